"""Event router: map a trigger event to exactly one handler.

Document routes are keyed by (kind, path template); templates such as
``projects/{projectId}/contributors/{userId}`` match exactly one document
depth and their placeholders become the event's ``params``. Identity routes
are keyed by kind only.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from collab_sync.application.dtos.trigger import (
    AuthUserEvent,
    DocumentEvent,
    TriggerKind,
)
from collab_sync.domain.exceptions import UnroutableEventException

logger = logging.getLogger(__name__)

TriggerEvent = DocumentEvent | AuthUserEvent
Handler = Callable[[Any], Awaitable[Any]]

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def compile_template(template: str) -> re.Pattern[str]:
    """Compile a document path template to a full-match regex.

    Each ``{name}`` matches a single path segment.
    """
    parts = []
    pos = 0
    for m in _PLACEHOLDER.finditer(template):
        parts.append(re.escape(template[pos:m.start()]))
        parts.append(f"(?P<{m.group(1)}>[^/]+)")
        pos = m.end()
    parts.append(re.escape(template[pos:]))
    return re.compile("^" + "".join(parts) + "$")


@dataclass(frozen=True)
class Route:
    """One registered handler."""

    name: str
    kind: TriggerKind
    handler: Handler
    template: str | None = None
    pattern: re.Pattern[str] | None = None

    def match(self, event: TriggerEvent) -> dict[str, str] | None:
        """Return path params when the route applies to the event, else None."""
        if event.kind is not self.kind:
            return None
        if self.pattern is None:
            return {} if isinstance(event, AuthUserEvent) else None
        if not isinstance(event, DocumentEvent):
            return None
        m = self.pattern.match(event.document.strip("/"))
        return m.groupdict() if m else None


class EventRouter:
    """Registry of trigger handlers and the dispatch entry point."""

    def __init__(self) -> None:
        self._routes: list[Route] = []

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    def add_document_route(
        self, name: str, kind: TriggerKind, template: str, handler: Handler
    ) -> None:
        """Register a handler for documents matching template."""
        if kind not in (TriggerKind.DOCUMENT_CREATED, TriggerKind.DOCUMENT_DELETED):
            raise ValueError(f"{kind} is not a document trigger")
        self._routes.append(
            Route(
                name=name,
                kind=kind,
                handler=handler,
                template=template,
                pattern=compile_template(template.strip("/")),
            )
        )

    def add_identity_route(self, name: str, kind: TriggerKind, handler: Handler) -> None:
        """Register a handler for identity lifecycle events."""
        if kind not in (TriggerKind.USER_CREATED, TriggerKind.USER_DELETED):
            raise ValueError(f"{kind} is not an identity trigger")
        self._routes.append(Route(name=name, kind=kind, handler=handler))

    def resolve(self, event: TriggerEvent) -> tuple[Route, TriggerEvent]:
        """Find the single route for event and bind its path params.

        Raises:
            UnroutableEventException: no route matches.
            ValueError: more than one route matches (misconfigured router).
        """
        matches = [(r, p) for r in self._routes if (p := r.match(event)) is not None]
        document = event.document if isinstance(event, DocumentEvent) else None
        if not matches:
            raise UnroutableEventException(event.kind.value, document)
        if len(matches) > 1:
            names = ", ".join(r.name for r, _ in matches)
            raise ValueError(f"Ambiguous routes for {event.kind.value} on {document}: {names}")
        route, params = matches[0]
        if isinstance(event, DocumentEvent):
            event = event.with_params(params)
        return route, event

    async def dispatch(self, event: TriggerEvent) -> Any:
        """Run the matching handler to completion and return its result."""
        route, bound = self.resolve(event)
        logger.info("Dispatching event %s to %s", event.event_id, route.name)
        try:
            return await route.handler(bound)
        except Exception:
            logger.exception("Handler %s failed for event %s", route.name, event.event_id)
            raise
