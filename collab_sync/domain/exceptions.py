"""Domain exceptions for collab-sync.

Defines exceptions raised by trigger handlers and the event router. The
presentation layer maps them to HTTP responses so the hosting trigger
infrastructure can decide whether to redeliver.
"""

from typing import Any


class CollabSyncException(Exception):
    """Base exception for all collab-sync errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. path, handler).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CollabSyncException):
    """Raised when an incoming event envelope is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnroutableEventException(CollabSyncException):
    """Raised when no handler is registered for an event type and document path."""

    def __init__(self, event_type: str, document: str | None = None) -> None:
        super().__init__(
            f"No handler registered for {event_type} on {document or '<none>'}",
            "UNROUTABLE_EVENT",
            {"event_type": event_type, "document": document},
        )


class HandlerFailedException(CollabSyncException):
    """Raised when one or more writes of a handler invocation failed.

    The invocation is reported as failed so the host redelivers it; every
    write a handler issues is keyed by a stable path, so the retry converges.
    """

    def __init__(self, handler: str, errors: list[BaseException]) -> None:
        self.errors = errors
        super().__init__(
            f"Handler {handler} failed ({len(errors)} error(s)): "
            + "; ".join(str(e) for e in errors),
            "HANDLER_FAILED",
            {"handler": handler, "errors": [str(e) for e in errors]},
        )
