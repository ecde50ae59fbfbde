"""Replay a captured CloudEvent through the trigger handlers.

Usage:
    uv run python -m scripts.replay_event path/to/event.json [--dry-run]

The file holds {"headers": {"ce-id": ..., "ce-type": ..., ...}, "data": {...}}
as the host delivered it. With --dry-run the event is decoded and routed
but no handler runs. Requires Firebase credentials (FIREBASE_SERVICE_ACCOUNT_KEY
or FIREBASE_SERVICE_ACCOUNT_PATH) unless --dry-run is given.
"""

import asyncio
import json
import sys
from pathlib import Path

from collab_sync.api.v1.cloudevents import parse_cloudevent
from collab_sync.api.v1.dependencies import build_event_router, build_route_table
from collab_sync.core.config import get_settings
from collab_sync.core.runtime import build_runtime, close_runtime
from collab_sync.domain.exceptions import CollabSyncException
from collab_sync.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Decode the event file, resolve its handler and (unless dry run) run it."""
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    dry_run = "--dry-run" in sys.argv[1:]
    if len(args) != 1:
        print(__doc__, file=sys.stderr)
        sys.exit(2)

    setup_logging()
    captured = json.loads(Path(args[0]).read_text(encoding="utf-8"))
    headers = {k.lower(): str(v) for k, v in captured.get("headers", {}).items()}
    body = json.dumps(captured.get("data", {})).encode()

    try:
        event = parse_cloudevent(headers, body)
    except CollabSyncException as e:
        print(f"Cannot decode event: {e.message}", file=sys.stderr)
        sys.exit(1)

    if dry_run:
        try:
            route, bound = build_route_table().resolve(event)
        except CollabSyncException as e:
            print(f"Unroutable: {e.message}", file=sys.stderr)
            sys.exit(1)
        params = getattr(bound, "params", {})
        print(f"Event {event.event_id} -> {route.name} {params}")
        return

    runtime = build_runtime(get_settings())
    try:
        result = await build_event_router(runtime).dispatch(event)
    except CollabSyncException as e:
        print(f"Handler failed ({e.error_code}): {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await close_runtime(runtime)
    print(f"Event {event.event_id} handled: {result!r}")


if __name__ == "__main__":
    asyncio.run(main())
