"""Trigger delivery endpoint.

The host POSTs one CloudEvent per document/identity change. A 204 acks the
event; any error status makes the host redeliver it (at-least-once).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from collab_sync.api.v1.cloudevents import parse_cloudevent
from collab_sync.api.v1.dependencies import get_event_router
from collab_sync.application.dispatch import EventRouter

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Malformed or unroutable event (not retried usefully)"},
        500: {"description": "Handler failed; host should redeliver"},
    },
)
async def deliver_event(
    request: Request,
    event_router: Annotated[EventRouter, Depends(get_event_router)],
) -> Response:
    """Decode the CloudEvent and run its handler to completion."""
    body = await request.body()
    event = parse_cloudevent(request.headers, body)
    await event_router.dispatch(event)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
