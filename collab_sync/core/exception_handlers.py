"""Centralized exception handlers for the trigger endpoint.

Register with register_exception_handlers(app). The hosting trigger
infrastructure redelivers on any non-2xx answer, so the status code
decides retry semantics: malformed or unroutable events get 400,
everything else (store unavailable, handler failure) 500.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from collab_sync.core.config import get_settings
from collab_sync.domain.exceptions import CollabSyncException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNROUTABLE_EVENT": 400,
    "HANDLER_FAILED": 500,
    "DOCUMENT_STORE_ERROR": 500,
    "STORAGE_DELETE_ERROR": 500,
    "STORAGE_PERMISSION_ERROR": 500,
}


def _collab_sync_exception_handler(
    request: Request, exc: CollabSyncException
) -> JSONResponse:
    """Return JSON from CollabSyncException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 500)
    if status >= 500:
        logger.error("Trigger failed (%s): %s", exc.error_code, exc.message)
    else:
        logger.warning("Trigger rejected (%s): %s", exc.error_code, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(CollabSyncException, _collab_sync_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
