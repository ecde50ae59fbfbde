"""FastAPI application entry point for trigger delivery.

Wiring only: lifespan, exception handlers, routers. No business logic here.
See collab_sync.core.lifespan and collab_sync.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI

from collab_sync.api.v1 import api_router
from collab_sync.core.config import get_settings
from collab_sync.core.exception_handlers import register_exception_handlers
from collab_sync.core.lifespan import create_lifespan
from collab_sync.core.runtime import HandlerRuntime
from collab_sync.shared.telemetry.logging import setup_logging


def create_app(runtime: HandlerRuntime | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        runtime: Pre-built handler runtime. When given, the event router is
            wired immediately and the app never closes the runtime.
    """
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.runtime = runtime
    app.state.event_router = None
    if runtime is not None:
        from collab_sync.api.v1.dependencies import build_event_router

        app.state.event_router = build_event_router(runtime)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
