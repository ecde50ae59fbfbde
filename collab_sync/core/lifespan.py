"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. No business logic here, only
wiring of the handler runtime, event router and telemetry.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from collab_sync.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: handler runtime (unless one was injected by create_app),
    event router, telemetry. Shutdown: telemetry flush, runtime close
    (only when this lifespan built it).
    """
    settings = get_settings()

    # ---- Startup ----
    from collab_sync.api.v1.dependencies import build_event_router
    from collab_sync.core.runtime import build_runtime, close_runtime

    owns_runtime = getattr(app.state, "runtime", None) is None
    if owns_runtime:
        app.state.runtime = build_runtime(settings)
    if getattr(app.state, "event_router", None) is None:
        app.state.event_router = build_event_router(app.state.runtime)

    if settings.telemetry_enabled:
        from collab_sync.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
            region=settings.function_region,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    from collab_sync.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    if owns_runtime and getattr(app.state, "runtime", None) is not None:
        await close_runtime(app.state.runtime)
        app.state.runtime = None
