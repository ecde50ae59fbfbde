"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from collab_sync.core.config import get_settings
from collab_sync.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(region=get_settings().function_region)
