"""API v1 router aggregation."""

from fastapi import APIRouter

from collab_sync.api.v1.endpoints import health, triggers

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(triggers.router, prefix="/triggers", tags=["triggers"])
