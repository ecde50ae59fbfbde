"""API v1: trigger delivery and health endpoints."""

from collab_sync.api.v1.router import api_router

__all__ = ["api_router"]
