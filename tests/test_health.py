"""Smoke tests for health and app wiring."""

from httpx import ASGITransport, AsyncClient

from collab_sync.main import create_app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the configured region."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "region": "asia-south1"}


async def test_triggers_unavailable_without_runtime() -> None:
    """Before the lifespan builds the runtime, deliveries get 503 (host retries)."""
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.post("/api/v1/triggers", headers={"ce-id": "e", "ce-type": "x"})
    assert response.status_code == 503
    assert response.json()["error"] == "HTTP_ERROR"
