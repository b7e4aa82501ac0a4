"""API status, metrics and docs tests."""

import pytest

from oyow_tours.core.database import PersistenceGateway


@pytest.mark.asyncio
async def test_status_reports_unreachable_store(degraded_client):
    """An unreachable store is reported, not raised."""
    response = await degraded_client.get("/api/status")
    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "Disconnected"
    assert data["status"] == "unhealthy"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_status_reports_connected_store(test_client, monkeypatch):
    """A store that answers the ping is reported healthy."""
    async def ping(self):
        return True

    monkeypatch.setattr(PersistenceGateway, "ping", ping)

    response = await test_client.get("/api/status")
    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "Connected"
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_metrics_endpoint(test_client):
    """The Prometheus endpoint exposes the business metrics."""
    await test_client.get("/api/tours")

    response = await test_client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "tour_catalog_fallbacks_total" in response.text
    assert "relay_connections_active" in response.text


@pytest.mark.asyncio
async def test_openapi_docs(test_client):
    """OpenAPI docs are available in development."""
    response = await test_client.get("/docs")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_request_id_is_echoed(test_client):
    """A caller-supplied request ID comes back on the response."""
    response = await test_client.get("/api/tours", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = await test_client.get("/api/tours")
    assert response.headers["X-Request-ID"]
