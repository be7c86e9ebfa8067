"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from crm.main import app


@pytest.mark.asyncio
async def test_health_reports_status_and_database_backend():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["charset"] == "utf8mb4"
    assert {"version", "environment", "database"} <= data.keys()
