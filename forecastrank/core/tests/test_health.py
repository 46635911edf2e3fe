"""Tests for health check endpoints."""

import pytest


@pytest.mark.asyncio
async def test_health_check_returns_ok(client):
    """Health endpoint should report status ok with the app identity."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["app_name"] == "ForecastRank"


@pytest.mark.asyncio
async def test_health_check_has_no_side_effects(client):
    """Health checks should not touch the analysis state."""
    await client.get("/health")
    status = await client.get("/analysis/status")

    assert status.json()["state"] == "idle"
