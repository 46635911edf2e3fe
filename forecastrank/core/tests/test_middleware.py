"""Tests for request middleware."""

import pytest


@pytest.mark.asyncio
async def test_request_id_generated_when_absent(client):
    """Middleware should generate a UUID request ID if none is provided."""
    response = await client.get("/health")

    request_id = response.headers.get("X-Request-ID")
    assert request_id is not None
    assert len(request_id) == 36


@pytest.mark.asyncio
async def test_request_id_preserved(client):
    custom_id = "analysis-request-7"
    response = await client.get("/health", headers={"X-Request-ID": custom_id})

    assert response.headers["X-Request-ID"] == custom_id


@pytest.mark.asyncio
async def test_request_id_unique_per_request(client):
    first = await client.get("/health")
    second = await client.get("/health")

    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_in_problem_details(client):
    """Error bodies should carry the request ID for correlation."""
    response = await client.get("/analysis/latest", headers={"X-Request-ID": "req-404"})

    body = response.json()
    assert body["request_id"] == "req-404"
    assert body["instance"] == "/requests/req-404"
