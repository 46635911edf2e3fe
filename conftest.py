"""Shared pytest fixtures for ForecastRank tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from forecastrank.features.analysis.service import AnalysisService, get_analysis_service
from forecastrank.main import app


@pytest.fixture
def analysis_service() -> AnalysisService:
    """Fresh analysis service, isolated from the process-wide instance."""
    return AnalysisService()


@pytest.fixture
async def client(analysis_service):
    """Create async HTTP client for testing FastAPI endpoints.

    The analysis routes are bound to a fresh service per test so results
    never leak between tests.
    """
    app.dependency_overrides[get_analysis_service] = lambda: analysis_service
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_analysis_service, None)
