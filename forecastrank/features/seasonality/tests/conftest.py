"""Test fixtures for seasonality module."""

import pytest


@pytest.fixture
def short_trend_series() -> list[float]:
    """Twelve observations with an upward trend and no repeating pattern."""
    return [10.0, 12.0, 13.0, 12.0, 15.0, 16.0, 14.0, 17.0, 19.0, 18.0, 20.0, 22.0]
