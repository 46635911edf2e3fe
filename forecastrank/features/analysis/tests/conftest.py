"""Test fixtures for analysis module."""

import numpy as np
import pytest

from forecastrank.features.analysis.schemas import AnalysisConfig
from forecastrank.features.analysis.service import AnalysisService


@pytest.fixture
def service() -> AnalysisService:
    """Analysis service with the default minimum of 10 observations."""
    return AnalysisService(min_observations=10)


@pytest.fixture
def default_config() -> AnalysisConfig:
    return AnalysisConfig()


@pytest.fixture
def trend_series() -> list[float]:
    """Twelve observations with an upward trend and no repeating pattern."""
    return [10.0, 12.0, 13.0, 12.0, 15.0, 16.0, 14.0, 17.0, 19.0, 18.0, 20.0, 22.0]


@pytest.fixture
def seasonal_series() -> np.ndarray:
    """Eight cycles of a period-6 triangle wave (48 observations)."""
    return np.tile([10.0, 20.0, 30.0, 40.0, 30.0, 20.0], 8)


@pytest.fixture
def zero_series() -> list[float]:
    """Twelve zeros: zero variance and zero actuals everywhere."""
    return [0.0] * 12


@pytest.fixture
def observations_payload(trend_series) -> list[dict[str, object]]:
    return [
        {"timestamp": f"2024-{month:02d}", "value": value}
        for month, value in enumerate(trend_series, start=1)
    ]
