"""Test fixtures for forecasting module."""

import numpy as np
import pytest


@pytest.fixture
def sample_time_series() -> np.ndarray:
    """Create 60 sequential values (1, 2, 3, ...) for easy verification."""
    return np.array(range(1, 61), dtype=np.float64)


@pytest.fixture
def sample_linear_series() -> np.ndarray:
    """Create 40 values on the exact line y = 2.5 * t + 3."""
    return 2.5 * np.arange(40, dtype=np.float64) + 3.0


@pytest.fixture
def sample_seasonal_series() -> np.ndarray:
    """Create 28 values with a period-7 pattern [10, 20, ..., 70] repeated."""
    weekly_pattern = np.array([10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0])
    return np.tile(weekly_pattern, 4)


@pytest.fixture
def sample_constant_series() -> np.ndarray:
    """Create 30 observations of the constant value 100."""
    return np.full(30, 100.0, dtype=np.float64)


@pytest.fixture
def sample_noisy_series() -> np.ndarray:
    """Create 50 values of a noisy random walk (fixed seed)."""
    rng = np.random.default_rng(42)
    return 50.0 + np.cumsum(rng.normal(0.0, 1.0, 50))
