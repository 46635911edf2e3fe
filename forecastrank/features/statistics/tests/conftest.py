"""Test fixtures for statistics module."""

import numpy as np
import pytest


@pytest.fixture
def sample_noisy_series() -> np.ndarray:
    """Create 200 values of a noisy random walk (fixed seed)."""
    rng = np.random.default_rng(42)
    return 100.0 + np.cumsum(rng.normal(0.0, 2.0, 200))
