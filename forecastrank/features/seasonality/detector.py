"""Autocorrelation-based seasonality detection.

Algorithm:
1. Compute mean and population variance of the full series once.
2. For lag l in 1..min(max_lag, n // 2):
       acf(l) = sum_{i=l}^{n-1} (x_i - mean)(x_{i-l} - mean) / (n * variance)
3. A lag is a candidate period when acf(l) is a strict local maximum against
   both immediate neighbours of the correlogram AND exceeds 0.3.
4. The smallest candidate lag is reported; None when no lag qualifies.

This is a heuristic, not a spectral estimator. The threshold and the
first-candidate-wins rule are fixed so results are reproducible run to run.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from forecastrank.core.logging import get_logger

logger = get_logger(__name__)

SIGNIFICANCE_THRESHOLD = 0.3


@dataclass(frozen=True)
class AutocorrelationPoint:
    """Sample autocorrelation at one lag.

    Attributes:
        lag: Lag in observations (>= 1).
        value: Autocorrelation, None if undefined (zero-variance series).
    """

    lag: int
    value: float | None


@dataclass(frozen=True)
class SeasonalityResult:
    """Outcome of seasonality detection.

    Attributes:
        period: Detected seasonal period, None if no significant peak.
        autocorrelogram: Autocorrelation for every evaluated lag, in lag order.
        threshold: Significance threshold a peak had to exceed.
    """

    period: int | None
    autocorrelogram: tuple[AutocorrelationPoint, ...]
    threshold: float = SIGNIFICANCE_THRESHOLD

    @property
    def detected(self) -> bool:
        """True when a seasonal period was found."""
        return self.period is not None


def autocorrelation(
    values: Sequence[float] | np.ndarray[Any, np.dtype[np.floating[Any]]],
    max_lag: int,
) -> np.ndarray[Any, np.dtype[np.floating[Any]]]:
    """Sample autocorrelation for lags 1..min(max_lag, n // 2).

    Args:
        values: Series values in order.
        max_lag: Largest lag to evaluate (> 0).

    Returns:
        Array where element k is the autocorrelation at lag k + 1. All NaN
        when the series has zero variance.

    Raises:
        ValueError: If max_lag is not positive or values is empty.
    """
    if max_lag <= 0:
        raise ValueError(f"max_lag must be positive, got {max_lag}")
    x = np.asarray(values, dtype=np.float64)
    n = len(x)
    if n == 0:
        raise ValueError("Cannot compute autocorrelation of an empty series")

    n_lags = min(max_lag, n // 2)
    # Autocorrelation is scale invariant; normalising keeps squares finite.
    x = x / (float(np.max(np.abs(x))) or 1.0)
    deviations = x - np.mean(x)
    variance = float(np.mean(deviations**2))

    if variance == 0.0:
        return np.full(n_lags, np.nan, dtype=np.float64)

    denominator = n * variance
    acf = np.empty(n_lags, dtype=np.float64)
    for k in range(n_lags):
        lag = k + 1
        acf[k] = float(np.dot(deviations[lag:], deviations[:-lag])) / denominator
    return acf


def find_first_peak(
    acf: np.ndarray[Any, np.dtype[np.floating[Any]]],
    threshold: float = SIGNIFICANCE_THRESHOLD,
) -> int | None:
    """Return the lag of the first significant strict local maximum.

    The first and last entries have only one neighbour and are never peaks.

    Args:
        acf: Autocorrelation values, element k at lag k + 1.
        threshold: Value a peak must strictly exceed.

    Returns:
        Lag of the first qualifying peak, or None.
    """
    for k in range(1, len(acf) - 1):
        value = acf[k]
        # NaN compares False everywhere, so undefined correlograms never peak
        if value > acf[k - 1] and value > acf[k + 1] and value > threshold:
            return k + 1
    return None


def detect_seasonality(
    values: Sequence[float] | np.ndarray[Any, np.dtype[np.floating[Any]]],
    max_lag: int = 24,
    threshold: float = SIGNIFICANCE_THRESHOLD,
) -> SeasonalityResult:
    """Detect the seasonal period of a series from its autocorrelogram.

    Args:
        values: Series values in order.
        max_lag: Largest lag to evaluate.
        threshold: Significance threshold for a peak.

    Returns:
        SeasonalityResult with the period (or None) and the correlogram.
    """
    acf = autocorrelation(values, max_lag)
    period = find_first_peak(acf, threshold)

    correlogram = tuple(
        AutocorrelationPoint(lag=k + 1, value=float(v) if math.isfinite(v) else None)
        for k, v in enumerate(acf)
    )

    logger.debug(
        "seasonality.detected" if period is not None else "seasonality.not_detected",
        period=period,
        n_lags=len(correlogram),
    )

    return SeasonalityResult(period=period, autocorrelogram=correlogram, threshold=threshold)
