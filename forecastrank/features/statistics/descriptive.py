"""Descriptive statistics over a numeric series.

Population moments (divisor n). Skewness and kurtosis are standardized by the
population std; for a zero-variance series they are undefined and reported as
None together with a warning, while every other field stays valid. A variance
beyond the double range is likewise None with a warning.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from forecastrank.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DescriptiveStatistics:
    """Summary statistics of a series.

    Attributes:
        n: Number of observations.
        mean: Arithmetic mean.
        variance: Population variance, None if it overflows a double.
        std: Population standard deviation.
        median: Median (average of the two middle values for even n).
        min: Minimum value.
        max: Maximum value.
        skewness: Third standardized moment, None if std == 0.
        kurtosis: Excess kurtosis (fourth standardized moment - 3), None if std == 0.
        warnings: Degenerate-input notes.
    """

    n: int
    mean: float
    variance: float | None
    std: float
    median: float
    min: float
    max: float
    skewness: float | None
    kurtosis: float | None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_degenerate(self) -> bool:
        """True when the series has zero variance."""
        return self.std == 0.0

    def as_dict(self) -> dict[str, Any]:
        """Return the numeric fields as a plain dictionary."""
        return {
            "n": self.n,
            "mean": self.mean,
            "variance": self.variance,
            "std": self.std,
            "median": self.median,
            "min": self.min,
            "max": self.max,
            "skewness": self.skewness,
            "kurtosis": self.kurtosis,
        }


def compute_statistics(
    values: Sequence[float] | np.ndarray[Any, np.dtype[np.floating[Any]]],
) -> DescriptiveStatistics:
    """Compute descriptive statistics of a non-empty series.

    Args:
        values: Finite numeric values in series order.

    Returns:
        DescriptiveStatistics for the series.

    Raises:
        ValueError: If values is empty.
    """
    x = np.asarray(values, dtype=np.float64)
    n = len(x)
    if n == 0:
        raise ValueError("Cannot compute statistics of an empty series")

    # Moments are taken on x / max|x| so squares of values near the float
    # range do not overflow; standardized moments are scale invariant.
    scale = float(np.max(np.abs(x))) or 1.0
    y = x / scale
    mean_y = float(np.mean(y))
    deviations = y - mean_y
    variance_y = float(np.mean(deviations**2))

    mean = mean_y * scale
    std = math.sqrt(variance_y) * scale
    variance: float | None = variance_y * scale * scale
    median = float(np.median(x))

    skewness: float | None = None
    kurtosis: float | None = None
    warnings: list[str] = []

    if variance_y == 0.0:
        warnings.append("Zero-variance series; skewness and kurtosis are undefined")
        logger.warning("statistics.degenerate_input", n=n, mean=mean)
    else:
        z = deviations / math.sqrt(variance_y)
        skewness = float(np.mean(z**3))
        kurtosis = float(np.mean(z**4)) - 3.0

    if variance is not None and not math.isfinite(variance):
        variance = None
        warnings.append("Variance exceeds the floating-point range; reported as undefined")
        logger.warning("statistics.variance_overflow", n=n, std=std)

    return DescriptiveStatistics(
        n=n,
        mean=mean,
        variance=variance,
        std=std,
        median=median,
        min=float(np.min(x)),
        max=float(np.max(x)),
        skewness=skewness,
        kurtosis=kurtosis,
        warnings=tuple(warnings),
    )
