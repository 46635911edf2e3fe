"""Exponential smoothing forecasters.

Smoothing models are not re-fit: each run iterates the recurrences end to end
over the full series with the supplied constants.

Models:
- Simple exponential smoothing (level only)
- Holt's linear trend (level + trend, forecast = level)
- Holt-Winters additive and multiplicative (level + trend + seasonal)

CRITICAL: Holt forecasts the level L_i alone while Holt-Winters forecasts
L_i + T_i (+/x S). Changing either convention changes every reported RMSE.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, ClassVar

import numpy as np

from forecastrank.features.forecasting.models import (
    BaseForecaster,
    FloatArray,
    ModelFamily,
    ModelType,
)


def safe_divide(numerator: float, denominator: float, substitute: float = 1.0) -> float:
    """Divide, replacing an exactly-zero denominator with `substitute`.

    Used for every division by a seasonal factor or level in the
    multiplicative Holt-Winters recurrences so Infinity/NaN never propagate.

    Args:
        numerator: Dividend.
        denominator: Divisor.
        substitute: Divisor used when denominator == 0.

    Returns:
        numerator / denominator, or numerator / substitute.
    """
    return numerator / (denominator if denominator != 0 else substitute)


class SeasonalIndices:
    """Fixed-size ring buffer of seasonal components.

    Slot `i mod season_length` holds the component for every position i of
    that phase; updates overwrite the slot in place.
    """

    def __init__(self, seeds: FloatArray) -> None:
        """Initialize from one full season of seed values.

        Args:
            seeds: Initial component for each phase (length = season length).

        Raises:
            ValueError: If seeds is empty.
        """
        if len(seeds) == 0:
            raise ValueError("Seasonal indices need at least one phase")
        self._slots = np.array(seeds, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, position: int) -> float:
        return float(self._slots[position % len(self._slots)])

    def __setitem__(self, position: int, value: float) -> None:
        self._slots[position % len(self._slots)] = value

    def as_array(self) -> FloatArray:
        """Return a copy of the current components."""
        return self._slots.copy()


class SimpleExponentialSmoothingForecaster(BaseForecaster):
    """Simple exponential smoothing.

    Formula: s_0 = x_0; s_i = alpha*x_i + (1-alpha)*s_{i-1}

    Defined at every position (no warm-up gap).

    Attributes:
        alpha: Level smoothing constant.
    """

    model_type: ClassVar[ModelType] = "simple_exponential_smoothing"
    display_name: ClassVar[str] = "Simple Exponential Smoothing"
    family: ClassVar[ModelFamily] = "smoothing"

    def __init__(self, alpha: float = 0.3) -> None:
        super().__init__()
        self.alpha = alpha

    def _predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:  # noqa: ARG002
        x = full_series
        smoothed = np.empty(len(x), dtype=np.float64)
        smoothed[0] = x[0]
        for i in range(1, len(x)):
            smoothed[i] = self.alpha * x[i] + (1 - self.alpha) * smoothed[i - 1]
        return smoothed

    def get_params(self) -> dict[str, Any]:
        return {"alpha": self.alpha}


class HoltForecaster(BaseForecaster):
    """Holt's linear trend smoothing.

    Formula:
        L_0 = x_0, T_0 = x_1 - x_0
        L_i = alpha*x_i + (1-alpha)*(L_{i-1} + T_{i-1})
        T_i = beta*(L_i - L_{i-1}) + (1-beta)*T_{i-1}
        y_hat[i] = L_i

    Attributes:
        alpha: Level smoothing constant.
        beta: Trend smoothing constant.
    """

    model_type: ClassVar[ModelType] = "holt"
    display_name: ClassVar[str] = "Holt Linear Trend"
    family: ClassVar[ModelFamily] = "smoothing"

    def __init__(self, alpha: float = 0.3, beta: float = 0.1) -> None:
        super().__init__()
        self.alpha = alpha
        self.beta = beta

    def check_fit(self, n_train: int, n_total: int) -> str | None:
        if n_total < 2:
            return f"Need at least 2 observations to initialise the trend, got {n_total}"
        return super().check_fit(n_train, n_total)

    def _predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:  # noqa: ARG002
        x = full_series
        level = float(x[0])
        trend = float(x[1] - x[0])
        predictions = np.empty(len(x), dtype=np.float64)
        predictions[0] = level

        for i in range(1, len(x)):
            new_level = self.alpha * x[i] + (1 - self.alpha) * (level + trend)
            trend = self.beta * (new_level - level) + (1 - self.beta) * trend
            level = new_level
            predictions[i] = level
        return predictions

    def get_params(self) -> dict[str, Any]:
        return {"alpha": self.alpha, "beta": self.beta}


class HoltWintersForecaster(BaseForecaster):
    """Shared Holt-Winters recurrence; subclasses define the seasonal algebra.

    Initialisation:
        L_0 = x_0, T_0 = (x_m - x_0) / m, S seeded from x_0..x_{m-1}
        y_hat[0] = x_0

    For i >= 1 (phase p = i mod m, s = S[p] before the update):
        L_i = alpha*deseasonalize(x_i, s) + (1-alpha)*(L_{i-1} + T_{i-1})
        T_i = beta*(L_i - L_{i-1}) + (1-beta)*T_{i-1}
        S[p] = gamma*seasonal_signal(x_i, L_i) + (1-gamma)*s
        y_hat[i] = combine(L_i + T_i, S[p])

    Attributes:
        alpha: Level smoothing constant.
        beta: Trend smoothing constant.
        gamma: Seasonal smoothing constant.
        season_length: Seasonal period m.
    """

    family: ClassVar[ModelFamily] = "smoothing"

    def __init__(
        self,
        alpha: float = 0.3,
        beta: float = 0.1,
        gamma: float = 0.1,
        season_length: int = 12,
    ) -> None:
        super().__init__()
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma
        self.season_length = season_length
        self._seasonal: SeasonalIndices | None = None

    def check_fit(self, n_train: int, n_total: int) -> str | None:
        if self.season_length < 1:
            return f"season_length must be >= 1, got {self.season_length}"
        if n_total <= self.season_length:
            return (
                f"Need more than season_length={self.season_length} observations, "
                f"got {n_total}"
            )
        return super().check_fit(n_train, n_total)

    @abstractmethod
    def _seed(self, first_season: FloatArray, level: float) -> FloatArray:
        """Initial seasonal components from the first season."""

    @abstractmethod
    def _deseasonalize(self, value: float, seasonal: float) -> float:
        """Remove the seasonal component from an observation."""

    @abstractmethod
    def _seasonal_signal(self, value: float, level: float) -> float:
        """Seasonal component implied by an observation and the new level."""

    @abstractmethod
    def _combine(self, level_plus_trend: float, seasonal: float) -> float:
        """Combine the trend line with the seasonal component."""

    def _predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:  # noqa: ARG002
        x = full_series
        m = self.season_length
        level = float(x[0])
        trend = float(x[m] - x[0]) / m
        seasonal = SeasonalIndices(self._seed(x[:m], level))

        predictions = np.empty(len(x), dtype=np.float64)
        predictions[0] = x[0]

        for i in range(1, len(x)):
            previous_seasonal = seasonal[i]
            new_level = self.alpha * self._deseasonalize(x[i], previous_seasonal) + (
                1 - self.alpha
            ) * (level + trend)
            trend = self.beta * (new_level - level) + (1 - self.beta) * trend
            level = new_level
            seasonal[i] = self.gamma * self._seasonal_signal(x[i], level) + (
                1 - self.gamma
            ) * previous_seasonal
            predictions[i] = self._combine(level + trend, seasonal[i])

        self._seasonal = seasonal
        return predictions

    @property
    def seasonal_components(self) -> FloatArray | None:
        """Seasonal components after the last run, one per phase."""
        return None if self._seasonal is None else self._seasonal.as_array()

    def get_params(self) -> dict[str, Any]:
        return {
            "alpha": self.alpha,
            "beta": self.beta,
            "gamma": self.gamma,
            "season_length": self.season_length,
        }


class HoltWintersAdditiveForecaster(HoltWintersForecaster):
    """Holt-Winters with additive seasonality (seasonal swing of constant size)."""

    model_type: ClassVar[ModelType] = "holt_winters_additive"
    display_name: ClassVar[str] = "Holt-Winters Additive"

    def _seed(self, first_season: FloatArray, level: float) -> FloatArray:
        return first_season - level

    def _deseasonalize(self, value: float, seasonal: float) -> float:
        return value - seasonal

    def _seasonal_signal(self, value: float, level: float) -> float:
        return value - level

    def _combine(self, level_plus_trend: float, seasonal: float) -> float:
        return level_plus_trend + seasonal


class HoltWintersMultiplicativeForecaster(HoltWintersForecaster):
    """Holt-Winters with multiplicative seasonality (swing proportional to level).

    Every division by a level or seasonal factor goes through safe_divide, so
    a zero denominator is replaced by 1.
    """

    model_type: ClassVar[ModelType] = "holt_winters_multiplicative"
    display_name: ClassVar[str] = "Holt-Winters Multiplicative"

    def _seed(self, first_season: FloatArray, level: float) -> FloatArray:
        return np.array([safe_divide(float(v), level) for v in first_season], dtype=np.float64)

    def _deseasonalize(self, value: float, seasonal: float) -> float:
        return safe_divide(value, seasonal)

    def _seasonal_signal(self, value: float, level: float) -> float:
        return safe_divide(value, level)

    def _combine(self, level_plus_trend: float, seasonal: float) -> float:
        return level_plus_trend * seasonal
