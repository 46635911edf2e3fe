"""Forecasting models with a unified full-series interface.

All forecasters implement a common interface:
- check_fit(n_train, n_total) -> skip reason or None
- fit_and_predict(train, full_series) -> np.ndarray aligned 1:1 with full_series
- get_params() -> dict

Positions a model cannot produce a value for (e.g. moving-average warm-up)
are NaN in the returned array. Every model is deterministic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Literal

import numpy as np

from forecastrank.core.exceptions import ModelFitError

if TYPE_CHECKING:
    from forecastrank.features.analysis.schemas import AnalysisConfig

FloatArray = np.ndarray[Any, np.dtype[np.floating[Any]]]

ModelFamily = Literal["classical", "smoothing"]

ModelType = Literal[
    "moving_average",
    "linear_trend",
    "simple_exponential_smoothing",
    "holt",
    "holt_winters_additive",
    "holt_winters_multiplicative",
]


class BaseForecaster(ABC):
    """Abstract base class for all forecasting models.

    Subclasses declare their identity through class attributes and implement
    `_predict`. Predictions always cover the full series; where a model needs
    fitted parameters they are estimated from `train` only.

    Attributes:
        model_type: Stable identifier of the model.
        display_name: Human-readable model name.
        family: 'classical' or 'smoothing'.
    """

    model_type: ClassVar[ModelType]
    display_name: ClassVar[str]
    family: ClassVar[ModelFamily]

    def __init__(self) -> None:
        """Initialize the forecaster."""
        self._is_fitted = False

    def check_fit(self, n_train: int, n_total: int) -> str | None:  # noqa: ARG002
        """Check whether the model can run on a series of this shape.

        Args:
            n_train: Number of training observations.
            n_total: Number of observations in the full series.

        Returns:
            Human-readable reason the model cannot run, or None if it can.
        """
        if n_total < 1:
            return "Need at least 1 observation"
        return None

    def fit_and_predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:
        """Fit on the training segment and predict every position of the series.

        Args:
            train: Training prefix of the series.
            full_series: Full series (train followed by test).

        Returns:
            Predictions with the same length as full_series (NaN = undefined).

        Raises:
            ModelFitError: If the model's preconditions are not met.
        """
        train = np.asarray(train, dtype=np.float64)
        full_series = np.asarray(full_series, dtype=np.float64)

        reason = self.check_fit(len(train), len(full_series))
        if reason is not None:
            raise ModelFitError(
                self.model_type,
                reason,
                details={"n_train": len(train), "n_total": len(full_series)},
            )

        predictions = self._predict(train, full_series)
        self._is_fitted = True
        return predictions

    @abstractmethod
    def _predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:
        """Compute predictions once preconditions have been checked."""

    @abstractmethod
    def get_params(self) -> dict[str, Any]:
        """Get model parameters (hyperparameters and fitted coefficients).

        Returns:
            Dictionary of parameter names to values.
        """

    @property
    def is_fitted(self) -> bool:
        """Check if fit_and_predict() has completed successfully."""
        return self._is_fitted


class MovingAverageForecaster(BaseForecaster):
    """Trailing moving average.

    Formula: y_hat[i] = mean(y[i-window+1 : i+1]) for i >= window - 1

    Positions i < window - 1 are undefined (insufficient history). The window
    is a fixed hyperparameter; nothing is estimated from the training segment.

    Attributes:
        window_size: Number of trailing observations averaged (default: 3).
    """

    model_type: ClassVar[ModelType] = "moving_average"
    display_name: ClassVar[str] = "Moving Average"
    family: ClassVar[ModelFamily] = "classical"

    def __init__(self, window_size: int = 3) -> None:
        """Initialize the moving average forecaster.

        Args:
            window_size: Window size for averaging.
        """
        super().__init__()
        self.window_size = window_size

    def check_fit(self, n_train: int, n_total: int) -> str | None:
        if self.window_size < 1:
            return f"window_size must be >= 1, got {self.window_size}"
        return super().check_fit(n_train, n_total)

    def _predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:  # noqa: ARG002
        n = len(full_series)
        predictions = np.full(n, np.nan, dtype=np.float64)
        if n < self.window_size:
            return predictions
        kernel = np.full(self.window_size, 1.0 / self.window_size)
        predictions[self.window_size - 1 :] = np.convolve(full_series, kernel, mode="valid")
        return predictions

    def get_params(self) -> dict[str, Any]:
        return {"window_size": self.window_size}


class LinearTrendForecaster(BaseForecaster):
    """Ordinary least squares trend line on the integer position.

    Formula:
        slope = (n*sum(t*y) - sum(t)*sum(y)) / (n*sum(t^2) - sum(t)^2)
        intercept = (sum(y) - slope*sum(t)) / n
        y_hat[i] = slope*i + intercept

    Fitted on positions 0..n_train-1 and extrapolated to every position of
    the full series.
    """

    model_type: ClassVar[ModelType] = "linear_trend"
    display_name: ClassVar[str] = "Linear Trend Regression"
    family: ClassVar[ModelFamily] = "classical"

    def __init__(self) -> None:
        """Initialize the linear trend forecaster."""
        super().__init__()
        self.slope: float | None = None
        self.intercept: float | None = None

    def check_fit(self, n_train: int, n_total: int) -> str | None:
        if n_train < 2:
            return f"Need at least 2 training observations, got {n_train}"
        return super().check_fit(n_train, n_total)

    def _predict(self, train: FloatArray, full_series: FloatArray) -> FloatArray:
        n = len(train)
        t = np.arange(n, dtype=np.float64)
        sum_t = float(np.sum(t))
        sum_y = float(np.sum(train))
        sum_ty = float(np.dot(t, train))
        sum_t2 = float(np.dot(t, t))

        slope = (n * sum_ty - sum_t * sum_y) / (n * sum_t2 - sum_t * sum_t)
        intercept = (sum_y - slope * sum_t) / n
        self.slope = slope
        self.intercept = intercept

        positions = np.arange(len(full_series), dtype=np.float64)
        return slope * positions + intercept

    def get_params(self) -> dict[str, Any]:
        return {"slope": self.slope, "intercept": self.intercept}


def model_factory(
    model_type: ModelType,
    config: AnalysisConfig,
    season_length: int | None = None,
) -> BaseForecaster:
    """Create a forecaster instance from an analysis configuration.

    Args:
        model_type: Which forecaster to build.
        config: Analysis configuration carrying the hyperparameters.
        season_length: Seasonal period (Holt-Winters models only).

    Returns:
        Instantiated forecaster.

    Raises:
        ValueError: If model_type is unknown or a seasonal model has no period.
    """
    from forecastrank.features.forecasting.smoothing import (
        HoltForecaster,
        HoltWintersAdditiveForecaster,
        HoltWintersMultiplicativeForecaster,
        SimpleExponentialSmoothingForecaster,
    )

    if model_type == "moving_average":
        return MovingAverageForecaster(window_size=config.moving_average_window)
    elif model_type == "linear_trend":
        return LinearTrendForecaster()
    elif model_type == "simple_exponential_smoothing":
        return SimpleExponentialSmoothingForecaster(alpha=config.alpha)
    elif model_type == "holt":
        return HoltForecaster(alpha=config.alpha, beta=config.beta)
    elif model_type in ("holt_winters_additive", "holt_winters_multiplicative"):
        if season_length is None:
            raise ValueError(f"{model_type} requires a season_length")
        seasonal_cls = (
            HoltWintersAdditiveForecaster
            if model_type == "holt_winters_additive"
            else HoltWintersMultiplicativeForecaster
        )
        return seasonal_cls(
            alpha=config.alpha,
            beta=config.beta,
            gamma=config.gamma,
            season_length=season_length,
        )
    else:
        raise ValueError(f"Unknown model type: {model_type}")


BASELINE_MODEL_TYPES: tuple[ModelType, ...] = (
    "moving_average",
    "linear_trend",
    "simple_exponential_smoothing",
    "holt",
)

SEASONAL_MODEL_TYPES: tuple[ModelType, ...] = (
    "holt_winters_additive",
    "holt_winters_multiplicative",
)


def build_forecasters(
    config: AnalysisConfig,
    season_length: int | None = None,
) -> list[BaseForecaster]:
    """Build the closed list of forecasters for one analysis run.

    The baseline models always come first, in a fixed order. The seasonal
    models are appended only when a season length is supplied.

    Args:
        config: Analysis configuration carrying the hyperparameters.
        season_length: Accepted seasonal period, or None.

    Returns:
        Forecasters in evaluation order.
    """
    model_types = list(BASELINE_MODEL_TYPES)
    if season_length is not None:
        model_types.extend(SEASONAL_MODEL_TYPES)
    return [model_factory(mt, config, season_length=season_length) for mt in model_types]
