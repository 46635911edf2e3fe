"""Forecasting module: classical and exponential smoothing models.

Every forecaster maps a series to a same-length prediction array through
`fit_and_predict(train, full_series)`.

Exports:
    Models:
        - BaseForecaster: Abstract base class for all forecasters
        - MovingAverageForecaster: Trailing mean of the last N observations
        - LinearTrendForecaster: OLS trend line fit on the training segment
        - SimpleExponentialSmoothingForecaster, HoltForecaster
        - HoltWintersAdditiveForecaster, HoltWintersMultiplicativeForecaster
        - model_factory: Create forecaster from an analysis configuration
        - build_forecasters: Ordered forecaster list for one analysis run

    Numerics:
        - safe_divide: Division guarded against zero denominators
        - SeasonalIndices: Ring buffer of seasonal components
"""

from forecastrank.features.forecasting.models import (
    BASELINE_MODEL_TYPES,
    SEASONAL_MODEL_TYPES,
    BaseForecaster,
    LinearTrendForecaster,
    ModelFamily,
    ModelType,
    MovingAverageForecaster,
    build_forecasters,
    model_factory,
)
from forecastrank.features.forecasting.smoothing import (
    HoltForecaster,
    HoltWintersAdditiveForecaster,
    HoltWintersForecaster,
    HoltWintersMultiplicativeForecaster,
    SeasonalIndices,
    SimpleExponentialSmoothingForecaster,
    safe_divide,
)

__all__ = [
    "BASELINE_MODEL_TYPES",
    "SEASONAL_MODEL_TYPES",
    "BaseForecaster",
    "HoltForecaster",
    "HoltWintersAdditiveForecaster",
    "HoltWintersForecaster",
    "HoltWintersMultiplicativeForecaster",
    "LinearTrendForecaster",
    "ModelFamily",
    "ModelType",
    "MovingAverageForecaster",
    "SeasonalIndices",
    "SimpleExponentialSmoothingForecaster",
    "build_forecasters",
    "model_factory",
    "safe_divide",
]
