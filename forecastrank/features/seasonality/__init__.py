"""Seasonal period detection from the sample autocorrelation function."""

from forecastrank.features.seasonality.detector import (
    SIGNIFICANCE_THRESHOLD,
    AutocorrelationPoint,
    SeasonalityResult,
    autocorrelation,
    detect_seasonality,
    find_first_peak,
)

__all__ = [
    "SIGNIFICANCE_THRESHOLD",
    "AutocorrelationPoint",
    "SeasonalityResult",
    "autocorrelation",
    "detect_seasonality",
    "find_first_peak",
]
