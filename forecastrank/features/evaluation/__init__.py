"""Evaluation module: holdout splitting and error metrics."""

from forecastrank.features.evaluation.metrics import (
    PARAMETER_COUNT,
    MetricResult,
    MetricsCalculator,
    MetricSet,
)
from forecastrank.features.evaluation.splitter import TrainTestSplit, train_test_split

__all__ = [
    "PARAMETER_COUNT",
    "MetricResult",
    "MetricSet",
    "MetricsCalculator",
    "TrainTestSplit",
    "train_test_split",
]
