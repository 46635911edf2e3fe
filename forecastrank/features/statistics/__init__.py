"""Descriptive statistics of the analysed series."""

from forecastrank.features.statistics.descriptive import (
    DescriptiveStatistics,
    compute_statistics,
)

__all__ = [
    "DescriptiveStatistics",
    "compute_statistics",
]
