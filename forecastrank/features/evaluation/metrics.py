"""Metrics calculator for forecast evaluation.

Supported Metrics:
- MSE: Mean Squared Error
- RMSE: Root Mean Squared Error (exactly sqrt(MSE))
- MAE: Mean Absolute Error
- MAPE: Mean Absolute Percentage Error (percent)
- AIC / BIC: Information criteria with a fixed parameter count k = 3

CRITICAL: Only pairs whose prediction is defined and finite are scored. The
count of such pairs (n_valid) is the divisor of every mean, including MAPE,
whose sum additionally skips terms with a zero actual.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

FloatArray = np.ndarray[Any, np.dtype[np.floating[Any]]]

# Effective parameter count used for every model's AIC/BIC. This is a uniform
# simplification, not each model's true number of free parameters.
PARAMETER_COUNT = 3


@dataclass
class MetricResult:
    """Result of a single metric calculation.

    Attributes:
        name: Name of the metric.
        value: Calculated value (nan when undefined).
        n_samples: Number of valid pairs used in calculation.
        warnings: List of warnings generated during calculation.
    """

    name: str
    value: float
    n_samples: int
    warnings: list[str] = field(default_factory=lambda: [])


@dataclass(frozen=True)
class MetricSet:
    """All error metrics of one model on the test window.

    Undefined values are None, never NaN.

    Attributes:
        mse: Mean squared error.
        rmse: Root mean squared error.
        mae: Mean absolute error.
        mape: Mean absolute percentage error (percent).
        aic: Akaike information criterion.
        bic: Bayesian information criterion.
        n_valid: Number of scored pairs.
        warnings: Edge cases hit while scoring.
    """

    mse: float | None
    rmse: float | None
    mae: float | None
    mape: float | None
    aic: float | None
    bic: float | None
    n_valid: int
    warnings: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, float | None]:
        """Return the metric values keyed by name."""
        return {
            "mse": self.mse,
            "rmse": self.rmse,
            "mae": self.mae,
            "mape": self.mape,
            "aic": self.aic,
            "bic": self.bic,
        }


def _defined(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _no_valid_pairs(name: str) -> MetricResult:
    return MetricResult(name=name, value=np.nan, n_samples=0, warnings=["No valid predictions"])


class MetricsCalculator:
    """Calculate forecasting accuracy metrics.

    Every method takes the aligned actual and predicted arrays, drops pairs
    with an undefined (NaN/inf) prediction, and returns a MetricResult.

    CRITICAL: All metrics handle edge cases (no valid pairs, zero actuals,
    perfect fits) by returning nan with a warning instead of raising.
    """

    @staticmethod
    def valid_pairs(
        actuals: FloatArray,
        predictions: FloatArray,
    ) -> tuple[FloatArray, FloatArray]:
        """Keep only pairs whose prediction is defined and finite.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values (NaN marks undefined).

        Returns:
            Tuple of (actuals, predictions) restricted to valid pairs.

        Raises:
            ValueError: If arrays have different lengths.
        """
        actuals = np.asarray(actuals, dtype=np.float64)
        predictions = np.asarray(predictions, dtype=np.float64)
        if len(actuals) != len(predictions):
            raise ValueError(
                f"Length mismatch: actuals={len(actuals)}, predictions={len(predictions)}"
            )
        mask = np.isfinite(predictions)
        return actuals[mask], predictions[mask]

    @staticmethod
    def mse(actuals: FloatArray, predictions: FloatArray) -> MetricResult:
        """Mean Squared Error.

        Formula: sum((actual - predicted)^2) / n_valid

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MSE value.
        """
        a, p = MetricsCalculator.valid_pairs(actuals, predictions)
        if len(a) == 0:
            return _no_valid_pairs("mse")

        errors = a - p
        return MetricResult(name="mse", value=float(np.sum(errors**2)) / len(a), n_samples=len(a))

    @staticmethod
    def rmse(actuals: FloatArray, predictions: FloatArray) -> MetricResult:
        """Root Mean Squared Error.

        Formula: sqrt(MSE)
        """
        mse_result = MetricsCalculator.mse(actuals, predictions)
        return MetricResult(
            name="rmse",
            value=math.sqrt(mse_result.value) if mse_result.n_samples else np.nan,
            n_samples=mse_result.n_samples,
            warnings=list(mse_result.warnings),
        )

    @staticmethod
    def mae(actuals: FloatArray, predictions: FloatArray) -> MetricResult:
        """Mean Absolute Error.

        Formula: sum(|actual - predicted|) / n_valid
        """
        a, p = MetricsCalculator.valid_pairs(actuals, predictions)
        if len(a) == 0:
            return _no_valid_pairs("mae")

        mae_value = float(np.sum(np.abs(a - p))) / len(a)
        return MetricResult(name="mae", value=mae_value, n_samples=len(a))

    @staticmethod
    def mape(actuals: FloatArray, predictions: FloatArray) -> MetricResult:
        """Mean Absolute Percentage Error.

        Formula: 100 * sum_{actual != 0}(|(actual - predicted) / actual|) / n_valid

        CRITICAL: Terms with a zero actual are excluded from the sum but the
        divisor stays n_valid; they are not counted as zero-error terms.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MAPE value in percent.
        """
        warnings: list[str] = []
        a, p = MetricsCalculator.valid_pairs(actuals, predictions)
        if len(a) == 0:
            return _no_valid_pairs("mape")

        nonzero = a != 0
        n_zeros = int(np.sum(~nonzero))
        if n_zeros > 0:
            warnings.append(f"{n_zeros} samples with zero actuals excluded from MAPE sum")

        ratios = np.abs((a[nonzero] - p[nonzero]) / a[nonzero])
        mape_value = 100.0 * float(np.sum(ratios)) / len(a)

        return MetricResult(name="mape", value=mape_value, n_samples=len(a), warnings=warnings)

    @staticmethod
    def _information_criterion(
        name: str,
        actuals: FloatArray,
        predictions: FloatArray,
        penalty: float | None,
    ) -> MetricResult:
        mse_result = MetricsCalculator.mse(actuals, predictions)
        n = mse_result.n_samples
        if n == 0:
            return _no_valid_pairs(name)
        if mse_result.value == 0.0:
            return MetricResult(
                name=name,
                value=np.nan,
                n_samples=n,
                warnings=[f"MSE is zero (perfect fit); {name.upper()} undefined as ln(0)"],
            )
        if penalty is None:
            penalty = PARAMETER_COUNT * math.log(n)
        return MetricResult(name=name, value=n * math.log(mse_result.value) + penalty, n_samples=n)

    @staticmethod
    def aic(actuals: FloatArray, predictions: FloatArray) -> MetricResult:
        """Akaike Information Criterion.

        Formula: n_valid * ln(MSE) + 2k, k = 3
        """
        return MetricsCalculator._information_criterion(
            "aic", actuals, predictions, penalty=2.0 * PARAMETER_COUNT
        )

    @staticmethod
    def bic(actuals: FloatArray, predictions: FloatArray) -> MetricResult:
        """Bayesian Information Criterion.

        Formula: n_valid * ln(MSE) + k * ln(n_valid), k = 3
        """
        return MetricsCalculator._information_criterion("bic", actuals, predictions, penalty=None)

    def calculate_all(
        self,
        actuals: FloatArray,
        predictions: FloatArray,
    ) -> MetricSet:
        """Calculate every metric for one model on the test window.

        Args:
            actuals: Held-out actual values.
            predictions: Aligned slice of the model's predictions.

        Returns:
            MetricSet with undefined values as None.
        """
        results = [
            self.mse(actuals, predictions),
            self.rmse(actuals, predictions),
            self.mae(actuals, predictions),
            self.mape(actuals, predictions),
            self.aic(actuals, predictions),
            self.bic(actuals, predictions),
        ]
        values = {r.name: _defined(r.value) for r in results}

        warnings: list[str] = []
        for result in results:
            for warning in result.warnings:
                if warning not in warnings:
                    warnings.append(warning)

        return MetricSet(
            mse=values["mse"],
            rmse=values["rmse"],
            mae=values["mae"],
            mape=values["mape"],
            aic=values["aic"],
            bic=values["bic"],
            n_valid=results[0].n_samples,
            warnings=tuple(warnings),
        )
