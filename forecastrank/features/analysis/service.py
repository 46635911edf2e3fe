"""Analysis service: one-shot forecast comparison over a single series.

Orchestrates:
- Holdout split of the series into a training prefix and a test suffix
- Descriptive statistics and seasonality detection over the full series
- Fitting and scoring every applicable forecaster on the test window
- Ranking by RMSE and residuals of the best model

CRITICAL: A run either completes and replaces the previous result wholesale,
or fails and leaves the previous state and result untouched.
"""

from __future__ import annotations

import math
import threading
import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import numpy as np

from forecastrank.core.config import get_settings
from forecastrank.core.exceptions import (
    AnalysisInProgressError,
    InsufficientDataError,
    ModelFitError,
)
from forecastrank.core.logging import bind_run_id, get_logger
from forecastrank.features.analysis.schemas import AnalysisConfig, AnalysisState
from forecastrank.features.evaluation import MetricsCalculator, MetricSet, train_test_split
from forecastrank.features.forecasting import (
    SEASONAL_MODEL_TYPES,
    BaseForecaster,
    HoltWintersAdditiveForecaster,
    HoltWintersMultiplicativeForecaster,
    ModelFamily,
    build_forecasters,
)
from forecastrank.features.seasonality import SeasonalityResult, detect_seasonality
from forecastrank.features.statistics import DescriptiveStatistics, compute_statistics

logger = get_logger(__name__)

FloatArray = np.ndarray[Any, np.dtype[np.floating[Any]]]

_SEASONAL_DISPLAY_NAMES = {
    cls.model_type: cls.display_name
    for cls in (HoltWintersAdditiveForecaster, HoltWintersMultiplicativeForecaster)
}


@dataclass(frozen=True)
class ModelResult:
    """Predictions and test-window metrics of one forecaster.

    Attributes:
        model_type: Stable model identifier.
        name: Display name.
        family: 'classical' or 'smoothing'.
        predictions: Aligned 1:1 with the full series; None = undefined.
        metrics: Metrics on the test window.
        params: Hyperparameters and fitted coefficients.
    """

    model_type: str
    name: str
    family: ModelFamily
    predictions: tuple[float | None, ...]
    metrics: MetricSet
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SkippedModel:
    """A forecaster that was not run because its preconditions were not met."""

    model_type: str
    name: str
    reason: str


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable outcome of one analysis run.

    Attributes:
        run_id: Identifier of the run (also bound to its log events).
        statistics: Descriptive statistics of the full series.
        seasonality: Detected period and autocorrelogram.
        models: Model results sorted by ascending RMSE (undefined last).
        best_model: First entry of models.
        residuals: actual - predicted of the best model at defined positions.
        n_observations: Length of the series.
        train_size: Length of the training prefix.
        test_size: Length of the test suffix.
        train_ratio: Ratio the split was computed from.
        timestamps: Observation labels in order.
        skipped_models: Models not run, with the reason.
        warnings: Degenerate-input notes collected during the run.
        duration_ms: Wall-clock time of the run.
    """

    run_id: str
    statistics: DescriptiveStatistics
    seasonality: SeasonalityResult
    models: tuple[ModelResult, ...]
    best_model: ModelResult
    residuals: tuple[float, ...]
    n_observations: int
    train_size: int
    test_size: int
    train_ratio: float
    timestamps: tuple[str, ...] = ()
    skipped_models: tuple[SkippedModel, ...] = ()
    warnings: tuple[str, ...] = ()
    duration_ms: float = 0.0

    def summary(self) -> list[tuple[int, str, float | None]]:
        """Ranking as (rank, name, rmse) rows, rank starting at 1."""
        return [
            (rank, model.name, model.metrics.rmse)
            for rank, model in enumerate(self.models, start=1)
        ]


def _rmse_sort_key(result: ModelResult) -> tuple[bool, float]:
    rmse = result.metrics.rmse
    return (rmse is None, rmse if rmse is not None else 0.0)


def _to_optional(predictions: FloatArray) -> tuple[float | None, ...]:
    return tuple(float(v) if math.isfinite(v) else None for v in predictions)


def seasonal_gate(period: int | None, train_size: int) -> tuple[int | None, str | None]:
    """Decide whether the Holt-Winters models may run.

    Args:
        period: Detected seasonal period, or None.
        train_size: Length of the training prefix.

    Returns:
        Tuple of (season_length, skip_reason); exactly one is None.
    """
    if period is None:
        return None, "No seasonal period detected"
    if not period < train_size / 2:
        return None, (
            f"Seasonal period {period} is not shorter than half the training "
            f"segment ({train_size})"
        )
    return period, None


class AnalysisService:
    """Run the full comparison pipeline and hold the latest result.

    State transitions are guarded by a non-blocking lock: a second call to
    run() while one is in flight is rejected, never queued.
    """

    def __init__(self, min_observations: int | None = None) -> None:
        """Initialize the service.

        Args:
            min_observations: Shortest accepted series; defaults to settings.
        """
        settings = get_settings()
        self.min_observations = (
            min_observations
            if min_observations is not None
            else settings.analysis_min_observations
        )
        self._lock = threading.Lock()
        self._state = AnalysisState.IDLE
        self._latest: AnalysisResult | None = None
        self.metrics_calculator = MetricsCalculator()

    @property
    def state(self) -> AnalysisState:
        """Current lifecycle state."""
        return self._state

    @property
    def latest_result(self) -> AnalysisResult | None:
        """Result of the last completed run, or None."""
        return self._latest

    def run(
        self,
        values: Sequence[float] | FloatArray,
        config: AnalysisConfig | None = None,
        timestamps: Sequence[str] | None = None,
    ) -> AnalysisResult:
        """Analyse a series and store the result.

        Args:
            values: Series values in order (finite).
            config: Run configuration; defaults from settings when None.
            timestamps: Observation labels; positions are used when None.

        Returns:
            The completed AnalysisResult.

        Raises:
            AnalysisInProgressError: If another run is in flight.
            InsufficientDataError: If the series is shorter than the minimum.
            ModelFitError: If an invoked forecaster fails.
        """
        if not self._lock.acquire(blocking=False):
            raise AnalysisInProgressError()

        try:
            x = np.array(values, dtype=np.float64)
            if len(x) < self.min_observations:
                logger.warning(
                    "analysis.insufficient_data",
                    n_observations=len(x),
                    min_observations=self.min_observations,
                )
                raise InsufficientDataError(len(x), self.min_observations)

            if timestamps is not None and len(timestamps) != len(x):
                raise ValueError(
                    f"Length mismatch: values={len(x)}, timestamps={len(timestamps)}"
                )

            run_config = config if config is not None else AnalysisConfig.from_settings()
            labels = (
                tuple(timestamps)
                if timestamps is not None
                else tuple(str(i) for i in range(len(x)))
            )

            previous_state = self._state
            self._state = AnalysisState.RUNNING
            try:
                result = self._execute(x, run_config, labels)
            except Exception:
                self._state = previous_state
                raise

            self._latest = result
            self._state = AnalysisState.COMPLETED
            return result
        finally:
            self._lock.release()

    def _execute(
        self,
        x: FloatArray,
        config: AnalysisConfig,
        timestamps: tuple[str, ...],
    ) -> AnalysisResult:
        run_id = uuid.uuid4().hex[:16]
        start_time = time.perf_counter()

        with bind_run_id(run_id):
            logger.info(
                "analysis.run_started",
                n_observations=len(x),
                train_ratio=config.train_ratio,
            )

            split = train_test_split(x, config.train_ratio)
            statistics = compute_statistics(x)
            seasonality = detect_seasonality(x, max_lag=config.max_lag)

            season_length, gate_reason = seasonal_gate(seasonality.period, split.train_size)
            skipped: list[SkippedModel] = []
            if gate_reason is not None:
                for model_type in SEASONAL_MODEL_TYPES:
                    skipped.append(
                        SkippedModel(
                            model_type=model_type,
                            name=_SEASONAL_DISPLAY_NAMES[model_type],
                            reason=gate_reason,
                        )
                    )

            results: list[ModelResult] = []
            for forecaster in build_forecasters(config, season_length):
                reason = forecaster.check_fit(split.train_size, len(x))
                if reason is not None:
                    skipped.append(
                        SkippedModel(
                            model_type=forecaster.model_type,
                            name=forecaster.display_name,
                            reason=reason,
                        )
                    )
                    continue
                results.append(self._score(forecaster, split.train, x, split.train_size))

            for skip in skipped:
                logger.info(
                    "analysis.model_skipped",
                    model_type=skip.model_type,
                    reason=skip.reason,
                )

            ranked = tuple(sorted(results, key=_rmse_sort_key))
            best = ranked[0]
            best_predictions = np.array(
                [np.nan if v is None else v for v in best.predictions], dtype=np.float64
            )
            defined = np.isfinite(best_predictions)
            residuals = tuple(float(r) for r in x[defined] - best_predictions[defined])

            warnings: list[str] = list(statistics.warnings)
            for model in ranked:
                for warning in model.metrics.warnings:
                    message = f"{model.name}: {warning}"
                    if message not in warnings:
                        warnings.append(message)

            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "analysis.run_completed",
                best_model=best.model_type,
                best_rmse=best.metrics.rmse,
                n_models=len(ranked),
                n_skipped=len(skipped),
                period=seasonality.period,
                duration_ms=duration_ms,
            )

        return AnalysisResult(
            run_id=run_id,
            statistics=statistics,
            seasonality=seasonality,
            models=ranked,
            best_model=best,
            residuals=residuals,
            n_observations=len(x),
            train_size=split.train_size,
            test_size=split.test_size,
            train_ratio=config.train_ratio,
            timestamps=timestamps,
            skipped_models=tuple(skipped),
            warnings=tuple(warnings),
            duration_ms=duration_ms,
        )

    def _score(
        self,
        forecaster: BaseForecaster,
        train: FloatArray,
        full_series: FloatArray,
        train_size: int,
    ) -> ModelResult:
        try:
            predictions = forecaster.fit_and_predict(train, full_series)
        except (ValueError, ArithmeticError) as e:
            raise ModelFitError(forecaster.model_type, str(e)) from e

        metrics = self.metrics_calculator.calculate_all(
            full_series[train_size:], predictions[train_size:]
        )

        logger.debug(
            "analysis.model_scored",
            model_type=forecaster.model_type,
            rmse=metrics.rmse,
            n_valid=metrics.n_valid,
        )

        return ModelResult(
            model_type=forecaster.model_type,
            name=forecaster.display_name,
            family=forecaster.family,
            predictions=_to_optional(predictions),
            metrics=metrics,
            params=forecaster.get_params(),
        )


@lru_cache
def get_analysis_service() -> AnalysisService:
    """Get the process-wide analysis service."""
    return AnalysisService()
