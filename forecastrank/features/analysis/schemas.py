"""Pydantic schemas for analysis configuration and API contracts.

Schemas are designed to be:
- Immutable (frozen=True) so a run's configuration cannot drift mid-run
- Strict (extra="forbid") so typos in configuration keys are rejected
- Range-checked so invalid configuration never reaches the orchestrator
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forecastrank.core.config import get_settings

if TYPE_CHECKING:
    from forecastrank.features.analysis.service import AnalysisResult


class AnalysisState(str, Enum):
    """Orchestrator lifecycle states.

    State transitions:
    - IDLE -> RUNNING -> COMPLETED
    - COMPLETED -> RUNNING -> COMPLETED (next run replaces the result)
    - RUNNING -> previous state when a run fails
    """

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


# =============================================================================
# Configuration
# =============================================================================


class AnalysisConfig(BaseModel):
    """Per-run analysis configuration.

    Attributes:
        train_ratio: Fraction of observations used for training.
        alpha: Level smoothing constant.
        beta: Trend smoothing constant.
        gamma: Seasonal smoothing constant.
        max_lag: Largest autocorrelation lag examined.
        moving_average_window: Trailing window of the moving average.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    train_ratio: float = Field(
        default=0.8,
        ge=0.5,
        le=0.9,
        description="Fraction of observations in the training segment",
    )
    alpha: float = Field(default=0.3, gt=0.0, lt=1.0, description="Level smoothing")
    beta: float = Field(default=0.1, gt=0.0, lt=1.0, description="Trend smoothing")
    gamma: float = Field(default=0.1, gt=0.0, lt=1.0, description="Seasonal smoothing")
    max_lag: int = Field(
        default=24,
        ge=1,
        description="Largest autocorrelation lag examined",
    )
    moving_average_window: int = Field(
        default=3,
        ge=1,
        description="Trailing window of the moving average",
    )

    @classmethod
    def from_settings(cls) -> AnalysisConfig:
        """Build the default configuration from application settings.

        Returns:
            AnalysisConfig populated from the analysis_* settings.
        """
        settings = get_settings()
        return cls(
            train_ratio=settings.analysis_train_ratio,
            alpha=settings.analysis_alpha,
            beta=settings.analysis_beta,
            gamma=settings.analysis_gamma,
            max_lag=settings.analysis_max_lag,
            moving_average_window=settings.analysis_moving_average_window,
        )


# =============================================================================
# Request
# =============================================================================


class Observation(BaseModel):
    """One point of the input series."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: str = Field(..., description="Opaque label, never parsed")
    value: float = Field(..., allow_inf_nan=False, description="Finite observed value")


class AnalysisRequest(BaseModel):
    """Request body for POST /analysis/run.

    Attributes:
        observations: Series in order; order is significant and kept.
        config: Optional overrides; defaults come from settings.
    """

    model_config = ConfigDict(extra="forbid")

    observations: list[Observation] = Field(..., min_length=1)
    config: AnalysisConfig | None = None

    @field_validator("observations")
    @classmethod
    def validate_series_length(cls, v: list[Observation]) -> list[Observation]:
        """Reject series longer than the configured maximum."""
        max_observations = get_settings().analysis_max_observations
        if len(v) > max_observations:
            raise ValueError(
                f"Series has {len(v)} observations, at most {max_observations} allowed"
            )
        return v

    def values(self) -> list[float]:
        """Observation values in order."""
        return [obs.value for obs in self.observations]

    def timestamps(self) -> list[str]:
        """Observation labels in order."""
        return [obs.timestamp for obs in self.observations]


# =============================================================================
# Responses
# =============================================================================


class StatisticsResponse(BaseModel):
    """Descriptive statistics of the full series."""

    model_config = ConfigDict(frozen=True)

    n: int
    mean: float
    variance: float | None
    std: float
    median: float
    min: float
    max: float
    skewness: float | None
    kurtosis: float | None


class AutocorrelationPointResponse(BaseModel):
    """Autocorrelation at one lag."""

    model_config = ConfigDict(frozen=True)

    lag: int
    value: float | None


class SeasonalityResponse(BaseModel):
    """Detected period and the correlogram it was read from."""

    model_config = ConfigDict(frozen=True)

    period: int | None
    threshold: float
    autocorrelogram: list[AutocorrelationPointResponse]


class MetricSetResponse(BaseModel):
    """Test-window error metrics of one model. None = undefined."""

    model_config = ConfigDict(frozen=True)

    mse: float | None
    rmse: float | None
    mae: float | None
    mape: float | None
    aic: float | None
    bic: float | None
    n_valid: int


class ModelResultResponse(BaseModel):
    """One ranked model."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    rank: int = Field(..., ge=1, description="1 = lowest RMSE")
    model_type: str
    name: str
    family: str
    params: dict[str, Any]
    predictions: list[float | None] = Field(
        ..., description="Aligned 1:1 with the input series; None = undefined"
    )
    metrics: MetricSetResponse


class SkippedModelResponse(BaseModel):
    """A model that was not run and why."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_type: str
    name: str
    reason: str


class AnalysisResponse(BaseModel):
    """Response body of a completed analysis.

    Every numeric field is finite or None.
    """

    model_config = ConfigDict(frozen=True)

    run_id: str
    n_observations: int
    train_size: int
    test_size: int
    train_ratio: float
    statistics: StatisticsResponse
    seasonality: SeasonalityResponse
    models: list[ModelResultResponse]
    best_model: str
    residuals: list[float]
    skipped_models: list[SkippedModelResponse]
    warnings: list[str]
    duration_ms: float

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalysisResponse:
        """Convert the orchestrator's result into the API shape.

        Args:
            result: Completed analysis result.

        Returns:
            AnalysisResponse mirroring the result.
        """
        stats = result.statistics
        return cls(
            run_id=result.run_id,
            n_observations=result.n_observations,
            train_size=result.train_size,
            test_size=result.test_size,
            train_ratio=result.train_ratio,
            statistics=StatisticsResponse(
                n=stats.n,
                mean=stats.mean,
                variance=stats.variance,
                std=stats.std,
                median=stats.median,
                min=stats.min,
                max=stats.max,
                skewness=stats.skewness,
                kurtosis=stats.kurtosis,
            ),
            seasonality=SeasonalityResponse(
                period=result.seasonality.period,
                threshold=result.seasonality.threshold,
                autocorrelogram=[
                    AutocorrelationPointResponse(lag=p.lag, value=p.value)
                    for p in result.seasonality.autocorrelogram
                ],
            ),
            models=[
                ModelResultResponse(
                    rank=rank,
                    model_type=model.model_type,
                    name=model.name,
                    family=model.family,
                    params=model.params,
                    predictions=list(model.predictions),
                    metrics=MetricSetResponse(
                        **model.metrics.as_dict(), n_valid=model.metrics.n_valid
                    ),
                )
                for rank, model in enumerate(result.models, start=1)
            ],
            best_model=result.best_model.name,
            residuals=list(result.residuals),
            skipped_models=[
                SkippedModelResponse(model_type=s.model_type, name=s.name, reason=s.reason)
                for s in result.skipped_models
            ],
            warnings=list(result.warnings),
            duration_ms=result.duration_ms,
        )


class AnalysisStatusResponse(BaseModel):
    """Current orchestrator state."""

    model_config = ConfigDict(frozen=True)

    state: AnalysisState
    has_result: bool
    last_run_id: str | None = None
