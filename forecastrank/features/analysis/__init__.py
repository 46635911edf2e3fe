"""Analysis module: orchestrates statistics, seasonality, forecasting and ranking."""

from forecastrank.features.analysis.schemas import (
    AnalysisConfig,
    AnalysisRequest,
    AnalysisResponse,
    AnalysisState,
    AnalysisStatusResponse,
    Observation,
)
from forecastrank.features.analysis.service import (
    AnalysisResult,
    AnalysisService,
    ModelResult,
    SkippedModel,
    get_analysis_service,
    seasonal_gate,
)

__all__ = [
    "AnalysisConfig",
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisResult",
    "AnalysisService",
    "AnalysisState",
    "AnalysisStatusResponse",
    "ModelResult",
    "Observation",
    "SkippedModel",
    "get_analysis_service",
    "seasonal_gate",
]
