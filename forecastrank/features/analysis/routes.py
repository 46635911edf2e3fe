"""FastAPI routes for analysis endpoints.

Endpoints:
- POST /analysis/run - Analyse a series and rank the forecasters
- GET /analysis/status - Current orchestrator state
- GET /analysis/latest - Result of the last completed run
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, status

from forecastrank.core.exceptions import NotFoundError
from forecastrank.core.logging import get_logger
from forecastrank.features.analysis.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AnalysisStatusResponse,
)
from forecastrank.features.analysis.service import AnalysisService, get_analysis_service

logger = get_logger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post(
    "/run",
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
    summary="Run an analysis",
    description="""
Analyse a single ordered series and rank the forecasters by test-window RMSE.

**Pipeline:**
- Holdout split: `train_size = floor(n * train_ratio)`
- Descriptive statistics and autocorrelation-based seasonality detection
- Moving average, linear trend, simple exponential smoothing and Holt
- Holt-Winters additive/multiplicative when a period is detected and it is
  shorter than half the training segment

**Errors:**
- 409 when another analysis is running
- 422 when the series has fewer than the minimum number of observations
  or the configuration is out of range
""",
)
def run_analysis(
    request: AnalysisRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Run the analysis pipeline on the posted series.

    Declared sync so FastAPI runs the CPU-bound work in its thread pool.

    Args:
        request: Observations and optional configuration.
        service: Process-wide analysis service.

    Returns:
        AnalysisResponse with the ranked models.
    """
    start_time = time.perf_counter()

    logger.info(
        "analysis.request_received",
        n_observations=len(request.observations),
        has_config=request.config is not None,
    )

    result = service.run(
        request.values(),
        config=request.config,
        timestamps=request.timestamps(),
    )

    logger.info(
        "analysis.request_completed",
        run_id=result.run_id,
        best_model=result.best_model.model_type,
        duration_ms=(time.perf_counter() - start_time) * 1000,
    )

    return AnalysisResponse.from_result(result)


@router.get(
    "/status",
    response_model=AnalysisStatusResponse,
    summary="Get the orchestrator state",
)
def get_status(
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisStatusResponse:
    """Return idle, running or completed with the last run id."""
    latest = service.latest_result
    return AnalysisStatusResponse(
        state=service.state,
        has_result=latest is not None,
        last_run_id=latest.run_id if latest is not None else None,
    )


@router.get(
    "/latest",
    response_model=AnalysisResponse,
    summary="Get the last completed analysis",
)
def get_latest(
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Return the last completed result.

    Raises:
        NotFoundError: If no analysis has completed yet.
    """
    latest = service.latest_result
    if latest is None:
        raise NotFoundError(message="No analysis has completed yet")
    return AnalysisResponse.from_result(latest)
