"""Custom exceptions and FastAPI exception handlers.

Implements RFC 7807 Problem Details for machine-readable error responses.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from forecastrank.core.logging import get_logger
from forecastrank.core.problem_details import (
    ERROR_TYPES,
    ProblemDetailResponse,
    problem_response,
)

logger = get_logger(__name__)


# =============================================================================
# Exception Classes
# =============================================================================


class ForecastRankError(Exception):
    """Base exception for ForecastRank errors.

    Each exception type maps to an RFC 7807 problem type URI.
    """

    error_type_uri: str = ERROR_TYPES["INTERNAL_ERROR"]

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            status_code: HTTP status code.
            details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    @property
    def title(self) -> str:
        """RFC 7807 title - short summary of problem type."""
        return self.code.replace("_", " ").title()


class NotFoundError(ForecastRankError):
    """Requested resource does not exist (e.g. no completed analysis yet)."""

    error_type_uri: str = ERROR_TYPES["NOT_FOUND"]

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class ConflictError(ForecastRankError):
    """Operation conflicts with the current state."""

    error_type_uri: str = ERROR_TYPES["CONFLICT"]

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str = "CONFLICT",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=409,
            details=details,
        )


class AnalysisInProgressError(ConflictError):
    """An analysis run is already executing; runs are never interleaved.

    Clients should retry once the current run has completed.
    """

    error_type_uri: str = ERROR_TYPES["ANALYSIS_IN_PROGRESS"]

    def __init__(
        self,
        message: str = "An analysis is already running",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="ANALYSIS_IN_PROGRESS", details=details)


class InsufficientDataError(ForecastRankError):
    """Series is too short to analyse.

    The orchestrator stays in its previous state and produces no result.
    """

    error_type_uri: str = ERROR_TYPES["INSUFFICIENT_DATA"]

    def __init__(
        self,
        n_observations: int,
        min_observations: int,
    ) -> None:
        super().__init__(
            message=(
                f"Insufficient data: {n_observations} observations, "
                f"at least {min_observations} required"
            ),
            code="INSUFFICIENT_DATA",
            status_code=422,
            details={
                "n_observations": n_observations,
                "min_observations": min_observations,
            },
        )


class ModelFitError(ForecastRankError):
    """A forecaster was invoked and could not produce predictions.

    Distinct from a skipped model: skipping is decided before invocation and
    is not an error.
    """

    error_type_uri: str = ERROR_TYPES["MODEL_FIT_ERROR"]

    def __init__(
        self,
        model_type: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"{model_type}: {message}",
            code="MODEL_FIT_ERROR",
            status_code=500,
            details={"model_type": model_type, **(details or {})},
        )
        self.model_type = model_type


# =============================================================================
# Exception Handlers (RFC 7807)
# =============================================================================


async def forecastrank_exception_handler(
    _request: Request,
    exc: ForecastRankError,
) -> ProblemDetailResponse:
    """Handle ForecastRankError exceptions with RFC 7807 Problem Details.

    Args:
        _request: FastAPI request object.
        exc: The raised exception.

    Returns:
        RFC 7807 Problem Detail response.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app.error_handled",
        error=exc.message,
        error_type=type(exc).__name__,
        error_code=exc.code,
        status_code=exc.status_code,
        details=exc.details,
        exc_info=exc.status_code >= 500,
    )

    return problem_response(
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        error_code=exc.code,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ProblemDetailResponse:
    """Handle request validation errors with RFC 7807 Problem Details.

    Pydantic errors are flattened into the 'errors' extension field so clients
    can see which configuration value or observation was rejected.

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        RFC 7807 Problem Detail response with field-level errors.
    """
    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = ".".join(str(part) for part in loc if part != "body")
        field_errors.append(
            {
                "field": field_path,
                "message": str(error.get("msg", "Validation failed")),
                "type": str(error.get("type", "unknown")),
            }
        )

    logger.warning(
        "app.validation_error",
        error_count=len(field_errors),
        path=str(request.url.path),
        fields=[e["field"] for e in field_errors],
    )

    return problem_response(
        status=422,
        title="Validation Error",
        detail=f"Request validation failed with {len(field_errors)} error(s). "
        "Check the 'errors' field for details.",
        error_code="VALIDATION_ERROR",
        errors=field_errors,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ProblemDetailResponse:
    """Handle unexpected exceptions with RFC 7807 Problem Details."""
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )

    return problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred. Include the request_id when reporting it.",
        error_code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(ForecastRankError, forecastrank_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
