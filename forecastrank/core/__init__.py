"""Core infrastructure: config, logging, middleware, exceptions."""

from forecastrank.core.config import Settings, get_settings
from forecastrank.core.logging import bind_run_id, get_logger, request_id_ctx, run_id_ctx

__all__ = [
    "Settings",
    "bind_run_id",
    "get_logger",
    "get_settings",
    "request_id_ctx",
    "run_id_ctx",
]
