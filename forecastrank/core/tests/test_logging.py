"""Tests for logging configuration and correlation ids."""

import pytest

from forecastrank.core.logging import (
    add_correlation_ids,
    bind_run_id,
    configure_logging,
    get_logger,
    request_id_ctx,
    run_id_ctx,
)


def test_get_logger_returns_bound_logger():
    """get_logger should return a structlog logger."""
    configure_logging()
    logger = get_logger("test")

    assert hasattr(logger, "info")
    assert hasattr(logger, "warning")


def test_bind_run_id_scopes_value():
    """bind_run_id should set run_id only inside the block."""
    assert run_id_ctx.get() is None

    with bind_run_id("abc123"):
        assert run_id_ctx.get() == "abc123"

    assert run_id_ctx.get() is None


def test_bind_run_id_resets_on_error():
    with pytest.raises(RuntimeError), bind_run_id("failing-run"):
        raise RuntimeError("boom")

    assert run_id_ctx.get() is None


def test_add_correlation_ids_includes_bound_values():
    """The processor should fold request_id and run_id into events."""
    token = request_id_ctx.set("req-1")
    try:
        with bind_run_id("run-1"):
            event = add_correlation_ids(None, "info", {"event": "analysis.run_started"})
    finally:
        request_id_ctx.reset(token)

    assert event == {"event": "analysis.run_started", "request_id": "req-1", "run_id": "run-1"}


def test_add_correlation_ids_skips_unset_values():
    event = add_correlation_ids(None, "info", {"event": "health.check_started"})
    assert event == {"event": "health.check_started"}
