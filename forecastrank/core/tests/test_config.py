"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from forecastrank.core.config import Settings, get_settings


def test_settings_defaults():
    """Settings should carry the application and analysis defaults."""
    settings = Settings()

    assert settings.app_name == "ForecastRank"
    assert settings.log_format == "json"
    assert settings.api_port == 8123
    assert settings.analysis_min_observations == 10
    assert settings.analysis_train_ratio == 0.8
    assert (settings.analysis_alpha, settings.analysis_beta, settings.analysis_gamma) == (
        0.3,
        0.1,
        0.1,
    )
    assert settings.analysis_max_lag == 24
    assert settings.analysis_moving_average_window == 3


@pytest.mark.parametrize(
    ("env", "development"),
    [("development", True), ("testing", False), ("production", False)],
)
def test_is_development(env, development):
    assert Settings(app_env=env).is_development is development


def test_get_settings_returns_singleton():
    """get_settings should return the cached instance."""
    assert get_settings() is get_settings()


def test_analysis_defaults_from_environment(monkeypatch):
    """Analysis defaults should be overridable through the environment."""
    monkeypatch.setenv("ANALYSIS_TRAIN_RATIO", "0.7")
    monkeypatch.setenv("ANALYSIS_ALPHA", "0.5")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.analysis_train_ratio == 0.7
    assert settings.analysis_alpha == 0.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("ratio", [0.4, 0.95])
def test_train_ratio_out_of_range_rejected(ratio):
    with pytest.raises(ValidationError, match="analysis_train_ratio"):
        Settings(analysis_train_ratio=ratio)


@pytest.mark.parametrize("field", ["analysis_alpha", "analysis_beta", "analysis_gamma"])
def test_smoothing_constants_rejected_at_bounds(field):
    with pytest.raises(ValidationError, match="Smoothing constants"):
        Settings(**{field: 1.0})


@pytest.mark.parametrize("minimum", [1, 9])
def test_min_observations_below_ten_rejected(minimum):
    with pytest.raises(ValidationError, match="analysis_min_observations must be >= 10"):
        Settings(analysis_min_observations=minimum)


def test_min_observations_can_be_raised():
    assert Settings(analysis_min_observations=50).analysis_min_observations == 50


def test_main_serves_on_configured_host_and_port(monkeypatch):
    """python -m forecastrank should hand the settings' host and port to uvicorn."""
    from forecastrank import __main__ as entrypoint

    calls = []
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    monkeypatch.setattr(
        entrypoint,
        "get_settings",
        lambda: Settings(
            api_host="127.0.0.1", api_port=9001, app_env="production", log_level="INFO"
        ),
    )

    entrypoint.main()

    assert calls == [
        (
            "forecastrank.main:app",
            {"host": "127.0.0.1", "port": 9001, "reload": False, "log_level": "info"},
        )
    ]
