"""Tests for analysis configuration and request schemas."""

import math

import pytest
from pydantic import ValidationError

from forecastrank.core.config import Settings
from forecastrank.features.analysis import schemas as schemas_module
from forecastrank.features.analysis.schemas import (
    AnalysisConfig,
    AnalysisRequest,
    AnalysisResponse,
    Observation,
)
from forecastrank.features.analysis.service import AnalysisService


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        config = AnalysisConfig()

        assert config.train_ratio == 0.8
        assert config.alpha == 0.3
        assert config.beta == 0.1
        assert config.gamma == 0.1
        assert config.max_lag == 24
        assert config.moving_average_window == 3

    @pytest.mark.parametrize("ratio", [0.5, 0.75, 0.9])
    def test_train_ratio_bounds_inclusive(self, ratio):
        assert AnalysisConfig(train_ratio=ratio).train_ratio == ratio

    @pytest.mark.parametrize("ratio", [0.49, 0.95, 1.0])
    def test_train_ratio_out_of_range(self, ratio):
        """Test ratios outside [0.5, 0.9] are rejected, not clamped."""
        with pytest.raises(ValidationError):
            AnalysisConfig(train_ratio=ratio)

    @pytest.mark.parametrize("field", ["alpha", "beta", "gamma"])
    @pytest.mark.parametrize("value", [0.0, 1.0, -0.2, 1.5])
    def test_smoothing_constants_open_interval(self, field, value):
        with pytest.raises(ValidationError):
            AnalysisConfig(**{field: value})

    @pytest.mark.parametrize("field", ["max_lag", "moving_average_window"])
    def test_non_positive_integers_rejected(self, field):
        with pytest.raises(ValidationError):
            AnalysisConfig(**{field: 0})

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            AnalysisConfig(window=3)  # type: ignore[call-arg]

    def test_frozen(self):
        config = AnalysisConfig()
        with pytest.raises(ValidationError):
            config.alpha = 0.5  # type: ignore[misc]

    def test_from_settings(self, monkeypatch):
        """Test defaults are taken from the analysis_* settings."""
        settings = Settings(analysis_alpha=0.6, analysis_train_ratio=0.7, analysis_max_lag=12)
        monkeypatch.setattr(schemas_module, "get_settings", lambda: settings)

        config = AnalysisConfig.from_settings()

        assert config.alpha == 0.6
        assert config.train_ratio == 0.7
        assert config.max_lag == 12
        assert config.beta == 0.1


class TestAnalysisRequest:
    """Tests for request validation."""

    def test_valid_request(self):
        request = AnalysisRequest(
            observations=[{"timestamp": "a", "value": 1.0}, {"timestamp": "b", "value": 2.5}],
        )

        assert request.values() == [1.0, 2.5]
        assert request.timestamps() == ["a", "b"]
        assert request.config is None

    def test_empty_series_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisRequest(observations=[])

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_values_rejected(self, value):
        with pytest.raises(ValidationError):
            Observation(timestamp="t0", value=value)

    def test_series_longer_than_maximum_rejected(self, monkeypatch):
        settings = Settings(analysis_max_observations=3)
        monkeypatch.setattr(schemas_module, "get_settings", lambda: settings)

        with pytest.raises(ValidationError, match="at most 3"):
            AnalysisRequest(
                observations=[{"timestamp": str(i), "value": float(i)} for i in range(4)],
            )

    def test_nested_config_validated(self):
        with pytest.raises(ValidationError):
            AnalysisRequest(
                observations=[{"timestamp": "a", "value": 1.0}],
                config={"train_ratio": 0.99},
            )


class TestAnalysisResponse:
    """Tests for converting a result into the API shape."""

    def test_from_result(self, trend_series):
        result = AnalysisService(min_observations=10).run(trend_series)

        response = AnalysisResponse.from_result(result)

        assert response.run_id == result.run_id
        assert response.best_model == result.best_model.name
        assert [m.rank for m in response.models] == [1, 2, 3, 4]
        assert response.models[0].metrics.rmse == result.best_model.metrics.rmse
        assert len(response.skipped_models) == 2
        assert len(response.seasonality.autocorrelogram) == 6
        assert response.statistics.n == 12
