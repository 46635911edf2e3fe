"""Tests for autocorrelation-based seasonality detection."""

import numpy as np
import pytest

from forecastrank.features.seasonality import (
    SIGNIFICANCE_THRESHOLD,
    autocorrelation,
    detect_seasonality,
    find_first_peak,
)


class TestAutocorrelation:
    """Tests for the sample autocorrelation function."""

    def test_known_values(self) -> None:
        """Test autocorrelation against hand-computed values."""
        # deviations [-1.5, -0.5, 0.5, 1.5], n * variance = 5
        acf = autocorrelation([1.0, 2.0, 3.0, 4.0], max_lag=10)

        np.testing.assert_allclose(acf, [0.25, -0.3])

    def test_lag_count_capped_at_half_length(self) -> None:
        """Test lags are limited to floor(n / 2)."""
        acf = autocorrelation(np.arange(11, dtype=np.float64), max_lag=24)
        assert len(acf) == 5

    def test_lag_count_capped_at_max_lag(self) -> None:
        """Test lags are limited to max_lag."""
        acf = autocorrelation(np.arange(100, dtype=np.float64), max_lag=24)
        assert len(acf) == 24

    def test_zero_variance_is_undefined(self) -> None:
        """Test a constant series yields an all-NaN correlogram."""
        acf = autocorrelation([5.0] * 20, max_lag=24)
        assert np.isnan(acf).all()

    def test_huge_values_stay_finite(self) -> None:
        """Test values near 1e200 give the same correlogram as the unit series."""
        acf = autocorrelation([1e200, -1e200] * 6, max_lag=24)

        assert np.isfinite(acf).all()
        np.testing.assert_allclose(acf, autocorrelation([1.0, -1.0] * 6, max_lag=24))
        assert acf[0] == pytest.approx(-11 / 12)

    def test_non_positive_max_lag_raises(self) -> None:
        """Test max_lag must be positive."""
        with pytest.raises(ValueError, match="max_lag"):
            autocorrelation([1.0, 2.0, 3.0], max_lag=0)


class TestFindFirstPeak:
    """Tests for peak selection."""

    def test_first_qualifying_peak_wins(self) -> None:
        """Test the smallest qualifying lag is chosen over a higher later peak."""
        acf = np.array([0.1, 0.5, 0.2, 0.9, 0.1])
        assert find_first_peak(acf) == 2

    def test_peak_below_threshold_ignored(self) -> None:
        """Test local maxima at or below the threshold do not qualify."""
        acf = np.array([0.1, SIGNIFICANCE_THRESHOLD, 0.1, 0.25, 0.0])
        assert find_first_peak(acf) is None

    def test_plateau_is_not_strict_maximum(self) -> None:
        """Test equal neighbours do not form a peak."""
        acf = np.array([0.5, 0.5, 0.4, 0.2])
        assert find_first_peak(acf) is None

    def test_edges_are_never_peaks(self) -> None:
        """Test first and last lags cannot be selected."""
        acf = np.array([0.9, 0.2, 0.1, 0.8])
        assert find_first_peak(acf) is None


class TestDetectSeasonality:
    """Tests for detect_seasonality."""

    @pytest.mark.parametrize("period", [4, 6, 12])
    def test_detects_synthetic_period(self, period: int) -> None:
        """Test a strong periodic signal is detected at its exact period."""
        rng = np.random.default_rng(7)
        i = np.arange(96)
        values = 50.0 + 10.0 * np.sin(2 * np.pi * i / period) + rng.normal(0, 0.5, len(i))

        result = detect_seasonality(values, max_lag=24)

        assert result.detected
        assert result.period == period

    def test_trending_series_has_no_period(self, short_trend_series) -> None:
        """Test the 12-point trending series has no significant peak."""
        result = detect_seasonality(short_trend_series, max_lag=24)

        assert result.period is None
        assert not result.detected
        assert [p.lag for p in result.autocorrelogram] == [1, 2, 3, 4, 5, 6]

    def test_correlogram_values_are_finite_or_none(self) -> None:
        """Test the correlogram never exposes NaN."""
        result = detect_seasonality([3.0] * 30)

        assert result.period is None
        assert all(p.value is None for p in result.autocorrelogram)

    def test_huge_alternating_series_has_period_two(self) -> None:
        """Test detection on values near 1e200 matches the unit-scale series."""
        result = detect_seasonality([1e200, -1e200] * 6, max_lag=24)

        assert result.period == 2
        assert result.autocorrelogram[1].value == pytest.approx(10 / 12)

    def test_threshold_recorded(self) -> None:
        """Test the threshold used is reported."""
        result = detect_seasonality(np.arange(20, dtype=np.float64))
        assert result.threshold == SIGNIFICANCE_THRESHOLD
