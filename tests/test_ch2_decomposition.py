"""
Chapter 2: Decomposition Tests

Validates the additive decomposition invariants:
- Y = T + S + R wherever T is defined
- Seasonal indices sum to zero over one cycle
- Moving-average edges are NaN, interior is defined
"""

import numpy as np
import pandas as pd
import pytest

from tsprimer.chapter2 import (TimeSeriesConfig, centered_moving_average,
                               decompose, make_weekly_series,
                               seasonal_indices, seasonal_strength)


@pytest.fixture
def weekly():
    return make_weekly_series(TimeSeriesConfig(seed=11))


def make_series(n: int, period: int, seed: int = 0) -> pd.Series:
    rng = np.random.default_rng(seed)
    t = np.arange(n)
    values = 50 + 0.3 * t + 5 * np.cos(2 * np.pi * t / period) + rng.normal(0, 1, n)
    return pd.Series(values, index=pd.date_range("2022-01-02", periods=n, freq="W-SUN"))


class TestReconstruction:
    @pytest.mark.parametrize("period", [4, 5, 12, 52])
    def test_components_sum_to_observed(self, period):
        series = make_series(3 * period + 1, period)
        result = decompose(series, period)
        mask = result.valid_mask

        rebuilt = result.trend[mask] + result.seasonal[mask] + result.resid[mask]
        np.testing.assert_allclose(rebuilt.to_numpy(), series[mask].to_numpy(), atol=1e-9)

    def test_resid_undefined_where_trend_undefined(self, weekly):
        result = decompose(weekly, 52)
        assert result.resid.isna().equals(result.trend.isna())
        assert result.detrended.isna().equals(result.trend.isna())

    def test_seasonal_defined_everywhere(self, weekly):
        result = decompose(weekly, 52)
        assert result.seasonal.notna().all()

    def test_components_aligned_to_index(self, weekly):
        result = decompose(weekly, 52)
        frame = result.to_frame()
        assert frame.index.equals(weekly.index)
        assert list(frame.columns) == ["observed", "trend", "seasonal", "resid"]


class TestSeasonalZeroSum:
    @pytest.mark.parametrize("period", [4, 7, 52])
    def test_indices_sum_to_zero(self, period):
        result = decompose(make_series(4 * period, period, seed=period), period)
        assert len(result.indices) == period
        assert abs(result.indices.sum()) < 1e-9

    def test_seasonal_repeats_indices(self, weekly):
        result = decompose(weekly, 52)
        np.testing.assert_allclose(result.seasonal.iloc[:52].to_numpy(), result.indices.to_numpy())
        np.testing.assert_allclose(result.seasonal.iloc[52:104].to_numpy(), result.indices.to_numpy())

    def test_phase_mean_ignores_nan(self):
        """Phase 0 mean uses only defined values: (2 + 4) / 2 = 3"""
        detrended = pd.Series([np.nan, 1.0, 2.0, -1.0, 4.0, np.nan])
        raw_phase0 = 3.0
        raw_phase1 = 0.0
        indices = seasonal_indices(detrended, 2)
        center = (raw_phase0 + raw_phase1) / 2
        np.testing.assert_allclose(indices.to_numpy(), [raw_phase0 - center, raw_phase1 - center])


class TestMovingAverageEdges:
    @pytest.mark.parametrize("window", [4, 5, 12, 52])
    def test_edges_nan_interior_defined(self, window):
        series = make_series(3 * window, window)
        trend = centered_moving_average(series, window)
        half = window // 2

        assert trend.iloc[:half].isna().all()
        assert trend.iloc[len(trend) - half:].isna().all()
        assert trend.iloc[half:len(trend) - half].notna().all()

    def test_odd_window_is_simple_average(self):
        series = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0])
        trend = centered_moving_average(series, 3)
        np.testing.assert_allclose(trend.iloc[1:4].to_numpy(), [2.0, 3.0, 4.0])

    def test_even_window_half_weights_ends(self):
        """2x4 MA at t=2: (0.5*y0 + y1 + y2 + y3 + 0.5*y4) / 4"""
        series = pd.Series([1.0, 2.0, 4.0, 8.0, 16.0, 32.0])
        trend = centered_moving_average(series, 4)
        expected = (0.5 * 1 + 2 + 4 + 8 + 0.5 * 16) / 4
        assert trend.iloc[2] == pytest.approx(expected)

    def test_constant_series_trend_is_constant(self):
        trend = centered_moving_average(pd.Series(np.full(20, 7.0)), 6)
        np.testing.assert_allclose(trend.dropna().to_numpy(), 7.0)


class TestAgainstStatsmodels:
    """Same algorithm as statsmodels seasonal_decompose (additive)"""

    @pytest.mark.parametrize("period", [4, 7, 52])
    def test_matches_seasonal_decompose(self, period):
        from statsmodels.tsa.seasonal import seasonal_decompose

        series = make_series(3 * period + 2, period, seed=3)
        ours = decompose(series, period)
        ref = seasonal_decompose(series, model="additive", period=period)

        np.testing.assert_allclose(ours.trend.to_numpy(), ref.trend.to_numpy(), equal_nan=True)
        np.testing.assert_allclose(ours.seasonal.to_numpy(), ref.seasonal.to_numpy())
        np.testing.assert_allclose(ours.resid.to_numpy(), ref.resid.to_numpy(), equal_nan=True)


class TestSeasonalStrength:
    def test_strong_for_synthetic_weekly(self, weekly):
        strength = seasonal_strength(decompose(weekly, 52))
        assert 0.5 < strength <= 1.0

    def test_bounded(self):
        rng = np.random.default_rng(5)
        series = pd.Series(rng.normal(100, 5, 48))
        strength = seasonal_strength(decompose(series, 12))
        assert 0.0 <= strength <= 1.0


@pytest.mark.fail_loud
class TestDecompositionInputs:
    def test_period_too_small(self):
        with pytest.raises(ValueError, match="period"):
            decompose(make_series(20, 4), 1)

    def test_fewer_than_two_cycles(self):
        with pytest.raises(ValueError, match="2 full cycles"):
            decompose(make_series(60, 52), 52)

    def test_missing_observation(self):
        series = make_series(24, 4)
        series.iloc[5] = np.nan
        with pytest.raises(ValueError, match="missing"):
            decompose(series, 4)
