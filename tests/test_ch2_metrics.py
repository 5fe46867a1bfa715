"""
Chapter 2: Metrics Tests

Validates NaN-aware behavior (explicit masking, not silent ignoring) and
the holdout leaderboard.
"""

import numpy as np
import pandas as pd
import pytest

from tsprimer.chapter2 import (ForecastMetrics, StrategyFactory,
                               compare_strategies, train_test_split)


@pytest.mark.fail_loud
class TestMetricsNaNHandling:
    """Metrics must explicitly handle NaN via masking"""

    def test_rmse_nan_masked(self):
        """RMSE is computed on the 3 valid rows"""
        y_true = np.array([100.0, 102.0, np.nan, 106.0])
        y_pred = np.array([99.0, 101.0, 104.0, 107.0])
        assert ForecastMetrics.rmse(y_true, y_pred) == pytest.approx(1.0)

    def test_rmse_all_nan_returns_nan(self):
        y = np.array([np.nan, np.nan])
        assert np.isnan(ForecastMetrics.rmse(y, y))

    def test_mae_nan_masked(self):
        y_true = np.array([100.0, np.nan, 104.0])
        y_pred = np.array([98.0, 1.0, 105.0])
        assert ForecastMetrics.mae(y_true, y_pred) == pytest.approx(1.5)

    def test_mape_masks_zero_actuals(self):
        y_true = np.array([0.0, 100.0])
        y_pred = np.array([5.0, 110.0])
        assert ForecastMetrics.mape(y_true, y_pred) == pytest.approx(10.0)

    def test_mase_insufficient_training(self):
        """MASE is NaN when training history is shorter than a season"""
        y_train = np.array([90.0, 92.0])
        result = ForecastMetrics.mase(np.array([100.0]), np.array([99.0]), y_train, season_length=4)
        assert np.isnan(result)

    def test_mase_scaled_by_naive(self):
        """Naive in-sample MAE of [1, 2, 3, 4] is 1, so MASE equals test MAE"""
        y_train = np.array([1.0, 2.0, 3.0, 4.0])
        result = ForecastMetrics.mase(np.array([6.0]), np.array([4.0]), y_train, season_length=1)
        assert result == pytest.approx(2.0)

    def test_mase_constant_training_returns_nan(self):
        y_train = np.full(10, 5.0)
        assert np.isnan(ForecastMetrics.mase(np.array([5.0]), np.array([6.0]), y_train))


class TestComputeAll:
    def test_keys_without_training(self):
        metrics = ForecastMetrics.compute_all(np.array([1.0, 2.0]), np.array([1.0, 3.0]))
        assert set(metrics) == {"rmse", "mae", "mape"}

    def test_keys_with_training(self):
        metrics = ForecastMetrics.compute_all(
            np.array([1.0, 2.0]), np.array([1.0, 3.0]), y_train=np.arange(1.0, 6.0)
        )
        assert set(metrics) == {"rmse", "mae", "mape", "mase"}


class TestHoldout:
    @pytest.fixture
    def series(self):
        t = np.arange(60)
        return pd.Series(10 + 0.5 * t, index=pd.date_range("2023-01-01", periods=60, freq="W-SUN"))

    def test_split_sizes(self, series):
        train, test = train_test_split(series, 12)
        assert len(train) == 48
        assert len(test) == 12
        assert train.index[-1] < test.index[0]

    @pytest.mark.fail_loud
    @pytest.mark.parametrize("test_size", [0, 60, 100])
    def test_bad_test_size(self, series, test_size):
        with pytest.raises(ValueError):
            train_test_split(series, test_size)

    def test_holt_wins_on_linear_trend(self, series):
        train, test = train_test_split(series, 12)
        strategies = [StrategyFactory.create(name) for name in ("naive", "mean", "ses", "holt")]
        leaderboard = compare_strategies(train, test, strategies)

        assert leaderboard.loc[0, "model"] == "holt"
        assert leaderboard.loc[0, "rmse"] == pytest.approx(0.0, abs=1e-9)
        assert leaderboard["rank"].tolist() == [1, 2, 3, 4]
        assert leaderboard.loc[3, "model"] == "mean"
