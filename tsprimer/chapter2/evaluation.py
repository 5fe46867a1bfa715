# file: tsprimer/chapter2/evaluation.py
"""
Chapter 2 Step 5: Forecast Accuracy

Holdout comparison of the forecast strategies with explicit NaN handling
(fail-loud principle): metrics are computed on valid rows only and return
NaN when nothing is valid.
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .forecasting import ForecastStrategy

logger = logging.getLogger(__name__)


class ForecastMetrics:
    """Compute forecasting evaluation metrics"""

    @staticmethod
    def _valid(y_true: np.ndarray, y_pred: np.ndarray) -> np.ndarray:
        return np.isfinite(y_pred) & np.isfinite(y_true)

    @staticmethod
    def rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """Root Mean Squared Error over valid rows"""
        y_true, y_pred = np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float)
        valid_mask = ForecastMetrics._valid(y_true, y_pred)

        if valid_mask.sum() == 0:
            return np.nan

        return float(np.sqrt(np.mean((y_pred[valid_mask] - y_true[valid_mask]) ** 2)))

    @staticmethod
    def mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """Mean Absolute Error over valid rows"""
        y_true, y_pred = np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float)
        valid_mask = ForecastMetrics._valid(y_true, y_pred)

        if valid_mask.sum() == 0:
            return np.nan

        return float(np.mean(np.abs(y_pred[valid_mask] - y_true[valid_mask])))

    @staticmethod
    def mape(y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """
        Mean Absolute Percentage Error (%)

        Rows with y_true == 0 are masked along with NaN/inf.
        """
        y_true, y_pred = np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float)
        valid_mask = ForecastMetrics._valid(y_true, y_pred) & (np.abs(y_true) > 1e-10)

        if valid_mask.sum() == 0:
            return np.nan

        ape = np.abs((y_pred[valid_mask] - y_true[valid_mask]) / np.abs(y_true[valid_mask]))
        return float(100 * np.mean(ape))

    @staticmethod
    def mase(
        y_true: np.ndarray,
        y_pred: np.ndarray,
        y_train: np.ndarray,
        season_length: int = 1,
    ) -> float:
        """
        Mean Absolute Scaled Error

        Test MAE divided by the in-sample MAE of the seasonal naive forecast.
        Returns NaN when the training history is shorter than one season
        plus one, or the naive MAE is zero.
        """
        y_train = np.asarray(y_train, dtype=float)
        if len(y_train) <= season_length:
            return np.nan

        scale = np.nanmean(np.abs(y_train[season_length:] - y_train[:-season_length]))
        if not np.isfinite(scale) or scale < 1e-10:
            return np.nan

        mae_test = ForecastMetrics.mae(y_true, y_pred)
        if np.isnan(mae_test):
            return np.nan

        return float(mae_test / scale)

    @staticmethod
    def compute_all(
        y_true: np.ndarray,
        y_pred: np.ndarray,
        y_train: Optional[np.ndarray] = None,
        season_length: int = 1,
    ) -> Dict[str, float]:
        """Compute all metrics at once"""
        metrics = {
            "rmse": ForecastMetrics.rmse(y_true, y_pred),
            "mae": ForecastMetrics.mae(y_true, y_pred),
            "mape": ForecastMetrics.mape(y_true, y_pred),
        }

        if y_train is not None:
            metrics["mase"] = ForecastMetrics.mase(
                y_true, y_pred, y_train, season_length=season_length
            )

        return metrics


def train_test_split(series: pd.Series, test_size: int) -> Tuple[pd.Series, pd.Series]:
    """
    Split off the last test_size observations as a holdout.

    Raises:
        ValueError: if test_size leaves no training data
    """
    if test_size < 1 or test_size >= len(series):
        raise ValueError(f"test_size must be in [1, {len(series) - 1}], got {test_size}")
    return series.iloc[:-test_size], series.iloc[-test_size:]


def compare_strategies(
    train: pd.Series,
    test: pd.Series,
    strategies: Sequence[ForecastStrategy],
    season_length: int = 1,
) -> pd.DataFrame:
    """
    Forecast the holdout with each strategy and rank by RMSE.

    Returns:
        Leaderboard with rmse / mae / mape / mase and rank
    """
    y_train = train.to_numpy(dtype=float)
    y_true = test.to_numpy(dtype=float)

    rows = []
    for strategy in strategies:
        y_pred = strategy.forecast(y_train, len(y_true))
        metrics = ForecastMetrics.compute_all(y_true, y_pred, y_train, season_length=season_length)
        rows.append({"model": strategy.get_name(), **metrics})
        logger.info(f"{strategy.get_name()}: rmse={metrics['rmse']:.2f} mae={metrics['mae']:.2f}")

    leaderboard = pd.DataFrame(rows).sort_values("rmse", kind="mergesort").reset_index(drop=True)
    leaderboard["rank"] = leaderboard.index + 1
    return leaderboard
