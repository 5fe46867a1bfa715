# file: tsprimer/chapter2/forecasting.py
"""
Chapter 2 Step 3: Forecast Recurrences

Escalating forecast rules, each a pure function of (history, parameters):
1. Naive: last observation
2. Mean: average of all observations
3. Simple exponential smoothing (SES):
       yhat_{t+1} = alpha * y_t + (1 - alpha) * yhat_t
4. Holt (trend-extended SES):
       l_t = alpha * y_t + (1 - alpha) * (l_{t-1} + b_{t-1})
       b_t = beta * (l_t - l_{t-1}) + (1 - beta) * b_{t-1}
       yhat_{T+h} = l_T + h * b_T

Strategies wrap the functions behind one forecast(y, h) interface so the
walkthrough can compare them side by side.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]


def _as_history(y: ArrayLike) -> np.ndarray:
    history = np.asarray(y, dtype=float)
    if history.ndim != 1:
        raise ValueError(f"History must be 1-dimensional, got shape {history.shape}")
    if len(history) == 0:
        raise ValueError("History is empty")
    if not np.isfinite(history).all():
        raise ValueError("History contains NaN/inf; recurrences expect a complete series")
    return history


def _check_horizon(h: int) -> None:
    if h < 1:
        raise ValueError(f"Horizon must be >= 1, got {h}")


def _check_smoothing(name: str, value: float) -> None:
    if not 0.0 < value <= 1.0:
        raise ValueError(f"{name} must be in (0, 1], got {value}")


def naive_forecast(y: ArrayLike, h: int) -> np.ndarray:
    """Every future step equals the last observed value"""
    history = _as_history(y)
    _check_horizon(h)
    return np.full(h, history[-1])


def mean_forecast(y: ArrayLike, h: int) -> np.ndarray:
    """Every future step equals the mean of all observed values"""
    history = _as_history(y)
    _check_horizon(h)
    return np.full(h, history.mean())


def seasonal_naive_forecast(y: ArrayLike, h: int, season_length: int) -> np.ndarray:
    """Each future step repeats the value one season earlier"""
    history = _as_history(y)
    _check_horizon(h)
    if season_length < 1 or season_length > len(history):
        raise ValueError(f"season_length must be in [1, {len(history)}], got {season_length}")

    last_cycle = history[-season_length:]
    return np.array([last_cycle[i % season_length] for i in range(h)])


def ses_fitted(y: ArrayLike, alpha: float, initial: Optional[float] = None) -> np.ndarray:
    """
    One-step-ahead SES forecasts yhat_1 .. yhat_T.

    Args:
        y: History y_1 .. y_T
        alpha: Smoothing parameter in (0, 1]
        initial: Seed for yhat_1 (default: y_1)

    Returns:
        Array of length T where element t is the forecast of y_t made with
        y_1 .. y_{t-1}
    """
    history = _as_history(y)
    _check_smoothing("alpha", alpha)

    fitted = np.empty(len(history))
    fitted[0] = history[0] if initial is None else float(initial)
    for t in range(1, len(history)):
        fitted[t] = alpha * history[t - 1] + (1 - alpha) * fitted[t - 1]
    return fitted


def ses_forecast(
    y: ArrayLike,
    h: int,
    alpha: float,
    initial: Optional[float] = None,
) -> np.ndarray:
    """
    Flat SES forecast yhat_{T+1|T} repeated for h steps.

    Example: y=[10, 12, 11, 14], alpha=0.5 -> fitted [10, 10, 11, 11],
    forecast 12.5
    """
    history = _as_history(y)
    _check_horizon(h)
    fitted = ses_fitted(history, alpha, initial)
    next_value = alpha * history[-1] + (1 - alpha) * fitted[-1]
    return np.full(h, next_value)


def ses_weights(alpha: float, n: int) -> np.ndarray:
    """
    Weight SES puts on the observation k steps back: alpha * (1 - alpha)^k.

    Element k applies to y_{T-k}. The seed keeps the remaining
    (1 - alpha)^n.
    """
    _check_smoothing("alpha", alpha)
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    k = np.arange(n)
    return alpha * (1 - alpha) ** k


@dataclass
class HoltState:
    """Level and slope after each observation"""
    level: np.ndarray
    trend: np.ndarray

    @property
    def last_level(self) -> float:
        return float(self.level[-1])

    @property
    def last_trend(self) -> float:
        return float(self.trend[-1])


def holt_components(
    y: ArrayLike,
    alpha: float,
    beta: float,
    initial_level: Optional[float] = None,
    initial_trend: Optional[float] = None,
) -> HoltState:
    """
    Run Holt's level/slope recurrences over the history.

    Seeds default to l_1 = y_1 and b_1 = y_2 - y_1 (0 for a single
    observation). Updates start at t = 2.
    """
    history = _as_history(y)
    _check_smoothing("alpha", alpha)
    _check_smoothing("beta", beta)

    if initial_level is None:
        initial_level = history[0]
    if initial_trend is None:
        initial_trend = history[1] - history[0] if len(history) > 1 else 0.0

    level = np.empty(len(history))
    trend = np.empty(len(history))
    level[0] = initial_level
    trend[0] = initial_trend
    for t in range(1, len(history)):
        level[t] = alpha * history[t] + (1 - alpha) * (level[t - 1] + trend[t - 1])
        trend[t] = beta * (level[t] - level[t - 1]) + (1 - beta) * trend[t - 1]

    return HoltState(level=level, trend=trend)


def holt_forecast(
    y: ArrayLike,
    h: int,
    alpha: float,
    beta: float,
    initial_level: Optional[float] = None,
    initial_trend: Optional[float] = None,
) -> np.ndarray:
    """Holt forecast l_T + h * b_T for h = 1 .. h (linear in h)"""
    _check_horizon(h)
    state = holt_components(y, alpha, beta, initial_level, initial_trend)
    steps = np.arange(1, h + 1)
    return state.last_level + steps * state.last_trend


class ForecastStrategy(ABC):
    """Base class for forecast strategies"""

    @abstractmethod
    def forecast(self, y: ArrayLike, h: int) -> np.ndarray:
        """Forecast h steps after the end of y"""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Strategy name"""
        pass


class NaiveStrategy(ForecastStrategy):
    def forecast(self, y: ArrayLike, h: int) -> np.ndarray:
        return naive_forecast(y, h)

    def get_name(self) -> str:
        return "naive"


class MeanStrategy(ForecastStrategy):
    def forecast(self, y: ArrayLike, h: int) -> np.ndarray:
        return mean_forecast(y, h)

    def get_name(self) -> str:
        return "mean"


class SeasonalNaiveStrategy(ForecastStrategy):
    def __init__(self, season_length: int = 52):
        self.season_length = season_length

    def forecast(self, y: ArrayLike, h: int) -> np.ndarray:
        return seasonal_naive_forecast(y, h, self.season_length)

    def get_name(self) -> str:
        return "seasonal_naive"


class SESStrategy(ForecastStrategy):
    """Simple exponential smoothing with a fixed alpha"""

    def __init__(self, alpha: float = 0.3, initial: Optional[float] = None):
        _check_smoothing("alpha", alpha)
        self.alpha = alpha
        self.initial = initial

    def forecast(self, y: ArrayLike, h: int) -> np.ndarray:
        return ses_forecast(y, h, self.alpha, self.initial)

    def get_name(self) -> str:
        return "ses"


class HoltStrategy(ForecastStrategy):
    """Holt's linear trend method with fixed alpha / beta"""

    def __init__(
        self,
        alpha: float = 0.3,
        beta: float = 0.1,
        initial_level: Optional[float] = None,
        initial_trend: Optional[float] = None,
    ):
        _check_smoothing("alpha", alpha)
        _check_smoothing("beta", beta)
        self.alpha = alpha
        self.beta = beta
        self.initial_level = initial_level
        self.initial_trend = initial_trend

    def forecast(self, y: ArrayLike, h: int) -> np.ndarray:
        return holt_forecast(y, h, self.alpha, self.beta, self.initial_level, self.initial_trend)

    def get_name(self) -> str:
        return "holt"


class StrategyFactory:
    """Factory for creating strategy instances"""

    _strategies = {
        "naive": NaiveStrategy,
        "mean": MeanStrategy,
        "seasonal_naive": SeasonalNaiveStrategy,
        "ses": SESStrategy,
        "holt": HoltStrategy,
    }

    @classmethod
    def create(cls, name: str, **kwargs) -> ForecastStrategy:
        """Create strategy by name"""
        if name not in cls._strategies:
            raise ValueError(f"Unknown strategy: {name}. Available: {cls.list_strategies()}")

        return cls._strategies[name](**kwargs)

    @classmethod
    def list_strategies(cls) -> List[str]:
        """List available strategies"""
        return list(cls._strategies.keys())


def forecast_all(
    y: ArrayLike,
    h: int,
    strategies: Sequence[ForecastStrategy],
    index: Optional[pd.Index] = None,
) -> pd.DataFrame:
    """
    Run several strategies on the same history.

    Returns:
        DataFrame with one column per strategy name, h rows
    """
    columns: Dict[str, np.ndarray] = {}
    for strategy in strategies:
        columns[strategy.get_name()] = strategy.forecast(y, h)
        logger.debug(f"{strategy.get_name()}: first step {columns[strategy.get_name()][0]:.2f}")

    return pd.DataFrame(columns, index=index)
