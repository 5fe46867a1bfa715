"""
Chapter 2: Time Series

Implements the decomposition and forecasting walkthrough:
- Synthetic weekly series with yearly seasonality
- Classical additive decomposition (trend, seasonal, residual)
- Forecast recurrences (naive, mean, SES, Holt)
- ETS model selection (statsmodels grid, statsforecast AutoETS)
- Holdout accuracy comparison
"""

from .config import ETSConfig, TimeSeriesConfig
from .decomposition import (Decomposition, centered_moving_average, decompose,
                            seasonal_indices, seasonal_strength)
from .ets import (ETSFit, ETSSearchResult, ETSSpec, auto_ets, candidate_specs,
                  search_ets)
from .evaluation import ForecastMetrics, compare_strategies, train_test_split
from .forecasting import (ForecastStrategy, HoltState, StrategyFactory,
                          forecast_all, holt_components, holt_forecast,
                          mean_forecast, naive_forecast,
                          seasonal_naive_forecast, ses_fitted, ses_forecast,
                          ses_weights)
from .synthetic import make_weekly_series, to_statsforecast_frame

__all__ = [
    # Config
    "TimeSeriesConfig",
    "ETSConfig",
    # Data
    "make_weekly_series",
    "to_statsforecast_frame",
    # Decomposition
    "Decomposition",
    "centered_moving_average",
    "seasonal_indices",
    "decompose",
    "seasonal_strength",
    # Recurrences
    "naive_forecast",
    "mean_forecast",
    "seasonal_naive_forecast",
    "ses_fitted",
    "ses_forecast",
    "ses_weights",
    "HoltState",
    "holt_components",
    "holt_forecast",
    "ForecastStrategy",
    "StrategyFactory",
    "forecast_all",
    # ETS
    "ETSSpec",
    "ETSSearchResult",
    "ETSFit",
    "candidate_specs",
    "search_ets",
    "auto_ets",
    # Evaluation
    "ForecastMetrics",
    "train_test_split",
    "compare_strategies",
]
