# file: tsprimer/chapter2/config.py
"""
Chapter 2: Time Series Configuration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ETSConfig:
    # Information criterion used to rank candidates: "aicc", "aic" or "bic"
    criterion: str = "aicc"
    # Tie-break: fewer parameters first, then grid order
    prefer_simpler: bool = True
    # Fit settings passed to statsmodels ETSModel.fit
    maxiter: int = 1000
    # Prediction interval levels for auto_ets
    levels: Tuple[int, ...] = (80, 95)


@dataclass(frozen=True)
class TimeSeriesConfig:
    # Synthetic weekly series
    seed: int = 42
    start: str = "2021-01-03"
    freq: str = "W-SUN"
    season_length: int = 52
    n_years: int = 3
    level: float = 200.0
    slope: float = 0.5
    amplitude: float = 40.0
    noise_sd: float = 8.0
    unique_id: str = "weekly_sales"

    # Forecast recurrences
    horizon: int = 12
    test_size: int = 12
    alpha: float = 0.3
    beta: float = 0.1

    ets: ETSConfig = field(default_factory=ETSConfig)

    def n_obs(self) -> int:
        return self.season_length * self.n_years
