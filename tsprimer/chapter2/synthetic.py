# file: tsprimer/chapter2/synthetic.py
"""
Chapter 2 Step 1: Synthetic Weekly Series

y_t = level + slope * t + amplitude * sin(2*pi*t / season_length) + noise

Generated once from a fixed seed. Values stay strictly positive so that
multiplicative ETS candidates are admissible.
"""

import logging

import numpy as np
import pandas as pd

from .config import TimeSeriesConfig

logger = logging.getLogger(__name__)


def make_weekly_series(config: TimeSeriesConfig) -> pd.Series:
    """
    Generate the weekly series used throughout Chapter 2.

    Returns:
        pd.Series with a weekly DatetimeIndex (config.freq)
    """
    n = config.n_obs()
    if n < 2 * config.season_length:
        raise ValueError(f"Need at least 2 seasonal cycles, got n_years={config.n_years}")

    rng = np.random.default_rng(config.seed)
    t = np.arange(n)

    trend = config.level + config.slope * t
    seasonal = config.amplitude * np.sin(2 * np.pi * t / config.season_length)
    noise = rng.normal(0.0, config.noise_sd, size=n)
    values = trend + seasonal + noise

    if (values <= 0).any():
        raise ValueError("Synthetic series must be strictly positive; raise level or lower amplitude/noise_sd")

    index = pd.date_range(config.start, periods=n, freq=config.freq)
    series = pd.Series(values, index=index, name=config.unique_id)

    logger.info(f"Synthetic weekly series: {n} obs, {index[0]:%Y-%m-%d} to {index[-1]:%Y-%m-%d}")
    return series


def to_statsforecast_frame(series: pd.Series, unique_id: str = "weekly_sales") -> pd.DataFrame:
    """
    Convert a series to statsforecast format.

    Returns:
        DataFrame with columns [unique_id, ds, y]; ds is timezone-naive
    """
    ds = pd.to_datetime(series.index, errors="raise")
    if ds.tz is not None:
        ds = ds.tz_convert("UTC").tz_localize(None)

    return pd.DataFrame({
        "unique_id": unique_id,
        "ds": ds,
        "y": series.to_numpy(dtype=float),
    })
