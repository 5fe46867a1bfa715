# file: tsprimer/chapter2/decomposition.py
"""
Chapter 2 Step 2: Classical Additive Decomposition

Y_t = T_t + S_t + R_t

1. Trend T: centered moving average of width `period`
   (2 x period MA when period is even). The first and last period // 2
   values are NaN. They are not imputed.
2. Detrended: Y - T (NaN where T is NaN)
3. Seasonal indices: per phase t mod period, mean of detrended values
   (NaN ignored), then centered so the indices sum to zero
4. Residual R: Y - T - S (NaN where T is NaN)
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


@dataclass
class Decomposition:
    """Additive decomposition of a single series"""
    observed: pd.Series
    trend: pd.Series
    seasonal: pd.Series
    resid: pd.Series
    indices: pd.Series
    period: int

    @property
    def detrended(self) -> pd.Series:
        return self.observed - self.trend

    @property
    def valid_mask(self) -> pd.Series:
        """Rows where trend (and so residual) is defined"""
        return self.trend.notna()

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "observed": self.observed,
            "trend": self.trend,
            "seasonal": self.seasonal,
            "resid": self.resid,
        })


def _check_series(series: pd.Series, period: int) -> None:
    if period < 2:
        raise ValueError(f"period must be >= 2, got {period}")
    if len(series) < 2 * period:
        raise ValueError(
            f"Need at least 2 full cycles ({2 * period} obs) for period={period}, got {len(series)}"
        )
    n_missing = int(series.isna().sum())
    if n_missing:
        raise ValueError(f"Series has {n_missing} missing observations; decomposition expects a complete series")


def centered_moving_average(series: pd.Series, window: int) -> pd.Series:
    """
    Centered moving average.

    Odd window: simple window-point MA centered on t.
    Even window: 2 x window MA, i.e. window + 1 points with half weight on
    both ends, so the result stays centered on t.

    The first and last window // 2 values are NaN.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    values = series.astype(float)
    half = window // 2
    if window % 2 == 1:
        trend = values.rolling(window, center=True).mean()
    else:
        trend = values.rolling(window).mean().rolling(2).mean().shift(-half)

    return trend.rename("trend")


def seasonal_indices(detrended: pd.Series, period: int) -> pd.Series:
    """
    Mean detrended value per phase, centered to sum to zero.

    Phase is the position within the cycle counted from the first
    observation (t mod period).
    """
    phase = np.arange(len(detrended)) % period
    raw = pd.Series(detrended.to_numpy(), index=phase).groupby(level=0).mean()
    raw = raw.reindex(range(period))
    if raw.isna().any():
        missing = raw[raw.isna()].index.tolist()
        raise ValueError(f"No detrended values for phases {missing}")

    adjusted = raw - raw.mean()
    adjusted.index.name = "phase"
    return adjusted.rename("seasonal_index")


def decompose(series: pd.Series, period: int) -> Decomposition:
    """
    Classical additive decomposition.

    Args:
        series: Evenly spaced, complete series
        period: Cycle length L (52 for weekly data with yearly seasonality)

    Returns:
        Decomposition with trend / seasonal / resid aligned to series.index
    """
    _check_series(series, period)
    observed = series.astype(float)

    trend = centered_moving_average(observed, period)
    detrended = observed - trend
    indices = seasonal_indices(detrended, period)

    phase = np.arange(len(observed)) % period
    seasonal = pd.Series(indices.to_numpy()[phase], index=observed.index, name="seasonal")
    resid = (observed - trend - seasonal).rename("resid")

    logger.info(
        f"Decomposed {len(observed)} obs (period={period}): "
        f"{int(trend.notna().sum())} obs with defined trend"
    )

    return Decomposition(
        observed=observed,
        trend=trend,
        seasonal=seasonal,
        resid=resid,
        indices=indices,
        period=period,
    )


def seasonal_strength(decomposition: Decomposition) -> float:
    """
    Strength of seasonality: max(0, 1 - Var(R) / Var(S + R)).

    Close to 1 means the seasonal pattern dominates the remainder.
    """
    mask = decomposition.valid_mask
    resid = decomposition.resid[mask]
    seasonal_plus_resid = decomposition.seasonal[mask] + resid

    denom = seasonal_plus_resid.var()
    if not np.isfinite(denom) or denom <= 0:
        return 0.0
    return float(max(0.0, 1.0 - resid.var() / denom))
