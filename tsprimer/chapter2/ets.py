# file: tsprimer/chapter2/ets.py
"""
Chapter 2 Step 4: State-Space Exponential Smoothing (ETS)

ETS(error, trend, seasonal) models written as a probabilistic recursive
system. The structure is chosen automatically from a small grid:

- error:    A (additive), M (multiplicative)
- trend:    N (none), A (additive), Ad (damped additive)
- seasonal: N (none), A (additive), M (multiplicative)

Two ways to run the search:
1. search_ets: explicit grid with statsmodels ETSModel, ranked by an
   information criterion (configurable, with a configurable tie-break)
2. auto_ets: statsforecast AutoETS, the library's built-in selection
"""

import logging
import re
import warnings
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import ETSConfig

logger = logging.getLogger(__name__)

CRITERIA = ("aicc", "aic", "bic")
_METHOD_RE = re.compile(r"ETS\(\s*([AM])\s*,\s*([AN])(d?)\s*,\s*([AMN])\s*\)")


@dataclass(frozen=True)
class ETSSpec:
    """One ETS structure from the grid"""
    error: str = "A"
    trend: str = "N"
    damped: bool = False
    seasonal: str = "N"

    def __post_init__(self):
        if self.error not in ("A", "M"):
            raise ValueError(f"error must be 'A' or 'M', got {self.error!r}")
        if self.trend not in ("N", "A"):
            raise ValueError(f"trend must be 'N' or 'A', got {self.trend!r}")
        if self.seasonal not in ("N", "A", "M"):
            raise ValueError(f"seasonal must be 'N', 'A' or 'M', got {self.seasonal!r}")
        if self.damped and self.trend == "N":
            raise ValueError("A damped trend needs trend='A'")

    @property
    def label(self) -> str:
        trend = self.trend + ("d" if self.damped else "")
        return f"ETS({self.error},{trend},{self.seasonal})"

    @property
    def is_seasonal(self) -> bool:
        return self.seasonal != "N"

    @property
    def is_multiplicative(self) -> bool:
        return self.error == "M" or self.seasonal == "M"

    @classmethod
    def from_method(cls, method: str) -> "ETSSpec":
        """Parse a method string such as 'ETS(M,Ad,N)'"""
        match = _METHOD_RE.search(method)
        if match is None:
            raise ValueError(f"Cannot parse ETS method string: {method!r}")
        error, trend, damped, seasonal = match.groups()
        return cls(error=error, trend=trend, damped=bool(damped), seasonal=seasonal)


def candidate_specs(season_length: int, n_obs: int, positive: bool) -> List[ETSSpec]:
    """
    Admissible grid for a series.

    - Multiplicative error / seasonality only for strictly positive data
    - Seasonal components only with season_length >= 2 and at least two
      full cycles
    """
    errors = ["A", "M"] if positive else ["A"]
    trends = [("N", False), ("A", False), ("A", True)]
    seasonals = ["N"]
    if season_length >= 2 and n_obs >= 2 * season_length:
        seasonals += ["A", "M"] if positive else ["A"]

    return [
        ETSSpec(error=error, trend=trend, damped=damped, seasonal=seasonal)
        for error in errors
        for trend, damped in trends
        for seasonal in seasonals
    ]


def _to_statsmodels_kwargs(spec: ETSSpec, season_length: int) -> dict:
    names = {"A": "add", "M": "mul", "N": None}
    kwargs = {
        "error": names[spec.error],
        "trend": names[spec.trend],
        "damped_trend": spec.damped,
        "seasonal": names[spec.seasonal],
    }
    if spec.is_seasonal:
        kwargs["seasonal_periods"] = season_length
    return kwargs


@dataclass
class ETSSearchResult:
    """Outcome of the grid search"""
    best: ETSSpec
    leaderboard: pd.DataFrame
    criterion: str
    fitted: Any = field(repr=False, default=None)

    def forecast(self, h: int) -> np.ndarray:
        """Point forecast h steps ahead with the selected model"""
        if h < 1:
            raise ValueError(f"Horizon must be >= 1, got {h}")
        return np.asarray(self.fitted.forecast(steps=h), dtype=float)


def fit_ets(y: np.ndarray, spec: ETSSpec, season_length: int, maxiter: int = 1000):
    """Fit one ETS structure with statsmodels"""
    from statsmodels.tools.sm_exceptions import ConvergenceWarning
    from statsmodels.tsa.exponential_smoothing.ets import ETSModel

    model = ETSModel(y, **_to_statsmodels_kwargs(spec, season_length))
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ConvergenceWarning)
        return model.fit(disp=False, maxiter=maxiter)


def search_ets(
    y: Sequence[float],
    season_length: int,
    config: Optional[ETSConfig] = None,
    candidates: Optional[Sequence[ETSSpec]] = None,
) -> ETSSearchResult:
    """
    Fit every candidate and keep the one with the lowest criterion.

    Args:
        y: Complete history
        season_length: Seasonal period
        config: Criterion, tie-break and fit settings
        candidates: Override the grid (default: candidate_specs)

    Returns:
        ETSSearchResult with the winner, a ranked leaderboard and the fitted
        statsmodels result
    """
    config = config or ETSConfig()
    if config.criterion not in CRITERIA:
        raise ValueError(f"Unknown criterion: {config.criterion}. Available: {list(CRITERIA)}")

    history = np.asarray(y, dtype=float)
    if len(history) == 0 or not np.isfinite(history).all():
        raise ValueError("ETS search needs a non-empty, complete series")

    positive = bool((history > 0).all())
    if candidates is None:
        candidates = candidate_specs(season_length, len(history), positive)
    elif not positive and any(spec.is_multiplicative for spec in candidates):
        raise ValueError("Multiplicative candidates need strictly positive data")

    rows = []
    fits = {}
    for order, spec in enumerate(candidates):
        try:
            result = fit_ets(history, spec, season_length, maxiter=config.maxiter)
        except (ValueError, np.linalg.LinAlgError) as e:
            logger.warning(f"{spec.label} fitting failed: {e}")
            rows.append({"model": spec.label, "grid_order": order, "n_params": np.nan,
                         "aic": np.nan, "aicc": np.nan, "bic": np.nan, "status": "failed"})
            continue

        fits[spec.label] = (spec, result)
        rows.append({
            "model": spec.label,
            "grid_order": order,
            "n_params": len(result.params),
            "aic": float(result.aic),
            "aicc": float(result.aicc),
            "bic": float(result.bic),
            "status": "ok",
        })
        logger.debug(f"{spec.label}: {config.criterion}={rows[-1][config.criterion]:.2f}")

    leaderboard = pd.DataFrame(rows)
    ranked = leaderboard[np.isfinite(leaderboard[config.criterion].astype(float))]
    if ranked.empty:
        raise RuntimeError(f"No ETS candidate produced a finite {config.criterion}")

    sort_cols = [config.criterion] + (["n_params"] if config.prefer_simpler else []) + ["grid_order"]
    ranked = ranked.sort_values(sort_cols, kind="mergesort").reset_index(drop=True)
    ranked["rank"] = ranked.index + 1

    unranked = leaderboard[~leaderboard["model"].isin(ranked["model"])]
    leaderboard = pd.concat([ranked, unranked], ignore_index=True)
    leaderboard["rank"] = leaderboard["rank"].astype("Int64")

    best_spec, best_fit = fits[ranked.loc[0, "model"]]
    logger.info(f"Selected {best_spec.label} by {config.criterion} from {len(candidates)} candidates")

    return ETSSearchResult(
        best=best_spec,
        leaderboard=leaderboard,
        criterion=config.criterion,
        fitted=best_fit,
    )


def _fitted_method(model: dict) -> str:
    """Method string of a fitted statsforecast ETS model"""
    if "method" in model:
        return model["method"]
    error, trend, seasonal, damped = (str(c) for c in model["components"][:4])
    damped_flag = "d" if damped in ("True", "1") else ""
    return f"ETS({error},{trend}{damped_flag},{seasonal})"


@dataclass
class ETSFit:
    """statsforecast AutoETS fit with its selected structure"""
    spec: ETSSpec
    model: Any = field(repr=False)
    levels: Sequence[int] = (80, 95)

    @property
    def method(self) -> str:
        return _fitted_method(self.model.model_)

    def forecast(self, h: int, levels: Optional[Sequence[int]] = None) -> pd.DataFrame:
        """
        Forecast h steps ahead.

        Returns:
            DataFrame with 'mean' plus 'lo-<level>' / 'hi-<level>' columns
        """
        if h < 1:
            raise ValueError(f"Horizon must be >= 1, got {h}")
        levels = list(levels if levels is not None else self.levels)
        preds = self.model.predict(h=h, level=levels or None)
        columns = ["mean"] + [f"{side}-{lvl}" for lvl in levels for side in ("lo", "hi")]
        return pd.DataFrame({col: np.asarray(preds[col], dtype=float) for col in columns})


def auto_ets(
    y: Sequence[float],
    season_length: int,
    config: Optional[ETSConfig] = None,
    model: str = "ZZZ",
) -> ETSFit:
    """
    Automatic ETS selection with statsforecast AutoETS.

    statsforecast ignores seasonality for season_length > 24 (a warning is
    emitted), so weekly data with yearly cycles comes back non-seasonal.
    """
    from statsforecast.models import AutoETS

    config = config or ETSConfig()
    history = np.asarray(y, dtype=float)
    if len(history) == 0 or not np.isfinite(history).all():
        raise ValueError("AutoETS needs a non-empty, complete series")

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        fitted = AutoETS(season_length=season_length, model=model).fit(history)

    spec = ETSSpec.from_method(_fitted_method(fitted.model_))
    logger.info(f"AutoETS selected {spec.label}")
    return ETSFit(spec=spec, model=fitted, levels=config.levels)
