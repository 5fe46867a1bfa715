"""
Chapter 2 Walkthrough: Decomposition and Forecasting

Steps:
1. Build the synthetic weekly series
2. Classical additive decomposition
3. Forecast recurrences by hand (SES on a toy series)
4. Compare naive / mean / SES / Holt on a holdout
5. ETS model selection (grid search + AutoETS)

Set TSPRIMER_OUTPUT_DIR to also save PNG figures.

Usage:
    python scripts/run_time_series.py
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd
from rich.console import Console
from rich.table import Table

from tsprimer.chapter2 import (StrategyFactory, TimeSeriesConfig, auto_ets,
                               compare_strategies, decompose, forecast_all,
                               make_weekly_series, search_ets,
                               seasonal_strength, ses_fitted, ses_forecast,
                               ses_weights, train_test_split)
from tsprimer.chapter2.plots import plot_decomposition, plot_forecasts
from tsprimer.config import load_settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger(__name__)
console = Console()


def show(df: pd.DataFrame, title: str) -> None:
    table = Table(title=title)
    for col in df.columns:
        table.add_column(str(col), style="green" if pd.api.types.is_numeric_dtype(df[col]) else "cyan")
    for _, row in df.iterrows():
        table.add_row(*[f"{v:.3f}" if isinstance(v, float) else str(v) for v in row.tolist()])
    console.print(table)


def main() -> None:
    settings = load_settings()
    config = TimeSeriesConfig(seed=settings.seed)
    output_dir = Path(settings.output_dir) if settings.output_dir else None
    logger.info(f"Settings: {settings}")

    print("\n--- Step 1: Weekly series ---")
    series = make_weekly_series(config)
    print(series.describe().round(2).to_string())

    print("\n--- Step 2: Additive decomposition ---")
    decomposition = decompose(series, config.season_length)
    n_missing = int(decomposition.trend.isna().sum())
    print(f"Trend undefined at {n_missing} edge points ({config.season_length // 2} per side)")
    print(f"Seasonal indices sum: {decomposition.indices.sum():.2e}")
    print(f"Seasonal strength: {seasonal_strength(decomposition):.3f}")
    if output_dir:
        plot_decomposition(decomposition, output_dir / "decomposition.png")

    print("\n--- Step 3: SES by hand ---")
    toy = [10, 12, 11, 14]
    print(f"y = {toy}, alpha = 0.5")
    print(f"fitted = {ses_fitted(toy, 0.5).tolist()}")
    print(f"next   = {ses_forecast(toy, 1, 0.5)[0]}")
    print(f"weights on y_T, y_T-1, ... = {np.round(ses_weights(0.5, 4), 4).tolist()}")

    print("\n--- Step 4: Holdout comparison ---")
    train, test = train_test_split(series, config.test_size)
    strategies = [
        StrategyFactory.create("naive"),
        StrategyFactory.create("mean"),
        StrategyFactory.create("seasonal_naive", season_length=config.season_length),
        StrategyFactory.create("ses", alpha=config.alpha),
        StrategyFactory.create("holt", alpha=config.alpha, beta=config.beta),
    ]
    leaderboard = compare_strategies(train, test, strategies, season_length=config.season_length)
    show(leaderboard, "Recurrence leaderboard")

    print("\n--- Step 5: ETS model selection ---")
    search = search_ets(train.to_numpy(), config.season_length, config.ets)
    show(search.leaderboard.head(10), f"ETS grid ({search.criterion})")
    print(f"Grid search selected: {search.best.label}")

    fit = auto_ets(train.to_numpy(), config.season_length, config.ets)
    print(f"AutoETS selected: {fit.spec.label}")
    ets_forecast = fit.forecast(config.test_size)
    ets_forecast.index = test.index
    print(ets_forecast.round(2).to_string())

    if output_dir:
        forecasts = forecast_all(train.to_numpy(), config.test_size, strategies, index=test.index)
        forecasts[search.best.label] = search.forecast(config.test_size)
        forecasts[f"AutoETS {fit.spec.label}"] = ets_forecast["mean"]
        plot_forecasts(train, test, forecasts, output_dir / "forecasts.png")
        print(f"Figures saved to {output_dir}")


if __name__ == "__main__":
    main()
