# file: tsprimer/chapter2/plots.py
"""
Chapter 2: Figures for the walkthrough

PNG output only; the Agg backend keeps this usable without a display.
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from .decomposition import Decomposition  # noqa: E402

warnings.filterwarnings('ignore', category=UserWarning, module='matplotlib')

plt.rcParams['figure.figsize'] = (12, 6)
plt.rcParams['figure.dpi'] = 100


def plot_decomposition(decomposition: Decomposition, path: Path) -> Path:
    """Observed / trend / seasonal / residual panels, saved as PNG"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    frame = decomposition.to_frame()
    fig, axes = plt.subplots(4, 1, figsize=(12, 10), sharex=True)
    for ax, col in zip(axes, frame.columns):
        if col == "resid":
            ax.scatter(frame.index, frame[col], s=8)
            ax.axhline(0, color="grey", linewidth=0.8)
        else:
            ax.plot(frame.index, frame[col])
        ax.set_ylabel(col)
        ax.grid(True, alpha=0.3)

    axes[0].set_title(f"Additive decomposition (period={decomposition.period})")
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_forecasts(
    train: pd.Series,
    test: Optional[pd.Series],
    forecasts: pd.DataFrame,
    path: Path,
) -> Path:
    """History, holdout and one line per forecast column, saved as PNG"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots()
    ax.plot(train.index, train.values, color="black", label="train")
    if test is not None:
        ax.plot(test.index, test.values, color="black", linestyle="--", label="test")
    for col in forecasts.columns:
        ax.plot(forecasts.index, forecasts[col].values, label=col)

    ax.set_title("Forecasts")
    ax.legend()
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path
