# file: tsprimer/chapter1/reshape.py
"""
Chapter 1 Step 3: Reshape Wide -> Long and Parse Month Labels

Wide: one column per month label ("01-01-2023", "02-01-2023", ...)
Long: one row per (entity, month, value)

Month labels stay text until the last step, where they are parsed with the
exact "month-day-year" format (errors="raise", no silent NaT).
"""

import logging
from typing import List

import pandas as pd

from .config import CleaningConfig
from .extract import clean_fields

logger = logging.getLogger(__name__)


def month_columns(df: pd.DataFrame, pattern: str) -> List[str]:
    """Columns whose label matches the month-label regex"""
    labels = pd.Series(df.columns.astype(str), index=df.columns)
    return labels[labels.str.match(pattern)].index.tolist()


def to_long(df: pd.DataFrame, config: CleaningConfig) -> pd.DataFrame:
    """
    Melt month columns into (month, value) pairs.

    Every non-month column is kept as a row key. Output has exactly
    len(df) * n_month_columns rows; the month column is still text.
    """
    value_cols = month_columns(df, config.month_label_pattern)
    if not value_cols:
        raise ValueError(f"No month columns match pattern {config.month_label_pattern!r}")
    id_cols = [col for col in df.columns if col not in value_cols]

    long_df = df.melt(
        id_vars=id_cols,
        value_vars=value_cols,
        var_name=config.month_col,
        value_name=config.value_col,
    )
    long_df[config.value_col] = pd.to_numeric(long_df[config.value_col], errors="raise")

    logger.info(f"Long format: {len(df)} rows x {len(value_cols)} months -> {len(long_df)} rows")
    return long_df


def parse_month_labels(long_df: pd.DataFrame, config: CleaningConfig) -> pd.DataFrame:
    """
    Parse the textual month column into datetime64.

    Raises:
        ValueError: if any label does not match config.month_label_format
    """
    parsed = long_df.copy()
    parsed[config.month_col] = pd.to_datetime(
        parsed[config.month_col],
        format=config.month_label_format,
        errors="raise",
    )
    return parsed


def reshape_sales(df: pd.DataFrame, config: CleaningConfig) -> pd.DataFrame:
    """
    Full Chapter 1 transformation, single pass, fail-stop.

    clean_fields -> to_long -> parse_month_labels
    """
    cleaned = clean_fields(df, config)
    long_df = to_long(cleaned, config)
    result = parse_month_labels(long_df, config)

    print(f"Reshaped: {len(df)} wide rows -> {len(result)} long rows")
    if len(result):
        print(f"  Months: {result[config.month_col].min():%Y-%m-%d} to {result[config.month_col].max():%Y-%m-%d}")

    return result
