# file: tsprimer/chapter1/validate.py
"""
Chapter 1 Step 4: Validate the Long Table

Hard gates for the reshape:
- Row count: every month column becomes one long row per wide row
- Coverage: each wide row key has every month exactly once
- Values: no null months, no null values
"""

from dataclasses import dataclass

import pandas as pd

from .config import CleaningConfig
from .reshape import month_columns


@dataclass
class ReshapeValidation:
    """Results of long-table validation"""
    is_valid: bool
    n_wide_rows: int
    n_month_columns: int
    n_long_rows: int
    expected_long_rows: int
    n_null_months: int
    n_null_values: int
    n_unbalanced_keys: int
    n_duplicate_months: int


def validate_long_table(
    wide: pd.DataFrame,
    long: pd.DataFrame,
    config: CleaningConfig,
) -> ReshapeValidation:
    """
    Validate the wide -> long reshape.

    Args:
        wide: Wide table (raw or cleaned; only month columns are counted)
        long: Long table from to_long or reshape_sales
        config: Column names and month pattern

    Returns:
        ReshapeValidation with detailed findings
    """
    labels = month_columns(wide, config.month_label_pattern)
    n_months = len(labels)
    expected = len(wide) * n_months

    # Compare like with like: parsed months against parsed labels
    expected_months = set(labels)
    if pd.api.types.is_datetime64_any_dtype(long[config.month_col]):
        parsed = pd.to_datetime(
            pd.Series(labels, dtype=object), format=config.month_label_format, errors="raise"
        )
        expected_months = set(parsed)

    # Each row key must have every month exactly once
    id_cols = [c for c in long.columns if c not in (config.month_col, config.value_col)]
    n_unbalanced = 0
    n_duplicate = 0
    if id_cols and len(long):
        per_cell = long.groupby(id_cols + [config.month_col], dropna=False).size()
        n_duplicate = int((per_cell > 1).sum())
        for _, group in long.groupby(id_cols, dropna=False):
            if set(group[config.month_col].dropna()) != expected_months:
                n_unbalanced += 1

    n_null_months = int(long[config.month_col].isna().sum())
    n_null_values = int(long[config.value_col].isna().sum())

    is_valid = (
        len(long) == expected
        and n_unbalanced == 0
        and n_duplicate == 0
        and n_null_months == 0
        and n_null_values == 0
    )

    return ReshapeValidation(
        is_valid=is_valid,
        n_wide_rows=len(wide),
        n_month_columns=n_months,
        n_long_rows=len(long),
        expected_long_rows=expected,
        n_null_months=n_null_months,
        n_null_values=n_null_values,
        n_unbalanced_keys=n_unbalanced,
        n_duplicate_months=n_duplicate,
    )


def assert_long_contract(wide: pd.DataFrame, long: pd.DataFrame, config: CleaningConfig) -> None:
    """
    Raise a ValueError if the reshape contract is violated.
    """
    result = validate_long_table(wide, long, config)
    if not result.is_valid:
        raise ValueError(
            f"Invalid long table: rows={result.n_long_rows} (expected {result.expected_long_rows}), "
            f"unbalanced_keys={result.n_unbalanced_keys}, duplicate_months={result.n_duplicate_months}, "
            f"null_months={result.n_null_months}, null_values={result.n_null_values}"
        )


def print_reshape_report(result: ReshapeValidation) -> None:
    """Print a human-readable validation report"""
    status = "PASS" if result.is_valid else "FAIL"
    print(f"\n=== Reshape Report: {status} ===")
    print(f"Wide rows: {result.n_wide_rows}")
    print(f"Month columns: {result.n_month_columns}")
    print(f"Long rows: {result.n_long_rows} (expected {result.expected_long_rows})")
    print(f"Unbalanced keys: {result.n_unbalanced_keys}")
    print(f"Duplicate months: {result.n_duplicate_months}")
    print(f"Null months: {result.n_null_months}")
    print(f"Null values: {result.n_null_values}")
