"""
Chapter 1 Walkthrough: String Cleaning

Steps:
1. Build the synthetic wide sales table
2. Extract substrings from customer / business unit / product
3. Reshape wide -> long
4. Parse month labels into dates
5. Validate the reshape

Usage:
    python scripts/run_string_cleaning.py
"""

import logging

import pandas as pd
from rich.console import Console
from rich.table import Table

from tsprimer.chapter1 import (CleaningConfig, assert_long_contract,
                               clean_fields, make_sales_table,
                               parse_month_labels, print_reshape_report,
                               to_long, validate_long_table)
from tsprimer.config import load_settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger(__name__)
console = Console()


def show(df: pd.DataFrame, title: str, max_rows: int = 6) -> None:
    table = Table(title=title)
    for col in df.columns:
        table.add_column(str(col), style="green" if pd.api.types.is_numeric_dtype(df[col]) else "cyan")
    for _, row in df.head(max_rows).iterrows():
        table.add_row(*[str(v) for v in row.tolist()])
    console.print(table)


def main() -> None:
    settings = load_settings()
    config = CleaningConfig(seed=settings.seed)
    logger.info(f"Settings: {settings}")

    print("\n--- Step 1: Wide table ---")
    wide = make_sales_table(config)
    show(wide.iloc[:, :6], "Raw wide table (first months)")

    print("\n--- Step 2: Extract substrings ---")
    cleaned = clean_fields(wide, config)
    show(cleaned.iloc[:, :6], "Cleaned text fields")

    print("\n--- Step 3: Wide -> long ---")
    long_df = to_long(cleaned, config)
    print(f"month dtype before parsing: {long_df[config.month_col].dtype}")

    print("\n--- Step 4: Parse month labels ---")
    long_df = parse_month_labels(long_df, config)
    print(f"month dtype after parsing: {long_df[config.month_col].dtype}")
    show(long_df, "Long table")

    print("\n--- Step 5: Validate ---")
    result = validate_long_table(wide, long_df, config)
    print_reshape_report(result)
    assert_long_contract(wide, long_df, config)


if __name__ == "__main__":
    main()
