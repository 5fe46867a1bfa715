# file: tsprimer/chapter1/synthetic.py
"""
Chapter 1 Step 1: Synthetic Wide Sales Table

One row per (customer, business unit, product) and one numeric column per
calendar month, labelled with "month-day-year" text such as "01-01-2023".
Text fields carry the formatting noise the later steps clean up:
- customer:      "113 - Shaws"
- business_unit: "20 Grocery"
- product:       "WX1X - 9 gal - Jelly"
"""

import logging
from typing import List

import numpy as np
import pandas as pd

from .config import CleaningConfig

logger = logging.getLogger(__name__)

CUSTOMERS = [
    (113, "Shaws"),
    (207, "Stop & Shop"),
    (318, "Hannaford"),
    (425, "Market Basket"),
    (561, "Big Y"),
    (604, "Price Chopper"),
]

BUSINESS_UNITS = {
    "Jelly": (20, "Grocery"),
    "Peanut Butter": (20, "Grocery"),
    "Ice Cream": (35, "Frozen"),
    "Orange Juice": (41, "Dairy"),
    "Sparkling Water": (52, "Beverages"),
}

PRODUCTS = [
    ("WX1X", "9 gal", "Jelly"),
    ("PB7Q", "16 oz", "Peanut Butter"),
    ("IC3Z", "1 pt", "Ice Cream"),
    ("OJ5R", "64 oz", "Orange Juice"),
    ("SW2K", "12 pk", "Sparkling Water"),
]


def month_labels(config: CleaningConfig) -> List[str]:
    """Month-start labels formatted with config.month_label_format"""
    months = pd.date_range(config.start_month, periods=config.n_months, freq="MS")
    return [m.strftime(config.month_label_format) for m in months]


def make_sales_table(config: CleaningConfig) -> pd.DataFrame:
    """
    Generate the wide sales table used throughout Chapter 1.

    Args:
        config: Sizes, seed and column names

    Returns:
        DataFrame with the three text columns followed by one integer column
        per month label
    """
    if not 1 <= config.n_customers <= len(CUSTOMERS):
        raise ValueError(f"n_customers must be in [1, {len(CUSTOMERS)}], got {config.n_customers}")
    if not 1 <= config.n_products <= len(PRODUCTS):
        raise ValueError(f"n_products must be in [1, {len(PRODUCTS)}], got {config.n_products}")
    if config.n_months < 1:
        raise ValueError(f"n_months must be positive, got {config.n_months}")

    rng = np.random.default_rng(config.seed)
    labels = month_labels(config)

    rows = []
    for code, name in CUSTOMERS[: config.n_customers]:
        for product_code, size, description in PRODUCTS[: config.n_products]:
            unit_code, unit_name = BUSINESS_UNITS[description]
            row = {
                config.customer_col: f"{code} - {name}",
                config.business_unit_col: f"{unit_code} {unit_name}",
                config.product_col: f"{product_code} - {size} - {description}",
            }
            base = rng.integers(50, 500)
            units = rng.poisson(base, size=len(labels))
            row.update(dict(zip(labels, units.tolist())))
            rows.append(row)

    df = pd.DataFrame(rows)
    logger.info(f"Synthetic sales table: {len(df)} rows x {len(labels)} month columns")
    return df
