# file: tsprimer/chapter1/config.py
"""
Chapter 1: String Cleaning Configuration
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CleaningConfig:
    # Synthetic table
    seed: int = 42
    n_customers: int = 4
    n_products: int = 3
    start_month: str = "2023-01-01"
    n_months: int = 12

    # Source columns
    customer_col: str = "customer"
    business_unit_col: str = "business_unit"
    product_col: str = "product"

    # Field formats
    delimiter: str = " - "
    size_col: str = "size"
    description_col: str = "description"

    # Month labels ("month-day-year")
    month_label_format: str = "%m-%d-%Y"
    month_label_pattern: str = r"^\d{1,2}-\d{1,2}-\d{4}$"

    # Long format
    month_col: str = "month"
    value_col: str = "value"

    def text_columns(self) -> Tuple[str, str, str]:
        return (self.customer_col, self.business_unit_col, self.product_col)
