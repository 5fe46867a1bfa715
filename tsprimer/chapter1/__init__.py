"""
Chapter 1: String Cleaning

Simple, step-by-step functions for learning:
1. synthetic - Wide sales table with formatted text fields
2. extract - Pull substrings out of customer / business unit / product
3. reshape - Wide to long, then parse month labels into dates
4. validate - Check the reshape row-count contract
"""

from .config import CleaningConfig
from .extract import (FieldFormatError, clean_fields, extract_after_delimiter,
                      split_product, strip_numeric_code)
from .reshape import month_columns, parse_month_labels, reshape_sales, to_long
from .synthetic import make_sales_table, month_labels
from .validate import (ReshapeValidation, assert_long_contract,
                       print_reshape_report, validate_long_table)

__all__ = [
    "CleaningConfig",
    "make_sales_table",
    "month_labels",
    "FieldFormatError",
    "extract_after_delimiter",
    "strip_numeric_code",
    "split_product",
    "clean_fields",
    "month_columns",
    "to_long",
    "parse_month_labels",
    "reshape_sales",
    "ReshapeValidation",
    "validate_long_table",
    "assert_long_contract",
    "print_reshape_report",
]
