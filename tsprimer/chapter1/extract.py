# file: tsprimer/chapter1/extract.py
"""
Chapter 1 Step 2: Extract Substrings from Formatted Fields

- customer:      keep the text after the first " - "     ("113 - Shaws" -> "Shaws")
- business_unit: drop the leading numeric code + space   ("20 Grocery" -> "Grocery")
- product:       split "code - size - description" into size and description

Fail loud: a value without the expected structure raises FieldFormatError
instead of becoming NaN.
"""

import logging
import re

import pandas as pd

from .config import CleaningConfig

logger = logging.getLogger(__name__)

PRODUCT_TOKENS = 3


class FieldFormatError(ValueError):
    """A text field does not have the structure the extraction expects"""

    def __init__(self, column: str, expected: str, bad_values: pd.Series):
        self.column = column
        self.bad_values = bad_values
        sample = bad_values.head(5).tolist()
        super().__init__(
            f"{len(bad_values)} value(s) in '{column}' do not match {expected}: {sample}"
        )


def extract_after_delimiter(series: pd.Series, delimiter: str = " - ") -> pd.Series:
    """
    Keep only the text after the FIRST delimiter.

    Later occurrences of the delimiter are kept as part of the result.
    """
    if series.empty:
        return series.astype(object).rename(series.name)
    parts = series.str.partition(delimiter)
    missing = parts[1] != delimiter
    if missing.any():
        raise FieldFormatError(series.name, f"'<prefix>{delimiter}<text>'", series[missing])
    return parts[2].rename(series.name)


def strip_numeric_code(series: pd.Series) -> pd.Series:
    """Keep only the text after a leading numeric code and one space"""
    if series.empty:
        return series.astype(object).rename(series.name)
    extracted = series.str.extract(r"^\d+ (.+)$", expand=False)
    missing = extracted.isna()
    if missing.any():
        raise FieldFormatError(series.name, "'<digits> <text>'", series[missing])
    return extracted.rename(series.name)


def split_product(
    series: pd.Series,
    separator: str = " - ",
    size_col: str = "size",
    description_col: str = "description",
) -> pd.DataFrame:
    """
    Split "code - size - description" on the exact separator.

    The first token (product code) is discarded.

    Returns:
        DataFrame with [size_col, description_col], same index as series
    """
    if series.empty:
        return pd.DataFrame({size_col: [], description_col: []}, index=series.index, dtype=object)
    n_separators = series.str.count(re.escape(separator))
    wrong = n_separators != PRODUCT_TOKENS - 1
    if wrong.any():
        raise FieldFormatError(
            series.name,
            f"{PRODUCT_TOKENS} tokens separated by '{separator}'",
            series[wrong],
        )

    tokens = series.str.split(separator, regex=False, expand=True)
    return pd.DataFrame({size_col: tokens[1], description_col: tokens[2]}, index=series.index)


def clean_fields(df: pd.DataFrame, config: CleaningConfig) -> pd.DataFrame:
    """
    Apply the three extractions to the wide table.

    Steps:
    1. customer -> text after the first delimiter
    2. business_unit -> text after the numeric code
    3. product -> size + description (inserted where product was)

    Args:
        df: Wide table from make_sales_table
        config: Column names and delimiter

    Returns:
        Copy of df with cleaned text columns
    """
    missing = [col for col in config.text_columns() if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    cleaned = df.copy()
    cleaned[config.customer_col] = extract_after_delimiter(
        cleaned[config.customer_col], config.delimiter
    )
    cleaned[config.business_unit_col] = strip_numeric_code(cleaned[config.business_unit_col])

    product_parts = split_product(
        cleaned[config.product_col],
        separator=config.delimiter,
        size_col=config.size_col,
        description_col=config.description_col,
    )
    position = cleaned.columns.get_loc(config.product_col)
    cleaned = cleaned.drop(columns=[config.product_col])
    cleaned.insert(position, config.size_col, product_parts[config.size_col])
    cleaned.insert(position + 1, config.description_col, product_parts[config.description_col])

    logger.info(f"Cleaned text fields: {len(cleaned)} rows, columns={list(cleaned.columns[:position + 2])}")
    return cleaned
