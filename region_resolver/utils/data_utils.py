"""
Data utility functions for type conversions and null handling.

This module provides utility functions for cleaning and converting values
read from reference CSV files and request payloads.
"""

import math
import pandas as pd
from typing import Any, Optional


def safe_int_conversion(value: Any) -> Optional[int]:
    """
    Safely convert a value to integer, handling nulls and invalid values.

    Args:
        value: Value to convert to integer

    Returns:
        Integer value or None if conversion fails
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None

    try:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if '.' in value:
                value = float(value)

        number = float(value)
        if not number.is_integer():
            return None
        return int(number)
    except (ValueError, TypeError, OverflowError):
        return None


def safe_float_conversion(value: Any) -> Optional[float]:
    """
    Safely convert a value to a finite float.

    Numeric strings are accepted. Booleans, NaN and infinities are not.

    Args:
        value: Value to convert

    Returns:
        Float value or None if the value is not a finite number
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        number = float(value)
    except (ValueError, TypeError, OverflowError):
        return None

    if not math.isfinite(number):
        return None
    return number


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""

    return str(value).strip()


def normalize_hint(value: Optional[str]) -> Optional[str]:
    """
    Normalize a free-text location hint for case-insensitive matching.

    Args:
        value: Raw hint text

    Returns:
        Lower-cased, trimmed hint, or None when blank
    """
    if value is None:
        return None

    # internal whitespace is kept; hints match as plain substrings
    normalized = value.strip().lower()
    return normalized or None


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    return bool(pd.isna(value))


def clean_dataframe_strings(df: pd.DataFrame, string_columns: list) -> pd.DataFrame:
    """
    Clean string columns in a DataFrame by removing extra whitespace.

    Args:
        df: DataFrame to clean
        string_columns: List of column names to clean

    Returns:
        DataFrame with cleaned string columns
    """
    df_cleaned = df.copy()

    for col in string_columns:
        if col in df_cleaned.columns:
            df_cleaned[col] = df_cleaned[col].apply(safe_string_conversion)

    return df_cleaned


def convert_numeric_columns(df: pd.DataFrame, numeric_columns: dict) -> pd.DataFrame:
    """
    Convert specified columns to numeric types with error handling.

    Args:
        df: DataFrame to process
        numeric_columns: Dict mapping column names to target types ('int' or 'float')

    Returns:
        DataFrame with converted numeric columns
    """
    df_converted = df.copy()

    for col, target_type in numeric_columns.items():
        if col in df_converted.columns:
            if target_type == 'int':
                # object dtype keeps None instead of coercing the column to float
                df_converted[col] = pd.Series(
                    [safe_int_conversion(v) for v in df_converted[col]],
                    index=df_converted.index,
                    dtype=object
                )
            elif target_type == 'float':
                df_converted[col] = pd.to_numeric(df_converted[col], errors='coerce')

    return df_converted


def detect_duplicates(df: pd.DataFrame, key_columns: list) -> pd.DataFrame:
    """
    Detect duplicate records based on specified key columns.

    Args:
        df: DataFrame to check for duplicates
        key_columns: List of column names to use for duplicate detection

    Returns:
        DataFrame containing only the duplicate records
    """
    duplicated_mask = df[key_columns].duplicated(keep=False)

    return df[duplicated_mask].copy()


def get_data_quality_summary(df: pd.DataFrame) -> dict:
    """
    Generate a summary of data quality metrics for a DataFrame.

    Args:
        df: DataFrame to analyze

    Returns:
        Dictionary containing data quality metrics
    """
    summary = {
        'total_records': len(df),
        'null_counts': {k: int(v) for k, v in df.isnull().sum().to_dict().items()},
        'duplicate_count': int(df.duplicated().sum()),
    }

    return summary
