"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_int_conversion,
    safe_float_conversion,
    safe_string_conversion,
    normalize_hint,
    is_null_or_empty,
    clean_dataframe_strings,
    convert_numeric_columns,
    detect_duplicates,
    get_data_quality_summary
)

__all__ = [
    'safe_int_conversion',
    'safe_float_conversion',
    'safe_string_conversion',
    'normalize_hint',
    'is_null_or_empty',
    'clean_dataframe_strings',
    'convert_numeric_columns',
    'detect_duplicates',
    'get_data_quality_summary'
]
