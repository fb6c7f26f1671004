"""
Tests for data utility functions.
"""

import math

import numpy as np
import pandas as pd
import pytest

from region_resolver.utils.data_utils import (
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


class TestSafeIntConversion:

    @pytest.mark.parametrize("value,expected", [
        (123, 123),
        ("45", 45),
        (" 67 ", 67),
        ("12.0", 12),
        (7.0, 7),
        (np.int64(9), 9),
    ])
    def test_valid_values(self, value, expected):
        assert safe_int_conversion(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "12.5", 3.7, True, np.nan, pd.NA])
    def test_invalid_values(self, value):
        assert safe_int_conversion(value) is None


class TestSafeFloatConversion:

    @pytest.mark.parametrize("value,expected", [
        (23.8, 23.8),
        (90, 90.0),
        ("  -12.5 ", -12.5),
        ("1e1", 10.0),
    ])
    def test_valid_values(self, value, expected):
        assert safe_float_conversion(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [
        None, "", "north", True, False, float('nan'), float('inf'), "-inf", [1], {}
    ])
    def test_invalid_values(self, value):
        assert safe_float_conversion(value) is None

    def test_result_is_always_finite(self):
        assert math.isfinite(safe_float_conversion("1e308"))
        assert safe_float_conversion("1e400") is None


def test_safe_string_conversion():
    assert safe_string_conversion("  Savar  ") == "Savar"
    assert safe_string_conversion(None) == ""
    assert safe_string_conversion(np.nan) == ""
    assert safe_string_conversion(12) == "12"


@pytest.mark.parametrize("raw,expected", [
    ("Dhaka", "dhaka"),
    ("  Cox's Bazar ", "cox's bazar"),
    ("Old  Town\t", "old  town"),
    ("   ", None),
    ("", None),
    (None, None),
])
def test_normalize_hint(raw, expected):
    assert normalize_hint(raw) == expected


def test_is_null_or_empty():
    assert is_null_or_empty(None)
    assert is_null_or_empty("  ")
    assert is_null_or_empty(np.nan)
    assert not is_null_or_empty("x")
    assert not is_null_or_empty(0)


def test_clean_dataframe_strings_leaves_other_columns():
    df = pd.DataFrame({'name': [' Savar ', None], 'id': [1, 2]})

    cleaned = clean_dataframe_strings(df, ['name', 'missing'])

    assert cleaned['name'].tolist() == ['Savar', '']
    assert df['name'].tolist()[0] == ' Savar '


def test_convert_numeric_columns_keeps_none_for_ints():
    df = pd.DataFrame({
        'id': ['1', 'x', '3'],
        'latitude': ['23.8', 'bad', None],
    })

    converted = convert_numeric_columns(df, {'id': 'int', 'latitude': 'float'})

    assert converted['id'].tolist() == [1, None, 3]
    assert converted['latitude'].iloc[0] == pytest.approx(23.8)
    assert converted['latitude'].iloc[1:].isna().all()


def test_detect_duplicates_returns_all_copies():
    df = pd.DataFrame({'id': [1, 2, 1], 'name': ['a', 'b', 'c']})

    duplicates = detect_duplicates(df, ['id'])

    assert duplicates['name'].tolist() == ['a', 'c']


def test_get_data_quality_summary():
    df = pd.DataFrame({'id': [1, 1, None], 'name': ['a', 'a', 'b']})

    summary = get_data_quality_summary(df)

    assert summary['total_records'] == 3
    assert summary['null_counts'] == {'id': 1, 'name': 0}
    assert summary['duplicate_count'] == 1
