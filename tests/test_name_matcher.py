"""
Tests for name-hint matching.
"""

import pytest

from region_resolver.matching.name_matcher import HintMatcher
from region_resolver.models import District, Upazila


@pytest.fixture
def districts():
    return [
        District(10, "Dhaka", 1),
        District(11, "Gazipur", 1),
        District(12, "Narayanganj", 1),
        District(13, "Narsingdi", 1),
    ]


def test_substring_match_returns_first_candidate(districts):
    record, method = HintMatcher().match("nar", districts)

    assert record.id == 12
    assert method == HintMatcher.SUBSTRING


def test_match_is_case_insensitive(districts):
    record, _ = HintMatcher().match("  GAZI ", districts)

    assert record.id == 11


@pytest.mark.parametrize("hint", [None, "", "   ", "Sylhet"])
def test_no_match(districts, hint):
    assert HintMatcher().match(hint, districts) is None


def test_empty_candidates():
    assert HintMatcher(fuzzy_threshold=0).match("dhaka", []) is None


def test_fuzzy_fallback_when_enabled(districts):
    assert HintMatcher().match("Narsingdee", districts) is None

    record, method = HintMatcher(fuzzy_threshold=80).match("Narsingdee", districts)

    assert record.id == 13
    assert method == HintMatcher.FUZZY


def test_substring_match_preferred_over_fuzzy(districts):
    record, method = HintMatcher(fuzzy_threshold=50).match("dhaka", districts)

    assert record.id == 10
    assert method == HintMatcher.SUBSTRING


def test_fuzzy_threshold_filters_weak_matches(districts):
    assert HintMatcher(fuzzy_threshold=95).match("Chattogram", districts) is None


@pytest.mark.parametrize("threshold", [-1, 101])
def test_invalid_threshold(threshold):
    with pytest.raises(ValueError):
        HintMatcher(fuzzy_threshold=threshold)


def test_internal_whitespace_is_matched_verbatim():
    candidates = [
        Upazila(100, "Far", 1, latitude=0.0, longitude=0.0),
        Upazila(101, "Old  Town", 1, latitude=50.0, longitude=50.0),
        Upazila(102, "Sylhet Sadar", 1, latitude=24.9, longitude=91.87),
    ]
    matcher = HintMatcher()

    record, method = matcher.match("Old  Town", candidates)
    assert record.id == 101
    assert method == HintMatcher.SUBSTRING

    assert matcher.match("old town", candidates) is None
    assert matcher.match("sylhet\tsadar", candidates) is None
    assert matcher.match("sylhet\nsadar", candidates) is None
