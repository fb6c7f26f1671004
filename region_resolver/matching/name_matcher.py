"""
Name-hint matching against hierarchy records.

Hints are matched as case-insensitive substrings of record names, taking the
first candidate in hierarchy order. An optional fuzzy fallback scores the
same candidates with rapidfuzz when no substring match exists.
"""

import logging
from typing import Optional, Sequence, Tuple, TypeVar

from rapidfuzz import fuzz, process

from ..utils.data_utils import normalize_hint

T = TypeVar('T')


class HintMatcher:
    """
    Matches a normalized hint to the first record whose name contains it.

    Attributes:
        fuzzy_threshold: Minimum rapidfuzz score (0-100) for the fallback, or
            None to disable fuzzy matching entirely
    """

    SUBSTRING = 'hint'
    FUZZY = 'fuzzy_hint'

    def __init__(self, fuzzy_threshold: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        if fuzzy_threshold is not None and not 0 <= fuzzy_threshold <= 100:
            raise ValueError(f"Fuzzy threshold must be between 0 and 100: {fuzzy_threshold}")
        self.fuzzy_threshold = fuzzy_threshold
        self.logger = logger or logging.getLogger(__name__)

    def match(self, hint: Optional[str], candidates: Sequence[T]) -> Optional[Tuple[T, str]]:
        """
        Find the record matching a hint.

        Args:
            hint: Free-text hint; normalized before matching
            candidates: Records with a ``name`` attribute, in hierarchy order

        Returns:
            Tuple of (record, method) or None if nothing matches
        """
        needle = normalize_hint(hint)
        if needle is None or not candidates:
            return None

        for candidate in candidates:
            if needle in candidate.name.lower():
                return candidate, self.SUBSTRING

        if self.fuzzy_threshold is None:
            return None

        return self._fuzzy_match(needle, candidates)

    def _fuzzy_match(self, needle: str, candidates: Sequence[T]) -> Optional[Tuple[T, str]]:
        names = [candidate.name.lower() for candidate in candidates]
        best = process.extractOne(
            needle, names, scorer=fuzz.WRatio, score_cutoff=self.fuzzy_threshold
        )
        if best is None:
            return None

        name, score, index = best
        self.logger.debug(f"Fuzzy hint match: '{needle}' -> '{name}' ({score:.1f})")
        return candidates[index], self.FUZZY
