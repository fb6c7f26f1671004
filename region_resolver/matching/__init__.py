"""
Matching strategy components.
"""

from .name_matcher import HintMatcher
from .nearest import NearestUpazilaFinder

__all__ = ['HintMatcher', 'NearestUpazilaFinder']
