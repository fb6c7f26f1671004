"""
Address-to-region resolution.

This module provides the RegionResolver class that maps a coordinate and
optional name hints onto a (division, district, upazila) triple. Resolution
runs in three ordered stages:

1. Name hints, each level narrowed to the parent resolved before it.
2. Nearest geolocated upazila, when any level is still unresolved.
3. Backfill of still-unresolved parents from the nearest upazila.
"""

import logging
import threading
from typing import Any, Dict, Optional

from .hierarchy import ReferenceHierarchy
from .matching.name_matcher import HintMatcher
from .matching.nearest import NearestUpazilaFinder
from .models import AddressHints, ResolutionResult, ResolveRequest
from .utils.request_parser import validate_coordinates


class RegionResolver:
    """
    Resolves inexact addresses onto the administrative hierarchy.

    The resolver never mutates the hierarchy; identical input against an
    unchanged hierarchy always yields identical output.
    """

    NEAREST = 'nearest'

    def __init__(self, hierarchy: ReferenceHierarchy,
                 hint_matcher: Optional[HintMatcher] = None,
                 nearest_finder: Optional[NearestUpazilaFinder] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the resolver.

        Args:
            hierarchy: Reference hierarchy to resolve against
            hint_matcher: Optional name-hint matcher (substring only by default)
            nearest_finder: Optional nearest-upazila finder
            logger: Optional logger instance
        """
        self.hierarchy = hierarchy
        self.logger = logger or logging.getLogger(__name__)
        self.hint_matcher = hint_matcher or HintMatcher(logger=self.logger)
        self.nearest_finder = nearest_finder or NearestUpazilaFinder(hierarchy, self.logger)
        self._stats_lock = threading.Lock()
        self._resolution_stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'total_resolved': 0,
            'division_hint_matches': 0,
            'district_hint_matches': 0,
            'upazila_hint_matches': 0,
            'fuzzy_hint_matches': 0,
            'nearest_fallbacks': 0,
            'complete': 0,
            'unresolved': 0
        }

    def resolve(self, latitude: Any, longitude: Any,
                address: Optional[AddressHints] = None) -> ResolutionResult:
        """
        Resolve a coordinate and optional hints.

        Args:
            latitude: Latitude in [-90, 90]
            longitude: Longitude in [-180, 180]
            address: Optional name hints

        Returns:
            ResolutionResult; unresolved levels are None

        Raises:
            ValidationError: If the coordinates are missing, not finite or out of range
        """
        lat, lon = validate_coordinates(latitude, longitude)
        hints = address or AddressHints()

        result = ResolutionResult()
        self._apply_hints(result, hints)

        if not result.is_complete():
            self._apply_nearest(result, lat, lon)

        self._record(result)
        return result

    def resolve_request(self, request: ResolveRequest) -> ResolutionResult:
        """Resolve a parsed ResolveRequest."""
        return self.resolve(request.latitude, request.longitude, request.address)

    def _apply_hints(self, result: ResolutionResult, hints: AddressHints):
        if hints.state:
            match = self.hint_matcher.match(hints.state, self.hierarchy.divisions())
            if match:
                division, method = match
                result.division_id = division.id
                result.methods['division'] = method

        if hints.district:
            candidates = self.hierarchy.districts(result.division_id)
            match = self.hint_matcher.match(hints.district, candidates)
            if match:
                district, method = match
                result.district_id = district.id
                result.methods['district'] = method
                if result.division_id is None:
                    result.division_id = district.division_id
                    result.methods['division'] = method

        if hints.upazila:
            candidates = self.hierarchy.upazilas(result.district_id)
            match = self.hint_matcher.match(hints.upazila, candidates)
            if match:
                upazila, method = match
                result.upazila_id = upazila.id
                result.methods['upazila'] = method
                if result.district_id is None:
                    result.district_id = upazila.district_id
                    result.methods['district'] = method
                if result.division_id is None:
                    result.division_id = self.hierarchy.division_id_for_district(upazila.district_id)
                    result.methods['division'] = method

    def _apply_nearest(self, result: ResolutionResult, latitude: float, longitude: float):
        nearest = self.nearest_finder.find_nearest(latitude, longitude)
        if nearest is None:
            self.logger.debug(
                f"No geolocated upazila available for ({latitude}, {longitude}); "
                f"missing levels: {result.missing_levels()}"
            )
            return

        if result.upazila_id is None:
            result.upazila_id = nearest.id
            result.methods['upazila'] = self.NEAREST
        if result.district_id is None:
            result.district_id = nearest.district_id
            result.methods['district'] = self.NEAREST
        if result.division_id is None:
            result.division_id = self.hierarchy.division_id_for_district(nearest.district_id)
            result.methods['division'] = self.NEAREST

    def _record(self, result: ResolutionResult):
        methods = result.methods
        with self._stats_lock:
            stats = self._resolution_stats
            stats['total_resolved'] += 1
            for level in ('division', 'district', 'upazila'):
                if methods.get(level) in (HintMatcher.SUBSTRING, HintMatcher.FUZZY):
                    stats[f'{level}_hint_matches'] += 1
            if HintMatcher.FUZZY in methods.values():
                stats['fuzzy_hint_matches'] += 1
            if self.NEAREST in methods.values():
                stats['nearest_fallbacks'] += 1
            if result.is_complete():
                stats['complete'] += 1
            elif result.is_empty():
                stats['unresolved'] += 1

    def get_statistics(self) -> Dict[str, int]:
        """Get a snapshot of resolution statistics."""
        with self._stats_lock:
            return dict(self._resolution_stats)

    def reset_statistics(self):
        with self._stats_lock:
            self._resolution_stats = self._empty_stats()
