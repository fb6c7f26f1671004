"""
Tests for the three-stage region resolution.
"""

import pytest

from region_resolver.exceptions import ValidationError
from region_resolver.hierarchy import ReferenceHierarchy
from region_resolver.matching.name_matcher import HintMatcher
from region_resolver.models import AddressHints, Division, District, Upazila, ResolveRequest
from region_resolver.resolver import RegionResolver


class TestNearestFallback:

    def test_no_hints_resolves_nearest_upazila_with_parent_chain(self, resolver, hierarchy):
        result = resolver.resolve(23.8, 90.4, AddressHints())

        assert result.upazila_id == 101
        assert result.district_id == 10
        assert result.division_id == 1
        assert result.is_consistent_with(hierarchy)
        assert result.methods == {'upazila': 'nearest', 'district': 'nearest', 'division': 'nearest'}

    def test_address_is_optional(self, resolver):
        result = resolver.resolve(24.9, 91.87)

        assert result.to_dict() == {'divisionId': 3, 'districtId': 30, 'upazilaId': 301}

    def test_upazilas_without_coordinates_are_never_nearest(self, resolver):
        # Bishwanath (302) has no coordinates
        result = resolver.resolve(24.9, 91.87)

        assert result.upazila_id != 302

    def test_equal_distances_pick_first_in_order(self):
        hierarchy = ReferenceHierarchy(
            [Division(1, "North")],
            [District(1, "Alpha", 1)],
            [
                Upazila(1, "East", 1, latitude=0.0, longitude=1.0),
                Upazila(2, "West", 1, latitude=0.0, longitude=-1.0),
            ]
        )
        resolver = RegionResolver(hierarchy)

        assert resolver.resolve(0, 0).upazila_id == 1

    def test_no_geolocated_upazilas_leaves_levels_unresolved(self):
        hierarchy = ReferenceHierarchy(
            [Division(1, "Dhaka")],
            [District(10, "Dhaka", 1)],
            [Upazila(100, "Savar", 10)]
        )
        resolver = RegionResolver(hierarchy)

        assert resolver.resolve(23.8, 90.4).to_dict() == {
            'divisionId': None, 'districtId': None, 'upazilaId': None
        }

        partial = resolver.resolve(23.8, 90.4, AddressHints(state="dhaka"))
        assert partial.to_dict() == {'divisionId': 1, 'districtId': None, 'upazilaId': None}


class TestNameHints:

    def test_state_hint_does_not_constrain_geographic_fallback(self, resolver, hierarchy):
        result = resolver.resolve(23.8, 90.4, AddressHints(state="Sylhet"))

        assert result.division_id == 3
        assert result.district_id == 10
        assert result.upazila_id == 101
        assert not result.is_consistent_with(hierarchy)

    def test_district_hint_outside_resolved_division_is_ignored(self, resolver):
        result = resolver.resolve(23.8, 90.4, AddressHints(state="Dhaka", district="Noakhali"))

        assert result.division_id == 1
        assert result.district_id == 10
        assert result.methods['district'] == 'nearest'

    def test_district_hint_backfills_division(self, resolver):
        result = resolver.resolve(24.07, 90.226, AddressHints(district="gazi"))

        assert result.district_id == 11
        assert result.division_id == 1
        assert result.upazila_id == 110
        assert result.methods == {'district': 'hint', 'division': 'hint', 'upazila': 'nearest'}

    def test_upazila_hint_narrowed_to_district(self, resolver):
        result = resolver.resolve(
            22.0, 92.0, AddressHints(district="Sylhet", upazila="companiganj")
        )

        assert result.to_dict() == {'divisionId': 3, 'districtId': 30, 'upazilaId': 300}

    def test_unnarrowed_upazila_hint_takes_first_match_and_backfills(self, resolver):
        result = resolver.resolve(25.0, 91.7, AddressHints(upazila="Companiganj"))

        assert result.to_dict() == {'divisionId': 2, 'districtId': 21, 'upazilaId': 210}
        assert set(result.methods.values()) == {'hint'}

    def test_hints_are_case_insensitive_substrings(self, resolver):
        result = resolver.resolve(22.3, 91.9, AddressHints(upazila="  SAV "))

        assert result.upazila_id == 100
        assert result.district_id == 10

    def test_blank_hints_are_ignored(self, resolver):
        result = resolver.resolve(23.8, 90.4, AddressHints(state="   ", district=""))

        assert result.methods['division'] == 'nearest'

    def test_unmatched_upazila_hint_falls_through(self, resolver):
        result = resolver.resolve(23.8, 90.4, AddressHints(upazila="Mirpur"))

        assert result.upazila_id == 101
        assert result.methods['upazila'] == 'nearest'

    def test_fully_hinted_request_skips_nearest_search(self, hierarchy):
        class ExplodingFinder:
            def find_nearest(self, latitude, longitude):
                raise AssertionError("nearest search should not run")

        resolver = RegionResolver(hierarchy, nearest_finder=ExplodingFinder())
        result = resolver.resolve(
            0, 0, AddressHints(state="Chattagram", district="Chattogram", upazila="Patiya")
        )

        assert result.to_dict() == {'divisionId': 2, 'districtId': 20, 'upazilaId': 200}

    def test_hint_whitespace_is_not_collapsed(self):
        hierarchy = ReferenceHierarchy(
            [Division(1, "North")],
            [District(1, "Alpha", 1)],
            [
                Upazila(100, "Far", 1, latitude=0.0, longitude=0.0),
                Upazila(101, "Old  Town", 1, latitude=50.0, longitude=50.0),
                Upazila(102, "Sylhet Sadar", 1, latitude=60.0, longitude=60.0),
            ]
        )
        resolver = RegionResolver(hierarchy)

        exact = resolver.resolve(0, 0, AddressHints(upazila="Old  Town"))
        assert exact.upazila_id == 101
        assert exact.methods['upazila'] == 'hint'

        tabbed = resolver.resolve(0, 0, AddressHints(upazila="sylhet\tsadar"))
        assert tabbed.upazila_id == 100
        assert tabbed.methods['upazila'] == 'nearest'

    def test_fuzzy_hint_only_when_configured(self, hierarchy):
        plain = RegionResolver(hierarchy)
        fuzzy = RegionResolver(hierarchy, hint_matcher=HintMatcher(fuzzy_threshold=80))
        hints = AddressHints(upazila="Savaar")

        assert plain.resolve(24.07, 90.226, hints).upazila_id == 110

        result = fuzzy.resolve(24.07, 90.226, hints)
        assert result.upazila_id == 100
        assert result.methods['upazila'] == 'fuzzy_hint'


class TestValidation:

    @pytest.mark.parametrize("latitude,longitude", [
        (90, 0), (-90, 0), (0, 180), (0, -180), ("23.8", "90.4"),
    ])
    def test_inclusive_bounds_and_numeric_strings_accepted(self, resolver, latitude, longitude):
        assert resolver.resolve(latitude, longitude).upazila_id is not None

    @pytest.mark.parametrize("latitude,longitude,message", [
        (90.0001, 0, "Latitude must be between -90 and 90"),
        (0, -180.5, "Longitude must be between -180 and 180"),
        (None, 90.4, "Latitude and longitude are required"),
        (23.8, "east", "Latitude and longitude are required"),
        (float('nan'), 90.4, "Latitude and longitude are required"),
        (23.8, float('inf'), "Latitude and longitude are required"),
        (True, 90.4, "Latitude and longitude are required"),
    ])
    def test_invalid_coordinates_rejected(self, resolver, latitude, longitude, message):
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(latitude, longitude)

        assert exc_info.value.message == message
        assert resolver.get_statistics()['total_resolved'] == 0


class TestResolverBehaviour:

    def test_identical_input_gives_identical_output(self, resolver):
        hints = AddressHints(state="chat", upazila="compani")

        first = resolver.resolve(23.0, 91.0, hints)
        second = resolver.resolve(23.0, 91.0, hints)

        assert first == second

    def test_resolve_request(self, resolver):
        request = ResolveRequest(latitude=23.8, longitude=90.4, address=AddressHints(state="Sylhet"))

        assert resolver.resolve_request(request).division_id == 3

    def test_statistics(self, resolver):
        resolver.resolve(23.8, 90.4)
        resolver.resolve(24.07, 90.226, AddressHints(district="gazi"))

        stats = resolver.get_statistics()
        assert stats['total_resolved'] == 2
        assert stats['district_hint_matches'] == 1
        assert stats['division_hint_matches'] == 1
        assert stats['nearest_fallbacks'] == 2
        assert stats['complete'] == 2

        resolver.reset_statistics()
        assert resolver.get_statistics()['total_resolved'] == 0
