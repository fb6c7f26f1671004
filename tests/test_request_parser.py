"""
Tests for resolve payload parsing.
"""

import pytest

from region_resolver.exceptions import ValidationError
from region_resolver.models import AddressHints
from region_resolver.utils.request_parser import (
    parse_address_hints,
    parse_resolve_payload,
    validate_coordinates
)


def test_parse_full_payload():
    request = parse_resolve_payload({
        'latitude': 23.8,
        'longitude': "90.4",
        'address': {'state': ' Dhaka ', 'district': None, 'upazila': 'TEJ'}
    })

    assert request.latitude == 23.8
    assert request.longitude == 90.4
    assert request.address == AddressHints(state='dhaka', upazila='tej')


def test_missing_address_gives_empty_hints():
    request = parse_resolve_payload({'latitude': 0, 'longitude': 0})

    assert request.address.is_empty()


def test_unknown_address_keys_are_ignored():
    hints = parse_address_hints({'city': 'Dhaka', 'state': 'Sylhet'})

    assert hints == AddressHints(state='sylhet')


@pytest.mark.parametrize("payload", [None, [], "text", 42, [{'latitude': 1}]])
def test_non_object_payload(payload):
    with pytest.raises(ValidationError, match="Invalid JSON payload"):
        parse_resolve_payload(payload)


@pytest.mark.parametrize("payload", [
    {},
    {'latitude': 23.8},
    {'longitude': 90.4},
    {'latitude': None, 'longitude': 90.4},
    {'latitude': '', 'longitude': 90.4},
])
def test_missing_coordinates(payload):
    with pytest.raises(ValidationError, match="Latitude and longitude are required"):
        parse_resolve_payload(payload)


def test_address_must_be_object():
    with pytest.raises(ValidationError, match="Address must be an object"):
        parse_resolve_payload({'latitude': 1, 'longitude': 1, 'address': 'Dhaka'})


def test_hint_must_be_string():
    with pytest.raises(ValidationError) as exc_info:
        parse_address_hints({'district': 12})

    assert exc_info.value.message == "Address field 'district' must be a string"
    assert exc_info.value.field_name == 'address.district'


@pytest.mark.parametrize("latitude,longitude,message", [
    (-90.01, 0, "Latitude must be between -90 and 90"),
    (91, 0, "Latitude must be between -90 and 90"),
    (0, 180.01, "Longitude must be between -180 and 180"),
    (0, -181, "Longitude must be between -180 and 180"),
])
def test_out_of_range(latitude, longitude, message):
    with pytest.raises(ValidationError) as exc_info:
        validate_coordinates(latitude, longitude)

    assert str(exc_info.value) == message


def test_boundaries_are_inclusive():
    assert validate_coordinates(-90, 180) == (-90.0, 180.0)
    assert validate_coordinates("90", "-180") == (90.0, -180.0)
