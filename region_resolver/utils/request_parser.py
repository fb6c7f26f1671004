"""
Request payload parsing for location resolution.

Turns a decoded JSON body into a ResolveRequest, rejecting malformed
coordinates and hints before any reference data is read.
"""

from typing import Any, Optional, Tuple

from ..exceptions import ValidationError, create_validation_error
from ..models import AddressHints, ResolveRequest
from .data_utils import safe_float_conversion

INVALID_PAYLOAD_MESSAGE = "Invalid JSON payload"
COORDINATES_REQUIRED_MESSAGE = "Latitude and longitude are required"

LATITUDE_BOUNDS = (-90.0, 90.0)
LONGITUDE_BOUNDS = (-180.0, 180.0)

HINT_FIELDS = ('state', 'district', 'upazila')


def validate_coordinates(latitude: Any, longitude: Any) -> Tuple[float, float]:
    """
    Validate and coerce a coordinate pair.

    Args:
        latitude: Raw latitude value (number or numeric string)
        longitude: Raw longitude value (number or numeric string)

    Returns:
        Tuple of (latitude, longitude) as floats

    Raises:
        ValidationError: If either value is missing, not a finite number,
            or outside its inclusive range
    """
    lat = safe_float_conversion(latitude)
    lon = safe_float_conversion(longitude)

    if lat is None or lon is None:
        field_name = 'latitude' if lat is None else 'longitude'
        raise create_validation_error(
            field_name,
            latitude if lat is None else longitude,
            ['required', 'finite number'],
            message=COORDINATES_REQUIRED_MESSAGE
        )

    _check_bounds('latitude', lat, LATITUDE_BOUNDS)
    _check_bounds('longitude', lon, LONGITUDE_BOUNDS)

    return lat, lon


def _check_bounds(field_name: str, value: float, bounds: Tuple[float, float]):
    low, high = bounds
    if not low <= value <= high:
        raise create_validation_error(
            field_name,
            value,
            [f'between {low:g} and {high:g}'],
            message=f"{field_name.capitalize()} must be between {low:g} and {high:g}"
        )


def parse_address_hints(address: Any) -> AddressHints:
    """
    Parse the optional address object of a resolve request.

    Args:
        address: Decoded ``address`` value, may be None

    Returns:
        AddressHints with normalized hints

    Raises:
        ValidationError: If the address is not an object or a hint is not a string
    """
    if address is None:
        return AddressHints()

    if not isinstance(address, dict):
        raise create_validation_error(
            'address', address, ['object'], message="Address must be an object"
        )

    hints = {}
    for field_name in HINT_FIELDS:
        value = address.get(field_name)
        if value is not None and not isinstance(value, str):
            raise create_validation_error(
                f'address.{field_name}',
                value,
                ['string'],
                message=f"Address field '{field_name}' must be a string"
            )
        hints[field_name] = value

    return AddressHints(**hints)


def parse_resolve_payload(payload: Optional[Any]) -> ResolveRequest:
    """
    Build a ResolveRequest from a decoded JSON payload.

    Args:
        payload: Decoded request body

    Returns:
        Validated ResolveRequest

    Raises:
        ValidationError: If the payload is not an object or contains invalid fields
    """
    if not isinstance(payload, dict):
        raise ValidationError(INVALID_PAYLOAD_MESSAGE, field_name='body', invalid_value=payload)

    latitude, longitude = validate_coordinates(
        payload.get('latitude'), payload.get('longitude')
    )
    address = parse_address_hints(payload.get('address'))

    return ResolveRequest(latitude=latitude, longitude=longitude, address=address)
