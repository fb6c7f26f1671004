"""
Data models for the region resolver application.

This module defines the reference hierarchy records, the resolve request and
result types, and the payload structs published over realtime channels.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, TYPE_CHECKING

from .utils.data_utils import safe_string_conversion, normalize_hint

if TYPE_CHECKING:
    from .hierarchy import ReferenceHierarchy


@dataclass(frozen=True)
class Division:
    """Top-level administrative region."""

    id: int
    name: str


@dataclass(frozen=True)
class District:
    """Administrative region belonging to exactly one division."""

    id: int
    name: str
    division_id: int


@dataclass(frozen=True)
class Upazila:
    """Sub-district belonging to exactly one district, optionally geolocated."""

    id: int
    name: str
    district_id: int
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def has_coordinates(self) -> bool:
        """Check if both coordinates are present and finite."""
        return (
            self.latitude is not None and self.longitude is not None
            and math.isfinite(self.latitude) and math.isfinite(self.longitude)
        )


@dataclass
class AddressHints:
    """Optional free-text names used to bias matching before the coordinate search."""

    state: Optional[str] = None
    district: Optional[str] = None
    upazila: Optional[str] = None

    def __post_init__(self):
        """Normalize hints; blank hints count as absent."""
        self.state = normalize_hint(self.state)
        self.district = normalize_hint(self.district)
        self.upazila = normalize_hint(self.upazila)

    def is_empty(self) -> bool:
        """Check if no hint is present."""
        return self.state is None and self.district is None and self.upazila is None


@dataclass
class ResolveRequest:
    """A validated resolve request."""

    latitude: float
    longitude: float
    address: AddressHints = field(default_factory=AddressHints)


@dataclass
class ResolutionResult:
    """
    Outcome of resolving a location onto the administrative hierarchy.

    Each identifier is independently optional; partial results are expected
    when hints are incomplete or no upazila carries coordinates.

    Attributes:
        division_id: Resolved division identifier
        district_id: Resolved district identifier
        upazila_id: Resolved upazila identifier
        methods: How each level was resolved ('hint', 'fuzzy_hint', 'nearest')
    """
    division_id: Optional[int] = None
    district_id: Optional[int] = None
    upazila_id: Optional[int] = None
    methods: Dict[str, str] = field(default_factory=dict)

    def is_complete(self) -> bool:
        """Check if all three levels are resolved."""
        return None not in (self.division_id, self.district_id, self.upazila_id)

    def is_empty(self) -> bool:
        """Check if no level is resolved."""
        return self.division_id is None and self.district_id is None and self.upazila_id is None

    def missing_levels(self) -> list:
        levels = []
        if self.division_id is None:
            levels.append('division')
        if self.district_id is None:
            levels.append('district')
        if self.upazila_id is None:
            levels.append('upazila')
        return levels

    def is_consistent_with(self, hierarchy: 'ReferenceHierarchy') -> bool:
        """
        Check that the resolved identifiers form a single parent chain.

        Unresolved levels are skipped, so a partial result is consistent as
        long as the levels it does carry agree with each other.
        """
        if self.upazila_id is not None and self.district_id is not None:
            upazila = hierarchy.get_upazila(self.upazila_id)
            if upazila is None or upazila.district_id != self.district_id:
                return False
        if self.district_id is not None and self.division_id is not None:
            district = hierarchy.get_district(self.district_id)
            if district is None or district.division_id != self.division_id:
                return False
        return True

    def to_dict(self) -> Dict[str, Optional[int]]:
        """Convert to the wire shape returned by the HTTP service."""
        return {
            'divisionId': self.division_id,
            'districtId': self.district_id,
            'upazilaId': self.upazila_id
        }


def _isoformat(value: datetime) -> str:
    if value.tzinfo is None:
        return value.isoformat(timespec='milliseconds') + 'Z'
    return value.isoformat(timespec='milliseconds')


@dataclass
class NotificationPayload:
    """A notification as delivered to its recipient's channel."""

    id: int
    message: str
    created_at: datetime
    link: Optional[str] = None
    is_read: bool = False
    sender_name: Optional[str] = None

    def __post_init__(self):
        self.message = safe_string_conversion(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'message': self.message,
            'link': self.link,
            'isRead': self.is_read,
            'createdAt': _isoformat(self.created_at),
            'senderName': self.sender_name
        }


@dataclass
class ChatPartner:
    """The other side of a conversation, as shown in a chat event."""

    id: int
    username: str
    name: Optional[str] = None
    blood_group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'username': self.username,
            'name': self.name,
            'bloodGroup': self.blood_group
        }


@dataclass
class ChatMessagePayload:
    """A chat message fanned out to both participants."""

    id: int
    content: str
    created_at: datetime
    sender_id: int
    receiver_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'content': self.content,
            'createdAt': _isoformat(self.created_at),
            'senderId': self.sender_id,
            'receiverId': self.receiver_id
        }
