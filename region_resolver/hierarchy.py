"""
Read-only reference hierarchy of divisions, districts and upazilas.

The hierarchy is seeded once at startup and never mutated afterwards, so the
parent indexes and the coordinate index are built a single time and shared
by every resolution.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Iterable

import numpy as np

from .exceptions import DataQualityError
from .models import Division, District, Upazila


@dataclass(frozen=True, eq=False)
class CoordinateIndex:
    """Parallel arrays over the upazilas that carry coordinates, in hierarchy order."""

    upazilas: tuple
    latitudes: np.ndarray
    longitudes: np.ndarray

    def __len__(self) -> int:
        return len(self.upazilas)


class ReferenceHierarchy:
    """
    In-memory three-level administrative hierarchy.

    Iteration order of every accessor is the order the records were supplied
    in; the data loader supplies them sorted by identifier.
    """

    def __init__(self, divisions: Iterable[Division], districts: Iterable[District],
                 upazilas: Iterable[Upazila], logger: Optional[logging.Logger] = None):
        """
        Build and validate the hierarchy.

        Args:
            divisions: Division records
            districts: District records
            upazilas: Upazila records
            logger: Optional logger instance

        Raises:
            DataQualityError: If identifiers repeat within a level or a parent
                reference does not resolve
        """
        self.logger = logger or logging.getLogger(__name__)

        self._divisions = self._index_level('division', list(divisions))
        self._districts = self._index_level('district', list(districts))
        self._upazilas = self._index_level('upazila', list(upazilas))

        self._validate_parents(
            'district', self._districts.values(), 'division_id', self._divisions
        )
        self._validate_parents(
            'upazila', self._upazilas.values(), 'district_id', self._districts
        )

        self._districts_by_division: Dict[int, List[District]] = {}
        for district in self._districts.values():
            self._districts_by_division.setdefault(district.division_id, []).append(district)

        self._upazilas_by_district: Dict[int, List[Upazila]] = {}
        for upazila in self._upazilas.values():
            self._upazilas_by_district.setdefault(upazila.district_id, []).append(upazila)

        self._coordinate_index = self._build_coordinate_index()

        self.logger.debug(f"Reference hierarchy ready: {self.summary()}")

    @staticmethod
    def _index_level(level: str, records: list) -> dict:
        index = {}
        duplicates = []
        for record in records:
            if record.id in index:
                duplicates.append(record.id)
                continue
            index[record.id] = record

        if duplicates:
            raise DataQualityError(
                f"Duplicate {level} identifiers: {sorted(set(duplicates))}",
                level=level,
                invalid_ids=sorted(set(duplicates)),
                recommendations=[f"Ensure every {level} id appears exactly once"]
            )
        return index

    @staticmethod
    def _validate_parents(level: str, records, parent_attr: str, parents: dict):
        orphans = [r.id for r in records if getattr(r, parent_attr) not in parents]
        if orphans:
            raise DataQualityError(
                f"{len(orphans)} {level} record(s) reference a missing parent via {parent_attr}",
                level=level,
                invalid_ids=orphans,
                recommendations=[f"Seed the parent rows before the {level} rows"]
            )

    def _build_coordinate_index(self) -> CoordinateIndex:
        located = tuple(u for u in self._upazilas.values() if u.has_coordinates())
        return CoordinateIndex(
            upazilas=located,
            latitudes=np.array([u.latitude for u in located], dtype=float),
            longitudes=np.array([u.longitude for u in located], dtype=float)
        )

    def get_division(self, division_id: int) -> Optional[Division]:
        return self._divisions.get(division_id)

    def get_district(self, district_id: int) -> Optional[District]:
        return self._districts.get(district_id)

    def get_upazila(self, upazila_id: int) -> Optional[Upazila]:
        return self._upazilas.get(upazila_id)

    def divisions(self) -> List[Division]:
        return list(self._divisions.values())

    def districts(self, division_id: Optional[int] = None) -> List[District]:
        """All districts, or only those of one division."""
        if division_id is None:
            return list(self._districts.values())
        return list(self._districts_by_division.get(division_id, []))

    def upazilas(self, district_id: Optional[int] = None) -> List[Upazila]:
        """All upazilas, or only those of one district."""
        if district_id is None:
            return list(self._upazilas.values())
        return list(self._upazilas_by_district.get(district_id, []))

    def division_id_for_district(self, district_id: int) -> Optional[int]:
        district = self._districts.get(district_id)
        return district.division_id if district else None

    def coordinate_index(self) -> CoordinateIndex:
        return self._coordinate_index

    def summary(self) -> Dict[str, int]:
        """Get record counts per level."""
        return {
            'divisions': len(self._divisions),
            'districts': len(self._districts),
            'upazilas': len(self._upazilas),
            'geolocated_upazilas': len(self._coordinate_index)
        }
