"""
Shared fixtures for the region resolver tests.
"""

import logging

import pytest

from region_resolver.hierarchy import ReferenceHierarchy
from region_resolver.models import Division, District, Upazila
from region_resolver.resolver import RegionResolver


@pytest.fixture
def divisions():
    return [
        Division(id=1, name="Dhaka"),
        Division(id=2, name="Chattagram"),
        Division(id=3, name="Sylhet"),
    ]


@pytest.fixture
def districts():
    return [
        District(id=10, name="Dhaka", division_id=1),
        District(id=11, name="Gazipur", division_id=1),
        District(id=20, name="Chattogram", division_id=2),
        District(id=21, name="Noakhali", division_id=2),
        District(id=30, name="Sylhet", division_id=3),
    ]


@pytest.fixture
def upazilas():
    return [
        Upazila(id=100, name="Savar", district_id=10, latitude=23.858, longitude=90.266),
        Upazila(id=101, name="Tejgaon", district_id=10, latitude=23.81, longitude=90.41),
        Upazila(id=102, name="Keraniganj", district_id=10, latitude=23.698, longitude=90.345),
        Upazila(id=110, name="Kaliakair", district_id=11, latitude=24.07, longitude=90.226),
        Upazila(id=200, name="Patiya", district_id=20, latitude=22.295, longitude=91.979),
        Upazila(id=210, name="Companiganj", district_id=21, latitude=22.873, longitude=91.285),
        Upazila(id=300, name="Companiganj", district_id=30, latitude=25.067, longitude=91.737),
        Upazila(id=301, name="Sylhet Sadar", district_id=30, latitude=24.899, longitude=91.871),
        Upazila(id=302, name="Bishwanath", district_id=30),
    ]


@pytest.fixture
def hierarchy(divisions, districts, upazilas):
    return ReferenceHierarchy(divisions, districts, upazilas)


@pytest.fixture
def resolver(hierarchy):
    return RegionResolver(hierarchy)


@pytest.fixture
def logger():
    return logging.getLogger("region_resolver.tests")


@pytest.fixture
def write_csv():
    """Write a small CSV file for loader tests."""

    def _write(path, header, rows):
        lines = [",".join(header)]
        lines.extend(",".join("" if v is None else str(v) for v in row) for row in rows)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write
