"""
Nearest-upazila search over the coordinate index.
"""

import logging
from typing import Optional

import numpy as np

from ..hierarchy import ReferenceHierarchy
from ..models import Upazila


class NearestUpazilaFinder:
    """
    Finds the geolocated upazila closest to a coordinate.

    Distance is the squared planar difference (dlat^2 + dlon^2); the deployment
    region is small enough that no geodesic correction is applied. On equal
    distances the first upazila in hierarchy order wins.
    """

    def __init__(self, hierarchy: ReferenceHierarchy, logger: Optional[logging.Logger] = None):
        self.hierarchy = hierarchy
        self.logger = logger or logging.getLogger(__name__)

    def find_nearest(self, latitude: float, longitude: float) -> Optional[Upazila]:
        """
        Find the nearest upazila.

        Args:
            latitude: Query latitude
            longitude: Query longitude

        Returns:
            The nearest Upazila, or None when no upazila carries coordinates
        """
        index = self.hierarchy.coordinate_index()
        if len(index) == 0:
            return None

        distances = (index.latitudes - latitude) ** 2 + (index.longitudes - longitude) ** 2
        # argmin returns the first occurrence of the minimum
        best = int(np.argmin(distances))
        return index.upazilas[best]
