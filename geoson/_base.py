"""
Base class declarations for geoson geometries
"""

from __future__ import annotations

from abc import abstractmethod, ABC
from typing import Any, Dict, List, Tuple, TYPE_CHECKING

import numpy as np
from typing_extensions import Self

from geoson.calc import enu_to_geodetic, reanchor_positions
from geoson.coordinates import Datum

if TYPE_CHECKING:  # pragma: no cover
    from geoson.structures import Point


class BaseGeometry(ABC):

    """
    A leaf geometry whose coordinates are stored in the local east/north/up
    frame of the collection it belongs to. Geodetic values are never stored;
    they are derived on request through a datum.
    """

    @property
    @abstractmethod
    def points(self) -> List['Point']:
        """The ordered points making up the geometry"""

    @abstractmethod
    def _with_points(self, points: List['Point']) -> Self:
        """Creates a geometry of the same kind from a new list of points"""

    def __eq__(self, other):
        if type(self) is not type(other):
            return False

        return self.points == other.points

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self.points)))

    def __iter__(self):
        return iter(self.points)

    def __len__(self):
        return len(self.points)

    @property
    def __geo_interface__(self) -> Dict[str, Any]:
        """The geometry as a GeoJSON-like mapping, in local (x, y, z) meters"""
        from geoson.crs import CRS
        from geoson.writers import geometry_to_geojson

        return geometry_to_geojson(self, Datum(), CRS.ENU)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """
        The east/north min/max bounds of the geometry.

        Returns:
            (min_x, min_y, max_x, max_y)
        """
        arr = self._non_empty_array()
        min_x, min_y = arr[:, :2].min(axis=0)
        max_x, max_y = arr[:, :2].max(axis=0)
        return float(min_x), float(min_y), float(max_x), float(max_y)

    @property
    def centroid(self) -> 'Point':
        """The arithmetic mean of the geometry's points"""
        from geoson.structures import Point

        return Point(*self._non_empty_array().mean(axis=0))

    def _non_empty_array(self) -> np.ndarray:
        arr = self.to_array()
        if not len(arr):
            raise ValueError(f'{type(self).__name__} has no points')
        return arr

    def copy(self) -> Self:
        return self._with_points([p.copy() for p in self.points])

    def reanchor(self, old: Datum, new: Datum) -> Self:
        """
        Re-expresses the geometry, currently anchored at `old`, in the local
        frame of `new`. The result describes the same places on earth.

        Args:
            old: (Datum)
                The datum the geometry is currently expressed in

            new: (Datum)
                The target datum

        Returns:
            A new geometry of the same kind
        """
        from geoson.structures import Point

        arr = reanchor_positions(self.to_array(), old, new)
        return self._with_points([Point(*row) for row in arr])

    def to_array(self) -> np.ndarray:
        """The geometry's points as an (n, 3) array of (x, y, z)"""
        return np.array([p.to_tuple() for p in self.points], dtype=np.float64).reshape(-1, 3)

    def to_wgs(self, datum: Datum) -> List[Tuple[float, float, float]]:
        """
        The geometry's points as geodetic coordinates.

        Args:
            datum: (Datum)
                The origin of the local frame the geometry is expressed in

        Returns:
            List of (longitude, latitude, altitude)
        """
        return [
            (float(lon), float(lat), float(alt))
            for lon, lat, alt in enu_to_geodetic(self.to_array(), datum)
        ]
