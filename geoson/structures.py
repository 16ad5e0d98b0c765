"""
Leaf geometries, stored in local east/north/up meters
"""

__all__ = ['Line', 'Path', 'Point', 'Polygon']

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from geoson._base import BaseGeometry
from geoson.calc import geodetic_to_enu
from geoson.coordinates import Datum


class Point(BaseGeometry):

    """
    A single position in the local frame.

    Args:
        x: (float)
            East, in meters

        y: (float)
            North, in meters

        z: (float)
            Up, in meters
    """

    def __init__(
        self,
        x: Union[float, int],
        y: Union[float, int],
        z: Union[float, int] = 0.0,
    ):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return False

        return self.to_tuple() == other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self):
        return f'<Point({self.x}, {self.y}, {self.z})>'

    @property
    def points(self) -> List['Point']:
        return [self]

    def _with_points(self, points: List['Point']) -> 'Point':
        return points[0]

    def copy(self) -> 'Point':
        return Point(self.x, self.y, self.z)

    @classmethod
    def from_wgs(
        cls,
        lon: float,
        lat: float,
        alt: float = 0.0,
        datum: Optional[Datum] = None
    ) -> 'Point':
        """
        Creates a Point from a geodetic coordinate, expressed in the local
        frame of the datum.

        Args:
            lon: (float)
                Longitude, in degrees

            lat: (float)
                Latitude, in degrees

            alt: (float)
                Altitude, in meters

            datum: (Datum)
                The origin of the local frame. Defaults to (0, 0, 0).

        Returns:
            Point
        """
        x, y, z = geodetic_to_enu([(lon, lat, alt)], datum or Datum())[0]
        return cls(x, y, z)

    def to_tuple(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z


class Line(BaseGeometry):

    """
    A straight segment between exactly two points.

    Args:
        start: (Point)
            The first point

        end: (Point)
            The second point
    """

    def __init__(self, start: Point, end: Point):
        self.start = start
        self.end = end

    def __repr__(self):
        return f'<Line {self.start.to_tuple()} -> {self.end.to_tuple()}>'

    @property
    def points(self) -> List[Point]:
        return [self.start, self.end]

    def _with_points(self, points: List[Point]) -> 'Line':
        return Line(*points)

    @property
    def length(self) -> float:
        """The length of the segment, in meters"""
        start, end = self.to_array()
        return float(np.linalg.norm(end - start))


class Path(BaseGeometry):

    """
    An open polyline of three or more ordered points. Two-point polylines are
    represented by Line.

    Args:
        points: (Sequence[Point])
            The vertices, in order
    """

    def __init__(self, points: Sequence[Point]):
        if len(points) < 3:
            raise ValueError(
                f'A Path requires at least 3 points, got {len(points)}; '
                'use Line for two-point segments.'
            )

        self._points = list(points)

    def __repr__(self):
        return f'<Path of {len(self._points)} points>'

    @property
    def points(self) -> List[Point]:
        return self._points

    def _with_points(self, points: List[Point]) -> 'Path':
        return Path(points)

    @property
    def length(self) -> float:
        """The summed length of the path's segments, in meters"""
        return float(np.linalg.norm(np.diff(self.to_array(), axis=0), axis=1).sum())


class Polygon(BaseGeometry):

    """
    The boundary ring of an area. By convention the first and last points are
    equal, but closure is not enforced and holes are not represented.

    Args:
        points: (Sequence[Point])
            The ring vertices, in order
    """

    def __init__(self, points: Sequence[Point]):
        self._points = list(points)

    def __repr__(self):
        return f'<Polygon of {len(self._points)} points>'

    @property
    def points(self) -> List[Point]:
        return self._points

    def _with_points(self, points: List[Point]) -> 'Polygon':
        return Polygon(points)

    @property
    def area(self) -> float:
        """The planar (east/north) area enclosed by the ring, in square meters"""
        if len(self._points) < 3:
            return 0.

        ring = self._closed_ring()
        x, y = ring[:, 0], ring[:, 1]
        return float(abs(np.dot(x[:-1], y[1:]) - np.dot(x[1:], y[:-1])) / 2)

    @property
    def is_closed(self) -> bool:
        """Whether the ring's first and last points are equal"""
        return bool(self._points) and self._points[0] == self._points[-1]

    @property
    def perimeter(self) -> float:
        """The planar length of the closed ring, in meters"""
        if len(self._points) < 2:
            return 0.

        ring = self._closed_ring()[:, :2]
        return float(np.linalg.norm(np.diff(ring, axis=0), axis=1).sum())

    def _closed_ring(self) -> np.ndarray:
        arr = self.to_array()
        if not self.is_closed:
            arr = np.vstack([arr, arr[:1]])
        return arr
