"""
Reference point and orientation of a local east/north/up frame
"""

__all__ = ['Datum', 'Heading']

from typing import List, Sequence, Tuple, Union


class Datum:
    """
    The geodetic origin (latitude, longitude, altitude) of a collection's local
    east/north/up frame.

    A datum is plain metadata: changing it on a collection does not move any
    coordinate already stored in that collection, it only changes the anchor
    used the next time the collection is written. Use
    FeatureCollection.reanchor() to reproject stored coordinates.

    Args:
        lat: (float)
            Latitude, in degrees

        lon: (float)
            Longitude, in degrees

        alt: (float)
            Altitude above the ellipsoid, in meters
    """

    def __init__(
        self,
        lat: Union[float, int] = 0.0,
        lon: Union[float, int] = 0.0,
        alt: Union[float, int] = 0.0,
    ):
        self.lat = float(lat)
        self.lon = float(lon)
        self.alt = float(alt)

    def __eq__(self, other):
        if not isinstance(other, Datum):
            return False

        return self.to_tuple() == other.to_tuple()

    __hash__ = None  # type: ignore  # mutable

    def __repr__(self):
        return f'<Datum({self.lat}, {self.lon}, {self.alt})>'

    def copy(self) -> 'Datum':
        return Datum(self.lat, self.lon, self.alt)

    @classmethod
    def from_list(cls, values: Sequence[float]) -> 'Datum':
        """Creates a Datum from a [lat, lon, alt, ...] sequence; extra entries are ignored"""
        return cls(values[0], values[1], values[2])

    def to_list(self) -> List[float]:
        """The datum as [lat, lon, alt], in the order used by geoson documents"""
        return [self.lat, self.lon, self.alt]

    def to_tuple(self) -> Tuple[float, float, float]:
        return self.lat, self.lon, self.alt


class Heading:
    """
    Orientation attached to a collection. Only yaw is serialized; roll and pitch
    are kept for completeness and default to zero. Headings do not take part in
    any coordinate transform.

    Args:
        yaw: (float)
            Yaw angle

        roll: (float)
            Roll angle

        pitch: (float)
            Pitch angle
    """

    def __init__(
        self,
        yaw: Union[float, int] = 0.0,
        roll: Union[float, int] = 0.0,
        pitch: Union[float, int] = 0.0,
    ):
        self.yaw = float(yaw)
        self.roll = float(roll)
        self.pitch = float(pitch)

    def __eq__(self, other):
        if not isinstance(other, Heading):
            return False

        return (
            self.yaw == other.yaw and
            self.roll == other.roll and
            self.pitch == other.pitch
        )

    __hash__ = None  # type: ignore  # mutable

    def __repr__(self):
        return f'<Heading(yaw={self.yaw}, roll={self.roll}, pitch={self.pitch})>'

    def copy(self) -> 'Heading':
        return Heading(self.yaw, self.roll, self.pitch)
