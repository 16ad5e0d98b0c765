""" Datum-anchored transforms between geodetic and local east/north/up coordinates """

__all__ = [
    'enu_to_geodetic', 'geodetic_to_enu', 'reanchor_positions'
]

from functools import lru_cache
from typing import Tuple

import numpy as np
from pyproj import Transformer
from pyproj.enums import TransformDirection

from geoson._const import ELLIPSOID
from geoson.coordinates import Datum


@lru_cache(maxsize=32)
def _topocentric_transformer(lat: float, lon: float, alt: float) -> Transformer:
    """
    Builds (and caches) a pipeline mapping lon/lat/alt to east/north/up meters
    around the given origin. The inverse direction maps back.
    """
    return Transformer.from_pipeline(
        '+proj=pipeline '
        f'+step +proj=cart +ellps={ELLIPSOID} '
        f'+step +proj=topocentric +ellps={ELLIPSOID} '
        f'+lat_0={lat!r} +lon_0={lon!r} +h_0={alt!r}'
    )


def _as_columns(positions) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    arr = np.atleast_2d(np.asarray(positions, dtype=np.float64))
    if arr.size == 0:
        arr = arr.reshape(0, 3)

    if arr.shape[1] != 3:
        raise ValueError(f'Expected positions of shape (n, 3), got {arr.shape}')

    return arr[:, 0], arr[:, 1], arr[:, 2]


def geodetic_to_enu(positions, datum: Datum) -> np.ndarray:
    """
    Converts geodetic positions to the local frame anchored at a datum.

    Args:
        positions:
            An (n, 3) array-like of (longitude, latitude, altitude) rows, in
            degrees and meters

        datum: (Datum)
            The origin of the local frame

    Returns:
        np.ndarray of shape (n, 3), (east, north, up) in meters
    """
    lon, lat, alt = _as_columns(positions)
    if not len(lon):
        return np.empty((0, 3))

    transformer = _topocentric_transformer(*datum.to_tuple())
    east, north, up = transformer.transform(lon, lat, alt)
    return np.column_stack([east, north, up])


def enu_to_geodetic(positions, datum: Datum) -> np.ndarray:
    """
    Converts local frame positions back to geodetic coordinates.

    Args:
        positions:
            An (n, 3) array-like of (east, north, up) rows, in meters

        datum: (Datum)
            The origin of the local frame

    Returns:
        np.ndarray of shape (n, 3), (longitude, latitude, altitude)
    """
    east, north, up = _as_columns(positions)
    if not len(east):
        return np.empty((0, 3))

    transformer = _topocentric_transformer(*datum.to_tuple())
    lon, lat, alt = transformer.transform(
        east, north, up, direction=TransformDirection.INVERSE
    )
    return np.column_stack([lon, lat, alt])


def reanchor_positions(positions, old: Datum, new: Datum) -> np.ndarray:
    """
    Re-expresses local frame positions anchored at `old` in the frame
    anchored at `new`, such that they describe the same places on earth.

    Args:
        positions:
            An (n, 3) array-like of (east, north, up) rows relative to `old`

        old: (Datum)
            The datum the positions are currently expressed in

        new: (Datum)
            The target datum

    Returns:
        np.ndarray of shape (n, 3)
    """
    if old == new:
        return np.array(positions, dtype=np.float64).reshape(-1, 3)

    return geodetic_to_enu(enu_to_geodetic(positions, old), new)
