"""
Coordinate flavors understood by geoson, and resolution of CRS labels
"""

__all__ = ['CRS', 'resolve_crs']

from enum import Enum
from typing import Union

from geoson._const import ENU_LABELS, WGS_LABELS
from geoson.errors import UnknownCRSError
from geoson.utils.logging import warn_once


class CRS(Enum):
    """
    The two coordinate flavors of a document. The member value is the label
    emitted when writing.

        WGS: longitude, latitude (degrees) and altitude (meters)
        ENU: east, north, up (meters) relative to the collection datum
    """
    WGS = 'EPSG:4326'
    ENU = 'ENU'

    @property
    def label(self) -> str:
        return self.value


def resolve_crs(label: Union[str, CRS]) -> CRS:
    """
    Maps a CRS label onto its coordinate flavor. Matching is case-sensitive.

    Args:
        label: (str)
            A CRS label, e.g. 'EPSG:4326' or 'ENU'. CRS members are
            returned unchanged.

    Returns:
        CRS
    """
    if isinstance(label, CRS):
        return label

    if label in WGS_LABELS:
        return CRS.WGS

    if label in ENU_LABELS:
        if label == 'ECEF':
            warn_once(
                "CRS 'ECEF' is read as east/north/up meters relative to the datum, "
                "not as earth-centered coordinates. (this warning will not repeat)"
            )
        return CRS.ENU

    raise UnknownCRSError(label)
