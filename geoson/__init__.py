from pathlib import Path as FilePath
from typing import Optional, Union

from geoson._version import __version__  # noqa: F401
from geoson.utils.logging import LOGGER
from geoson.coordinates import Datum, Heading
from geoson.crs import CRS, resolve_crs
from geoson.errors import (
    DocumentStructureError, GeometryError, GeosonError, MetadataError,
    UnknownCRSError
)
from geoson.structures import Line, Path, Point, Polygon
from geoson.collections import Feature, FeatureCollection
from geoson.parsers import read_geojson
from geoson.writers import write_geojson


def read(
    fpath: Union[str, FilePath],
    datum: Optional[Datum] = None,
    crs: Union[CRS, str, None] = None,
    heading: Optional[Heading] = None,
    strict: bool = False,
) -> FeatureCollection:
    """Reads a geojson file into a FeatureCollection. See parsers.parse_feature_collection."""
    return read_geojson(fpath, datum=datum, crs=crs, heading=heading, strict=strict)


def write(
    collection: FeatureCollection,
    fpath: Union[str, FilePath],
    crs: Union[CRS, str, None] = None,
) -> None:
    """Writes a FeatureCollection to a geojson file. See writers.write_geojson."""
    write_geojson(collection, fpath, crs=crs)


__all__ = [
    'CRS',
    'Datum',
    'DocumentStructureError',
    'Feature',
    'FeatureCollection',
    'GeometryError',
    'GeosonError',
    'Heading',
    'Line',
    'MetadataError',
    'Path',
    'Point',
    'Polygon',
    'UnknownCRSError',
    'LOGGER',
    'read',
    'resolve_crs',
    'write',
]
