"""Module for parsing geojson documents into geoson structures"""

__all__ = [
    'normalize_document', 'parse_feature_collection', 'parse_geometry',
    'parse_linestring', 'parse_polygon', 'parse_position', 'parse_properties',
    'read_geojson'
]

import json
from pathlib import Path as FilePath
from typing import cast, Any, Dict, List, Optional, Sequence, Union

from geoson._const import DATUM_LENGTH
from geoson.calc import geodetic_to_enu
from geoson.collections import Feature, FeatureCollection
from geoson.coordinates import Datum, Heading
from geoson.crs import CRS, resolve_crs
from geoson.errors import DocumentStructureError, GeometryError, MetadataError
from geoson.structures import Line, Path, Point, Polygon
from geoson.typing import GeoJSON, Geometry
from geoson.utils.functions import dump_compact_json, is_number, stringify_property
from geoson.utils.logging import LOGGER, warn_once


def _coordinate_value(coords: Sequence[Any], idx: int) -> float:
    """Reads one element of a coordinate tuple; raises IndexError/TypeError as list access would"""
    value = coords[idx]
    if not is_number(value):
        raise TypeError(
            f'Coordinate element {idx} must be a number, got {type(value).__name__}'
        )
    return float(value)


def _read_positions(positions: Sequence[Sequence[Any]], datum: Datum, crs: CRS) -> List[Point]:
    """
    Converts a list of [a, b, c?] tuples into local frame Points.
    WGS tuples are (longitude, latitude, altitude) and are transformed in one
    batch; ENU tuples are (east, north, up) and are taken as-is.
    """
    rows = [
        (
            _coordinate_value(pos, 0),
            _coordinate_value(pos, 1),
            _coordinate_value(pos, 2) if len(pos) > 2 else 0.0,
        )
        for pos in positions
    ]
    if crs is CRS.WGS:
        rows = [tuple(row) for row in geodetic_to_enu(rows, datum)]

    return [Point(*row) for row in rows]


def normalize_document(gjson: Union[str, GeoJSON]) -> GeoJSON:
    """
    Rewrites any geojson object into FeatureCollection form.

        FeatureCollection -> returned unchanged
        Feature -> wrapped as the only feature of a collection
        anything else -> treated as a bare geometry, wrapped into a
                         property-less Feature and then into a collection

    Collection-level properties are never synthesized.

    Args:
        gjson:
            A geojson structure (as a string or python dict)

    Returns:
        dict
    """
    if isinstance(gjson, str):
        gjson = json.loads(gjson)

    if not isinstance(gjson, dict) or not isinstance(gjson.get('type'), str):
        raise DocumentStructureError("top-level object has no string 'type' field")

    gjson = cast(Dict[str, Any], gjson)
    if gjson['type'] == 'FeatureCollection':
        return gjson

    if gjson['type'] == 'Feature':
        return {'type': 'FeatureCollection', 'features': [gjson]}

    feature = {'type': 'Feature', 'geometry': gjson, 'properties': {}}
    return {'type': 'FeatureCollection', 'features': [feature]}


def parse_properties(props: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Flattens a geojson properties object into a string -> string map.

    Strings are copied verbatim; every other value is replaced by its compact
    JSON text, e.g. 3 -> '3', True -> 'true', [1, 2] -> '[1,2]'. This is
    one-directional: the original JSON types are not restored on write.

    Args:
        props:
            A geojson properties object. None is treated as empty.

    Returns:
        Dict[str, str]
    """
    if props is None:
        return {}

    if not isinstance(props, dict):
        raise DocumentStructureError(
            f"Feature 'properties' must be an object, got {type(props).__name__}"
        )

    return {str(k): stringify_property(v) for k, v in props.items()}


def parse_position(coords: Sequence[Any], datum: Datum, crs: CRS) -> Point:
    """
    Parses a single [a, b, c?] coordinate tuple into a local frame Point.

    Args:
        coords:
            The coordinate tuple. Under CRS.WGS this is (longitude, latitude,
            altitude); under CRS.ENU it is (east, north, up). The third
            element defaults to 0.

        datum: (Datum)
            The origin of the local frame

        crs: (CRS)
            The flavor of the tuple

    Returns:
        Point
    """
    return _read_positions([coords], datum, crs)[0]


def parse_linestring(
    coords: Sequence[Sequence[Any]],
    datum: Datum,
    crs: CRS
) -> Union[Line, Path]:
    """
    Parses LineString coordinates. Exactly two positions produce a Line
    (identical endpoints included), three or more produce a Path.

    Args:
        coords:
            A list of coordinate tuples

        datum: (Datum)
            The origin of the local frame

        crs: (CRS)
            The flavor of the tuples

    Returns:
        Line or Path
    """
    points = _read_positions(coords, datum, crs)
    if len(points) < 2:
        raise GeometryError(
            f'LineString requires at least 2 positions, got {len(points)}'
        )

    if len(points) == 2:
        return Line(points[0], points[1])

    return Path(points)


def parse_polygon(
    coords: Sequence[Sequence[Sequence[Any]]],
    datum: Datum,
    crs: CRS,
    strict: bool = False,
) -> Polygon:
    """
    Parses Polygon coordinates. Only the exterior ring (index 0) is used.

    Args:
        coords:
            A list of rings, each a list of coordinate tuples

        datum: (Datum)
            The origin of the local frame

        crs: (CRS)
            The flavor of the tuples

        strict: (bool) (Default False)
            If True, rings beyond the exterior ring raise a GeometryError
            instead of being discarded.

    Returns:
        Polygon
    """
    exterior = coords[0]
    if len(coords) > 1:
        if strict:
            raise GeometryError(
                f'Polygon has {len(coords) - 1} hole(s); holes are not supported'
            )
        warn_once(
            'Polygon holes are not supported and will be discarded. '
            '(this warning will not repeat)'
        )

    return Polygon(_read_positions(exterior, datum, crs))


def parse_geometry(
    geom: GeoJSON,
    datum: Datum,
    crs: CRS,
    strict: bool = False,
) -> List[Geometry]:
    """
    Recursively parses a geojson geometry into a flat list of leaf geometries,
    in document order. Multi-geometries and GeometryCollections contribute
    one entry per member; their grouping is not kept.

    Args:
        geom:
            A geojson geometry object

        datum: (Datum)
            The origin of the local frame

        crs: (CRS)
            The flavor of the coordinate tuples

        strict: (bool) (Default False)
            If True, unrecognized geometry types and polygon holes raise a
            GeometryError. Otherwise unrecognized types yield no geometries
            and holes are discarded.

    Returns:
        List of Point, Line, Path or Polygon
    """
    gtype = geom['type']

    if gtype == 'Point':
        return [parse_position(geom['coordinates'], datum, crs)]

    if gtype == 'LineString':
        return [parse_linestring(geom['coordinates'], datum, crs)]

    if gtype == 'Polygon':
        return [parse_polygon(geom['coordinates'], datum, crs, strict)]

    if gtype == 'MultiPoint':
        return cast(List[Geometry], _read_positions(geom['coordinates'], datum, crs))

    if gtype == 'MultiLineString':
        return [parse_linestring(line, datum, crs) for line in geom['coordinates']]

    if gtype == 'MultiPolygon':
        return [parse_polygon(poly, datum, crs, strict) for poly in geom['coordinates']]

    if gtype == 'GeometryCollection':
        return [
            shape
            for sub_geom in geom['geometries']
            for shape in parse_geometry(sub_geom, datum, crs, strict)
        ]

    if strict:
        raise GeometryError(f'Unrecognized geometry type: {gtype}')

    warn_once(f'Unrecognized geometry type {gtype!r} will be ignored.')
    return []


def _metadata_crs(props: Dict[str, Any]) -> CRS:
    label = props.get('crs')
    if not isinstance(label, str):
        raise MetadataError('crs', "'properties' missing string 'crs'")

    return resolve_crs(label)


def _metadata_datum(props: Dict[str, Any]) -> Datum:
    values = props.get('datum')
    if (
        not isinstance(values, list) or
        len(values) < DATUM_LENGTH or
        not all(is_number(x) for x in values[:DATUM_LENGTH])
    ):
        raise MetadataError('datum', "'properties' missing array 'datum' of >= 3 numbers")

    return Datum.from_list(values)


def _metadata_heading(props: Dict[str, Any]) -> Heading:
    yaw = props.get('heading')
    if not is_number(yaw):
        raise MetadataError('heading', "'properties' missing numeric 'heading'")

    return Heading(yaw=yaw)


def parse_feature_collection(
    gjson: Union[str, GeoJSON],
    datum: Optional[Datum] = None,
    crs: Union[CRS, str, None] = None,
    heading: Optional[Heading] = None,
    strict: bool = False,
) -> FeatureCollection:
    """
    Parses a geojson document (bare geometry, Feature or FeatureCollection)
    into a FeatureCollection whose geometries are all in the local frame of
    its datum.

    Collection metadata is read from the top-level 'properties' object:

        crs: (str) one of 'EPSG:4326', 'WGS84', 'WGS', 'ENU', 'ECEF'
        datum: [lat, lon, alt, ...] (extra elements ignored)
        heading: (number) the yaw of the collection

    Any of these may instead be supplied by the caller, in which case the
    document value is neither required nor read.

    Features without a geometry are skipped. Every leaf geometry becomes its
    own Feature, carrying a copy of the source feature's properties and id.

    Args:
        gjson:
            A geojson structure (as a string or python dict)

        datum: (Datum) (Optional)
            Overrides the document datum

        crs: (CRS or str) (Optional)
            Overrides the document crs

        heading: (Heading) (Optional)
            Overrides the document heading

        strict: (bool) (Default False)
            If True, features without geometry, polygon holes and unrecognized
            geometry types raise a GeometryError instead of being tolerated.

    Returns:
        FeatureCollection
    """
    doc = normalize_document(gjson)

    props = doc.get('properties')
    overrides = (datum, crs, heading)
    if any(x is None for x in overrides) and not isinstance(props, dict):
        raise MetadataError('properties', "missing top-level 'properties'")

    crs = resolve_crs(crs) if crs is not None else _metadata_crs(props)
    datum = datum.copy() if datum is not None else _metadata_datum(props)
    heading = heading.copy() if heading is not None else _metadata_heading(props)

    if not isinstance(doc.get('features'), list):
        raise DocumentStructureError("FeatureCollection has no 'features' array")

    features: List[Feature] = []
    for idx, feat in enumerate(doc['features']):
        if not isinstance(feat, dict):
            raise DocumentStructureError(f'Feature {idx} is not an object')

        if feat.get('geometry') is None:
            if strict:
                raise GeometryError(f'Feature {idx} has no geometry')
            LOGGER.debug('Skipping feature %d: no geometry', idx)
            continue

        shapes = parse_geometry(feat['geometry'], datum, crs, strict)
        properties = parse_properties(feat.get('properties'))
        fid = dump_compact_json(feat['id']) if 'id' in feat else None

        features.extend(
            Feature(shape, properties=dict(properties), id=fid)
            for shape in shapes
        )

    return FeatureCollection(features, crs=crs, datum=datum, heading=heading)


def read_geojson(
    fpath: Union[str, FilePath],
    datum: Optional[Datum] = None,
    crs: Union[CRS, str, None] = None,
    heading: Optional[Heading] = None,
    strict: bool = False,
) -> FeatureCollection:
    """
    Reads a geojson file into a FeatureCollection. See
    parse_feature_collection for the meaning of the arguments.

    Args:
        fpath:
            Path to the geojson file

    Returns:
        FeatureCollection
    """
    LOGGER.debug('Reading %s', fpath)
    with open(fpath, 'r', encoding='utf-8') as f:
        gjson = json.load(f)

    return parse_feature_collection(
        gjson,
        datum=datum,
        crs=crs,
        heading=heading,
        strict=strict
    )
