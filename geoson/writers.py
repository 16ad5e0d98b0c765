"""Module for serializing geoson structures into geojson documents"""

__all__ = [
    'collection_to_geojson', 'feature_to_geojson', 'geometry_to_geojson',
    'write_geojson'
]

import json
from pathlib import Path as FilePath
from typing import TYPE_CHECKING, List, Optional, Union

from geoson.calc import enu_to_geodetic
from geoson.coordinates import Datum
from geoson.crs import CRS, resolve_crs
from geoson.structures import Line, Path, Point, Polygon
from geoson.typing import GeoJSON, Geometry
from geoson.utils.logging import LOGGER

if TYPE_CHECKING:  # pragma: no cover
    from geoson.collections import Feature, FeatureCollection


def _positions(points: List[Point], datum: Datum, crs: CRS) -> List[List[float]]:
    """Emits points as [x, y, z] (ENU) or, through the datum, as [lon, lat, alt] (WGS)"""
    if crs is CRS.ENU:
        return [[p.x, p.y, p.z] for p in points]

    return [
        [float(lon), float(lat), float(alt)]
        for lon, lat, alt in enu_to_geodetic([p.to_tuple() for p in points], datum)
    ]


def geometry_to_geojson(geometry: Geometry, datum: Datum, crs: CRS) -> GeoJSON:
    """
    Converts a leaf geometry into a geojson geometry object.

        Point -> Point
        Line -> LineString with its two endpoints
        Path -> LineString with all of its points
        Polygon -> Polygon with a single (exterior) ring

    Args:
        geometry:
            A Point, Line, Path or Polygon, in the local frame of `datum`

        datum: (Datum)
            The origin of the local frame

        crs: (CRS)
            The flavor of the emitted coordinates

    Returns:
        dict
    """
    if isinstance(geometry, Point):
        return {
            'type': 'Point',
            'coordinates': _positions([geometry], datum, crs)[0]
        }

    if isinstance(geometry, (Line, Path)):
        return {
            'type': 'LineString',
            'coordinates': _positions(geometry.points, datum, crs)
        }

    if isinstance(geometry, Polygon):
        return {
            'type': 'Polygon',
            'coordinates': [_positions(geometry.points, datum, crs)]
        }

    raise TypeError(f'Unsupported geometry type: {type(geometry).__name__}')


def feature_to_geojson(feature: 'Feature', datum: Datum, crs: CRS) -> GeoJSON:
    """
    Converts a Feature into a geojson Feature object. Property values are
    written as strings; an id is written back as the JSON value it was read
    from.

    Args:
        feature: (Feature)
            The feature

        datum: (Datum)
            The origin of the local frame

        crs: (CRS)
            The flavor of the emitted coordinates

    Returns:
        dict
    """
    out = {
        'type': 'Feature',
        'geometry': geometry_to_geojson(feature.geometry, datum, crs),
        'properties': dict(feature.properties),
    }
    if feature.id is not None:
        out['id'] = json.loads(feature.id)

    return out


def collection_to_geojson(
    collection: 'FeatureCollection',
    crs: Union[CRS, str, None] = None
) -> GeoJSON:
    """
    Converts a FeatureCollection into a geojson FeatureCollection, with the
    crs label, datum ([lat, lon, alt]) and heading (yaw) stored in the
    top-level properties.

    Args:
        collection: (FeatureCollection)
            The collection to convert. It is not modified.

        crs: (CRS or str) (Optional)
            The output flavor. Defaults to the collection's declared CRS.

    Returns:
        dict
    """
    crs = resolve_crs(crs) if crs is not None else collection.crs
    datum = collection.datum

    return {
        'type': 'FeatureCollection',
        'properties': {
            'crs': crs.label,
            'datum': datum.to_list(),
            'heading': collection.heading.yaw,
        },
        'features': [
            feature_to_geojson(feature, datum, crs)
            for feature in collection.features
        ]
    }


def write_geojson(
    collection: 'FeatureCollection',
    fpath: Union[str, FilePath],
    crs: Optional[Union[CRS, str]] = None
) -> None:
    """
    Writes a FeatureCollection to a pretty-printed geojson file.

    Args:
        collection: (FeatureCollection)
            The collection to write

        fpath:
            The destination path. Its directory must exist.

        crs: (CRS or str) (Optional)
            The output flavor. Defaults to the collection's declared CRS.

    Returns:
        None
    """
    gjson = collection_to_geojson(collection, crs)
    LOGGER.debug('Writing %d features to %s', len(gjson['features']), fpath)
    with open(fpath, 'w', encoding='utf-8') as f:
        json.dump(gjson, f, indent=2, ensure_ascii=False)
        f.write('\n')
