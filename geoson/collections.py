"""
Module for features and feature collections
"""

__all__ = ['Feature', 'FeatureCollection']

import copy
import json
from typing import Any, Dict, List, Optional, TextIO, Union

from pydantic import validate_call

from geoson.coordinates import Datum, Heading
from geoson.crs import CRS, resolve_crs
from geoson.structures import Line, Path, Point, Polygon
from geoson.typing import GeoJSON, Geometry
from geoson.utils.functions import stringify_property

_KIND_NAMES = {
    Point: 'POINT',
    Line: 'LINE',
    Path: 'PATH',
    Polygon: 'POLYGON',
}


class Feature:

    """
    A single geometry with string properties.

    Args:
        geometry: (Geometry)
            A Point, Line, Path or Polygon in the local frame

        properties: (Dict[str, Any])
            The properties. Non-string values are stored as their compact
            JSON text.

        id: (str) (Optional)
            The feature identifier, as the JSON text it had in the source
            document (e.g. '"abc"' or '7'). Raises ValueError if it is not
            valid JSON text.
    """

    def __init__(
        self,
        geometry: Geometry,
        properties: Optional[Dict[str, Any]] = None,
        id: Optional[str] = None,  # pylint: disable=redefined-builtin
    ):
        if id is not None:
            try:
                json.loads(id)
            except (TypeError, ValueError) as exc:
                raise ValueError(f'Feature id must be JSON text, got {id!r}') from exc

        self.geometry = geometry
        self.properties = {
            str(k): stringify_property(v) for k, v in (properties or {}).items()
        }
        self.id = id

    def __eq__(self, other):
        if not isinstance(other, Feature):
            return False

        return (
            self.geometry == other.geometry and
            self.properties == other.properties and
            self.id == other.id
        )

    def __repr__(self):
        return f'<Feature {type(self.geometry).__name__} with {len(self.properties)} properties>'

    def copy(self) -> 'Feature':
        return Feature(
            self.geometry.copy(),
            properties=copy.deepcopy(self.properties),
            id=self.id
        )

    def set_property(self, key: str, value: Any, inplace: bool = True) -> 'Feature':
        """
        Sets the value of a property on this feature. Non-string values are
        stored as their compact JSON text, as they would be when parsed.

        Args:
            key: (str)
                The property name

            value: (Any)
                The property value

            inplace: (bool) (Default True)
                If True, will mutate this object. If False, will create a copy
                instead.

        Returns:
            Feature
        """
        feature = self if inplace else self.copy()
        feature.properties[key] = stringify_property(value)
        return feature

    def to_geojson(self, datum: Datum, crs: Union[CRS, str] = CRS.ENU) -> GeoJSON:
        """Convert the feature to a geojson Feature object. See writers.feature_to_geojson."""
        from geoson.writers import feature_to_geojson

        return feature_to_geojson(self, datum, resolve_crs(crs))


class FeatureCollection:

    """
    An ordered list of features sharing one local frame.

    Every geometry is stored in east/north/up meters relative to `datum`,
    whatever flavor the collection was read from. `crs` only selects the
    flavor used when the collection is written.

    Assigning a new datum does not move any stored coordinate; it only
    changes the anchor used on the next write. Use reanchor() to keep
    geometries in place on earth while changing the datum.

    Args:
        features: (List[Feature])
            The features, in order

        crs: (CRS or str)
            The declared flavor. Any recognized CRS label, e.g. 'WGS84' or
            'ENU', is accepted.

        datum: (Datum)
            The origin of the local frame. Defaults to (0, 0, 0).

        heading: (Heading)
            The collection orientation. Defaults to zero yaw.
    """

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        features: List[Feature],
        crs: Union[CRS, str] = CRS.WGS,
        datum: Optional[Datum] = None,
        heading: Optional[Heading] = None,
    ):
        self.features = features
        self.crs = resolve_crs(crs)
        self.datum = datum if datum is not None else Datum()
        self.heading = heading if heading is not None else Heading()

    def __add__(self, other):
        if not isinstance(other, FeatureCollection):
            raise ValueError('You can only combine a FeatureCollection with another FeatureCollection')

        if other.datum != self.datum:
            other = other.reanchor(self.datum, inplace=False)

        return FeatureCollection(
            self.features + other.features,
            crs=self.crs,
            datum=self.datum.copy(),
            heading=self.heading.copy(),
        )

    def __bool__(self):
        return bool(self.features)

    def __eq__(self, other):
        if not isinstance(other, FeatureCollection):
            return False

        return (
            self.crs == other.crs and
            self.datum == other.datum and
            self.heading == other.heading and
            self.features == other.features
        )

    def __getitem__(self, item):
        return self.features[item]

    def __iter__(self):
        return self.features.__iter__()

    def __len__(self):
        return self.features.__len__()

    def __repr__(self):
        pl = 's' if len(self.features) != 1 else ''
        return f'<FeatureCollection of {len(self.features)} feature{pl} ({self.crs.name})>'

    def copy(self) -> 'FeatureCollection':
        return FeatureCollection(
            [x.copy() for x in self.features],
            crs=self.crs,
            datum=self.datum.copy(),
            heading=self.heading.copy(),
        )

    def describe(self, stream: TextIO) -> None:
        """
        Writes a human-readable summary of the collection to a text stream.

        Args:
            stream:
                Any writable text sink, e.g. sys.stdout or io.StringIO()
        """
        stream.write(f'CRS: {self.crs.name}\n')
        stream.write('DATUM: {:g}, {:g}, {:g}\n'.format(*self.datum.to_tuple()))
        stream.write(f'HEADING: {self.heading.yaw:g}\n')
        stream.write(f'FEATURES: {len(self.features)}\n')
        for feature in self.features:
            kind = _KIND_NAMES[type(feature.geometry)]
            stream.write(
                f'  {kind} POINTS:{len(feature.geometry.points)} PROPS:{len(feature.properties)}\n'
            )

    @classmethod
    def from_geojson(
        cls,
        gjson: Union[str, GeoJSON],
        datum: Optional[Datum] = None,
        crs: Union[CRS, str, None] = None,
        heading: Optional[Heading] = None,
        strict: bool = False,
    ) -> 'FeatureCollection':
        """
        Creates a FeatureCollection from a geojson document. See
        parsers.parse_feature_collection.
        """
        from geoson.parsers import parse_feature_collection

        return parse_feature_collection(
            gjson,
            datum=datum,
            crs=crs,
            heading=heading,
            strict=strict
        )

    def reanchor(self, datum: Datum, inplace: bool = True) -> 'FeatureCollection':
        """
        Changes the collection datum and reprojects every stored geometry so
        that it keeps describing the same places on earth.

        Args:
            datum: (Datum)
                The new datum

            inplace: (bool) (Default True)
                If True, will mutate this object. If False, will create a copy
                instead.

        Returns:
            FeatureCollection
        """
        collection = self if inplace else self.copy()
        old = collection.datum
        for feature in collection.features:
            feature.geometry = feature.geometry.reanchor(old, datum)

        collection.datum = datum.copy()
        return collection

    def to_geojson(self, crs: Union[CRS, str, None] = None) -> GeoJSON:
        """
        Convert the collection to a geojson FeatureCollection object. See
        writers.collection_to_geojson.

        Args:
            crs: (CRS) (Optional)
                The output flavor. Defaults to the collection's declared CRS.

        Returns:
            dict
        """
        from geoson.writers import collection_to_geojson

        return collection_to_geojson(self, crs)
