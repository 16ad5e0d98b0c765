"""Module for geoson type hinting"""

__all__ = ['GeoJSON', 'Geometry']

from typing import Any, Dict, Union

from geoson.structures import Line, Path, Point, Polygon

# The closed set of leaf geometries. Parsers and writers dispatch over
# exactly these four types.
Geometry = Union[Point, Line, Path, Polygon]

# A decoded GeoJSON object
GeoJSON = Dict[str, Any]
