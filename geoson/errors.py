"""
Exceptions raised while reading or writing geoson documents.

All of them subclass ValueError. Errors coming from the layers below
(json.JSONDecodeError, IndexError/TypeError on coordinate access, OSError
on file access) are propagated as-is and are not wrapped here.
"""

__all__ = [
    'DocumentStructureError', 'GeometryError', 'GeosonError',
    'MetadataError', 'UnknownCRSError',
]


class GeosonError(ValueError):
    """Base class for geoson errors"""


class DocumentStructureError(GeosonError):
    """The document does not have the shape of a GeoJSON object"""


class MetadataError(GeosonError):
    """
    A collection-level metadata field ('properties', 'crs', 'datum' or
    'heading') is missing or has the wrong type.

    Args:
        field: (str)
            The name of the offending field

        message: (str)
            The error message
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UnknownCRSError(GeosonError):
    """A CRS label did not match any recognized coordinate flavor"""

    def __init__(self, label: str):
        super().__init__(f'Unknown CRS string: {label}')
        self.label = label


class GeometryError(GeosonError):
    """A geometry node cannot be represented (or is rejected in strict mode)"""
