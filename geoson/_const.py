"""
Constants declarations for geoson
"""

# Ellipsoid used for every datum <-> local frame transform
ELLIPSOID = 'WGS84'

# Labels accepted on read, per coordinate flavor
WGS_LABELS = ('EPSG:4326', 'WGS84', 'WGS')
ENU_LABELS = ('ENU', 'ECEF')

# Number of leading entries of a 'datum' array that are consumed (lat, lon, alt)
DATUM_LENGTH = 3
