"""
Exposes the version of geoson
"""
__version__ = 'v0.1.0'
