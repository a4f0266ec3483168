"""Geocoding strategies for different providers."""

from .errors import ErrorStatus, GeocodingError
from .google_maps import GoogleMapsStrategy
from .result import ADDRESS_SEGMENTS, BatchEntry, GeocodeResult
from .strategy import GeocodingStrategy

__all__ = [
    "GeocodingStrategy",
    "GoogleMapsStrategy",
    "GeocodeResult",
    "BatchEntry",
    "ADDRESS_SEGMENTS",
    "ErrorStatus",
    "GeocodingError",
]
