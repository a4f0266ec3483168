"""gmaps_geocoder: geocode postal addresses with the Google Maps API."""

from .config import GeocoderConfig
from .geocoding import (
    BatchEntry,
    ErrorStatus,
    GeocodeResult,
    GeocodingError,
    GeocodingStrategy,
    GoogleMapsStrategy,
)

__all__ = [
    "GeocoderConfig",
    "GoogleMapsStrategy",
    "GeocodingStrategy",
    "GeocodeResult",
    "BatchEntry",
    "ErrorStatus",
    "GeocodingError",
]
