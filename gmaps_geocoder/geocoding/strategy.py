"""Abstract base class for geocoding strategies."""

from abc import ABC, abstractmethod

from .result import GeocodeResult


class GeocodingStrategy(ABC):
    """Abstract base class for geocoding service providers.

    Implementations should handle provider-specific logic including:
    - API authentication
    - Request formatting
    - Response parsing
    """

    @abstractmethod
    def geocode(self, query: str) -> GeocodeResult:
        """Geocode an address query.

        Args:
            query: Address string to geocode

        Returns:
            The parsed GeocodeResult for the best match.

        Raises:
            GeocodingError: if the provider reports no usable result.
        """

    @abstractmethod
    def get_source_name(self) -> str:
        """Get the provider name.

        Returns:
            String identifier for this geocoding provider (e.g., 'google_maps')
        """
