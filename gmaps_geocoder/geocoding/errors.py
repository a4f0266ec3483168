"""Error types raised when Google Maps reports a non-OK status."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorStatus(Enum):
    """Categories of geocoding failure, keyed by the API status string.

    See https://developers.google.com/maps/documentation/geocoding/requests-geocoding#StatusCodes
    """

    ZERO_RESULTS = "zero_results"
    QUERY_LIMIT = "query_limit"
    REQUEST_DENIED = "request_denied"
    INVALID_REQUEST = "invalid_request"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, status: Optional[str]) -> ErrorStatus:
        """Map a Google status string, falling back to UNKNOWN."""
        return _API_STATUSES.get(status, cls.UNKNOWN)


_API_STATUSES = {
    "ZERO_RESULTS": ErrorStatus.ZERO_RESULTS,
    "OVER_QUERY_LIMIT": ErrorStatus.QUERY_LIMIT,
    "REQUEST_DENIED": ErrorStatus.REQUEST_DENIED,
    "INVALID_REQUEST": ErrorStatus.INVALID_REQUEST,
    "UNKNOWN_ERROR": ErrorStatus.UNKNOWN,
}


class GeocodingError(Exception):
    """Google Maps did not return a usable result.

    Attributes:
        status: The ErrorStatus category.
        response: The decoded response document, kept for diagnostics.
    """

    def __init__(self, status: ErrorStatus, response: Optional[Dict[str, Any]] = None):
        self.status = status
        self.response = response if response is not None else {}
        super().__init__(f"Google returned:\n{self.response!r}")

    @classmethod
    def from_response(cls, response: Optional[Dict[str, Any]]) -> GeocodingError:
        """Build the error for a response document.

        Empty documents and documents without a status are UNKNOWN.
        """
        if not response or "status" not in response:
            return cls(ErrorStatus.UNKNOWN, response)
        return cls(ErrorStatus.from_api(response["status"]), response)
