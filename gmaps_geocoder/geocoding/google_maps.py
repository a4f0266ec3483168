"""Google Maps geocoding strategy implementation."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from numbers import Real
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional
from urllib.parse import quote_plus

import requests

from ..config import GOOGLE_API_URI, GeocoderConfig
from .result import BatchEntry, GeocodeResult, neighborhood_names
from .strategy import GeocodingStrategy

log = logging.getLogger(__name__)

# Worker threads used by geocode_many when max_workers is not set
DEFAULT_MAX_WORKERS = 32


class GoogleMapsStrategy(GeocodingStrategy):
    """Geocoding strategy using Google Maps Geocoding API.

    Requirements:
    - Google Maps API key with Geocoding API enabled (optional for
      low-volume keyless use)
    - See: https://developers.google.com/maps/documentation/geocoding

    Rate limits:
    - Default: 50 requests per second
    - Can be configured in Google Cloud Console; batches are not throttled
      here, so keep ``max_workers`` under the project quota.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        timeout: float = 10.0,
        max_workers: Optional[int] = None,
        base_url: str = GOOGLE_API_URI,
        session_factory: Callable[[], requests.Session] = requests.Session,
        logger: Optional[Callable[[str], None]] = None,
    ):
        """Initialize Google Maps strategy.

        Args:
            api_key: Google Maps API key, or None to send no key
            timeout: Per-request timeout in seconds
            max_workers: Concurrency cap for geocode_many (None: DEFAULT_MAX_WORKERS)
            base_url: Geocoding endpoint
            session_factory: Creates HTTP sessions; batch workers get one each
            logger: Optional callable receiving diagnostic messages. When
                omitted messages go to this module's logger.
        """
        if not timeout > 0:
            raise ValueError(f"timeout must be greater than 0, got {timeout!r}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers!r}")
        self.api_key = api_key
        self.timeout = timeout
        self.max_workers = max_workers
        self.base_url = base_url
        self.logger = logger
        self._session_factory = session_factory
        self.session = session_factory()

    @classmethod
    def from_config(cls, config: GeocoderConfig, **kwargs: Any) -> GoogleMapsStrategy:
        """Build a strategy from a GeocoderConfig.

        Args:
            config: API key, timeout, concurrency cap and endpoint
            **kwargs: Passed through to the constructor (session_factory, logger)

        Returns:
            A GoogleMapsStrategy using the config's settings
        """
        return cls(
            config.api_key,
            timeout=config.timeout,
            max_workers=config.max_workers,
            base_url=config.base_url,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def query_url(self, address: str) -> str:
        """Build the geocoding URL for an address.

        Args:
            address: Free-text address; it is form-encoded

        Returns:
            URL with ``address``, ``sensor=false`` and, when configured, ``key``
        """
        return f"{self.base_url}?address={quote_plus(address)}&sensor=false{self._key_param()}"

    def neighborhood_url(self, lat: float, lng: float) -> str:
        """Build the reverse lookup URL restricted to neighborhoods.

        Args:
            lat: Latitude of the point
            lng: Longitude of the point

        Returns:
            URL with ``latlng`` and ``componentRestrictions=neighborhood``
        """
        return (
            f"{self.base_url}?sensor=false"
            f"&latlng={lat},{lng}"
            "&componentRestrictions=neighborhood"
            f"{self._key_param()}"
        )

    def _key_param(self) -> str:
        return f"&key={self.api_key}" if self.api_key else ""

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def geocode(self, query: str) -> GeocodeResult:
        """Geocode an address using Google Maps API.

        Args:
            query: Address string to geocode

        Returns:
            GeocodeResult built from the first result Google returned

        Raises:
            GeocodingError: status was not OK or no results came back
            requests.RequestException: the request itself failed
        """
        doc = self._get_json(self.session, self.query_url(query))
        result = GeocodeResult.from_response(doc)
        self._log(logging.INFO, f'Geocoded "{query}" => "{result.formatted_address}"')
        return result

    def geocode_many(self, addresses: Mapping[Hashable, str]) -> Dict[Hashable, BatchEntry]:
        """Geocode many addresses concurrently.

        Args:
            addresses: Mapping of caller-chosen identifier to address string

        Returns:
            Mapping with one BatchEntry per input identifier, in input order.
            Failures are recorded on the entries, never raised. At most
            max_workers (default DEFAULT_MAX_WORKERS) requests run at once.
        """
        if not addresses:
            return {}

        urls = {key: self.query_url(address) for key, address in addresses.items()}
        workers = min(self.max_workers or DEFAULT_MAX_WORKERS, len(urls))

        # One session per worker thread, closed once the batch is done
        local = threading.local()
        sessions: List[requests.Session] = []
        sessions_lock = threading.Lock()

        def fetch(url: str) -> Dict[str, Any]:
            session = getattr(local, "session", None)
            if session is None:
                session = local.session = self._session_factory()
                with sessions_lock:
                    sessions.append(session)
            return self._get_json(session, url)

        entries: Dict[Hashable, BatchEntry] = {}
        try:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = {pool.submit(fetch, url): key for key, url in urls.items()}
                for future in as_completed(futures):
                    key = futures[future]
                    entries[key] = self._batch_entry(addresses[key], future)
        finally:
            for session in sessions:
                session.close()

        ok = sum(1 for entry in entries.values() if entry.ok)
        self._log(logging.INFO, f"Geocoded {ok}/{len(entries)} addresses")
        return {key: entries[key] for key in addresses}

    def _batch_entry(self, address: str, future) -> BatchEntry:
        try:
            doc = future.result()
        except (requests.RequestException, ValueError) as exc:
            self._log(logging.WARNING, f"Request failed for {address!r}: {exc}")
            return BatchEntry.failed(address, exc)

        entry = BatchEntry.from_response(address, doc)
        if entry.error is not None:
            self._log(logging.WARNING, f"No result for {address!r}: {entry.error.status.value}")
        for name, message in entry.field_errors.items():
            self._log(logging.WARNING, f"Could not parse {name} for {address!r}: {message}")
        return entry

    def fetch_neighborhood(self, result: GeocodeResult) -> Optional[List[str]]:
        """Look up the neighborhood names around a geocoded result.

        Returns:
            De-duplicated neighborhood long names across every result entry,
            or None without a request when *result* has no usable bounds.
        """
        if not _valid_bounds(getattr(result, "bounds", None)):
            return None
        doc = self._get_json(self.session, self.neighborhood_url(result.lat, result.lng))
        return neighborhood_names(doc)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _get_json(self, session: requests.Session, url: str) -> Dict[str, Any]:
        """GET *url* and decode the body; an undecodable body yields {}."""
        log.debug("GET %s", url)
        resp = session.get(url, timeout=self.timeout)
        try:
            data = resp.json()
        except ValueError:
            log.debug("Undecodable body from %s (HTTP %s)", url, resp.status_code)
            return {}
        return data if isinstance(data, dict) else {}

    def _log(self, level: int, message: str) -> None:
        if self.logger is not None:
            self.logger(message)
        else:
            log.log(level, message)

    def get_source_name(self) -> str:
        """Get the provider name.

        Returns:
            'google_maps'
        """
        return "google_maps"

    def close(self) -> None:
        """Close the session used for single and neighborhood lookups."""
        self.session.close()

    def __enter__(self) -> GoogleMapsStrategy:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _valid_bounds(bounds: Any) -> bool:
    return (
        isinstance(bounds, (list, tuple))
        and len(bounds) == 4
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in bounds)
    )
