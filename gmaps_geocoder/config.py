"""Client configuration.

The API key and friends are passed to the client explicitly. ``from_env``
is the one place that reads the process environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

GOOGLE_API_URI = "https://maps.googleapis.com/maps/api/geocode/json"

ENV_API_KEY = "GOOGLE_MAPS_API_KEY"
ENV_TIMEOUT = "GOOGLE_MAPS_TIMEOUT"
ENV_MAX_WORKERS = "GOOGLE_MAPS_MAX_WORKERS"


@dataclass(frozen=True)
class GeocoderConfig:
    """Settings for GoogleMapsStrategy.

    Attributes:
        api_key: Google Maps API key. When None the ``key`` parameter is
            left out of request URLs.
        timeout: Per-request timeout in seconds.
        max_workers: Upper bound on concurrent batch requests. None uses
            the strategy default of 32 worker threads.
        base_url: Geocoding endpoint.
    """

    api_key: Optional[str] = None
    timeout: float = 10.0
    max_workers: Optional[int] = None
    base_url: str = GOOGLE_API_URI

    def __post_init__(self):
        if not self.timeout > 0:
            raise ValueError(f"timeout must be greater than 0, got {self.timeout!r}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> GeocoderConfig:
        """Build a config from environment variables.

        Empty variables count as unset.

        Raises:
            ValueError: if a numeric variable cannot be parsed or is not
                greater than 0.
        """
        env = os.environ if environ is None else environ

        api_key = env.get(ENV_API_KEY) or None
        timeout = _parse(env, ENV_TIMEOUT, float, cls.timeout)
        max_workers = _parse(env, ENV_MAX_WORKERS, int, None)
        return cls(api_key=api_key, timeout=timeout, max_workers=max_workers)


def _parse(env, name, convert, default):
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = convert(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{name} must be greater than 0, got {raw!r}")
    return value
