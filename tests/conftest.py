"""Shared fixtures: canned Google Maps documents and a fake HTTP session."""

from __future__ import annotations

import copy
import json
import threading
from typing import Any, Dict, List
from urllib.parse import parse_qs, urlparse

import pytest

from gmaps_geocoder.geocoding import GoogleMapsStrategy

UNION_STREET = {
    "status": "OK",
    "results": [
        {
            "address_components": [
                {"long_name": "837", "short_name": "837", "types": ["street_number"]},
                {"long_name": "Union Street", "short_name": "Union St", "types": ["route"]},
                {
                    "long_name": "Park Slope",
                    "short_name": "Park Slope",
                    "types": ["neighborhood", "political"],
                },
                {
                    "long_name": "Brooklyn",
                    "short_name": "Brooklyn",
                    "types": ["political", "sublocality", "sublocality_level_1"],
                },
                {
                    "long_name": "Kings County",
                    "short_name": "Kings County",
                    "types": ["administrative_area_level_2", "political"],
                },
                {
                    "long_name": "New York",
                    "short_name": "NY",
                    "types": ["administrative_area_level_1", "political"],
                },
                {
                    "long_name": "United States",
                    "short_name": "US",
                    "types": ["country", "political"],
                },
                {"long_name": "11215", "short_name": "11215", "types": ["postal_code"]},
            ],
            "formatted_address": "837 Union St, Brooklyn, NY 11215, USA",
            "geometry": {
                "location": {"lat": 40.6748151, "lng": -73.9760302},
                "viewport": {
                    "northeast": {"lat": 40.6761640802915, "lng": -73.9746812197085},
                    "southwest": {"lat": 40.6734661197085, "lng": -73.9773791802915},
                },
            },
            "types": ["street_address"],
        }
    ],
}

PENNSYLVANIA_AVENUE = {
    "status": "OK",
    "results": [
        {
            "address_components": [
                {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
                {
                    "long_name": "Pennsylvania Avenue Northwest",
                    "short_name": "Pennsylvania Ave NW",
                    "types": ["route"],
                },
                {
                    "long_name": "Washington",
                    "short_name": "Washington",
                    "types": ["locality", "political"],
                },
                {
                    "long_name": "District of Columbia",
                    "short_name": "DC",
                    "types": ["administrative_area_level_1", "political"],
                },
                {
                    "long_name": "United States",
                    "short_name": "US",
                    "types": ["country", "political"],
                },
                {"long_name": "20500", "short_name": "20500", "types": ["postal_code"]},
            ],
            "formatted_address": "1600 Pennsylvania Ave NW, Washington, DC 20500, USA",
            "geometry": {
                "location": {"lat": 38.897696, "lng": -77.036519},
                "viewport": {
                    "northeast": {"lat": 38.8990449802915, "lng": -77.0351700197085},
                    "southwest": {"lat": 38.8963470197085, "lng": -77.0378679802915},
                },
            },
            "partial_match": True,
            "types": ["street_address"],
        }
    ],
}


def union_street() -> Dict[str, Any]:
    return copy.deepcopy(UNION_STREET)


def pennsylvania_avenue() -> Dict[str, Any]:
    return copy.deepcopy(PENNSYLVANIA_AVENUE)


class FakeResponse:
    def __init__(self, body: Any, status_code: int = 200):
        self._body = body
        self.status_code = status_code

    def json(self) -> Any:
        if isinstance(self._body, str):
            return json.loads(self._body)
        return copy.deepcopy(self._body)


class FakeSession:
    """Stands in for requests.Session.

    Responses are keyed by the ``address`` query parameter, or by
    ``latlng`` for neighborhood lookups. A value that is an exception
    instance is raised instead of returned.
    """

    def __init__(self, responses: Dict[str, Any] = None):
        self.responses = dict(responses or {})
        self.requests: List[str] = []
        self.timeouts: List[float] = []
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url: str, timeout: float = None) -> FakeResponse:
        with self._lock:
            self.requests.append(url)
            self.timeouts.append(timeout)
        params = parse_qs(urlparse(url).query)
        key = (params.get("address") or params.get("latlng") or [""])[0]
        body = self.responses.get(key, {"status": "ZERO_RESULTS", "results": []})
        if isinstance(body, Exception):
            raise body
        return FakeResponse(body)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def session():
    return FakeSession(
        {
            "837 Union Street Brooklyn NY": UNION_STREET,
            "1600 Pennsylvania Washington": PENNSYLVANIA_AVENUE,
        }
    )


@pytest.fixture
def strategy(session):
    return GoogleMapsStrategy(session_factory=lambda: session)


@pytest.fixture
def union_doc():
    return union_street()


@pytest.fixture
def pennsylvania_doc():
    return pennsylvania_avenue()


@pytest.fixture
def make_strategy():
    """Build a strategy around a FakeSession serving *responses*."""

    def factory(responses=None, **kwargs):
        fake = FakeSession(responses)
        return GoogleMapsStrategy(session_factory=lambda: fake, **kwargs), fake

    return factory


@pytest.fixture
def fake_session_cls():
    return FakeSession
