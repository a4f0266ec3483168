"""Parsed Google Maps geocoding results.

A GeocodeResult is built from one decoded response document. Every
attribute is read out of ``results[0]`` by a small extractor function;
the extractors are listed once, in ADDRESS_SEGMENTS, and both the single
and the batch code paths walk that table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import GeocodingError

Bounds = Tuple[float, float, float, float]


# ----------------------------------------------------------------------
# Extractors
# ----------------------------------------------------------------------

def _first_result(doc: Dict[str, Any]) -> Dict[str, Any]:
    return doc["results"][0]


def _component(doc: Dict[str, Any], type_: str, name: str = "long_name") -> Optional[str]:
    """Return *name* of the first address component tagged with *type_*."""
    for component in _first_result(doc)["address_components"]:
        if not isinstance(component, dict):
            continue
        if type_ in (component.get("types") or ()):
            return component.get(name)
    return None


def parse_city(doc):
    return _component(doc, "sublocality") or _component(doc, "locality")


def parse_country_long_name(doc):
    return _component(doc, "country")


def parse_country_short_name(doc):
    return _component(doc, "country", "short_name")


def parse_county(doc):
    return _component(doc, "administrative_area_level_2")


def parse_lat(doc):
    return _first_result(doc)["geometry"]["location"]["lat"]


def parse_lng(doc):
    return _first_result(doc)["geometry"]["location"]["lng"]


def parse_neighborhood(doc):
    return _component(doc, "neighborhood")


def parse_bounds(doc) -> Bounds:
    viewport = _first_result(doc)["geometry"]["viewport"]
    northeast = viewport["northeast"]
    southwest = viewport["southwest"]
    return (northeast["lat"], northeast["lng"], southwest["lat"], southwest["lng"])


def parse_postal_code(doc):
    return _component(doc, "postal_code")


def parse_state_long_name(doc):
    return _component(doc, "administrative_area_level_1")


def parse_state_short_name(doc):
    return _component(doc, "administrative_area_level_1", "short_name")


def parse_formatted_address(doc):
    return _first_result(doc)["formatted_address"]


def parse_formatted_street_address(doc) -> str:
    # Kept literal: a missing part leaves a leading or trailing space.
    street_number = _component(doc, "street_number") or ""
    route = _component(doc, "route") or ""
    return f"{street_number} {route}"


Extractor = Callable[[Dict[str, Any]], Any]

ADDRESS_SEGMENTS: Tuple[Tuple[str, Extractor], ...] = (
    ("city", parse_city),
    ("country_long_name", parse_country_long_name),
    ("country_short_name", parse_country_short_name),
    ("county", parse_county),
    ("lat", parse_lat),
    ("lng", parse_lng),
    ("neighborhood", parse_neighborhood),
    ("bounds", parse_bounds),
    ("postal_code", parse_postal_code),
    ("state_long_name", parse_state_long_name),
    ("state_short_name", parse_state_short_name),
    ("formatted_address", parse_formatted_address),
    ("formatted_street_address", parse_formatted_street_address),
)


def check_response(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return *doc* if it holds at least one result, else raise GeocodingError."""
    if not doc or doc.get("status") != "OK" or not doc.get("results"):
        raise GeocodingError.from_response(doc)
    return doc


# ----------------------------------------------------------------------
# Single result
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class GeocodeResult:
    """The first match Google returned for one address."""

    formatted_address: Optional[str]
    formatted_street_address: str
    city: Optional[str]
    county: Optional[str]
    state_long_name: Optional[str]
    state_short_name: Optional[str]
    postal_code: Optional[str]
    country_long_name: Optional[str]
    country_short_name: Optional[str]
    neighborhood: Optional[str]
    lat: float
    lng: float
    bounds: Bounds
    response: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, doc: Optional[Dict[str, Any]]) -> GeocodeResult:
        """Parse a decoded response document.

        Raises GeocodingError when the document is empty, its status is not
        "OK", or it carries no results.
        """
        doc = check_response(doc)
        values = {name: extract(doc) for name, extract in ADDRESS_SEGMENTS}
        return cls(response=doc, **values)

    def partial_match(self) -> bool:
        """True when Google did not find the address exactly as given."""
        results = self.response.get("results") or [{}]
        return results[0].get("partial_match") is True

    def exact_match(self) -> bool:
        return not self.partial_match()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (useful for JSON serialisation)."""
        data: Dict[str, Any] = {name: getattr(self, name) for name, _ in ADDRESS_SEGMENTS}
        data["bounds"] = list(self.bounds)
        data["partial_match"] = self.partial_match()
        return data


# ----------------------------------------------------------------------
# Batch entries
# ----------------------------------------------------------------------

@dataclass
class BatchEntry:
    """Outcome of one address in a batch lookup.

    ``fields`` holds every segment that parsed (a value of None means the
    API data had no such component). ``field_errors`` names the segments
    whose extractor raised. ``error`` is set when the whole entry failed:
    transport error, undecodable body or a non-OK status.
    """

    address: str
    document: Optional[Dict[str, Any]] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    field_errors: Dict[str, str] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_response(cls, address: str, doc: Dict[str, Any]) -> BatchEntry:
        """Parse what can be parsed out of *doc*, recording failures per field."""
        entry = cls(address=address)
        try:
            check_response(doc)
        except GeocodingError as exc:
            entry.document = doc
            entry.error = exc
            return entry

        for name, extract in ADDRESS_SEGMENTS:
            try:
                entry.fields[name] = extract(doc)
            except (KeyError, IndexError, TypeError, AttributeError) as exc:
                entry.field_errors[name] = f"{type(exc).__name__}: {exc}"

        entry.document = {**doc, **entry.fields}
        return entry

    @classmethod
    def failed(cls, address: str, error: Exception) -> BatchEntry:
        return cls(address=address, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"address": self.address, "ok": self.ok}
        data.update(self.fields)
        if "bounds" in data:
            data["bounds"] = list(data["bounds"])
        if self.field_errors:
            data["field_errors"] = dict(self.field_errors)
        if self.error is not None:
            data["error"] = str(self.error)
        return data


def neighborhood_names(doc: Dict[str, Any]) -> List[str]:
    """Long names of every 'neighborhood' component, de-duplicated in order."""
    names: List[str] = []
    for result in doc.get("results") or ():
        if not isinstance(result, dict):
            continue
        for component in result.get("address_components") or ():
            if not isinstance(component, dict) or "neighborhood" not in (component.get("types") or ()):
                continue
            name = component.get("long_name")
            if name not in names:
                names.append(name)
    return names
