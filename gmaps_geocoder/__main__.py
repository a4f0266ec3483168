"""Command-line geocoding.

Usage:
    python -m gmaps_geocoder "837 Union Street Brooklyn NY"
    python -m gmaps_geocoder --neighborhood "837 Union Street Brooklyn NY"
    python -m gmaps_geocoder "837 Union St Brooklyn" "1600 Pennsylvania Washington"

One address prints the parsed result; several run as a concurrent batch
keyed by position. The API key comes from --api-key or GOOGLE_MAPS_API_KEY.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

import requests

from .config import GeocoderConfig
from .geocoding import GeocodingError, GoogleMapsStrategy


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gmaps-geocoder",
        description="Geocode postal addresses with the Google Maps API.",
    )
    parser.add_argument("addresses", nargs="+", metavar="ADDRESS")
    parser.add_argument("--api-key", help="overrides GOOGLE_MAPS_API_KEY")
    parser.add_argument(
        "--neighborhood",
        action="store_true",
        help="also look up neighborhood names (single address only)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)
    if args.neighborhood and len(args.addresses) > 1:
        parser.error("--neighborhood takes a single ADDRESS")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = GeocoderConfig.from_env()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    if args.api_key:
        config = dataclasses.replace(config, api_key=args.api_key)

    with GoogleMapsStrategy.from_config(config) as strategy:
        if len(args.addresses) > 1:
            entries = strategy.geocode_many(dict(enumerate(args.addresses)))
            output = {str(key): entry.to_dict() for key, entry in entries.items()}
        else:
            try:
                result = strategy.geocode(args.addresses[0])
                output = result.to_dict()
                if args.neighborhood:
                    output["neighborhoods"] = strategy.fetch_neighborhood(result)
            except GeocodingError as exc:
                print(f"Geocoding failed ({exc.status.value}): {exc}", file=sys.stderr)
                sys.exit(1)
            except requests.RequestException as exc:
                print(f"Request failed: {exc}", file=sys.stderr)
                sys.exit(1)

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
