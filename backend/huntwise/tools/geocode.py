# backend/huntwise/tools/geocode.py
import logging
import time
from typing import Optional

import httpx

from huntwise.config import settings
from huntwise.constants import UNKNOWN_AREA
from huntwise.errors import LocationUnavailable
from huntwise.http import get_http_client
from huntwise.models import LocationInfo

log = logging.getLogger("huntwise.geocode")

def t(): return time.perf_counter()

def unknown_location() -> LocationInfo:
    return LocationInfo(place_name=UNKNOWN_AREA)

async def resolve(postal_code: str, client: Optional[httpx.AsyncClient] = None) -> LocationInfo:
    """
    ZIP -> place name, state abbreviation and coordinates via Zippopotam.
    Raises LocationUnavailable for unknown codes and upstream errors.
    """
    start = t()
    client = client or get_http_client()
    try:
        r = await client.get(f"{settings.GEOCODE_URL}/{postal_code}")
    except httpx.HTTPError as e:
        raise LocationUnavailable(postal_code, f"transport error: {e}") from e

    if r.status_code == 404:
        raise LocationUnavailable(postal_code, "unknown ZIP code")
    if r.is_error:
        raise LocationUnavailable(postal_code, f"HTTP {r.status_code}")

    try:
        place = r.json()["places"][0]
        loc = LocationInfo(
            place_name=place["place name"],
            region_code=place.get("state abbreviation"),
            latitude=float(place["latitude"]),
            longitude=float(place["longitude"]),
        )
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise LocationUnavailable(postal_code, f"malformed response: {e}") from e

    log.info("Geocoding %s: %dms -> %s", postal_code, round((t() - start) * 1000), loc.display_name)
    return loc
