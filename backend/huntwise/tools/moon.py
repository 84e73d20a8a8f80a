# backend/huntwise/tools/moon.py
import datetime as dt
import logging
import math
import time
from typing import Optional

import httpx

from huntwise.config import settings
from huntwise.constants import MOON_PHASES
from huntwise.errors import ProviderUnavailable
from huntwise.http import get_http_client
from huntwise.models import LunarReading
from huntwise.utils.numbers import round_half_up

log = logging.getLogger("huntwise.moon")

def t(): return time.perf_counter()

def _parse_pct(raw) -> int:
    # USNO reports fracillum as "15%"
    if isinstance(raw, (int, float)):
        val = float(raw)
    else:
        val = float(str(raw).strip().rstrip("%"))
    if not 0 <= val <= 100:
        raise ValueError(f"illumination out of range: {raw!r}")
    return round_half_up(val)

async def fetch_illumination(
    date: dt.date,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> LunarReading:
    """
    Current phase + illuminated fraction for `date` from the USNO one-day API.
    """
    start = t()
    lat = settings.MOON_DEFAULT_LAT if lat is None else lat
    lon = settings.MOON_DEFAULT_LON if lon is None else lon
    params = {
        "date": date.isoformat(),
        "coords": f"{lat:.4f},{lon:.4f}",
        "tz": 0,
    }
    client = client or get_http_client()
    try:
        r = await client.get(settings.MOON_URL, params=params)
        r.raise_for_status()
        data = (r.json().get("properties") or {}).get("data") or {}
        reading = LunarReading(
            illumination_pct=_parse_pct(data["fracillum"]),
            phase_name=str(data["curphase"]),
        )
    except httpx.HTTPError as e:
        raise ProviderUnavailable("moon", str(e)) from e
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise ProviderUnavailable("moon", f"malformed response: {e}") from e

    log.info("Moon %s: %dms (%s, %d%%)", date, round((t() - start) * 1000),
             reading.phase_name, reading.illumination_pct)
    return reading

def simulated_illumination(date: dt.date) -> LunarReading:
    """Deterministic stand-in keyed on day-of-month; tagged simulated."""
    day = date.day
    phase = MOON_PHASES[int((day % 30) / 30 * len(MOON_PHASES))]
    pct = round_half_up(abs(math.sin(day / 30 * math.pi)) * 100)
    return LunarReading(illumination_pct=pct, phase_name=phase, simulated=True)
