# backend/huntwise/tools/weather.py
import logging
import random
import time
from typing import Optional

import httpx

from huntwise.config import settings
from huntwise.constants import (
    ESTIMATED_PRESSURE_RANGE,
    FALLBACK_CONDITION,
    FALLBACK_PRESSURE_INHG,
    FALLBACK_TEMPERATURE_F,
    FALLBACK_WIND_MPH,
    HPA_TO_INHG,
    WMO_CONDITIONS,
)
from huntwise.errors import ProviderUnavailable
from huntwise.http import get_http_client
from huntwise.models import WeatherReading

log = logging.getLogger("huntwise.weather")

def t(): return time.perf_counter()

def estimate_pressure(rng: random.Random) -> float:
    lo, hi = ESTIMATED_PRESSURE_RANGE
    return round(rng.uniform(lo, hi), 2)

async def fetch_current(
    lat: Optional[float],
    lon: Optional[float],
    rng: random.Random,
    client: Optional[httpx.AsyncClient] = None,
) -> WeatherReading:
    """
    Current conditions from Open-Meteo in hunter units (°F, inHg, mph).
    Missing pressure is estimated from `rng` and flagged.
    """
    if lat is None or lon is None:
        raise ProviderUnavailable("weather", "missing lat/lon")

    start = t()
    params = {
        "latitude": lat,
        "longitude": lon,
        "current": "temperature_2m,pressure_msl,wind_speed_10m,weather_code",
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "timezone": "auto",
    }

    api_start = t()
    client = client or get_http_client()
    try:
        r = await client.get(settings.WEATHER_URL, params=params)
        r.raise_for_status()
        cur = r.json().get("current") or {}
    except httpx.HTTPError as e:
        raise ProviderUnavailable("weather", str(e)) from e
    except (ValueError, AttributeError) as e:
        raise ProviderUnavailable("weather", f"malformed response: {e}") from e
    api_ms = round((t() - api_start) * 1000)

    temp = cur.get("temperature_2m")
    wind = cur.get("wind_speed_10m")
    if temp is None or wind is None:
        raise ProviderUnavailable("weather", "temperature/wind missing from response")

    pressure_hpa = cur.get("pressure_msl")
    if pressure_hpa is None:
        pressure, estimated = estimate_pressure(rng), True
    else:
        pressure, estimated = round(float(pressure_hpa) * HPA_TO_INHG, 2), False

    code = cur.get("weather_code")
    condition = WMO_CONDITIONS.get(int(code), FALLBACK_CONDITION) if code is not None else FALLBACK_CONDITION

    total_ms = round((t() - start) * 1000)
    log.info("Weather current: %dms (API: %dms)", total_ms, api_ms)

    return WeatherReading(
        temperature_f=float(temp),
        pressure_in_hg=pressure,
        wind_mph=float(wind),
        condition_text=condition,
        pressure_estimated=estimated,
    )

def fallback_weather() -> WeatherReading:
    return WeatherReading(
        temperature_f=FALLBACK_TEMPERATURE_F,
        pressure_in_hg=FALLBACK_PRESSURE_INHG,
        wind_mph=FALLBACK_WIND_MPH,
        condition_text=FALLBACK_CONDITION,
        pressure_estimated=True,
    )
