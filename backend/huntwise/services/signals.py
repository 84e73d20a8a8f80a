"""
Signal providers: each wraps one tool with its fallback contract so the
scorer only ever sees complete readings.
"""
import datetime as dt
import random
from typing import Optional, Tuple

from huntwise.config import settings
from huntwise.constants import Provenance
from huntwise.models import HistoryReading, LocationInfo, LunarReading, WeatherReading
from huntwise.tools import geocode, history, moon, weather
from huntwise.tools.fallback import fetch_with_fallback


class GeoResolver:
    """Raises LocationUnavailable; the caller decides on the placeholder."""

    async def resolve(self, postal_code: str) -> LocationInfo:
        return await geocode.resolve(postal_code)


class LunarSignal:

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = settings.PROVIDER_TIMEOUT_SEC if timeout is None else timeout

    async def illumination(
        self, date: dt.date, location: Optional[LocationInfo] = None
    ) -> Tuple[LunarReading, Provenance]:
        lat = location.latitude if location else None
        lon = location.longitude if location else None
        return await fetch_with_fallback(
            "moon",
            lambda: moon.fetch_illumination(date, lat, lon),
            lambda: moon.simulated_illumination(date),
            self.timeout,
        )


class WeatherSignal:

    def __init__(self, rng: Optional[random.Random] = None, timeout: Optional[float] = None):
        self.rng = rng or random.Random()
        self.timeout = settings.PROVIDER_TIMEOUT_SEC if timeout is None else timeout

    async def current(self, location: LocationInfo) -> Tuple[WeatherReading, Provenance]:
        return await fetch_with_fallback(
            "weather",
            lambda: weather.fetch_current(location.latitude, location.longitude, self.rng),
            weather.fallback_weather,
            self.timeout,
        )


class HistorySignal:

    def __init__(self, window_days: Optional[int] = None, timeout: Optional[float] = None):
        self.window_days = settings.HISTORY_WINDOW_DAYS if window_days is None else window_days
        self.timeout = settings.PROVIDER_TIMEOUT_SEC if timeout is None else timeout

    async def recent_activity(self, postal_code: str) -> Tuple[HistoryReading, Provenance]:
        async def _live() -> HistoryReading:
            n = await history.count_recent_harvests(postal_code, self.window_days)
            return HistoryReading(recent_harvest_count=n, window_days=self.window_days)

        # store down reads as "no recent activity", not an error
        return await fetch_with_fallback(
            "history",
            _live,
            lambda: HistoryReading(recent_harvest_count=0, window_days=self.window_days),
            self.timeout,
        )
