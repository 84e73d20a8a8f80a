"""
Shared fixtures: signal bundles and in-process fake providers.
"""
from __future__ import annotations

import datetime as dt

import pytest

from huntwise.constants import Provenance
from huntwise.errors import LocationUnavailable
from huntwise.models import (
    HistoryReading,
    LocationInfo,
    LunarReading,
    SignalBundle,
    WeatherReading,
)


def make_bundle(
    illumination: int = 15,
    temp_f: float = 40.0,
    pressure: float = 30.1,
    wind: float = 8.0,
    harvests: int = 3,
    provenance: dict | None = None,
) -> SignalBundle:
    return SignalBundle(
        lunar=LunarReading(illumination_pct=illumination, phase_name="Waxing Crescent"),
        weather=WeatherReading(temperature_f=temp_f, pressure_in_hg=pressure,
                               wind_mph=wind, condition_text="Clear"),
        history=HistoryReading(recent_harvest_count=harvests, window_days=30),
        provenance=provenance if provenance is not None else {
            "lunar": Provenance.LIVE, "weather": Provenance.LIVE, "history": Provenance.LIVE,
        },
    )


BRECKENRIDGE = LocationInfo(place_name="Breckenridge", region_code="CO",
                            latitude=39.4817, longitude=-106.0384)


# ── Fake providers ─────────────────────────────────────────────────────────────

class FakeGeo:
    def __init__(self, location: LocationInfo | None = BRECKENRIDGE):
        self.location = location
        self.calls = 0

    async def resolve(self, postal_code: str) -> LocationInfo:
        self.calls += 1
        if self.location is None:
            raise LocationUnavailable(postal_code, "unknown ZIP code")
        return self.location


class FakeLunar:
    def __init__(self, pct: int = 15, phase: str = "Waxing Crescent"):
        self.reading = LunarReading(illumination_pct=pct, phase_name=phase)

    async def illumination(self, date, location=None):
        return self.reading, Provenance.LIVE


class FakeWeather:
    def __init__(self, temp_f=40.0, pressure=30.1, wind=8.0):
        self.reading = WeatherReading(temperature_f=temp_f, pressure_in_hg=pressure,
                                      wind_mph=wind, condition_text="Clear")
        self.seen_location = None

    async def current(self, location):
        self.seen_location = location
        return self.reading, Provenance.LIVE


class FakeHistory:
    def __init__(self, count: int = 3):
        self.reading = HistoryReading(recent_harvest_count=count, window_days=30)

    async def recent_activity(self, postal_code):
        return self.reading, Provenance.LIVE


@pytest.fixture
def bundle():
    return make_bundle()


@pytest.fixture
def nov5():
    return dt.date(2024, 11, 5)


@pytest.fixture
def failing_tools(monkeypatch):
    """Make every live signal tool raise, as if all upstreams were down."""
    from huntwise.errors import ProviderUnavailable
    from huntwise.tools import history, moon, weather

    async def _moon(*a, **kw):
        raise ProviderUnavailable("moon", "down")

    async def _weather(*a, **kw):
        raise ProviderUnavailable("weather", "down")

    async def _history(*a, **kw):
        raise ProviderUnavailable("history", "down")

    monkeypatch.setattr(moon, "fetch_illumination", _moon)
    monkeypatch.setattr(weather, "fetch_current", _weather)
    monkeypatch.setattr(history, "count_recent_harvests", _history)
