"""
Tests for huntwise/services/pipeline.py and services/signals.py.

What we test
------------
PredictionService.predict():
  - Reference scenario end to end -> 86 / Exceptional with location + coordinates.
  - Identical inputs and provider responses give identical results (bar lastUpdated).
  - Geo failure -> "Unknown Area", no coordinates, scoring still happens,
    whether the resolver raises LocationUnavailable, any other error, or hangs.
  - An explicit timeout / window of 0 is kept, not replaced by the configured default.
  - All signal tools failing -> degraded, confidence 60, every signal Simulated.
  - Weather receives the resolved location.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import random

import pytest

from huntwise.config import settings
from huntwise.constants import ActivityLevel, Provenance
from huntwise.models import PredictionRequest
from huntwise.services.pipeline import PredictionService
from huntwise.services.signals import HistorySignal, LunarSignal, WeatherSignal
from tests.conftest import FakeGeo, FakeHistory, FakeLunar, FakeWeather

REQ = PredictionRequest(postal_code="80424", target_date=dt.date(2024, 11, 5))


def _service(**overrides) -> PredictionService:
    kwargs = dict(geo=FakeGeo(), lunar=FakeLunar(), weather=FakeWeather(),
                  history=FakeHistory(), rng=None, timeout=1.0)
    kwargs.update(overrides)
    return PredictionService(**kwargs)


@pytest.mark.asyncio
async def test_reference_scenario():
    res = await _service().predict(REQ)

    assert res.activity_score == 86
    assert res.activity_level is ActivityLevel.EXCEPTIONAL
    assert res.location == "Breckenridge, CO"
    assert res.coordinates.lat == pytest.approx(39.4817)
    assert res.date == "2024-11-05"
    assert res.conditions.recent_harvest_count == 3
    assert res.conditions.season == "Peak Season (Rut)"
    assert set(res.data_integration.values()) == {Provenance.LIVE}
    assert res.degraded is False


@pytest.mark.asyncio
async def test_idempotent_apart_from_timestamp():
    a = await _service(rng=random.Random(11)).predict(REQ)
    b = await _service(rng=random.Random(11)).predict(REQ)
    assert a.model_dump(exclude={"last_updated"}) == b.model_dump(exclude={"last_updated"})


@pytest.mark.asyncio
async def test_weather_gets_resolved_location():
    wx = FakeWeather()
    await _service(weather=wx).predict(REQ)
    assert wx.seen_location.place_name == "Breckenridge"


@pytest.mark.asyncio
async def test_unknown_zip_uses_placeholder():
    res = await _service(geo=FakeGeo(location=None)).predict(REQ)

    assert res.location == "Unknown Area"
    assert res.coordinates is None
    assert res.data_integration["location"] is Provenance.SIMULATED
    assert 5 <= res.activity_score <= 95


@pytest.mark.asyncio
async def test_all_providers_down_is_degraded(failing_tools):
    svc = PredictionService(
        geo=FakeGeo(location=None),
        lunar=LunarSignal(timeout=1.0),
        weather=WeatherSignal(rng=random.Random(0), timeout=1.0),
        history=HistorySignal(timeout=1.0),
        rng=random.Random(0),
        timeout=1.0,
    )
    res = await svc.predict(REQ)

    assert res.degraded is True
    assert res.confidence == 60
    assert 5 <= res.activity_score <= 95
    assert res.factors["season"].label == "Peak Season (Rut)"
    assert res.conditions.temperature_f == 45.0
    assert res.conditions.recent_harvest_count == 0
    assert all(p is Provenance.SIMULATED for p in res.data_integration.values())


@pytest.mark.asyncio
async def test_single_provider_down_lowers_confidence(failing_tools):
    svc = _service(lunar=LunarSignal(timeout=1.0), rng=random.Random(5))
    res = await svc.predict(REQ)

    assert res.data_integration["lunar"] is Provenance.SIMULATED
    assert res.data_integration["weather"] is Provenance.LIVE
    assert 60 <= res.confidence <= 65
    assert res.degraded is False


class _CrashingGeo:
    async def resolve(self, postal_code):
        raise RuntimeError("HTTP client not open")


class _HangingGeo:
    async def resolve(self, postal_code):
        await asyncio.sleep(5)


@pytest.mark.asyncio
@pytest.mark.parametrize("geo", [_CrashingGeo(), _HangingGeo()])
async def test_any_resolver_failure_uses_placeholder(geo):
    res = await _service(geo=geo, timeout=0.05).predict(REQ)

    assert res.location == "Unknown Area"
    assert res.coordinates is None
    assert res.data_integration["location"] is Provenance.SIMULATED
    assert res.activity_score == 86


def test_zero_timeout_and_window_are_kept():
    assert PredictionService(timeout=0).timeout == 0
    assert LunarSignal(timeout=0).timeout == 0
    assert WeatherSignal(timeout=0).timeout == 0
    hist = HistorySignal(window_days=0, timeout=0)
    assert (hist.window_days, hist.timeout) == (0, 0)


def test_unset_timeout_uses_setting():
    assert LunarSignal().timeout == settings.PROVIDER_TIMEOUT_SEC
    assert HistorySignal().window_days == settings.HISTORY_WINDOW_DAYS
