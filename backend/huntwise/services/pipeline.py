import asyncio
import datetime as dt
import logging
import random
import time
from typing import Optional, Dict, Any

from huntwise.config import settings
from huntwise.constants import DEFAULT_WEIGHTS, Provenance, ScoringWeights
from huntwise.models import LocationInfo, PredictionRequest, SignalBundle
from huntwise.schemas import Conditions, Coordinates, PredictionResponse
from huntwise.services import scorer
from huntwise.services.signals import GeoResolver, HistorySignal, LunarSignal, WeatherSignal
from huntwise.tools.fallback import fetch_with_fallback
from huntwise.tools.geocode import unknown_location

log = logging.getLogger("huntwise.pipeline")

def t(): return time.perf_counter()


class PredictionService:
    """
    Request orchestration: geo first (weather needs coordinates), then
    lunar/weather/history fanned out and all collected before scoring.
    """

    def __init__(
        self,
        geo: Optional[GeoResolver] = None,
        lunar: Optional[LunarSignal] = None,
        weather: Optional[WeatherSignal] = None,
        history: Optional[HistorySignal] = None,
        rng: Optional[random.Random] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        timeout: Optional[float] = None,
    ):
        self.rng = rng
        self.geo = geo or GeoResolver()
        self.lunar = lunar or LunarSignal()
        self.weather = weather or WeatherSignal(rng=rng)
        self.history = history or HistorySignal()
        self.weights = weights
        self.timeout = settings.PROVIDER_TIMEOUT_SEC if timeout is None else timeout

    async def _locate(self, postal_code: str) -> tuple[LocationInfo, Provenance]:
        # any resolver failure, not only LocationUnavailable, means "Unknown Area"
        return await fetch_with_fallback(
            "geocode",
            lambda: self.geo.resolve(postal_code),
            unknown_location,
            self.timeout,
        )

    async def gather_signals(self, postal_code: str, date: dt.date,
                             location: LocationInfo) -> SignalBundle:
        timings: Dict[str, int] = {}
        results: Dict[str, Any] = {}

        starts = {name: t() for name in ("lunar", "weather", "history")}
        tasks = {
            "lunar": asyncio.create_task(self.lunar.illumination(date, location)),
            "weather": asyncio.create_task(self.weather.current(location)),
            "history": asyncio.create_task(self.history.recent_activity(postal_code)),
        }

        # providers absorb their own failures, so these never raise
        for name, task in tasks.items():
            results[name] = await task
            timings[name] = round((t() - starts[name]) * 1000)

        log.info("Signal timings: %s", timings)
        return SignalBundle(
            lunar=results["lunar"][0],
            weather=results["weather"][0],
            history=results["history"][0],
            provenance={name: res[1] for name, res in results.items()},
        )

    async def predict(self, req: PredictionRequest) -> PredictionResponse:
        t0 = t()
        log.info("Generating prediction for ZIP: %s, Date: %s", req.postal_code, req.target_date)

        location, geo_prov = await self._locate(req.postal_code)
        signals = await self.gather_signals(req.postal_code, req.target_date, location)

        result = scorer.score(location, req.target_date, signals, rng=self.rng, weights=self.weights)
        if result.degraded:
            log.warning("All signal providers failed for %s; season-only prediction", req.postal_code)

        coords = None
        if location.has_coordinates:
            coords = Coordinates(lat=location.latitude, lon=location.longitude)

        wx, lunar, hist = signals.weather, signals.lunar, signals.history
        response = PredictionResponse(
            **result.model_dump(),
            zip_code=req.postal_code,
            date=req.target_date.isoformat(),
            location=location.display_name,
            coordinates=coords,
            conditions=Conditions(
                temperature_f=wx.temperature_f,
                pressure_in_hg=wx.pressure_in_hg,
                pressure_estimated=wx.pressure_estimated,
                wind_mph=wx.wind_mph,
                condition_text=wx.condition_text,
                moon_phase=lunar.phase_name,
                illumination_pct=lunar.illumination_pct,
                recent_harvest_count=hist.recent_harvest_count,
                history_window_days=hist.window_days,
                season=result.factors["season"].label,
            ),
            data_integration={"location": geo_prov, **signals.provenance},
            last_updated=dt.datetime.now(dt.timezone.utc),
        )

        log.info("Prediction %s/%s: score=%d (%s) confidence=%d in %dms",
                 req.postal_code, req.target_date, response.activity_score,
                 response.activity_level.value, response.confidence, round((t() - t0) * 1000))
        return response
