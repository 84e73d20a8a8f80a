# Domain models shared by tools, services and the scorer
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from huntwise.constants import Provenance


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PredictionRequest(_Frozen):
    postal_code: str
    target_date: dt.date


class LocationInfo(_Frozen):
    place_name: str
    region_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def display_name(self) -> str:
        return f"{self.place_name}, {self.region_code}" if self.region_code else self.place_name


class LunarReading(_Frozen):
    illumination_pct: int = Field(..., ge=0, le=100)
    phase_name: str
    simulated: bool = False


class WeatherReading(_Frozen):
    temperature_f: float
    pressure_in_hg: float
    wind_mph: float
    condition_text: str
    pressure_estimated: bool = False


class HistoryReading(_Frozen):
    recent_harvest_count: int = Field(0, ge=0)
    window_days: int = 30


class SeasonContext(_Frozen):
    score: float
    label: str


class SignalBundle(_Frozen):
    lunar: LunarReading
    weather: WeatherReading
    history: HistoryReading
    provenance: dict[str, Provenance] = Field(default_factory=dict)

    @property
    def all_live(self) -> bool:
        return all(p is Provenance.LIVE for p in self.provenance.values())

    @property
    def all_fallback(self) -> bool:
        """True when lunar, weather and history all came from defaults."""
        return all(
            self.provenance.get(k) is Provenance.SIMULATED
            for k in ("lunar", "weather", "history")
        )
