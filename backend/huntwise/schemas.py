import datetime as dt
from typing import Optional, List, Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from huntwise.constants import ActivityLevel, Provenance


class ApiModel(BaseModel):
    # JSON is camelCase; Python side stays snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------- Request models ----------

class PredictBody(ApiModel):
    zip_code: str = Field("", description="5-digit US ZIP code")
    date: Optional[str] = Field(None, description="Target date YYYY-MM-DD; defaults to today")


# ---------- Response models ----------

class FactorDetail(ApiModel):
    score: float
    label: str
    impact: str

class FactorBreakdown(ApiModel):
    moon: float
    temperature: float
    pressure: float
    wind: float
    weather: float
    season: float
    history: float
    weights: Dict[str, float]
    raw: float = Field(..., description="Weighted composite before scaling and clamping")

class DeerPrediction(ApiModel):
    probability: int
    movement: str
    best_stand: str

class TurkeyPrediction(ApiModel):
    probability: int
    movement: str
    best_strategy: str

class SpeciesPredictions(ApiModel):
    deer: DeerPrediction
    turkey: TurkeyPrediction

class PredictionResult(ApiModel):
    activity_score: int = Field(..., ge=0, le=100)
    activity_level: ActivityLevel
    confidence: int
    degraded: bool = False
    factors: Dict[str, FactorDetail]
    factor_breakdown: FactorBreakdown
    species_predictions: SpeciesPredictions
    recommendations: List[str] = Field(default_factory=list)
    optimal_times: List[str] = Field(default_factory=list)
    model: str

class Coordinates(ApiModel):
    lat: float
    lon: float

class Conditions(ApiModel):
    temperature_f: float
    pressure_in_hg: float
    pressure_estimated: bool
    wind_mph: float
    condition_text: str
    moon_phase: str
    illumination_pct: int
    recent_harvest_count: int
    history_window_days: int
    season: str

class PredictionResponse(PredictionResult):
    zip_code: str
    date: str
    location: str
    coordinates: Optional[Coordinates] = None
    conditions: Conditions
    data_integration: Dict[str, Provenance]
    last_updated: dt.datetime
