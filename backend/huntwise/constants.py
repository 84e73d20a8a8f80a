"""
Static lookup tables. Loaded once at import; never mutated.
"""
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

MODEL_NAME = "Hunt Wise Predictive Algorithm v3.0"

UNKNOWN_AREA = "Unknown Area"


class Provenance(str, Enum):
    LIVE = "Live"
    SIMULATED = "Simulated"


class ActivityLevel(str, Enum):
    VERY_LOW = "Very Low"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"
    EXCEPTIONAL = "Exceptional"


class ScoringWeights(NamedTuple):
    moon: float = 0.25
    weather: float = 0.35
    season: float = 0.25
    history: float = 0.15


DEFAULT_WEIGHTS = ScoringWeights()

# Evaluated top to bottom; first threshold the score meets wins.
ACTIVITY_BRACKETS = (
    (85, ActivityLevel.EXCEPTIONAL),
    (70, ActivityLevel.VERY_HIGH),
    (55, ActivityLevel.HIGH),
    (40, ActivityLevel.MODERATE),
    (25, ActivityLevel.LOW),
)

SCORE_FLOOR, SCORE_CEILING = 5, 95

MOON_PHASES = (
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Third Quarter",
    "Waning Crescent",
)

# 0-indexed month -> (score, label)
SEASONS = MappingProxyType({
    **{m: (0.9, "Peak Season (Rut)") for m in (9, 10, 11)},
    **{m: (0.7, "Spring Season") for m in (3, 4, 5)},
    **{m: (0.3, "Summer (Low Activity)") for m in (6, 7, 8)},
    **{m: (0.4, "Winter Season") for m in (0, 1, 2)},
})

SPRING_MONTHS = frozenset({3, 4, 5})
FALL_MONTHS = frozenset({9, 10, 11})

# Used when a provider is down
FALLBACK_TEMPERATURE_F = 45.0
FALLBACK_PRESSURE_INHG = 29.9
FALLBACK_WIND_MPH = 8.0
FALLBACK_CONDITION = "Unknown"
ESTIMATED_PRESSURE_RANGE = (29.7, 30.3)

HPA_TO_INHG = 0.02953

# WMO weather interpretation codes (Open-Meteo `weather_code`)
WMO_CONDITIONS = MappingProxyType({
    0: "Clear",
    1: "Mainly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Freezing Fog",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    56: "Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Light Rain",
    63: "Rain",
    65: "Heavy Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Rain Showers",
    81: "Rain Showers",
    82: "Violent Rain Showers",
    85: "Snow Showers",
    86: "Heavy Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm with Hail",
    99: "Thunderstorm with Hail",
})

# Recommendation rule tables: (predicate-threshold, text). One line per table.
OVERALL_ADVICE = (
    (70, "Excellent conditions - plan an all-day hunt"),
    (40, "Good conditions - focus on prime morning and evening windows"),
    (0, "Slow conditions - keep sits short and stay near food sources"),
)
TEMPERATURE_ADVICE = {
    "cold": "Cold temperatures - deer move more during warmer midday hours",
    "warm": "Warm temperatures - hunt the first and last hour of light",
    "mild": "Mild temperatures - focus on dawn and dusk periods",
}
WIND_ADVICE = {
    "high": "High winds - use natural windbreaks and elevated stands",
    "light": "Light winds - ground blinds and still hunting are effective",
}
MOON_ADVICE = {
    "dark": "Dark moon - expect daylight movement near bedding areas",
    "bright": "Bright moon - deer feed at night, watch for late-morning movement",
    "partial": "Partial moon - stick to a standard dawn and dusk plan",
}

# Answer to browser preflights on /predict; empty body
PREFLIGHT_HEADERS = MappingProxyType({
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
})
