"""
Composite game-activity scorer.

Every sub-score is normalized to [0, 1] and combined with tunable weights
into a 0-100 activity score. The functions here are pure: randomness only
enters through the optional `rng`, and only touches confidence (inside its
band) and the species probabilities. `activity_score` never sees it.
"""
import datetime as dt
import random
from typing import Optional

from huntwise.constants import (
    ACTIVITY_BRACKETS,
    DEFAULT_WEIGHTS,
    FALL_MONTHS,
    MODEL_NAME,
    MOON_ADVICE,
    OVERALL_ADVICE,
    SCORE_CEILING,
    SCORE_FLOOR,
    SEASONS,
    SPRING_MONTHS,
    TEMPERATURE_ADVICE,
    WIND_ADVICE,
    ActivityLevel,
    ScoringWeights,
)
from huntwise.models import LocationInfo, SeasonContext, SignalBundle
from huntwise.schemas import (
    DeerPrediction,
    FactorBreakdown,
    FactorDetail,
    PredictionResult,
    SpeciesPredictions,
    TurkeyPrediction,
)
from huntwise.utils.numbers import clamp, round_half_up

LIVE_CONFIDENCE = (85, 95)
PARTIAL_CONFIDENCE = (60, 65)
DEGRADED_CONFIDENCE = 60


# ---------- sub-scores ----------

def moon_score(illumination_pct: float) -> float:
    # new moon -> daylight movement, full moon -> night feeding; both "good"
    if illumination_pct <= 25:
        return 0.8
    if illumination_pct >= 75:
        return 0.7
    return 0.6

def temperature_score(temp_f: float) -> float:
    if 35 <= temp_f <= 55:
        return 1.0
    if 25 <= temp_f <= 65:
        return 0.7
    return 0.4

def pressure_score(pressure_in_hg: float) -> float:
    if pressure_in_hg > 30.0:
        return 0.9
    if pressure_in_hg < 29.5:
        return 0.3
    return 0.7

def wind_score(wind_mph: float) -> float:
    if wind_mph <= 12:
        return 0.9
    if wind_mph <= 20:
        return 0.6
    return 0.3

def weather_score(temp_f: float, pressure_in_hg: float, wind_mph: float) -> float:
    return (temperature_score(temp_f) + pressure_score(pressure_in_hg) + wind_score(wind_mph)) / 3

def season_context(date: dt.date) -> SeasonContext:
    score, label = SEASONS[date.month - 1]
    return SeasonContext(score=score, label=label)

def history_score(recent_harvest_count: int) -> float:
    if recent_harvest_count >= 5:
        return 0.9
    if recent_harvest_count >= 2:
        return 0.7
    if recent_harvest_count >= 1:
        return 0.6
    return 0.4

def composite_score(moon: float, weather: float, season: float, history: float,
                    weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    return (moon * weights.moon + weather * weights.weather
            + season * weights.season + history * weights.history)

def scale_score(raw: float) -> int:
    return clamp(round_half_up(raw * 100), SCORE_FLOOR, SCORE_CEILING)

def activity_level(score: int) -> ActivityLevel:
    for threshold, level in ACTIVITY_BRACKETS:
        if score >= threshold:
            return level
    return ActivityLevel.VERY_LOW

def confidence_for(signals: SignalBundle, rng: Optional[random.Random] = None) -> int:
    """Reflects data provenance, not statistical certainty."""
    if signals.all_fallback:
        return DEGRADED_CONFIDENCE
    lo, hi = LIVE_CONFIDENCE if signals.all_live else PARTIAL_CONFIDENCE
    return lo + (rng.randint(0, hi - lo) if rng else (hi - lo) // 2)


# ---------- labels ----------

def _moon_factor(pct: int, phase: str, score: float) -> FactorDetail:
    if pct <= 25:
        label, impact = "New Moon - Excellent", "Dark nights push deer movement into daylight"
    elif pct >= 75:
        label, impact = "Full Moon - Good", "Bright nights favor nocturnal feeding"
    else:
        label, impact = "Partial - Fair", "Moderate moonlight, little effect on movement"
    return FactorDetail(score=score, label=label, impact=f"{impact} ({phase}, {pct}% lit)")

def _pressure_label(pressure: float) -> str:
    if pressure > 30.0:
        return "High - Excellent"
    if pressure < 29.5:
        return "Low - Poor"
    return "Stable - Good"

def _temperature_label(temp_f: float) -> str:
    if 35 <= temp_f <= 50:
        return "Favorable"
    return "Too Warm" if temp_f > 50 else "Cold"

def _history_factor(count: int, window_days: int, score: float) -> FactorDetail:
    if count >= 5:
        impact = "Strong recent harvest activity"
    elif count >= 2:
        impact = "Steady recent harvest activity"
    elif count >= 1:
        impact = "Some recent harvest activity"
    else:
        impact = "Limited recent activity"
    return FactorDetail(score=score, label=f"{count} harvests in last {window_days} days", impact=impact)

_SEASON_IMPACT = {
    "Peak Season (Rut)": "Rut drives peak daytime movement",
    "Spring Season": "Spring green-up and turkey breeding activity",
    "Summer (Low Activity)": "Heat suppresses daytime movement",
    "Winter Season": "Post-rut recovery, deer focus on food sources",
}


# ---------- advice ----------

def optimal_times(score: int, temp_f: float) -> list[str]:
    if temp_f > 60:
        return ["5:00-6:30 AM", "6:00-7:30 PM"]
    if temp_f < 30:
        return ["7:00-9:00 AM", "3:30-5:30 PM"]
    if score > 60:
        return ["5:30-8:00 AM", "4:30-7:30 PM"]
    return ["6:00-7:30 AM", "5:00-7:00 PM"]

def recommendations(score: int, temp_f: float, wind_mph: float, illumination_pct: int) -> list[str]:
    """One line each: overall, temperature timing, wind technique, moon strategy."""
    out = [next(text for threshold, text in OVERALL_ADVICE if score >= threshold)]

    if temp_f < 40:
        out.append(TEMPERATURE_ADVICE["cold"])
    elif temp_f > 60:
        out.append(TEMPERATURE_ADVICE["warm"])
    else:
        out.append(TEMPERATURE_ADVICE["mild"])

    out.append(WIND_ADVICE["high"] if wind_mph > 15 else WIND_ADVICE["light"])

    if illumination_pct <= 25:
        out.append(MOON_ADVICE["dark"])
    elif illumination_pct >= 75:
        out.append(MOON_ADVICE["bright"])
    else:
        out.append(MOON_ADVICE["partial"])
    return out

def _jitter(rng: Optional[random.Random], spread: int = 5) -> int:
    return rng.randint(-spread, spread) if rng else 0

def species_predictions(score: int, month0: int, wind_mph: float,
                        rng: Optional[random.Random] = None) -> SpeciesPredictions:
    if score > 70:
        deer_move = "High movement expected"
    elif score > 50:
        deer_move = "Moderate movement"
    else:
        deer_move = "Limited movement"

    if month0 in SPRING_MONTHS:
        turkey_move, strategy = "Spring gobbling activity", "Use hen calls at dawn"
    elif month0 in FALL_MONTHS:
        turkey_move, strategy = "Fall flocking behavior", "Target feeding areas"
    else:
        turkey_move, strategy = "Normal feeding patterns", "Target feeding areas"

    return SpeciesPredictions(
        deer=DeerPrediction(
            probability=clamp(score + _jitter(rng), 10, 90),
            movement=deer_move,
            best_stand="Downwind of bedding areas" if wind_mph < 10 else "Protected areas with cover",
        ),
        turkey=TurkeyPrediction(
            probability=clamp(score - 10 + _jitter(rng), 5, 85),
            movement=turkey_move,
            best_strategy=strategy,
        ),
    )


# ---------- entry point ----------

def score(location: LocationInfo, date: dt.date, signals: SignalBundle,
          rng: Optional[random.Random] = None,
          weights: ScoringWeights = DEFAULT_WEIGHTS) -> PredictionResult:
    """
    Combine lunar, weather, season and history signals into a prediction.

    `location` is carried for context only; the score depends on `date`
    and `signals`. Pass `rng=None` for fully deterministic output.
    """
    lunar, wx, hist = signals.lunar, signals.weather, signals.history
    season = season_context(date)

    m = moon_score(lunar.illumination_pct)
    ts = temperature_score(wx.temperature_f)
    ps = pressure_score(wx.pressure_in_hg)
    ws = wind_score(wx.wind_mph)
    w = (ts + ps + ws) / 3
    h = history_score(hist.recent_harvest_count)

    raw = composite_score(m, w, season.score, h, weights)
    activity = scale_score(raw)

    factors = {
        "moon": _moon_factor(lunar.illumination_pct, lunar.phase_name, m),
        "weather": FactorDetail(
            score=round(w, 3),
            label=_temperature_label(wx.temperature_f),
            impact=(f"{round_half_up(wx.temperature_f)}°F, {wx.condition_text}; "
                    f"pressure {wx.pressure_in_hg:.2f} inHg ({_pressure_label(wx.pressure_in_hg)}); "
                    f"wind {round_half_up(wx.wind_mph)} mph"),
        ),
        "season": FactorDetail(score=season.score, label=season.label,
                               impact=_SEASON_IMPACT[season.label]),
        "history": _history_factor(hist.recent_harvest_count, hist.window_days, h),
    }

    return PredictionResult(
        activity_score=activity,
        activity_level=activity_level(activity),
        confidence=confidence_for(signals, rng),
        degraded=signals.all_fallback,
        factors=factors,
        factor_breakdown=FactorBreakdown(
            moon=m, temperature=ts, pressure=ps, wind=ws,
            weather=round(w, 4), season=season.score, history=h,
            weights=weights._asdict(), raw=round(raw, 4),
        ),
        species_predictions=species_predictions(activity, date.month - 1, wx.wind_mph, rng),
        recommendations=recommendations(activity, wx.temperature_f, wx.wind_mph, lunar.illumination_pct),
        optimal_times=optimal_times(activity, wx.temperature_f),
        model=MODEL_NAME,
    )
