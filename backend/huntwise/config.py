# backend/huntwise/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

dotenv_path = Path(__file__).parents[2] / '.env'
load_dotenv(dotenv_path)


def _csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


class Settings:
    # --- Geocoding (Zippopotam) ---
    GEOCODE_URL: str = os.getenv("GEOCODE_URL", "https://api.zippopotam.us/us")

    # --- Weather (Open-Meteo, no key) ---
    WEATHER_URL: str = os.getenv("WEATHER_URL", "https://api.open-meteo.com/v1/forecast")

    # --- Moon (USNO) ---
    MOON_URL: str = os.getenv("MOON_URL", "https://aa.usno.navy.mil/api/rstt/oneday")
    # illumination barely varies across the US; used when the ZIP can't be resolved
    MOON_DEFAULT_LAT: float = float(os.getenv("MOON_DEFAULT_LAT", "39.83"))
    MOON_DEFAULT_LON: float = float(os.getenv("MOON_DEFAULT_LON", "-98.58"))

    # --- Harvest history (Supabase REST) ---
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    TROPHY_TABLE: str = os.getenv("TROPHY_TABLE", "trophies")

    # --- Pipeline knobs ---
    PROVIDER_TIMEOUT_SEC: float = float(os.getenv("PROVIDER_TIMEOUT_SEC", "4.0"))
    HISTORY_WINDOW_DAYS: int = int(os.getenv("HISTORY_WINDOW_DAYS", "30"))

    # Composite weights (tunable; defaults are the long-standing production values)
    SCORE_WEIGHT_MOON: float    = float(os.getenv("SCORE_WEIGHT_MOON", "0.25"))
    SCORE_WEIGHT_WEATHER: float = float(os.getenv("SCORE_WEIGHT_WEATHER", "0.35"))
    SCORE_WEIGHT_SEASON: float  = float(os.getenv("SCORE_WEIGHT_SEASON", "0.25"))
    SCORE_WEIGHT_HISTORY: float = float(os.getenv("SCORE_WEIGHT_HISTORY", "0.15"))

    # --- Server ---
    CORS_ALLOW_ORIGINS: list[str] = _csv(os.getenv("CORS_ALLOW_ORIGINS", "*"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def history_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


settings = Settings()
