"""
Dependency injection container for the application.
Constructs singletons and provides them to routes/handlers.
"""
import random

from huntwise.config import settings
from huntwise.constants import ScoringWeights
from huntwise.services.pipeline import PredictionService

# Singletons - created once and reused
_prediction_service = None

def get_scoring_weights() -> ScoringWeights:
    return ScoringWeights(
        moon=settings.SCORE_WEIGHT_MOON,
        weather=settings.SCORE_WEIGHT_WEATHER,
        season=settings.SCORE_WEIGHT_SEASON,
        history=settings.SCORE_WEIGHT_HISTORY,
    )

def get_prediction_service() -> PredictionService:
    """Get singleton prediction service."""
    global _prediction_service
    if _prediction_service is None:
        _prediction_service = PredictionService(
            rng=random.Random(),
            weights=get_scoring_weights(),
            timeout=settings.PROVIDER_TIMEOUT_SEC,
        )
    return _prediction_service
