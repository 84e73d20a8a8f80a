"""
/predict endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends

from huntwise.di import get_prediction_service
from huntwise.schemas import PredictBody, PredictionResponse
from huntwise.services.pipeline import PredictionService
from huntwise.services.validation import parse_request

router = APIRouter(tags=["predict"], prefix="/predict")

async def _run(zip_code: str, date: Optional[str], service: PredictionService) -> PredictionResponse:
    # InputValidationError -> 400 via the app-level handler
    req = parse_request(zip_code, date)
    return await service.predict(req)

@router.post("", response_model=PredictionResponse)
async def predict(body: PredictBody,
                  service: PredictionService = Depends(get_prediction_service)):
    """Game-activity prediction for `{zipCode, date?}`."""
    return await _run(body.zip_code, body.date, service)

@router.get("/{zip_code}", response_model=PredictionResponse)
async def predict_today(zip_code: str,
                        service: PredictionService = Depends(get_prediction_service)):
    return await _run(zip_code, None, service)

@router.get("/{zip_code}/{date}", response_model=PredictionResponse)
async def predict_on(zip_code: str, date: str,
                     service: PredictionService = Depends(get_prediction_service)):
    return await _run(zip_code, date, service)
