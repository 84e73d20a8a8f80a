import datetime as dt
import re
from typing import Optional

from huntwise.errors import InputValidationError
from huntwise.models import PredictionRequest

ZIP_RE = re.compile(r"[0-9]{5}")
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

ZIP_ERROR = "Invalid ZIP code format. Must be 5 digits."
DATE_ERROR = "Invalid date format. Must be YYYY-MM-DD."


def parse_request(zip_code: Optional[str], date_text: Optional[str],
                  today: Optional[dt.date] = None) -> PredictionRequest:
    if not zip_code or not ZIP_RE.fullmatch(zip_code):
        raise InputValidationError(ZIP_ERROR)

    if not date_text:
        return PredictionRequest(postal_code=zip_code, target_date=today or dt.date.today())

    if not DATE_RE.fullmatch(date_text):
        raise InputValidationError(DATE_ERROR)
    try:
        target = dt.date.fromisoformat(date_text)
    except ValueError as e:
        raise InputValidationError(DATE_ERROR) from e
    return PredictionRequest(postal_code=zip_code, target_date=target)
