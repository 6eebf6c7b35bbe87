from __future__ import annotations

import math
from typing import Optional

from ..core.enums import ValidationErrorCode
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str, code: ValidationErrorCode) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", code)
    return value.strip()


def require_coordinates(lat: Optional[float], lng: Optional[float]) -> tuple[float, float]:
    """Both coordinates must be present; a failed GPS fix arrives as None."""
    if lat is None or lng is None:
        raise ValidationError("Location is not available. Please enable GPS.", ValidationErrorCode.MISSING_LOCATION)
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        raise ValidationError("Location is not valid", ValidationErrorCode.MISSING_LOCATION)
    if not (math.isfinite(lat) and math.isfinite(lng)) or abs(lat) > 90 or abs(lng) > 180:
        raise ValidationError("Location is not valid", ValidationErrorCode.MISSING_LOCATION)
    return lat, lng


def require_month(year: int, month: int) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Month is not valid", ValidationErrorCode.INVALID_MONTH)
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationError("Month is not valid", ValidationErrorCode.INVALID_MONTH)
    return year, month
