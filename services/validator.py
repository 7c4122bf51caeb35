"""Domain checks applied to payloads before any mutation."""

from __future__ import annotations

from typing import Optional

from app.schemas import SensorDataPayload
from models.results import InvalidInput

TEMPERATURE_RANGE = (-50.0, 60.0)
HUMIDITY_RANGE = (0.0, 100.0)
SOIL_MOISTURE_RANGE = (0.0, 100.0)


def _encodable(text: str) -> bool:
    # Lone surrogates survive JSON decoding but cannot be written back out.
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _within(value: float, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    # NaN compares False both ways and is rejected.
    return low <= value <= high


def validate(payload: SensorDataPayload) -> Optional[InvalidInput]:
    """Return the first failed check, or ``None`` when the payload is acceptable."""
    if not payload.device_id.strip():
        return InvalidInput("device id empty")
    if not _encodable(payload.device_id):
        return InvalidInput("device id not valid utf-8")
    if not _within(payload.humidity, HUMIDITY_RANGE):
        return InvalidInput("humidity out of range")
    if not _within(payload.temperature, TEMPERATURE_RANGE):
        return InvalidInput("temperature out of range")
    if not _within(payload.soil_moisture, SOIL_MOISTURE_RANGE):
        return InvalidInput("soil moisture out of range")
    return None
