"""Pydantic schemas for sensor records and request payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

MAX_ID = 2**64 - 1


class SensorDataPayload(BaseModel):
    """Caller-supplied fields for creating or updating a reading.

    Only types are enforced here; range checks happen in the validator so
    that they surface as ``InvalidInput`` results.
    """

    device_id: str = Field(..., description="Identifier of the reporting IoT device.")
    temperature: float = Field(..., description="Air temperature in degrees Celsius.")
    humidity: float = Field(..., description="Relative humidity in percent.")
    soil_moisture: float = Field(..., description="Soil moisture in percent.")


class SensorData(BaseModel):
    """A stored greenhouse sensor reading."""

    id: int = Field(..., ge=0, le=MAX_ID)
    device_id: str
    temperature: float
    humidity: float
    soil_moisture: float
    created_at: datetime
    updated_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    detail: str
