"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Path, status

from app.schemas import MAX_ID, ErrorResponse, SensorData, SensorDataPayload
from models.results import Err, InvalidInput, NotFound, ServiceError
from services.record_service import RecordService, build_default_service

router = APIRouter()

_ERROR_STATUS = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
}


def get_service() -> RecordService:
    return build_default_service()


def _raise_for_error(error: ServiceError) -> NoReturn:
    raise HTTPException(status_code=_ERROR_STATUS[type(error)], detail=error.msg)


@router.post(
    "/sensor-data",
    status_code=status.HTTP_201_CREATED,
    response_model=SensorData,
    responses={400: {"model": ErrorResponse}},
    summary="Store a new sensor reading.",
)
def add_sensor_data(
    payload: SensorDataPayload,
    service: RecordService = Depends(get_service),
) -> SensorData:
    result = service.add_sensor_data(payload)
    if isinstance(result, Err):
        _raise_for_error(result.error)
    return result.value


@router.get(
    "/sensor-data/{record_id}",
    response_model=SensorData,
    responses={404: {"model": ErrorResponse}},
    summary="Fetch a sensor reading by id.",
)
def get_sensor_data(
    record_id: int = Path(..., ge=0, le=MAX_ID, description="Identifier assigned at creation."),
    service: RecordService = Depends(get_service),
) -> SensorData:
    result = service.get_sensor_data(record_id)
    if isinstance(result, Err):
        _raise_for_error(result.error)
    return result.value


@router.put(
    "/sensor-data/{record_id}",
    response_model=SensorData,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Replace the measured fields of a sensor reading.",
)
def update_sensor_data(
    payload: SensorDataPayload,
    record_id: int = Path(..., ge=0, le=MAX_ID, description="Identifier assigned at creation."),
    service: RecordService = Depends(get_service),
) -> SensorData:
    result = service.update_sensor_data(record_id, payload)
    if isinstance(result, Err):
        _raise_for_error(result.error)
    return result.value


@router.delete(
    "/sensor-data/{record_id}",
    response_model=SensorData,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a sensor reading and return it.",
)
def delete_sensor_data(
    record_id: int = Path(..., ge=0, le=MAX_ID, description="Identifier assigned at creation."),
    service: RecordService = Depends(get_service),
) -> SensorData:
    result = service.delete_sensor_data(record_id)
    if isinstance(result, Err):
        _raise_for_error(result.error)
    return result.value


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
