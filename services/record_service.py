"""Create/read/update/delete orchestration for sensor records."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Callable

from app.schemas import SensorData, SensorDataPayload
from datastore.record_map import DurableRecordMap, build_default_record_map
from models.results import Err, InvalidInput, NotFound, Ok, Result
from services.validator import validate
from storage.id_counter import DurableCounter, build_default_counter

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordService:
    """Owns the id counter and record map and applies the record lifecycle.

    Domain failures come back as ``Err(NotFound)`` or ``Err(InvalidInput)``.
    Storage failures raise ``StorageError`` and are not caught here.
    """

    def __init__(
        self,
        counter: DurableCounter,
        records: DurableRecordMap,
        clock: Clock = utc_now,
    ) -> None:
        self.counter = counter
        self.records = records
        self.clock = clock
        self._lock = Lock()

    def add_sensor_data(self, payload: SensorDataPayload) -> Result[SensorData, InvalidInput]:
        error = validate(payload)
        if error is not None:
            logger.warning(
                "Rejected new sensor data",
                extra={
                    "device_id": payload.device_id.encode("utf-8", "backslashreplace").decode("utf-8"),
                    "reason": error.msg,
                },
            )
            return Err(error)

        with self._lock:
            record_id = self.counter.next()
            record = SensorData(
                id=record_id,
                device_id=payload.device_id,
                temperature=payload.temperature,
                humidity=payload.humidity,
                soil_moisture=payload.soil_moisture,
                created_at=self.clock(),
                updated_at=None,
            )
            self.records.put(record_id, record)

        logger.info(
            "Stored sensor data",
            extra={"record_id": record_id, "device_id": record.device_id},
        )
        return Ok(record)

    def get_sensor_data(self, record_id: int) -> Result[SensorData, NotFound]:
        with self._lock:
            record = self.records.get(record_id)
        if record is None:
            logger.warning("Lookup of missing sensor data", extra={"record_id": record_id})
            return Err(NotFound(f"Sensor data with id={record_id} not found"))
        return Ok(record)

    def update_sensor_data(
        self, record_id: int, payload: SensorDataPayload
    ) -> Result[SensorData, InvalidInput | NotFound]:
        error = validate(payload)
        if error is not None:
            logger.warning(
                "Rejected sensor data update",
                extra={"record_id": record_id, "reason": error.msg},
            )
            return Err(error)

        with self._lock:
            record = self.records.get(record_id)
            if record is None:
                logger.warning("Update of missing sensor data", extra={"record_id": record_id})
                return Err(
                    NotFound(
                        f"couldn't update sensor data with id={record_id}. Data not found"
                    )
                )

            updated = record.model_copy(
                update={
                    "device_id": payload.device_id,
                    "temperature": payload.temperature,
                    "humidity": payload.humidity,
                    "soil_moisture": payload.soil_moisture,
                    "updated_at": self._next_update_time(record),
                }
            )
            self.records.put(record_id, updated)

        logger.info(
            "Updated sensor data",
            extra={"record_id": record_id, "device_id": updated.device_id},
        )
        return Ok(updated)

    def delete_sensor_data(self, record_id: int) -> Result[SensorData, NotFound]:
        with self._lock:
            removed = self.records.remove(record_id)
        if removed is None:
            logger.warning("Delete of missing sensor data", extra={"record_id": record_id})
            return Err(
                NotFound(f"couldn't delete sensor data with id={record_id}. Data not found.")
            )
        logger.info("Deleted sensor data", extra={"record_id": record_id})
        return Ok(removed)

    def _next_update_time(self, record: SensorData) -> datetime:
        # Never move backwards, even if the wall clock does.
        floor = record.updated_at or record.created_at
        now = self.clock()
        return now if now >= floor else floor


@lru_cache
def build_default_service() -> RecordService:
    """Factory that wires the service with the configured durable stores."""
    return RecordService(counter=build_default_counter(), records=build_default_record_map())
