from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_COUNTER_PATH_ENV = "SENSOR_COUNTER_PATH"
_RECORDS_PATH_ENV = "SENSOR_RECORDS_PATH"
_ID_START_ENV = "SENSOR_ID_START"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    counter_path: Optional[str]
    records_path: Optional[str]
    id_start: int
    log_level: str


def _env(name: str) -> Optional[str]:
    """Stripped value of ``name``; ``""`` if set but blank, ``None`` if unset."""
    value = os.getenv(name)
    return None if value is None else value.strip()


def _read_path(name: str, default: str) -> Optional[str]:
    # A blank value switches the store to in-memory mode.
    value = _env(name)
    if value is None:
        return default
    return value or None


def _read_id_start(default: int) -> int:
    try:
        parsed = int(_env(_ID_START_ENV) or default)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


@lru_cache
def get_settings() -> Settings:
    return Settings(
        counter_path=_read_path(_COUNTER_PATH_ENV, "./tmp/id_counter.json"),
        records_path=_read_path(_RECORDS_PATH_ENV, "./tmp/sensor_data"),
        id_start=_read_id_start(0),
        log_level=(_env(_LOG_LEVEL_ENV) or "INFO").upper(),
    )
