from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Optional

from models.results import StorageError
from settings import get_settings
from storage.files import atomic_write_bytes

logger = logging.getLogger(__name__)

MAX_COUNTER_VALUE = 2**64


class DurableCounter:
    """Monotonic id source whose value survives process restarts.

    The counter holds the next id to hand out. ``next()`` commits the
    incremented value to disk before returning the previous one, so an id
    is never issued twice even if the process dies right after.
    """

    def __init__(self, persistence_path: Optional[Path] = None, initial: int = 0) -> None:
        if not 0 <= initial < MAX_COUNTER_VALUE:
            raise ValueError(f"Initial counter value {initial} is outside the u64 range.")
        self.persistence_path = persistence_path
        self._value = initial
        self._lock = Lock()
        if persistence_path:
            self._load_from_disk()

    def next(self) -> int:
        with self._lock:
            current = self._value
            following = current + 1
            if following >= MAX_COUNTER_VALUE:
                raise StorageError("Id counter exhausted the u64 range.")
            self._persist(following)
            self._value = following
            return current

    def peek(self) -> int:
        with self._lock:
            return self._value

    def _persist(self, value: int) -> None:
        if not self.persistence_path:
            return
        payload = json.dumps({"next_id": value}, sort_keys=True)
        atomic_write_bytes(self.persistence_path, payload.encode("utf-8"))

    def _load_from_disk(self) -> None:
        assert self.persistence_path is not None
        if not self.persistence_path.exists():
            # Fresh store: write the initial value so a restart resumes from it.
            self._persist(self._value)
            return

        try:
            data = json.loads(self.persistence_path.read_text(encoding="utf-8"))
            value = data["next_id"]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(
                f"Id counter state at {self.persistence_path} is unreadable: {exc}"
            ) from exc

        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value < MAX_COUNTER_VALUE:
            raise StorageError(
                f"Id counter state at {self.persistence_path} holds an invalid value: {value!r}"
            )
        self._value = value
        logger.debug(
            "Loaded id counter",
            extra={"path": str(self.persistence_path), "next_id": value},
        )


@lru_cache
def build_default_counter(path: Optional[str] = None) -> DurableCounter:
    settings = get_settings()
    counter_path = settings.counter_path if path is None else path
    persistence = Path(counter_path) if counter_path else None
    return DurableCounter(persistence_path=persistence, initial=settings.id_start)
