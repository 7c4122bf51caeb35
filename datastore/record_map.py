from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from app.schemas import MAX_ID, SensorData
from datastore.codec import JsonRecordCodec, RecordCodec
from models.results import StorageError
from settings import get_settings
from storage.files import atomic_write_bytes, remove_file

logger = logging.getLogger(__name__)

_SUFFIX = ".rec"
_KEY_WIDTH = len(str(MAX_ID))


def _check_id(record_id: int) -> None:
    if not 0 <= record_id <= MAX_ID:
        raise ValueError(f"Record id {record_id} is outside the u64 range.")


class DurableRecordMap:
    """Ordered id -> record map backed by one file per record.

    Every ``put`` and ``remove`` hits the disk before returning, so the
    map seen after a restart is the map seen before it.
    """

    def __init__(self, root_path: Optional[Path] = None, codec: Optional[RecordCodec] = None) -> None:
        self.root_path = root_path
        self.codec: RecordCodec = codec or JsonRecordCodec()
        self._items: Dict[int, SensorData] = {}
        self._lock = Lock()
        if root_path:
            root_path.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def get(self, record_id: int) -> Optional[SensorData]:
        with self._lock:
            item = self._items.get(record_id)
            if item is None:
                return None
            return item.model_copy(deep=True)

    def put(self, record_id: int, record: SensorData) -> None:
        _check_id(record_id)
        with self._lock:
            if self.root_path:
                atomic_write_bytes(self._path_for(record_id), self.codec.encode(record))
            self._items[record_id] = record.model_copy(deep=True)

    def remove(self, record_id: int) -> Optional[SensorData]:
        with self._lock:
            item = self._items.get(record_id)
            if item is None:
                return None
            if self.root_path:
                remove_file(self._path_for(record_id))
            del self._items[record_id]
            return item

    def keys(self) -> list[int]:
        with self._lock:
            return sorted(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return record_id in self._items

    def _path_for(self, record_id: int) -> Path:
        assert self.root_path is not None
        return self.root_path / f"{record_id:0{_KEY_WIDTH}d}{_SUFFIX}"

    def _load_from_disk(self) -> None:
        assert self.root_path is not None
        for path in sorted(self.root_path.glob(f"*{_SUFFIX}")):
            try:
                record_id = int(path.stem)
                data = path.read_bytes()
            except (OSError, ValueError) as exc:
                raise StorageError(f"Unreadable record file {path}: {exc}") from exc
            record = self.codec.decode(data)
            if record.id != record_id:
                raise StorageError(
                    f"Record file {path} holds id {record.id}, expected {record_id}."
                )
            self._items[record_id] = record
        logger.debug(
            "Loaded record map",
            extra={"path": str(self.root_path), "record_count": len(self._items)},
        )


@lru_cache
def build_default_record_map(path: Optional[str] = None) -> DurableRecordMap:
    settings = get_settings()
    records_path = settings.records_path if path is None else path
    root = Path(records_path) if records_path else None
    return DurableRecordMap(root_path=root)
