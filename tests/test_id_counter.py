"""Unit tests for the durable id counter."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from models.results import StorageError
from storage.id_counter import MAX_COUNTER_VALUE, DurableCounter


def test_first_id_is_initial_value_and_ids_increase() -> None:
    counter = DurableCounter()

    assert [counter.next() for _ in range(3)] == [0, 1, 2]
    assert counter.peek() == 3


def test_custom_initial_value() -> None:
    counter = DurableCounter(initial=10)

    assert counter.next() == 10
    assert counter.peek() == 11


def test_counter_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "counter.json"
    counter = DurableCounter(persistence_path=path)
    counter.next()
    counter.next()

    assert json.loads(path.read_text()) == {"next_id": 2}

    reloaded = DurableCounter(persistence_path=path)
    assert reloaded.next() == 2


def test_fresh_store_writes_initial_value(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "counter.json"

    DurableCounter(persistence_path=path, initial=5)

    assert json.loads(path.read_text()) == {"next_id": 5}


def test_corrupt_state_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "counter.json"
    path.write_text("not json")

    with pytest.raises(StorageError):
        DurableCounter(persistence_path=path)


def test_negative_state_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "counter.json"
    path.write_text(json.dumps({"next_id": -1}))

    with pytest.raises(StorageError):
        DurableCounter(persistence_path=path)


def test_failed_write_does_not_consume_id(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "counter.json"
    counter = DurableCounter(persistence_path=path)

    def broken_write(*_args, **_kwargs):
        raise StorageError("disk full")

    monkeypatch.setattr("storage.id_counter.atomic_write_bytes", broken_write)
    with pytest.raises(StorageError):
        counter.next()

    assert counter.peek() == 0


def test_exhausted_range_raises() -> None:
    counter = DurableCounter(initial=MAX_COUNTER_VALUE - 1)

    with pytest.raises(StorageError):
        counter.next()


def test_concurrent_calls_never_repeat(tmp_path: Path) -> None:
    counter = DurableCounter(persistence_path=tmp_path / "counter.json")
    issued: list[int] = []
    issued_lock = threading.Lock()

    def worker() -> None:
        for _ in range(25):
            value = counter.next()
            with issued_lock:
                issued.append(value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(issued) == list(range(100))
    assert DurableCounter(persistence_path=tmp_path / "counter.json").peek() == 100
