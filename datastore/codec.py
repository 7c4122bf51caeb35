"""Byte encoding for records kept in the durable record map."""

from __future__ import annotations

import json
from typing import Protocol

from pydantic import ValidationError

from app.schemas import SensorData
from models.results import CodecError

CODEC_VERSION = 1


class RecordCodec(Protocol):
    def encode(self, record: SensorData) -> bytes:
        ...

    def decode(self, data: bytes) -> SensorData:
        ...


class JsonRecordCodec:
    """Versioned JSON envelope: ``{"record": {...}, "version": 1}``."""

    version = CODEC_VERSION

    def encode(self, record: SensorData) -> bytes:
        envelope = {"version": self.version, "record": record.model_dump(mode="json")}
        return json.dumps(envelope, sort_keys=True, separators=(",", ":")).encode("utf-8")

    def decode(self, data: bytes) -> SensorData:
        try:
            envelope = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CodecError(f"Stored record is not valid JSON: {exc}") from exc

        if not isinstance(envelope, dict):
            raise CodecError("Stored record envelope is not an object.")

        version = envelope.get("version")
        if version != self.version:
            raise CodecError(f"Unsupported record encoding version {version!r}.")

        try:
            return SensorData.model_validate(envelope.get("record"))
        except ValidationError as exc:
            raise CodecError(f"Stored record failed schema validation: {exc}") from exc
