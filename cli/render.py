from __future__ import annotations

from typing import Any, Dict, Iterable

import typer

_RECORD_FIELDS = (
    "id",
    "device_id",
    "temperature",
    "humidity",
    "soil_moisture",
    "created_at",
    "updated_at",
)


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {'-' if value is None else value}")


def render_record(payload: Dict[str, Any], heading: str = "Sensor Data") -> None:
    echo_heading(heading)
    echo_key_values((field, payload.get(field)) for field in _RECORD_FIELDS)
