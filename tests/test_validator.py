"""Unit tests for payload validation."""

from __future__ import annotations

import math

import pytest

from app.schemas import SensorDataPayload
from models.results import InvalidInput
from services.validator import validate


def _payload(**overrides) -> SensorDataPayload:
    fields = {
        "device_id": "greenhouse-1",
        "temperature": 21.5,
        "humidity": 55.0,
        "soil_moisture": 40.0,
    }
    fields.update(overrides)
    return SensorDataPayload(**fields)


def test_valid_payload_passes() -> None:
    assert validate(_payload()) is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"humidity": 0.0},
        {"humidity": 100.0},
        {"temperature": -50.0},
        {"temperature": 60.0},
        {"soil_moisture": 0.0},
        {"soil_moisture": 100.0},
    ],
)
def test_inclusive_boundaries_are_accepted(overrides) -> None:
    assert validate(_payload(**overrides)) is None


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"device_id": ""}, "device id empty"),
        ({"device_id": "  \t"}, "device id empty"),
        ({"humidity": 150.0}, "humidity out of range"),
        ({"humidity": -0.1}, "humidity out of range"),
        ({"temperature": -60.0}, "temperature out of range"),
        ({"temperature": 60.01}, "temperature out of range"),
        ({"soil_moisture": 100.5}, "soil moisture out of range"),
        ({"soil_moisture": math.nan}, "soil moisture out of range"),
    ],
)
def test_out_of_range_values_are_rejected(overrides, message) -> None:
    assert validate(_payload(**overrides)) == InvalidInput(message)


def test_checks_short_circuit_in_order() -> None:
    payload = _payload(device_id=" ", humidity=500.0, temperature=-500.0, soil_moisture=-1.0)
    assert validate(payload) == InvalidInput("device id empty")

    payload = _payload(humidity=500.0, temperature=-500.0, soil_moisture=-1.0)
    assert validate(payload) == InvalidInput("humidity out of range")

    payload = _payload(temperature=-500.0, soil_moisture=-1.0)
    assert validate(payload) == InvalidInput("temperature out of range")


def test_device_id_with_lone_surrogate_is_rejected() -> None:
    assert validate(_payload(device_id="gh-\ud800")) == InvalidInput("device id not valid utf-8")


def test_non_ascii_device_id_is_accepted() -> None:
    assert validate(_payload(device_id="serre-n°3 🌱")) is None
