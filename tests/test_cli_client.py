from __future__ import annotations

import json

import httpx
import pytest
import typer

from cli.client import ApiClient
from cli.config import CLIConfig


def _client(handler) -> ApiClient:
    config = CLIConfig(base_url="http://sensors.test")
    client = ApiClient(config)
    client._client.close()
    client._client = httpx.Client(  # type: ignore[attr-defined]
        base_url=config.base_url, transport=httpx.MockTransport(handler)
    )
    return client


def test_requests_use_expected_routes() -> None:
    seen: list[tuple[str, str, bytes]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.content))
        return httpx.Response(200, json={"id": 1})

    client = _client(handler)
    payload = {"device_id": "gh", "temperature": 1.0, "humidity": 2.0, "soil_moisture": 3.0}

    assert client.add(payload) == {"id": 1}
    client.get(1)
    client.update(1, payload)
    client.delete(1)
    client.close()

    assert [(method, path) for method, path, _ in seen] == [
        ("POST", "/sensor-data"),
        ("GET", "/sensor-data/1"),
        ("PUT", "/sensor-data/1"),
        ("DELETE", "/sensor-data/1"),
    ]
    assert json.loads(seen[0][2]) == payload


def test_error_detail_is_reported_and_exits(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Sensor data with id=9 not found"})

    client = _client(handler)

    with pytest.raises(typer.Exit) as excinfo:
        client.get(9)

    assert excinfo.value.exit_code == 1
    assert "Sensor data with id=9 not found" in capsys.readouterr().err


def test_non_json_error_body_falls_back_to_text(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    client = _client(handler)

    with pytest.raises(typer.Exit):
        client.delete(2)

    assert "status 500: Internal Server Error" in capsys.readouterr().err


def test_connection_failure_exits(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)

    with pytest.raises(typer.Exit):
        client.get(1)

    assert "Could not reach http://sensors.test" in capsys.readouterr().err
