from __future__ import annotations

from typing import Any, Dict, NoReturn

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Thin HTTP client for the sensor store API."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def add(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._send("POST", "/sensor-data", json=payload)

    def get(self, record_id: int) -> Dict[str, Any]:
        return self._send("GET", f"/sensor-data/{record_id}")

    def update(self, record_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._send("PUT", f"/sensor-data/{record_id}", json=payload)

    def delete(self, record_id: int) -> Dict[str, Any]:
        return self._send("DELETE", f"/sensor-data/{record_id}")

    def _send(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        detail: Any = None
        try:
            detail = exc.response.json().get("detail")
        except (ValueError, AttributeError):
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
