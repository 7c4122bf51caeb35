from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_record


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Store and inspect greenhouse sensor readings.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _payload(device_id: str, temperature: float, humidity: float, soil_moisture: float) -> Dict[str, Any]:
    return {
        "device_id": device_id,
        "temperature": temperature,
        "humidity": humidity,
        "soil_moisture": soil_moisture,
    }


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Sensor store API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("add")
def add_command(
    ctx: typer.Context,
    device_id: str = typer.Option(..., "--device-id", "-d", help="Reporting device identifier."),
    temperature: float = typer.Option(..., "--temperature", "-t", help="Degrees Celsius, -50 to 60."),
    humidity: float = typer.Option(..., "--humidity", "-H", help="Relative humidity percent, 0 to 100."),
    soil_moisture: float = typer.Option(..., "--soil-moisture", "-s", help="Soil moisture percent, 0 to 100."),
) -> None:
    """Store a new sensor reading."""
    state = _get_state(ctx)
    record = state.client.add(_payload(device_id, temperature, humidity, soil_moisture))
    typer.secho(f"Stored sensor data id={record.get('id')}", fg=typer.colors.GREEN)
    render_record(record)


@app.command("get")
def get_command(
    ctx: typer.Context,
    record_id: int = typer.Argument(..., min=0, help="Identifier returned from the add command."),
) -> None:
    """Fetch a sensor reading by id."""
    state = _get_state(ctx)
    render_record(state.client.get(record_id))


@app.command("update")
def update_command(
    ctx: typer.Context,
    record_id: int = typer.Argument(..., min=0, help="Identifier of the reading to replace."),
    device_id: str = typer.Option(..., "--device-id", "-d", help="Reporting device identifier."),
    temperature: float = typer.Option(..., "--temperature", "-t", help="Degrees Celsius, -50 to 60."),
    humidity: float = typer.Option(..., "--humidity", "-H", help="Relative humidity percent, 0 to 100."),
    soil_moisture: float = typer.Option(..., "--soil-moisture", "-s", help="Soil moisture percent, 0 to 100."),
) -> None:
    """Replace the measured fields of a sensor reading."""
    state = _get_state(ctx)
    record = state.client.update(
        record_id, _payload(device_id, temperature, humidity, soil_moisture)
    )
    typer.secho(f"Updated sensor data id={record_id}", fg=typer.colors.GREEN)
    render_record(record)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    record_id: int = typer.Argument(..., min=0, help="Identifier of the reading to delete."),
) -> None:
    """Delete a sensor reading."""
    state = _get_state(ctx)
    record = state.client.delete(record_id)
    typer.secho(f"Deleted sensor data id={record_id}", fg=typer.colors.YELLOW)
    render_record(record, heading="Removed Sensor Data")
