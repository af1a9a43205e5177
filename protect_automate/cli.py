"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pyhap.accessory_driver import AccessoryDriver

from protect_automate.api import Platform
from protect_automate.core.config_loader import LoadedConfig, default_config_path, load_config
from protect_automate.core.discovery import BUTTON_LABEL
from protect_automate.core.errors import ProtectAutomateError
from protect_automate.core.identity import generate_uuid
from protect_automate.core.model import STRATEGY_HTTP
from protect_automate.core.service import DisarmService
from protect_automate.host.hap import HapHost

app = typer.Typer(help="HomeKit trigger switch that disarms a Somfy Protect alarm")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def _load(config: Path | None) -> LoadedConfig:
    loaded = load_config(config)
    for warning in loaded.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return loaded


@app.command("check")
def check_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Validate the configuration and show the resolution strategy."""
    try:
        loaded = _load(config)
        resolution = loaded.config.resolution
        typer.echo(f"Platform: {loaded.config.platform} ({loaded.config.name})")
        typer.echo(f"Strategy: {resolution.strategy}")
        if resolution.strategy == STRATEGY_HTTP:
            auth = "bearer token" if resolution.http_token else "no auth"
            typer.echo(f"Endpoint: http://{resolution.http_host}:{resolution.http_port}/disarm ({auth})")
        else:
            typer.echo(f"Alarm name: {resolution.alarm_name or '<not set>'}")
    except ProtectAutomateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("uuid")
def show_uuid(label: str = typer.Argument(BUTTON_LABEL)) -> None:
    """Print the accessory UUID derived from LABEL."""
    typer.echo(generate_uuid(label))


@app.command("disarm")
def disarm(
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Send one disarm request through the HTTP control API."""
    _configure_logging(verbose)
    try:
        loaded = _load(config)
        resolution = loaded.config.resolution
        if resolution.strategy != STRATEGY_HTTP:
            typer.echo(
                f"Error: strategy '{resolution.strategy}' needs a running accessory host; use 'run' instead",
                err=True,
            )
            raise typer.Exit(code=1)
        outcome = asyncio.run(DisarmService(None, resolution).disarm())
    except ProtectAutomateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if not outcome.disarmed:
        typer.echo(f"Error: {outcome.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(outcome.message)
    if outcome.body is not None:
        typer.echo(f"response={outcome.body}")


@app.command("run")
def run_bridge(
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
    port: int = typer.Option(51826, "--port", help="HAP port"),
    persist_file: Path = typer.Option(
        Path("protect-automate.state"), "--persist-file", help="HAP pairing state file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run a HomeKit bridge exposing the trigger switch until interrupted."""
    _configure_logging(verbose)
    try:
        loaded = _load(config)
        driver = AccessoryDriver(port=port, persist_file=str(persist_file))
        host = HapHost(driver, loaded.config.name)
        platform = Platform(host, loaded.config)
        typer.echo(f"Using config {config or default_config_path()}")
        try:
            host.start()
        finally:
            platform.close()
    except ProtectAutomateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
