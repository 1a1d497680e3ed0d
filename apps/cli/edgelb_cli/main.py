"""Edge load balancer CLI - Typer command-line interface for UPnP IGD load balancers."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from packages.common.config import (
    ConfigError,
    EdgeConfig,
    normalize_log_level,
    read_cloud_config,
)
from packages.common.logging import setup_logging

app = typer.Typer(
    name="edgelb",
    help="Edge load balancer - map Kubernetes LoadBalancer services onto a UPnP gateway",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def _config(ctx: typer.Context) -> EdgeConfig:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="YAML cloud config file (overrides environment)"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
) -> None:
    """Load configuration and set up JSON logging for every command."""
    try:
        config = read_cloud_config(config_file)
        level = normalize_log_level(log_level) if log_level else config.log_level
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    setup_logging(level)
    ctx.obj = config


@app.command()
def addresses(ctx: typer.Context) -> None:
    """
    Discover the gateway and show the addresses used for port mappings.

    Examples:
        edgelb addresses
    """
    from apps.cli.edgelb_cli.commands.addresses import addresses_command

    addresses_command(_config(ctx))


@app.command()
def validate(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="Manifest with nodes and services"),
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="Cluster name"),
) -> None:
    """
    Check which services of a manifest can get a UPnP IGD load balancer.

    Examples:
        edgelb validate services.yaml
    """
    from apps.cli.edgelb_cli.commands.validate import validate_command

    validate_command(manifest, _config(ctx), cluster_name=cluster_name)


@app.command()
def apply(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="Manifest with nodes and services"),
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="Cluster name"),
) -> None:
    """
    Ensure a load balancer (gateway port mappings) for every service.

    Examples:
        edgelb apply services.yaml
        edgelb apply services.yaml --cluster-name edge-1
    """
    from apps.cli.edgelb_cli.commands.apply import apply_command

    apply_command(manifest, _config(ctx), cluster_name=cluster_name)


@app.command()
def delete(
    ctx: typer.Context,
    manifest: Path = typer.Argument(..., help="Manifest with nodes and services"),
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="Cluster name"),
) -> None:
    """
    Remove the gateway port mappings of every service.

    Examples:
        edgelb delete services.yaml
    """
    from apps.cli.edgelb_cli.commands.apply import delete_command

    delete_command(manifest, _config(ctx), cluster_name=cluster_name)


if __name__ == "__main__":
    app()
