"""CLI validate command implementation.

Runs the eligibility checks on every service of a manifest. Never contacts
the gateway.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from apps.cli.edgelb_cli.utils import ManifestError, load_manifest, resolve_cluster_name
from packages.common.config import EdgeConfig
from packages.core.errors import ValidationRejectedError
from packages.core.use_cases.reconcile_load_balancer import get_load_balancer_name
from packages.core.validator import validate_service

console = Console()


def validate_command(manifest_path: Path, config: EdgeConfig, cluster_name: str | None = None) -> None:
    """Validate the services of a manifest.

    Exits with code 1 if any service is rejected.

    Args:
        manifest_path: Manifest file.
        config: Loaded configuration.
        cluster_name: Optional cluster name override.
    """
    try:
        manifest = load_manifest(manifest_path)
    except ManifestError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    cluster = resolve_cluster_name(cluster_name, manifest, config)

    table = Table(title="Service Validation")
    table.add_column("Load Balancer", style="cyan")
    table.add_column("Result", style="bold")
    table.add_column("Details")

    rejected = 0
    for service in manifest.services:
        name = get_load_balancer_name(cluster, service)
        try:
            warnings = validate_service(name, service)
        except ValidationRejectedError as e:
            rejected += 1
            table.add_row(name, "[red]rejected[/red]", e.reason)
            continue
        table.add_row(name, "[green]accepted[/green]", "; ".join(warnings))

    console.print(table)

    if rejected:
        console.print(f"[red]{rejected} service(s) rejected[/red]")
        raise typer.Exit(1)
