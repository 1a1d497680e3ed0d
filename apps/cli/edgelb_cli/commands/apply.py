"""CLI apply and delete command implementations.

Both build one controller for the whole run; the registry therefore only
spans the services of a single invocation.
"""

from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from apps.cli.edgelb_cli.utils import ManifestError, load_manifest, resolve_cluster_name
from packages.common.config import EdgeConfig
from packages.common.factories import make_load_balancer_controller
from packages.core.errors import EdgeLoadBalancerError
from packages.core.use_cases.reconcile_load_balancer import LoadBalancerController
from packages.schemas.edge import ClusterManifest, Service

console = Console()


def _run(
    manifest_path: Path,
    config: EdgeConfig,
    cluster_name: str | None,
    title: str,
    action: Callable[[LoadBalancerController, str, ClusterManifest, Service], str],
) -> None:
    try:
        manifest = load_manifest(manifest_path)
    except ManifestError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    cluster = resolve_cluster_name(cluster_name, manifest, config)

    try:
        controller = make_load_balancer_controller(config)
    except EdgeLoadBalancerError as e:
        console.print(f"[red]Gateway unavailable: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=title)
    table.add_column("Load Balancer", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Details")

    failed = 0
    for service in manifest.services:
        name = controller.get_load_balancer_name(cluster, service)
        try:
            details = action(controller, cluster, manifest, service)
        except EdgeLoadBalancerError as e:
            failed += 1
            table.add_row(name, "[red]✗[/red]", str(e))
            continue
        table.add_row(name, "[green]✓[/green]", details)

    console.print(table)

    if failed:
        console.print(f"[red]{failed} load balancer(s) failed[/red]")
        raise typer.Exit(1)


def _ensure(
    controller: LoadBalancerController, cluster: str, manifest: ClusterManifest, service: Service
) -> str:
    status = controller.ensure_load_balancer(cluster, service, manifest.nodes)
    return status.advertised_address


def _delete(
    controller: LoadBalancerController, cluster: str, manifest: ClusterManifest, service: Service
) -> str:
    controller.ensure_load_balancer_deleted(cluster, service)
    return "deleted"


def apply_command(manifest_path: Path, config: EdgeConfig, cluster_name: str | None = None) -> None:
    """Ensure a load balancer for every service of a manifest."""
    _run(manifest_path, config, cluster_name, "Load Balancers", _ensure)


def delete_command(manifest_path: Path, config: EdgeConfig, cluster_name: str | None = None) -> None:
    """Ensure the load balancers of every service of a manifest are deleted."""
    _run(manifest_path, config, cluster_name, "Deleted Load Balancers", _delete)
