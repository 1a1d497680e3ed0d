"""CLI addresses command implementation.

Discovers the UPnP gateway and prints the addresses the controller would use.
"""

import typer
from rich.console import Console
from rich.table import Table

from packages.common.config import EdgeConfig
from packages.core.errors import EdgeLoadBalancerError
from packages.gateway.addresses import discover_gateway_identity
from packages.gateway.upnp_igd import UpnpIgdClient

console = Console()


def addresses_command(config: EdgeConfig) -> None:
    """Display the gateway control URL, local address and external address.

    Args:
        config: Loaded configuration.
    """
    try:
        client = UpnpIgdClient.discover(discover_delay_ms=config.upnp_discover_delay_ms)
        identity = discover_gateway_identity(client.control_host, config)
    except EdgeLoadBalancerError as e:
        console.print(f"[red]Gateway discovery failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Gateway Addresses")
    table.add_column("Address", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("control", client.control_url)
    table.add_row("local", identity.local_address)
    table.add_row("external", identity.external_address)
    console.print(table)
