"""Gateway adapters: UPnP IGD client and address discovery."""

from packages.gateway.addresses import (
    discover_gateway_identity,
    get_external_ip,
    get_local_address_to_host,
)
from packages.gateway.upnp_igd import UpnpActionError, UpnpIgdClient

__all__ = [
    "UpnpActionError",
    "UpnpIgdClient",
    "discover_gateway_identity",
    "get_external_ip",
    "get_local_address_to_host",
]
