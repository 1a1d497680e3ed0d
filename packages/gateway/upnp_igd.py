"""UPnP Internet Gateway Device adapter for GatewayClientPort.

Talks to the first IGD found on the LAN through miniupnpc (SSDP discovery
plus SOAP WANIPConnection actions). Mappings are always enabled, have an
infinite lease and no remote host restriction.
"""

import logging
from typing import Any
from urllib.parse import urlparse

import miniupnpc

from packages.core.errors import GatewayDiscoveryError
from packages.core.ports.gateway_client import GatewayClientPort

logger = logging.getLogger(__name__)

# UPnP error strings as reported by miniupnpc (strupnperror)
NO_SUCH_ENTRY = "NoSuchEntryInArray"  # 714
CONFLICT_IN_MAPPING_ENTRY = "ConflictInMappingEntry"  # 718


class UpnpActionError(RuntimeError):
    """A WANIPConnection action was rejected by the gateway."""

    def __init__(self, action: str, message: str) -> None:
        self.action = action
        super().__init__(f"{action}: {message}")


class UpnpIgdClient(GatewayClientPort):
    """GatewayClientPort implementation over a miniupnpc ``UPnP`` handle.

    Args:
        upnp: A ``miniupnpc.UPnP`` instance on which an IGD was selected.
        control_url: Control URL returned by ``selectigd()``.
    """

    def __init__(self, upnp: Any, control_url: str) -> None:
        self._upnp = upnp
        self.control_url = control_url

    @classmethod
    def discover(cls, discover_delay_ms: int = 2000) -> "UpnpIgdClient":
        """Discover the gateway on the LAN and select its IGD service.

        Raises:
            GatewayDiscoveryError: If no IGD answers.
        """
        upnp = miniupnpc.UPnP()
        upnp.discoverdelay = discover_delay_ms
        devices = upnp.discover()
        if devices < 1:
            raise GatewayDiscoveryError("no UPnP devices discovered")
        if devices > 1:
            logger.warning(
                f"Discovered {devices} UPnP devices: using the first internet gateway device"
            )

        try:
            control_url = upnp.selectigd()
        except Exception as e:
            raise GatewayDiscoveryError(f"no internet gateway device selected: {e}") from e

        logger.info(f"Selected UPnP internet gateway device at {control_url}")
        return cls(upnp, control_url)

    @property
    def control_host(self) -> str:
        """Host of the IGD control endpoint."""
        host = urlparse(self.control_url).hostname
        if not host:
            raise GatewayDiscoveryError(f"control URL '{self.control_url}' has no host")
        return host

    def add_port_mapping(
        self,
        external_port: int,
        protocol: str,
        internal_port: int,
        internal_host: str,
        description: str,
    ) -> None:
        try:
            self._upnp.addportmapping(
                external_port, protocol, internal_host, internal_port, description, ""
            )
        except Exception as e:
            if CONFLICT_IN_MAPPING_ENTRY in str(e) and self._is_installed(
                external_port, protocol, internal_host, internal_port
            ):
                logger.debug(f"Port mapping {protocol} {external_port} already installed")
                return
            raise UpnpActionError("AddPortMapping", str(e)) from e

    def delete_port_mapping(self, external_port: int, protocol: str) -> None:
        try:
            self._upnp.deleteportmapping(external_port, protocol, "")
        except Exception as e:
            if NO_SUCH_ENTRY in str(e):
                logger.debug(f"Port mapping {protocol} {external_port} already absent")
                return
            raise UpnpActionError("DeletePortMapping", str(e)) from e

    def _is_installed(
        self, external_port: int, protocol: str, internal_host: str, internal_port: int
    ) -> bool:
        try:
            entry = self._upnp.getspecificportmapping(external_port, protocol)
        except Exception as e:
            logger.debug(f"GetSpecificPortMappingEntry failed: {e}")
            return False
        if not entry:
            return False
        host, port = entry[0], entry[1]
        return host == internal_host and int(port) == internal_port


__all__ = ["UpnpActionError", "UpnpIgdClient"]
