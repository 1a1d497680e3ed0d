"""Factory functions for creating fully-wired controllers and providers.

Centralizes dependency injection to keep CLI commands thin.
"""

import logging

from packages.common.config import EdgeConfig, get_config
from packages.core.provider import EdgeCloudProvider
from packages.core.registry import ReconciliationRegistry
from packages.core.use_cases.reconcile_load_balancer import LoadBalancerController
from packages.gateway.addresses import discover_gateway_identity
from packages.gateway.upnp_igd import UpnpIgdClient

logger = logging.getLogger(__name__)


def make_load_balancer_controller(
    config: EdgeConfig | None = None,
    registry: ReconciliationRegistry | None = None,
) -> LoadBalancerController:
    """Create a LoadBalancerController wired to the LAN's UPnP gateway.

    Discovers the gateway, then resolves the local and external addresses
    once; both stay fixed for the controller's lifetime.

    Args:
        config: Configuration (environment config by default).
        registry: Registry to share (a fresh one by default).

    Returns:
        LoadBalancerController: Ready to reconcile load balancers.

    Raises:
        GatewayDiscoveryError: If no gateway is found.
        AddressResolutionError: If an address cannot be resolved.
    """
    config = config or get_config()

    client = UpnpIgdClient.discover(discover_delay_ms=config.upnp_discover_delay_ms)
    identity = discover_gateway_identity(client.control_host, config)

    logger.info("Initialized LoadBalancerController")
    return LoadBalancerController(client=client, identity=identity, registry=registry)


def make_cloud_provider(config: EdgeConfig | None = None) -> EdgeCloudProvider:
    """Create the edge cloud provider; the gateway is discovered on first use."""
    return EdgeCloudProvider(lambda: make_load_balancer_controller(config))


__all__ = ["make_cloud_provider", "make_load_balancer_controller"]
