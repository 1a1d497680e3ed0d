"""EdgeCloudProvider - cloud provider facade for edge deployments.

Only the load balancer interface is supported; instances, zones, clusters
and routes are reported as unavailable.
"""

import logging
from collections.abc import Callable
from threading import Lock

from packages.core.use_cases.reconcile_load_balancer import LoadBalancerController

logger = logging.getLogger(__name__)

PROVIDER_NAME = "edge"


class EdgeCloudProvider:
    """Cloud provider exposing a lazily created LoadBalancerController.

    Args:
        controller_factory: Builds the controller (discovers the gateway and
            its addresses). Called until it succeeds once.
    """

    def __init__(self, controller_factory: Callable[[], LoadBalancerController]) -> None:
        self._controller_factory = controller_factory
        self._controller: LoadBalancerController | None = None
        self._lock = Lock()

    def load_balancer(self) -> tuple[LoadBalancerController | None, bool]:
        """Return the load balancer interface and whether it is available."""
        with self._lock:
            if self._controller is None:
                try:
                    self._controller = self._controller_factory()
                except Exception as e:
                    logger.error(f"Error getting LoadBalancer interface: {e}")
                    return None, False
        logger.info("LoadBalancer API interface available")
        return self._controller, True

    def instances(self) -> tuple[None, bool]:
        return None, False

    def zones(self) -> tuple[None, bool]:
        return None, False

    def clusters(self) -> tuple[None, bool]:
        return None, False

    def routes(self) -> tuple[None, bool]:
        return None, False

    def provider_name(self) -> str:
        return PROVIDER_NAME

    def has_cluster_id(self) -> bool:
        return True


__all__ = ["EdgeCloudProvider", "PROVIDER_NAME"]
