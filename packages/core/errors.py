"""Exceptions raised by the edge load balancer core and its adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from packages.schemas.edge import MappingRule


class EdgeLoadBalancerError(Exception):
    """Base class for all edge load balancer errors."""


class ValidationRejectedError(EdgeLoadBalancerError, ValueError):
    """A service is not eligible for a UPnP IGD load balancer.

    The caller should not retry until the service spec changes.
    """

    def __init__(self, load_balancer: str, reason: str) -> None:
        self.load_balancer = load_balancer
        self.reason = reason
        super().__init__(f"{load_balancer}: {reason}")


class AddressResolutionError(EdgeLoadBalancerError):
    """The local or external address needed for a mapping could not be resolved."""


class LoadBalancerNotFoundError(EdgeLoadBalancerError, LookupError):
    """No registry record exists for a load balancer that must exist."""

    def __init__(self, load_balancer: str, action: str = "update") -> None:
        self.load_balancer = load_balancer
        super().__init__(f"cannot {action} load balancer '{load_balancer}': not found")


class GatewayClientError(EdgeLoadBalancerError):
    """A port mapping call to the gateway failed."""

    def __init__(self, operation: str, rule: MappingRule | None, message: str) -> None:
        self.operation = operation
        self.rule = rule
        target = f" {rule}" if rule is not None else ""
        super().__init__(f"{operation} port mapping{target} failed: {message}")


class CrossHostMappingError(EdgeLoadBalancerError):
    """A mapping targets a host other than the one this process runs on.

    UPnP IGD devices usually only accept mappings that point at the
    requesting client, so such requests are refused before reaching the device.
    """

    def __init__(self, local_address: str, internal_host: str) -> None:
        self.local_address = local_address
        self.internal_host = internal_host
        super().__init__(
            f"the local client ({local_address}) cannot be used to set up "
            f"mappings to '{internal_host}'"
        )


class GatewayDiscoveryError(EdgeLoadBalancerError):
    """No UPnP internet gateway device answered discovery."""


__all__ = [
    "AddressResolutionError",
    "CrossHostMappingError",
    "EdgeLoadBalancerError",
    "GatewayClientError",
    "GatewayDiscoveryError",
    "LoadBalancerNotFoundError",
    "ValidationRejectedError",
]
