"""Eligibility checks for services requesting a UPnP IGD load balancer.

Checks run in a fixed order and the first failing one rejects the service.
``loadBalancerIP`` and ``loadBalancerSourceRanges`` are accepted but ignored;
both produce a warning. Source ranges are NOT enforced: clients may connect
from any address.
"""

import logging

from packages.core.errors import ValidationRejectedError
from packages.schemas.edge import (
    CLUSTER_IP_NONE,
    IP_FAMILY_IPV4,
    SERVICE_AFFINITY_NONE,
    SERVICE_TYPE_LOAD_BALANCER,
    Protocol,
    Service,
)

logger = logging.getLogger(__name__)

LOAD_BALANCER_TYPE_ANNOTATION = "midokura.com/load-balancer-type"
UPNP_IGD_LOAD_BALANCER_TYPE = "upnp-igd"

_SUPPORTED_PROTOCOLS = {p.value for p in Protocol}


def validate_service(load_balancer: str, service: Service) -> list[str]:
    """Validate that a service can be mapped onto the gateway.

    Args:
        load_balancer: Load balancer name, used as error and log context.
        service: Service to validate. Never modified.

    Returns:
        list[str]: Warnings for accepted-but-ignored settings (may be empty).

    Raises:
        ValidationRejectedError: If the service is not eligible.
    """

    def reject(reason: str) -> ValidationRejectedError:
        return ValidationRejectedError(load_balancer, reason)

    lb_type = service.annotations.get(LOAD_BALANCER_TYPE_ANNOTATION)
    if lb_type is None:
        raise reject(f"missing '{LOAD_BALANCER_TYPE_ANNOTATION}' annotation")
    if lb_type != UPNP_IGD_LOAD_BALANCER_TYPE:
        raise reject(
            f"unsupported load balancer type "
            f"(annotation '{LOAD_BALANCER_TYPE_ANNOTATION}={lb_type}')"
        )

    spec = service.spec
    if spec.type != SERVICE_TYPE_LOAD_BALANCER:
        raise reject(f"ServiceType must be '{SERVICE_TYPE_LOAD_BALANCER}'")
    if spec.cluster_ip == CLUSTER_IP_NONE:
        raise reject(f"ClusterIP must not be '{CLUSTER_IP_NONE}'")
    if spec.publish_not_ready_addresses:
        raise reject("PublishNotReadyAddresses must be false")
    if spec.ip_family is not None and spec.ip_family != IP_FAMILY_IPV4:
        raise reject(
            f"IPFamily must be {IP_FAMILY_IPV4}: IPFamily '{spec.ip_family}' not supported"
        )
    if spec.session_affinity != SERVICE_AFFINITY_NONE:
        raise reject(
            f"SessionAffinity must be {SERVICE_AFFINITY_NONE}: "
            f"SessionAffinity '{spec.session_affinity}' not supported"
        )

    warnings: list[str] = []
    if spec.load_balancer_ip:
        warnings.append(f"ignoring LoadBalancerIP: '{spec.load_balancer_ip}'")
    if spec.load_balancer_source_ranges:
        # TODO: enforce source ranges once the gateway exposes a filtering primitive
        warnings.append(
            "security warning: ignoring load balancer source range restrictions "
            "(not implemented): clients may connect from any IP address"
        )

    for port in spec.ports:
        if port.protocol not in _SUPPORTED_PROTOCOLS:
            raise reject(
                f"port mapping for port {port.name}: unsupported protocol {port.protocol}"
            )
        if port.has_symbolic_target_port:
            raise reject(
                f"port mapping for port {port.name}: unsupported TargetPort type String"
            )
        if port.node_port == 0:
            raise reject(f"port mapping for port {port.name}: a valid NodePort must be declared")

    for warning in warnings:
        logger.warning(f"{load_balancer}: {warning}")

    return warnings


__all__ = [
    "LOAD_BALANCER_TYPE_ANNOTATION",
    "UPNP_IGD_LOAD_BALANCER_TYPE",
    "validate_service",
]
