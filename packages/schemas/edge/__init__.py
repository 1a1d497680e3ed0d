"""Edge load balancer schemas.

Represents the Kubernetes-shaped inputs (services, nodes) and the port
mapping state the reconciliation core keeps for a UPnP IGD gateway.
"""

from packages.schemas.edge.load_balancer import (
    GatewayIdentity,
    LoadBalancerRecord,
    LoadBalancerStatus,
)
from packages.schemas.edge.mapping_rule import MappingKey, MappingRule, Protocol
from packages.schemas.edge.service import (
    CLUSTER_IP_NONE,
    IP_FAMILY_IPV4,
    NODE_INTERNAL_IP,
    SERVICE_AFFINITY_NONE,
    SERVICE_TYPE_LOAD_BALANCER,
    ClusterManifest,
    Node,
    NodeAddress,
    Service,
    ServiceMetadata,
    ServicePort,
    ServiceSpec,
)

__all__ = [
    "CLUSTER_IP_NONE",
    "ClusterManifest",
    "GatewayIdentity",
    "IP_FAMILY_IPV4",
    "LoadBalancerRecord",
    "LoadBalancerStatus",
    "MappingKey",
    "MappingRule",
    "NODE_INTERNAL_IP",
    "Node",
    "NodeAddress",
    "Protocol",
    "SERVICE_AFFINITY_NONE",
    "SERVICE_TYPE_LOAD_BALANCER",
    "Service",
    "ServiceMetadata",
    "ServicePort",
    "ServiceSpec",
]
