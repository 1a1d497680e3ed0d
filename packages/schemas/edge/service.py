"""Service and Node schemas.

Kubernetes-shaped, read-only inputs of the reconciliation core. Field
names accept both snake_case and the camelCase spelling used in Kubernetes
manifests (``nodePort``, ``clusterIP``, ``loadBalancerIP`` ...).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"
CLUSTER_IP_NONE = "None"
IP_FAMILY_IPV4 = "IPv4"
SERVICE_AFFINITY_NONE = "None"
NODE_INTERNAL_IP = "InternalIP"

_KUBE_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class ServicePort(BaseModel):
    """A single port declared by a service.

    ``target_port`` keeps the int-or-string nature of Kubernetes: a string
    value is a symbolic (named) container port.
    """

    model_config = _KUBE_MODEL_CONFIG

    name: str = Field(default="", description="Port name, unique within the service")
    protocol: str = Field(default="TCP", description="TCP, UDP or SCTP")
    port: int = Field(..., ge=1, le=65535, description="Port exposed by the load balancer")
    target_port: int | str | None = Field(
        default=None,
        description="Container port, numeric or symbolic",
    )
    node_port: int = Field(
        default=0,
        ge=0,
        le=65535,
        description="Port opened on every node (0 when not allocated)",
    )

    @property
    def has_symbolic_target_port(self) -> bool:
        return isinstance(self.target_port, str)


class ServiceMetadata(BaseModel):
    """Object metadata relevant to load balancing."""

    model_config = _KUBE_MODEL_CONFIG

    name: str = Field(..., min_length=1)
    namespace: str = Field(default="default", min_length=1)
    annotations: dict[str, str] = Field(default_factory=dict)


class ServiceSpec(BaseModel):
    """Service spec fields inspected by the validator and the controller."""

    model_config = _KUBE_MODEL_CONFIG

    type: str = Field(default="ClusterIP", description="Service type")
    cluster_ip: str | None = Field(default=None, alias="clusterIP")
    ports: list[ServicePort] = Field(default_factory=list)
    publish_not_ready_addresses: bool = False
    ip_family: str | None = None
    session_affinity: str = SERVICE_AFFINITY_NONE
    load_balancer_ip: str = Field(default="", alias="loadBalancerIP")
    load_balancer_source_ranges: list[str] = Field(default_factory=list)


class Service(BaseModel):
    """A service requesting an external load balancer.

    Examples:
        >>> service = Service.model_validate(
        ...     {
        ...         "metadata": {"name": "web", "namespace": "default"},
        ...         "spec": {
        ...             "type": "LoadBalancer",
        ...             "ports": [{"name": "http", "port": 80, "nodePort": 30080}],
        ...         },
        ...     }
        ... )
        >>> service.spec.ports[0].node_port
        30080
    """

    model_config = _KUBE_MODEL_CONFIG

    metadata: ServiceMetadata
    spec: ServiceSpec = Field(default_factory=ServiceSpec)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations


class NodeAddress(BaseModel):
    """One address reported by a node (InternalIP, ExternalIP, Hostname ...)."""

    model_config = _KUBE_MODEL_CONFIG

    type: str
    address: str


class Node(BaseModel):
    """A cluster node that may host the mapped node ports."""

    model_config = _KUBE_MODEL_CONFIG

    name: str = Field(..., min_length=1)
    addresses: list[NodeAddress] = Field(default_factory=list)

    def internal_addresses(self) -> list[str]:
        return [a.address for a in self.addresses if a.type == NODE_INTERNAL_IP]


class ClusterManifest(BaseModel):
    """Nodes and services of one cluster, as read from a manifest file."""

    model_config = _KUBE_MODEL_CONFIG

    cluster: str | None = None
    nodes: list[Node] = Field(default_factory=list)
    services: list[Service] = Field(default_factory=list)


__all__ = [
    "CLUSTER_IP_NONE",
    "ClusterManifest",
    "IP_FAMILY_IPV4",
    "NODE_INTERNAL_IP",
    "Node",
    "NodeAddress",
    "SERVICE_AFFINITY_NONE",
    "SERVICE_TYPE_LOAD_BALANCER",
    "Service",
    "ServiceMetadata",
    "ServicePort",
    "ServiceSpec",
]
