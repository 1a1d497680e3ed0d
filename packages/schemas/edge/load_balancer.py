"""Load balancer state schemas.

``LoadBalancerRecord`` is what the registry remembers per load balancer;
``GatewayIdentity`` holds the two addresses discovered once at startup.
"""

import ipaddress

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.schemas.edge.mapping_rule import MappingRule


def _ipv4(value: str) -> str:
    try:
        return str(ipaddress.IPv4Address(value))
    except ValueError as e:
        raise ValueError(f"'{value}' is not an IPv4 address") from e


class LoadBalancerStatus(BaseModel):
    """Status reported back for an ensured load balancer."""

    model_config = ConfigDict(frozen=True)

    advertised_address: str = Field(
        ...,
        description="External (public) address of the gateway",
        examples=["203.0.113.7"],
    )

    @property
    def ingress(self) -> list[dict[str, str]]:
        """Kubernetes ``status.loadBalancer.ingress`` rendering."""
        return [{"ip": self.advertised_address}]


class LoadBalancerRecord(BaseModel):
    """Mappings believed installed for one load balancer, plus its status."""

    model_config = ConfigDict(frozen=True)

    installed_mappings: frozenset[MappingRule] = Field(default_factory=frozenset)
    status: LoadBalancerStatus


class GatewayIdentity(BaseModel):
    """Addresses used to reach and to advertise the gateway.

    Attributes:
        local_address: Address of this host on the interface towards the gateway.
        external_address: Public address of the gateway (NAT external side).
    """

    model_config = ConfigDict(frozen=True)

    local_address: str
    external_address: str

    @field_validator("local_address", "external_address")
    @classmethod
    def validate_ipv4(cls, v: str) -> str:
        return _ipv4(v)


__all__ = ["GatewayIdentity", "LoadBalancerRecord", "LoadBalancerStatus"]
