"""MappingRule entity schema.

Represents one port forwarding rule installed on a UPnP IGD gateway
(external port + protocol forwarded to an internal host + port).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Protocol(str, Enum):
    """Transport protocols a gateway port mapping can forward."""

    TCP = "TCP"
    UDP = "UDP"


# (protocol, external_port, internal_host, internal_port, port_name)
MappingKey = tuple[Protocol, int, str, int, str]


class MappingRule(BaseModel):
    """Immutable port mapping rule.

    Two rules are the same rule when protocol, external port, internal host,
    internal port and the declared service port name match. ``description``
    is carried to the gateway when the rule is added but never compared.

    Examples:
        >>> rule = MappingRule(
        ...     protocol=Protocol.TCP,
        ...     external_port=80,
        ...     internal_host="192.168.1.10",
        ...     internal_port=30080,
        ...     port_name="http",
        ...     description="kubernetes/default/web/http",
        ... )
        >>> rule.key
        (<Protocol.TCP: 'TCP'>, 80, '192.168.1.10', 30080, 'http')
    """

    model_config = ConfigDict(frozen=True)

    protocol: Protocol = Field(..., description="Forwarded transport protocol")
    external_port: int = Field(
        ...,
        ge=1,
        le=65535,
        description="Port opened on the public side of the gateway",
    )
    internal_host: str = Field(
        ...,
        description="LAN address the traffic is forwarded to (empty when unknown)",
        examples=["192.168.1.10", ""],
    )
    internal_port: int = Field(
        ...,
        ge=1,
        le=65535,
        description="Port on the internal host (the service node port)",
    )
    port_name: str = Field(
        default="",
        description="Name of the declared service port this rule was derived from",
    )
    description: str = Field(
        default="",
        description="Human readable label stored on the gateway",
        examples=["kubernetes/default/web/http"],
    )

    @property
    def key(self) -> MappingKey:
        return (
            self.protocol,
            self.external_port,
            self.internal_host,
            self.internal_port,
            self.port_name,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MappingRule):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return (
            f"{self.protocol.value} {self.external_port} -> "
            f"{self.internal_host or '*'}:{self.internal_port}"
        )


__all__ = ["MappingKey", "MappingRule", "Protocol"]
