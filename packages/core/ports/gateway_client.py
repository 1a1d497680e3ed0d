"""GatewayClientPort - Port interface for gateway port mapping operations.

Core layer defines this interface; adapters (packages/gateway) implement it
over whatever control protocol the device speaks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class GatewayClientPort(ABC):
    """Add and remove single port mappings on a NAT gateway.

    Both operations must be idempotent: adding a mapping that is already
    present succeeds without duplication, and deleting an absent mapping
    succeeds as a no-op.
    """

    @abstractmethod
    def add_port_mapping(
        self,
        external_port: int,
        protocol: str,
        internal_port: int,
        internal_host: str,
        description: str,
    ) -> None:
        """Forward ``protocol``/``external_port`` to ``internal_host``:``internal_port``.

        Raises:
            Exception: If the gateway rejects the mapping.
        """

    @abstractmethod
    def delete_port_mapping(self, external_port: int, protocol: str) -> None:
        """Remove the mapping for ``protocol``/``external_port`` if present.

        Raises:
            Exception: If the gateway fails to process the request.
        """


__all__ = ["GatewayClientPort"]
