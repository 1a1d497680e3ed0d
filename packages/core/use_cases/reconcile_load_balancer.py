"""LoadBalancerController - Converge gateway port mappings to a service spec.

Implements the four load balancer entry points of a cloud provider
(get / ensure / update / ensure-deleted) on top of one reconcile transition:

1. Validate the service (skipped for deletions)
2. Resolve the node that exposes this process's local address
3. Load the previously installed mappings from the registry, or assume a
   prior state when there is no record (everything for deletions, nothing
   for creations)
4. Build the desired mappings (empty for deletions)
5. Diff and apply: removals first, then additions, stopping at the first
   gateway error
6. Commit the registry only when every gateway call succeeded

A failure in step 5 leaves the registry untouched. Because gateway add and
delete calls are idempotent, a later reconciliation re-issues the same diff
and converges.
"""

import logging
from collections.abc import Sequence
from enum import Enum

from packages.common.tracing import TracingContext
from packages.core.differ import diff_rule_sets, ordered
from packages.core.errors import (
    AddressResolutionError,
    CrossHostMappingError,
    GatewayClientError,
    LoadBalancerNotFoundError,
)
from packages.core.ports.gateway_client import GatewayClientPort
from packages.core.registry import ReconciliationRegistry
from packages.core.validator import validate_service
from packages.schemas.edge import (
    GatewayIdentity,
    LoadBalancerRecord,
    LoadBalancerStatus,
    MappingRule,
    Node,
    Protocol,
    Service,
)

logger = logging.getLogger(__name__)

_SUPPORTED_PROTOCOLS = {p.value for p in Protocol}


class ReconcileMode(str, Enum):
    """Reconciliation variants behind the load balancer entry points."""

    ENSURE = "ensure"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_delete(self) -> bool:
        return self is ReconcileMode.DELETE

    @property
    def creates_if_missing(self) -> bool:
        return self is not ReconcileMode.UPDATE


def get_load_balancer_name(cluster_name: str, service: Service) -> str:
    """Return the ``cluster/namespace/name`` identity of a service's load balancer."""
    return f"{cluster_name}/{service.namespace}/{service.name}"


def find_node_internal_ip(local_address: str, nodes: Sequence[Node]) -> str:
    """Return the node internal IP equal to ``local_address``.

    Raises:
        AddressResolutionError: If no node exposes that internal IP.
    """
    for node in nodes:
        if local_address in node.internal_addresses():
            return local_address
    raise AddressResolutionError(f"no nodes with internal IP '{local_address}'")


def build_mappings(
    name: str,
    service: Service,
    internal_host: str,
    skip_unmappable: bool = False,
) -> frozenset[MappingRule]:
    """Build one mapping rule per declared service port.

    Args:
        name: Load balancer name, used as the description prefix.
        service: Service whose ports are mapped.
        internal_host: Node address the ports are forwarded to.
        skip_unmappable: Skip ports that can never have been installed
            (unsupported protocol, zero port) instead of failing on them.

    Returns:
        frozenset[MappingRule]: Desired mappings.
    """
    rules: set[MappingRule] = set()
    for port in service.spec.ports:
        if skip_unmappable and (port.protocol not in _SUPPORTED_PROTOCOLS or port.node_port == 0):
            logger.debug(f"{name}: skipping unmappable port '{port.name}'")
            continue
        rules.add(
            MappingRule(
                protocol=Protocol(port.protocol),
                external_port=port.port,
                internal_host=internal_host,
                internal_port=port.node_port,
                port_name=port.name,
                description=f"{name}/{port.name}",
            )
        )
    return frozenset(rules)


class LoadBalancerController:
    """Load balancer API for a single UPnP IGD gateway.

    Only one reconciliation per load balancer runs at a time: the registry's
    per-name lock is held for the whole transition. Gateway calls are
    synchronous and block the caller.
    """

    def __init__(
        self,
        client: GatewayClientPort,
        identity: GatewayIdentity,
        registry: ReconciliationRegistry | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Gateway adapter used to add and delete mappings.
            identity: Local and external addresses, resolved once at startup.
            registry: Registry of installed load balancers (a fresh one by default).
        """
        self.client = client
        self.identity = identity
        self.registry = registry if registry is not None else ReconciliationRegistry()

    # ========== Load balancer API ==========

    def get_load_balancer_name(self, cluster_name: str, service: Service) -> str:
        return get_load_balancer_name(cluster_name, service)

    def get_load_balancer(
        self, cluster_name: str, service: Service
    ) -> tuple[LoadBalancerStatus | None, bool]:
        """Return ``(status, exists)`` for a load balancer without side effects."""
        record = self.registry.get(self.get_load_balancer_name(cluster_name, service))
        if record is None:
            return None, False
        return record.status, True

    def ensure_load_balancer(
        self, cluster_name: str, service: Service, nodes: Sequence[Node]
    ) -> LoadBalancerStatus:
        """Create the load balancer, or bring an existing one up to date."""
        record = self._run(ReconcileMode.ENSURE, cluster_name, service, nodes)
        assert record is not None
        return record.status

    def update_load_balancer(
        self, cluster_name: str, service: Service, nodes: Sequence[Node]
    ) -> None:
        """Update an existing load balancer.

        Raises:
            LoadBalancerNotFoundError: If the load balancer was never ensured.
        """
        self._run(ReconcileMode.UPDATE, cluster_name, service, nodes)

    def ensure_load_balancer_deleted(self, cluster_name: str, service: Service) -> None:
        """Remove the load balancer's mappings; succeeds if it did not exist."""
        self._run(ReconcileMode.DELETE, cluster_name, service, None)

    # ========== Reconciliation ==========

    def _run(
        self,
        mode: ReconcileMode,
        cluster_name: str,
        service: Service,
        nodes: Sequence[Node] | None,
    ) -> LoadBalancerRecord | None:
        with TracingContext(self.get_load_balancer_name(cluster_name, service)):
            try:
                return self.reconcile(mode, cluster_name, service, nodes)
            except Exception as e:
                logger.error(f"{mode.value} load balancer failed: {e}")
                raise

    def reconcile(
        self,
        mode: ReconcileMode,
        cluster_name: str,
        service: Service,
        nodes: Sequence[Node] | None = None,
    ) -> LoadBalancerRecord | None:
        """Converge the gateway to the state requested for ``service``.

        Returns:
            LoadBalancerRecord | None: The committed record, or None after a deletion.

        Raises:
            ValidationRejectedError: If the service is not eligible.
            AddressResolutionError: If no node exposes the local address.
            LoadBalancerNotFoundError: If updating an unknown load balancer.
            CrossHostMappingError: If a mapping targets another host.
            GatewayClientError: If a gateway call fails.
        """
        name = self.get_load_balancer_name(cluster_name, service)

        with TracingContext(name), self.registry.exclusive(name):
            node_ip = ""
            if not mode.is_delete:
                validate_service(name, service)
                try:
                    node_ip = find_node_internal_ip(self.identity.local_address, nodes or [])
                except AddressResolutionError as e:
                    raise AddressResolutionError(f"{name}: {e}") from e

            old_record = self.registry.get(name)
            if old_record is not None:
                old_mappings = old_record.installed_mappings
            elif not mode.creates_if_missing:
                raise LoadBalancerNotFoundError(name, action=mode.value)
            elif mode.is_delete:
                # Unknown prior state: assume everything was installed.
                old_mappings = build_mappings(name, service, node_ip, skip_unmappable=True)
            else:
                old_mappings = frozenset()

            if mode.is_delete:
                new_mappings: frozenset[MappingRule] = frozenset()
            else:
                new_mappings = build_mappings(name, service, node_ip)

            self._patch(old_mappings, new_mappings)

            if mode.is_delete:
                self.registry.remove(name)
                logger.info(f"Deleted load balancer {name}")
                return None

            record = LoadBalancerRecord(
                installed_mappings=new_mappings,
                status=LoadBalancerStatus(advertised_address=self.identity.external_address),
            )
            self.registry.put(name, record)
            logger.info(
                f"Load balancer {name} has {len(new_mappings)} mapping(s) "
                f"on {self.identity.external_address}"
            )
            return record

    def _patch(
        self,
        old: frozenset[MappingRule],
        new: frozenset[MappingRule],
    ) -> None:
        to_add, to_remove = diff_rule_sets(old, new)
        if not to_add and not to_remove:
            logger.debug("Mappings already up to date")
            return

        # Removals first: they free external ports the additions may reuse.
        for rule in ordered(to_remove):
            self._delete_port_mapping(rule)
        for rule in ordered(to_add):
            self._add_port_mapping(rule)

    def _add_port_mapping(self, rule: MappingRule) -> None:
        local_address = self.identity.local_address
        if rule.internal_host != local_address:
            raise CrossHostMappingError(local_address, rule.internal_host)

        logger.info(f"Adding port mapping {rule} ({rule.description})")
        try:
            self.client.add_port_mapping(
                rule.external_port,
                rule.protocol.value,
                rule.internal_port,
                rule.internal_host,
                rule.description,
            )
        except Exception as e:
            raise GatewayClientError("add", rule, str(e)) from e

    def _delete_port_mapping(self, rule: MappingRule) -> None:
        logger.info(f"Deleting port mapping {rule.protocol.value} {rule.external_port}")
        try:
            self.client.delete_port_mapping(rule.external_port, rule.protocol.value)
        except Exception as e:
            raise GatewayClientError("delete", rule, str(e)) from e


__all__ = [
    "LoadBalancerController",
    "ReconcileMode",
    "build_mappings",
    "find_node_internal_ip",
    "get_load_balancer_name",
]
