"""Shared pytest fixtures for the edge load balancer test suite.

Provides the gateway identity, nodes, service builders and a recording
gateway client used across all test modules.
"""

from collections.abc import Callable
from typing import Any

import pytest

from packages.core.registry import ReconciliationRegistry
from packages.core.use_cases.reconcile_load_balancer import LoadBalancerController
from packages.core.validator import (
    LOAD_BALANCER_TYPE_ANNOTATION,
    UPNP_IGD_LOAD_BALANCER_TYPE,
)
from packages.schemas.edge import GatewayIdentity, Node, NodeAddress, Service
from tests.utils.mocks import RecordingGatewayClient

LOCAL_ADDRESS = "192.168.1.10"
EXTERNAL_ADDRESS = "203.0.113.7"
CLUSTER = "kubernetes"


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host credentials and settings out of configuration tests."""
    for var in (
        "EDGE_USERNAME",
        "EDGE_PASSWORD",
        "MIDOKURA_USERNAME",
        "MIDOKURA_PASSWORD",
        "CLUSTER_NAME",
        "LOG_LEVEL",
        "EXTERNAL_IP_SOURCES",
    ):
        monkeypatch.delenv(var, raising=False)


# ========== Gateway Fixtures ==========


@pytest.fixture
def identity() -> GatewayIdentity:
    return GatewayIdentity(local_address=LOCAL_ADDRESS, external_address=EXTERNAL_ADDRESS)


@pytest.fixture
def gateway_client() -> RecordingGatewayClient:
    return RecordingGatewayClient()


@pytest.fixture
def registry() -> ReconciliationRegistry:
    return ReconciliationRegistry()


@pytest.fixture
def controller(
    gateway_client: RecordingGatewayClient,
    identity: GatewayIdentity,
    registry: ReconciliationRegistry,
) -> LoadBalancerController:
    return LoadBalancerController(client=gateway_client, identity=identity, registry=registry)


# ========== Cluster Fixtures ==========


@pytest.fixture
def nodes() -> list[Node]:
    """Two nodes; the second one is the host this controller runs on."""
    return [
        Node(
            name="node-0",
            addresses=[
                NodeAddress(type="Hostname", address="node-0"),
                NodeAddress(type="InternalIP", address="192.168.1.20"),
            ],
        ),
        Node(
            name="node-1",
            addresses=[
                NodeAddress(type="ExternalIP", address="198.51.100.4"),
                NodeAddress(type="InternalIP", address=LOCAL_ADDRESS),
            ],
        ),
    ]


def build_service(
    name: str = "web",
    namespace: str = "default",
    ports: list[dict[str, Any]] | None = None,
    annotations: dict[str, str] | None = None,
    **spec: Any,
) -> Service:
    """Build a valid UPnP IGD LoadBalancer service; keyword args override spec fields."""
    if ports is None:
        ports = [
            {"name": "http", "protocol": "TCP", "port": 80, "targetPort": 8080, "nodePort": 30080},
            {"name": "dns", "protocol": "UDP", "port": 53, "targetPort": 53, "nodePort": 30053},
        ]
    if annotations is None:
        annotations = {LOAD_BALANCER_TYPE_ANNOTATION: UPNP_IGD_LOAD_BALANCER_TYPE}
    return Service.model_validate(
        {
            "metadata": {"name": name, "namespace": namespace, "annotations": annotations},
            "spec": {"type": "LoadBalancer", "ports": ports, **spec},
        }
    )


@pytest.fixture
def service_factory() -> Callable[..., Service]:
    return build_service


@pytest.fixture
def service() -> Service:
    return build_service()
