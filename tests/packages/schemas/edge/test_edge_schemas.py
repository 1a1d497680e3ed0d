"""Tests for edge schemas: MappingRule, Service and GatewayIdentity."""

import pytest
from pydantic import ValidationError

from packages.schemas.edge import (
    ClusterManifest,
    GatewayIdentity,
    LoadBalancerStatus,
    MappingRule,
    Node,
    Protocol,
    Service,
)


def make_rule(**overrides) -> MappingRule:
    fields = {
        "protocol": "TCP",
        "external_port": 80,
        "internal_host": "192.168.1.10",
        "internal_port": 30080,
        "port_name": "http",
    }
    fields.update(overrides)
    return MappingRule(**fields)


def test_mapping_rule_equality_ignores_description() -> None:
    assert make_rule(description="a") == make_rule(description="b")
    assert hash(make_rule(description="a")) == hash(make_rule(description="b"))
    assert len({make_rule(description="a"), make_rule(description="b")}) == 1


@pytest.mark.parametrize(
    "field,value",
    [
        ("protocol", "UDP"),
        ("external_port", 8080),
        ("internal_host", "192.168.1.11"),
        ("internal_port", 30081),
        ("port_name", "web"),
    ],
)
def test_mapping_rule_identity_fields(field: str, value: object) -> None:
    assert make_rule() != make_rule(**{field: value})


@pytest.mark.parametrize("field", ["external_port", "internal_port"])
def test_mapping_rule_rejects_zero_ports(field: str) -> None:
    with pytest.raises(ValidationError):
        make_rule(**{field: 0})


def test_mapping_rule_rejects_unknown_protocol() -> None:
    with pytest.raises(ValidationError):
        make_rule(protocol="SCTP")


def test_mapping_rule_is_immutable() -> None:
    rule = make_rule()

    with pytest.raises(ValidationError):
        rule.external_port = 81


def test_mapping_rule_str() -> None:
    assert str(make_rule(protocol=Protocol.UDP, external_port=53, internal_port=30053)) == (
        "UDP 53 -> 192.168.1.10:30053"
    )
    assert str(make_rule(internal_host="")) == "TCP 80 -> *:30080"


def test_service_accepts_kubernetes_field_names() -> None:
    service = Service.model_validate(
        {
            "metadata": {"name": "web", "namespace": "prod"},
            "spec": {
                "type": "LoadBalancer",
                "clusterIP": "10.96.0.12",
                "loadBalancerIP": "203.0.113.50",
                "loadBalancerSourceRanges": ["10.0.0.0/8"],
                "ports": [{"name": "http", "port": 80, "targetPort": "web", "nodePort": 30080}],
            },
        }
    )

    assert service.namespace == "prod"
    assert service.spec.cluster_ip == "10.96.0.12"
    assert service.spec.load_balancer_ip == "203.0.113.50"
    assert service.spec.load_balancer_source_ranges == ["10.0.0.0/8"]
    assert service.spec.ports[0].has_symbolic_target_port is True
    assert service.spec.ports[0].protocol == "TCP"


def test_service_defaults() -> None:
    service = Service.model_validate({"metadata": {"name": "web"}})

    assert service.namespace == "default"
    assert service.annotations == {}
    assert service.spec.type == "ClusterIP"
    assert service.spec.session_affinity == "None"
    assert service.spec.ports == []


def test_numeric_target_port_is_not_symbolic() -> None:
    service = Service.model_validate(
        {"metadata": {"name": "web"}, "spec": {"ports": [{"port": 80, "targetPort": 8080}]}}
    )

    assert service.spec.ports[0].has_symbolic_target_port is False


def test_node_internal_addresses() -> None:
    node = Node.model_validate(
        {
            "name": "node-1",
            "addresses": [
                {"type": "Hostname", "address": "node-1"},
                {"type": "InternalIP", "address": "192.168.1.10"},
                {"type": "ExternalIP", "address": "198.51.100.4"},
            ],
        }
    )

    assert node.internal_addresses() == ["192.168.1.10"]


def test_cluster_manifest_defaults() -> None:
    manifest = ClusterManifest.model_validate({})

    assert manifest.cluster is None
    assert manifest.nodes == []
    assert manifest.services == []


def test_gateway_identity_requires_ipv4() -> None:
    with pytest.raises(ValidationError):
        GatewayIdentity(local_address="fe80::1", external_address="203.0.113.7")


def test_status_ingress_rendering() -> None:
    assert LoadBalancerStatus(advertised_address="203.0.113.7").ingress == [{"ip": "203.0.113.7"}]
