"""Tests for diff_rule_sets - minimal add/remove computation."""

import itertools

import pytest

from packages.core.differ import diff_rule_sets, ordered
from packages.schemas.edge import MappingRule, Protocol

NODE_IP = "192.0.2.1"


def rule(external_port: int, internal_port: int, name: str = "", protocol: str = "TCP") -> MappingRule:
    return MappingRule(
        protocol=Protocol(protocol),
        external_port=external_port,
        internal_host=NODE_IP,
        internal_port=internal_port,
        port_name=name,
    )


def test_worked_example_removes_changed_port_and_keeps_unchanged() -> None:
    """svc-port-1 moves from node port 34567 to 23456; svc-port-2 stays."""
    a = rule(12345, 34567, "svc-port-1")
    b = rule(12345, 23456, "svc-port-2")
    c = rule(12345, 23456, "svc-port-1")

    to_add, to_remove = diff_rule_sets({a, b}, {b, c})

    assert to_remove == {a}
    assert to_add == {c}


def test_same_set_yields_no_operations() -> None:
    rules = {rule(80, 30080), rule(53, 30053, protocol="UDP")}

    assert diff_rule_sets(rules, rules) == (frozenset(), frozenset())


def test_from_empty_adds_everything() -> None:
    rules = {rule(80, 30080), rule(443, 30443)}

    assert diff_rule_sets(set(), rules) == (frozenset(rules), frozenset())


def test_to_empty_removes_everything() -> None:
    rules = {rule(80, 30080), rule(443, 30443)}

    assert diff_rule_sets(rules, set()) == (frozenset(), frozenset(rules))


def test_internal_port_change_is_remove_plus_add() -> None:
    old, new = rule(80, 30080), rule(80, 31080)

    assert diff_rule_sets({old}, {new}) == (frozenset({new}), frozenset({old}))


def test_protocol_is_part_of_identity() -> None:
    tcp, udp = rule(53, 30053), rule(53, 30053, protocol="UDP")

    assert diff_rule_sets({tcp}, {udp}) == (frozenset({udp}), frozenset({tcp}))


def test_description_change_is_not_a_difference() -> None:
    old = rule(80, 30080, "http")
    new = old.model_copy(update={"description": "kubernetes/default/web/http"})

    assert diff_rule_sets({old}, {new}) == (frozenset(), frozenset())


_POOL = [
    rule(80, 30080, "http"),
    rule(80, 31080, "http"),
    rule(443, 30443, "https"),
    rule(53, 30053, "dns", protocol="UDP"),
]
_SUBSETS = [
    set(c) for n in range(len(_POOL) + 1) for c in itertools.combinations(_POOL, n)
]


@pytest.mark.parametrize("old", _SUBSETS)
def test_diff_is_minimal_and_reaches_new(old: set[MappingRule]) -> None:
    for new in _SUBSETS:
        to_add, to_remove = diff_rule_sets(old, new)

        assert not (to_add & old)
        assert to_remove <= old
        assert (old - to_remove) | to_add == new


def test_ordered_is_stable_by_protocol_then_port() -> None:
    rules = [rule(443, 30443), rule(53, 30053, protocol="UDP"), rule(80, 30080)]

    assert [(r.protocol.value, r.external_port) for r in ordered(rules)] == [
        ("TCP", 80),
        ("TCP", 443),
        ("UDP", 53),
    ]
