"""Minimal edit between two port mapping sets.

The gateway protocol has no "modify" primitive: a rule whose internal port
changes is a removal of the old rule plus an addition of the new one.
"""

from collections.abc import Iterable

from packages.schemas.edge import MappingKey, MappingRule


def diff_rule_sets(
    old: Iterable[MappingRule],
    new: Iterable[MappingRule],
) -> tuple[frozenset[MappingRule], frozenset[MappingRule]]:
    """Compute the rules to add and to remove to move from ``old`` to ``new``.

    Rules present in both sets generate no gateway call.

    Args:
        old: Rules believed installed.
        new: Rules that should be installed.

    Returns:
        tuple: ``(to_add, to_remove)``.

    Example:
        >>> a = MappingRule(protocol="TCP", external_port=80, internal_host="10.0.0.1",
        ...                 internal_port=30080)
        >>> b = MappingRule(protocol="TCP", external_port=80, internal_host="10.0.0.1",
        ...                 internal_port=30081)
        >>> to_add, to_remove = diff_rule_sets({a}, {b})
        >>> (to_add == {b}, to_remove == {a})
        (True, True)
    """
    to_be_added: dict[MappingKey, MappingRule] = {rule.key: rule for rule in new}
    to_remove: set[MappingRule] = set()

    for rule in old:
        if rule.key in to_be_added:
            del to_be_added[rule.key]
        else:
            to_remove.add(rule)

    return frozenset(to_be_added.values()), frozenset(to_remove)


def ordered(rules: Iterable[MappingRule]) -> list[MappingRule]:
    """Stable application order for a set of rules (by protocol, then ports)."""
    return sorted(rules, key=lambda r: (r.protocol.value, *r.key[1:]))


__all__ = ["diff_rule_sets", "ordered"]
