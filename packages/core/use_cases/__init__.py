"""Core use cases - Application service orchestration.

Use cases orchestrate workflows across adapters without containing framework-specific code.
"""

from __future__ import annotations

from packages.core.use_cases.reconcile_load_balancer import (
    LoadBalancerController,
    ReconcileMode,
    build_mappings,
    find_node_internal_ip,
    get_load_balancer_name,
)

__all__ = [
    "LoadBalancerController",
    "ReconcileMode",
    "build_mappings",
    "find_node_internal_ip",
    "get_load_balancer_name",
]
