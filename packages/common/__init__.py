"""Common utilities for the edge load balancer.

This package provides reusable utilities like logging, config, tracing
and retry helpers.

Note: Factory functions are available via direct import to avoid circular dependencies:
    from packages.common.factories import make_load_balancer_controller
"""
