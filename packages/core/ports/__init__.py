"""Ports for core use-cases."""

from __future__ import annotations

from packages.core.ports.gateway_client import GatewayClientPort

__all__ = ["GatewayClientPort"]
