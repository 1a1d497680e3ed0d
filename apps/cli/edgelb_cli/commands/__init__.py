"""Edge load balancer CLI commands package.

- addresses: Discover the gateway and show the local and external addresses
- validate: Check services of a manifest without touching the gateway
- apply: Ensure the load balancers of a manifest
- apply (delete): Ensure the load balancers of a manifest are deleted
"""

__all__ = ["addresses", "apply", "validate"]
