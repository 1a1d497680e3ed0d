"""Address discovery for the gateway identity.

Two addresses are resolved once at startup and never change afterwards:

- the local address of this host on the interface that reaches the
  gateway (the only internal host mappings may target)
- the external address of the gateway as seen from the internet (the
  address advertised in every load balancer status)
"""

import ipaddress
import logging
import socket
from collections import Counter
from collections.abc import Sequence

import httpx

from packages.common.config import EdgeConfig
from packages.common.resilience import resilient_external_call
from packages.core.errors import AddressResolutionError
from packages.schemas.edge import GatewayIdentity

logger = logging.getLogger(__name__)


def get_local_address_to_host(host: str, probe_port: int = 12345) -> str:
    """Return the local address the routing table picks to reach ``host``.

    A UDP socket is "connected" only to read its local address: UDP has no
    handshake, so nothing is sent on the wire and the port is irrelevant.

    Raises:
        AddressResolutionError: If no route to ``host`` exists.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect((host, probe_port))
            return s.getsockname()[0]
    except OSError as e:
        raise AddressResolutionError(f"no local address towards '{host}': {e}") from e


def _fetch_ip(client: httpx.Client, url: str) -> str:
    response = client.get(url)
    response.raise_for_status()
    return response.text.strip()


def get_external_ip(
    sources: Sequence[str],
    timeout: float = 5.0,
    max_attempts: int = 3,
    http_client: httpx.Client | None = None,
) -> str:
    """Resolve the public IPv4 address by consensus of several echo services.

    Each source is asked once (with retries); answers that are not IPv4
    addresses are discarded and the most voted address wins. Ties go to
    the address seen first.

    Args:
        sources: URLs answering with the caller's address in plain text.
        timeout: Per-request timeout in seconds.
        max_attempts: Attempts per source before it is skipped.
        http_client: Optional client to use instead of a new one.

    Returns:
        str: The external IPv4 address.

    Raises:
        AddressResolutionError: If no source returned a usable address.
    """
    fetch = resilient_external_call(
        max_attempts=max_attempts,
        min_wait=0.5,
        max_wait=5,
        retry_on=(httpx.TransportError,),
    )(_fetch_ip)

    votes: Counter[str] = Counter()
    client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        for url in sources:
            try:
                answer = fetch(client, url)
            except httpx.HTTPError as e:
                logger.warning(f"External IP source {url} failed: {e}")
                continue
            try:
                address = str(ipaddress.IPv4Address(answer))
            except ValueError:
                logger.warning(f"External IP source {url} returned a non IPv4 answer")
                continue
            votes[address] += 1
    finally:
        if http_client is None:
            client.close()

    if not votes:
        raise AddressResolutionError("external IP could not be determined: no source answered")

    address, count = votes.most_common(1)[0]
    if len(votes) > 1:
        logger.warning(f"External IP sources disagree: {dict(votes)}; using {address}")
    logger.debug(f"External IP {address} ({count}/{sum(votes.values())} votes)")
    return address


def discover_gateway_identity(
    control_host: str,
    config: EdgeConfig,
    http_client: httpx.Client | None = None,
) -> GatewayIdentity:
    """Resolve the local and external addresses for a gateway.

    Args:
        control_host: Hostname or address of the gateway's control endpoint.
        config: Configuration with the probe port and external IP sources.
        http_client: Optional HTTP client for the external IP lookup.

    Returns:
        GatewayIdentity: Immutable pair of addresses.
    """
    local_address = get_local_address_to_host(control_host, config.probe_port)
    external_address = get_external_ip(
        config.external_ip_sources,
        timeout=config.external_ip_timeout,
        max_attempts=config.external_ip_max_attempts,
        http_client=http_client,
    )
    identity = GatewayIdentity(local_address=local_address, external_address=external_address)
    logger.info(
        f"Gateway addresses: local={identity.local_address}, "
        f"external={identity.external_address}"
    )
    return identity


__all__ = [
    "discover_gateway_identity",
    "get_external_ip",
    "get_local_address_to_host",
]
