"""Tests for controller and provider factories."""

from typing import Any

import pytest

from packages.common.config import EdgeConfig
from packages.common.factories import make_cloud_provider, make_load_balancer_controller
from packages.core.errors import GatewayDiscoveryError
from packages.core.registry import ReconciliationRegistry
from packages.schemas.edge import GatewayIdentity
from tests.utils.mocks import create_mock_upnp

IDENTITY = GatewayIdentity(local_address="192.168.1.10", external_address="203.0.113.7")


@pytest.fixture
def config() -> EdgeConfig:
    return EdgeConfig(_env_file=None, upnp_discover_delay_ms=100)


@pytest.mark.unit
def test_make_controller_wires_discovered_gateway(mocker: Any, config: EdgeConfig) -> None:
    mocker.patch(
        "packages.gateway.upnp_igd.miniupnpc.UPnP", return_value=create_mock_upnp(mocker)
    )
    discover = mocker.patch(
        "packages.common.factories.discover_gateway_identity", return_value=IDENTITY
    )
    registry = ReconciliationRegistry()

    controller = make_load_balancer_controller(config, registry=registry)

    discover.assert_called_once_with("192.168.1.1", config)
    assert controller.identity == IDENTITY
    assert controller.registry is registry


@pytest.mark.unit
def test_provider_retries_after_discovery_failure(mocker: Any, config: EdgeConfig) -> None:
    mocker.patch(
        "packages.gateway.upnp_igd.miniupnpc.UPnP",
        return_value=create_mock_upnp(mocker, devices=0),
    )

    provider = make_cloud_provider(config)

    assert provider.load_balancer() == (None, False)

    mocker.patch(
        "packages.gateway.upnp_igd.miniupnpc.UPnP", return_value=create_mock_upnp(mocker)
    )
    mocker.patch("packages.common.factories.discover_gateway_identity", return_value=IDENTITY)

    controller, supported = provider.load_balancer()

    assert supported is True
    assert controller is not None


@pytest.mark.unit
def test_discovery_error_propagates(mocker: Any, config: EdgeConfig) -> None:
    mocker.patch(
        "packages.gateway.upnp_igd.miniupnpc.UPnP",
        return_value=create_mock_upnp(mocker, devices=0),
    )

    with pytest.raises(GatewayDiscoveryError):
        make_load_balancer_controller(config)
