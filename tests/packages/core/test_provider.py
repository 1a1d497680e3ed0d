"""Tests for EdgeCloudProvider - cloud provider facade."""

from unittest.mock import MagicMock

from packages.core.provider import PROVIDER_NAME, EdgeCloudProvider


def test_load_balancer_is_built_once() -> None:
    controller = MagicMock()
    factory = MagicMock(return_value=controller)
    provider = EdgeCloudProvider(factory)

    assert provider.load_balancer() == (controller, True)
    assert provider.load_balancer() == (controller, True)
    factory.assert_called_once()


def test_load_balancer_unavailable_when_factory_fails() -> None:
    factory = MagicMock(side_effect=[RuntimeError("no gateway"), MagicMock()])
    provider = EdgeCloudProvider(factory)

    assert provider.load_balancer() == (None, False)
    # A later call retries the discovery
    controller, available = provider.load_balancer()
    assert available is True and controller is not None


def test_unsupported_interfaces() -> None:
    provider = EdgeCloudProvider(MagicMock())

    assert provider.instances() == (None, False)
    assert provider.zones() == (None, False)
    assert provider.clusters() == (None, False)
    assert provider.routes() == (None, False)
    assert provider.provider_name() == PROVIDER_NAME == "edge"
    assert provider.has_cluster_id() is True
