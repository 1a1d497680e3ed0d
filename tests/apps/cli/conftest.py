"""Fixtures for edgelb CLI tests."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from packages.core.validator import LOAD_BALANCER_TYPE_ANNOTATION, UPNP_IGD_LOAD_BALANCER_TYPE


@pytest.fixture(autouse=True)
def keep_test_logging(mocker: Any) -> None:
    """Leave pytest's log handlers in place while commands run."""
    mocker.patch("apps.cli.edgelb_cli.main.setup_logging")


def lb_service(name: str, ports: list[dict[str, Any]], **spec: Any) -> dict[str, Any]:
    return {
        "metadata": {
            "name": name,
            "namespace": "default",
            "annotations": {LOAD_BALANCER_TYPE_ANNOTATION: UPNP_IGD_LOAD_BALANCER_TYPE},
        },
        "spec": {"type": "LoadBalancer", "ports": ports, **spec},
    }


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    return {
        "cluster": "edge-1",
        "nodes": [
            {"name": "node-1", "addresses": [{"type": "InternalIP", "address": "192.168.1.10"}]}
        ],
        "services": [
            lb_service("web", [{"name": "http", "protocol": "TCP", "port": 80, "nodePort": 30080}]),
            lb_service("dns", [{"name": "dns", "protocol": "UDP", "port": 53, "nodePort": 30053}]),
        ],
    }


@pytest.fixture
def write_manifest(tmp_path: Path):
    def _write(data: Any) -> Path:
        path = tmp_path / "manifest.yaml"
        path.write_text(yaml.safe_dump(data))
        return path

    return _write
