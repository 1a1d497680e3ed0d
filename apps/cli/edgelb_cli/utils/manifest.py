"""Manifest loading for CLI commands.

A manifest is a YAML (or JSON) document listing the nodes and services of
one cluster, using Kubernetes field names.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from packages.common.config import EdgeConfig
from packages.schemas.edge import ClusterManifest


class ManifestError(ValueError):
    """Exception raised when a manifest cannot be loaded."""


def load_manifest(path: Path) -> ClusterManifest:
    """Load and validate a cluster manifest.

    Raises:
        ManifestError: If the file is unreadable, not YAML, or not a manifest.
    """
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"unable to read manifest '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"invalid YAML in manifest '{path}': {e}") from e

    if not isinstance(content, dict):
        raise ManifestError(f"manifest '{path}' must contain a mapping")

    try:
        return ClusterManifest.model_validate(content)
    except ValidationError as e:
        raise ManifestError(f"invalid manifest '{path}': {e}") from e


def resolve_cluster_name(
    option: str | None, manifest: ClusterManifest, config: EdgeConfig
) -> str:
    """Pick the cluster name: command option, then manifest, then config."""
    return option or manifest.cluster or config.cluster_name


__all__ = ["ManifestError", "load_manifest", "resolve_cluster_name"]
