"""CLI helpers."""

from apps.cli.edgelb_cli.utils.manifest import ManifestError, load_manifest, resolve_cluster_name

__all__ = ["ManifestError", "load_manifest", "resolve_cluster_name"]
