"""Module exposing the CLI Typer app under ``apps.cli``.

Entry points and tests import ``apps.cli.main``; the application itself
lives in ``edgelb_cli``.
"""

from __future__ import annotations

from apps.cli.edgelb_cli.main import app

__all__ = ["app"]
