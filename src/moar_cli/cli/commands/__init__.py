"""CLI command modules for moar.

Importing this package registers every command on :data:`moar_cli.cli.app.app`.
"""

from __future__ import annotations

from . import branch, each, scripts, status, tag

__all__ = ["branch", "each", "scripts", "status", "tag"]
