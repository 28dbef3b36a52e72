"""Locating packages in a workspace of sibling git repositories."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path

__all__ = [
    "WorkspaceError",
    "is_git",
    "read_version",
    "require_package_dir",
    "workspace_package_dirs",
]

logger = logging.getLogger(__name__)


class WorkspaceError(Exception):
    """The command was not run from a git repository root."""


def is_git(directory: Path) -> bool:
    return (directory / ".git" / "config").exists()


def require_package_dir(directory: Path) -> Path:
    if not is_git(directory):
        raise WorkspaceError("Must be run from a git repository root")
    return directory


def workspace_package_dirs(package_dir: Path) -> list[Path]:
    """Return the git repositories that are siblings of ``package_dir``.

    The package directory itself is included. Results are sorted by name.
    """
    workspace = package_dir.parent
    return sorted(
        (child for child in workspace.iterdir() if child.is_dir() and is_git(child)),
        key=lambda p: p.name,
    )


def read_version(directory: Path) -> str:
    """Return the package version, or an empty string when none is declared.

    ``package.json`` is consulted first, then ``pyproject.toml``.
    """
    package_json = directory / "package.json"
    if package_json.exists():
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.debug("Unreadable %s: %s", package_json, exc)
        else:
            version = data.get("version") if isinstance(data, dict) else None
            return version if isinstance(version, str) else ""

    pyproject = directory / "pyproject.toml"
    if pyproject.exists():
        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.debug("Unreadable %s: %s", pyproject, exc)
        else:
            project = data.get("project")
            version = project.get("version") if isinstance(project, dict) else None
            return version if isinstance(version, str) else ""
    return ""
