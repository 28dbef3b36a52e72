"""Analysis options and user settings.

:class:`PrepareConfig` (re-exported here) is the value object handed to
:meth:`~moar_cli.package.analyzer.PackageAnalyzer.prepare`. User defaults live
in ``config.toml`` under the moar home directory:

.. code-block:: toml

    [branch]
    suppress = ".*WIP.*"

    [display]
    color = true

    [status]
    verify = false
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from moar_cli.package.options import PrepareConfig

__all__ = [
    "PrepareConfig",
    "Settings",
    "get_moar_home",
    "get_package_dir",
    "load_settings",
]

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"


@dataclass(frozen=True)
class Settings:
    suppress: str | None = None
    hide: str | None = None
    show: str | None = None
    color: bool = True
    verify: bool = False


def get_moar_home() -> Path:
    """Return ``$MOAR_HOME`` or ``~/.moar``."""
    if env_home := os.environ.get("MOAR_HOME"):
        return Path(env_home)
    return Path.home() / ".moar"


def get_package_dir() -> Path:
    """Return the package directory the CLI acts on.

    ``MOAR_PACKAGE_DIR`` overrides the current working directory.
    """
    if env_dir := os.environ.get("MOAR_PACKAGE_DIR"):
        return Path(env_dir).resolve()
    return Path.cwd().resolve()


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    value = payload.get(name)
    return value if isinstance(value, dict) else {}


def _optional_str(section: dict[str, Any], key: str) -> str | None:
    value = section.get(key)
    return value if isinstance(value, str) and value else None


def load_settings(path: Path | None = None) -> Settings:
    """Read user settings, falling back to defaults on any problem."""
    path = path or get_moar_home() / CONFIG_FILENAME
    if not path.exists():
        return Settings()
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()

    branch = _section(payload, "branch")
    display = _section(payload, "display")
    status = _section(payload, "status")
    return Settings(
        suppress=_optional_str(branch, "suppress"),
        hide=_optional_str(branch, "hide"),
        show=_optional_str(branch, "show"),
        color=bool(display.get("color", True)),
        verify=bool(status.get("verify", False)),
    )
