"""Shared console, theme and directory helpers for the moar commands."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from moar_cli.ansi.theme import DEFAULT_THEME, PLAIN_THEME, PackageTheme
from moar_cli.config import Settings, get_package_dir
from moar_cli.workspace import WorkspaceError, require_package_dir

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


def theme_for(settings: Settings) -> PackageTheme:
    return DEFAULT_THEME if settings.color else PLAIN_THEME


def package_dir_or_exit() -> Path:
    """Resolve the package directory or exit with status 1."""
    try:
        return require_package_dir(get_package_dir())
    except WorkspaceError as exc:
        err_console.print(f"[red]💥ERROR:[/red] {exc}")
        raise typer.Exit(1)


def trace(message: str) -> None:
    console.print(message, markup=False, soft_wrap=True)
