"""Small commands that print package facts or shell snippets."""

from __future__ import annotations

import typer
from rich.text import Text

from moar_cli.cli.app import app
from moar_cli.cli.helpers import console, package_dir_or_exit, theme_for
from moar_cli.config import load_settings
from moar_cli.workspace import read_version

CLI_NAME = "moar"


def _pipe_hint(command: str) -> Text:
    theme = theme_for(load_settings())
    line = Text()
    line.append_text(theme.comment("# Use with pipe"))
    line.append(" ")
    line.append_text(theme.command(command))
    return line


def _print(text: str | Text) -> None:
    console.print(text, markup=False, soft_wrap=True)


@app.command(name="at")
def at() -> None:
    """Display the version of the current package."""
    _print(read_version(package_dir_or_exit()))


@app.command(name="name")
def name() -> None:
    """Display the name of the current package."""
    _print(package_dir_or_exit().name)


@app.command(name="refetch")
def refetch() -> None:
    """Delete tags and re-fetch from origin (tags under local/ are preserved).

    Example: moar refetch | sh
    """
    package_dir_or_exit()
    _print(_pipe_hint(f"{CLI_NAME} refetch | sh"))
    _print('git tag -d `git tag | grep -v "local"`')
    _print("git fetch --tags origin")


@app.command(name="release")
def release(
    finish: bool = typer.Option(False, "--finish", "-f", help="Finish the release"),
) -> None:
    """Start or finish a git flow release.

    Example: moar release | sh
    """
    package_dir_or_exit()
    if finish:
        _print(_pipe_hint(f"{CLI_NAME} release --finish | sh"))
        _print(f'echo "git flow release finish `{CLI_NAME} at`" | pbcopy')
        return
    _print(_pipe_hint(f"{CLI_NAME} release | sh"))
    _print(f"git flow release start `{CLI_NAME} at`")
    _print("npm version minor")


__all__ = ["at", "name", "refetch", "release"]
