"""Write and push a workspace tag."""

from __future__ import annotations

from pathlib import Path

import typer

from moar_cli.cli.app import app
from moar_cli.cli.helpers import err_console, package_dir_or_exit
from moar_cli.core.git import GitCommandError, GitRepository
from moar_cli.workspace import read_version, workspace_package_dirs


def build_tag_message(package_dir: Path, base_message: str = "") -> str:
    """Base message followed by the HEAD commit and version of every package."""
    message = f"{base_message}\n{'-' * 40}\n"
    for directory in workspace_package_dirs(package_dir):
        try:
            head = GitRepository(directory).rev_parse("HEAD")
        except GitCommandError:
            continue
        message += f"{head} {directory.name}@{read_version(directory)}\n"
    return message


@app.command(name="tag")
def tag(
    base_tag: str = typer.Argument(..., metavar="TAG", help="Base tag name; the package version is appended"),
    message: str = typer.Option("", "--message", "-m", help="Base tag message"),
) -> None:
    """Write a signed tag describing the workspace and push it to origin."""
    package_dir = package_dir_or_exit()
    name = base_tag + read_version(package_dir)
    repo = GitRepository(package_dir)
    try:
        repo.tag(name, build_tag_message(package_dir, message), sign=True)
        repo.push_tag("origin", name)
    except GitCommandError as exc:
        err_console.print(f"[red]💥ERROR:[/red] {package_dir} - unable to tag {exc}")
        raise typer.Exit(1)
    err_console.print(f"{package_dir} - created tag")


__all__ = ["build_tag_message", "tag"]
