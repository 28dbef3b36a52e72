"""Build a script that runs a command in every package directory."""

from __future__ import annotations

from pathlib import Path

import typer

from moar_cli.cli.app import app
from moar_cli.cli.helpers import console, package_dir_or_exit
from moar_cli.workspace import workspace_package_dirs

DEFAULT_COMMAND = "git remote update"


def build_each_script(
    package_dir: Path,
    command: str = DEFAULT_COMMAND,
    *,
    brief: bool = False,
    right: bool = False,
) -> str:
    if command == DEFAULT_COMMAND:
        brief = not right

    buffer = ""
    for directory in workspace_package_dirs(package_dir):
        name = directory.name
        buffer += f"cd ../{name} && \\\n"
        if brief:
            buffer += f'echo "$({command}) {name} " && \\\n'
        elif right:
            buffer += f'echo "{name} $({command}) " && \\\n'
        else:
            buffer += f'echo "# * {name} {"*" * (60 - len(name))}" && \\\n'
            buffer += f"({command}) && \\\n"
    buffer += f"cd ../{package_dir.name} \n"
    return buffer


@app.command(name="each")
def each(
    command: str = typer.Argument(DEFAULT_COMMAND, help="Command to run in each package directory"),
    brief: bool = typer.Option(False, "--brief", "-b", help="Provide a very brief output"),
    right: bool = typer.Option(False, "--right", "-r", help="Put the name on the right hand of output line"),
) -> None:
    """Build a script to run a command in all package directories.

    Example: moar each | sh
    """
    package_dir = package_dir_or_exit()
    console.print(build_each_script(package_dir, command, brief=brief, right=right), markup=False, soft_wrap=True)


__all__ = ["DEFAULT_COMMAND", "build_each_script", "each"]
