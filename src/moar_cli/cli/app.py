"""The root typer application; command modules attach to it with ``@app.command``."""

from __future__ import annotations

import typer

from .helpers import configure_logging

app = typer.Typer(
    name="moar",
    help="Report how the packages of a workspace relate to develop, master and their upstreams",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


__all__ = ["app"]
