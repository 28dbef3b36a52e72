"""Unmerged branch listing for the current package."""

from __future__ import annotations

import re
from typing import Optional

import typer

from moar_cli.cli.app import app
from moar_cli.cli.helpers import console, err_console, package_dir_or_exit, theme_for, trace
from moar_cli.config import PrepareConfig, Settings, load_settings
from moar_cli.package import FilterRule, PackageAnalyzer, PackageRenderer, SimplifyNameMode


def build_prepare_config(
    settings: Settings,
    *,
    hide: str | None = None,
    show: str | None = None,
    suppress: str | None = None,
    raw: bool = False,
    naked: bool = False,
    full_name: bool = False,
    test_merge: bool = False,
    verify: bool = False,
) -> PrepareConfig:
    """Combine command-line options with user settings.

    Patterns given on the command line replace the corresponding setting.
    """
    rule = FilterRule.compile(
        suppress=suppress or settings.suppress,
        hide=hide or settings.hide,
        show=show or settings.show,
    )
    return PrepareConfig(
        verify=verify or settings.verify,
        test_merge=test_merge,
        full=True,
        filter_rule=rule,
        simplify_name_mode=SimplifyNameMode.REMOTE if full_name else SimplifyNameMode.SHORT,
        raw_mode=raw,
        naked=naked,
    )


@app.command(name="branch")
def branch(
    hide: Optional[str] = typer.Option(None, "--hide", "-h", help="Hide using the supplied regular expression"),
    show: Optional[str] = typer.Option(None, "--show", "-s", help="Show using the supplied regular expression"),
    suppress: Optional[str] = typer.Option(
        None, "--suppress", "-x", help="Drop branches matching the regular expression, even if shown"
    ),
    raw: bool = typer.Option(False, "--raw", "-r", help='Show "raw" output (useful to understand hide/show)'),
    naked: bool = typer.Option(False, "--naked-mode", "-n", help="Display only the full branch names"),
    full_name: bool = typer.Option(False, "--full-name", "-f", help="Display full branch names"),
    test_merge: bool = typer.Option(False, "--test-merge", "-t", help="Test merges"),
    verify: bool = typer.Option(False, "--verify", "-y", help="Verify signatures"),
) -> None:
    """Display branches with recent activity.

    Example: moar branch -s'(hours|days|[1-2] weeks)'
    """
    package_dir = package_dir_or_exit()
    settings = load_settings()
    try:
        config = build_prepare_config(
            settings,
            hide=hide,
            show=show,
            suppress=suppress,
            raw=raw,
            naked=naked,
            full_name=full_name,
            test_merge=test_merge,
            verify=verify,
        )
    except re.error as exc:
        err_console.print(f"[red]Invalid regular expression:[/red] {exc}")
        raise typer.Exit(2)

    package = PackageAnalyzer(package_dir, trace=trace).prepare(config)
    renderer = PackageRenderer(package, theme_for(settings))
    for line in renderer.branch_lines(naked=config.naked):
        console.print(line, soft_wrap=True)


__all__ = ["branch", "build_prepare_config"]
