"""Workspace status command implementation."""

from __future__ import annotations

import logging

import typer

from moar_cli.cli.app import app
from moar_cli.cli.helpers import console, package_dir_or_exit, theme_for, trace
from moar_cli.config import PrepareConfig, load_settings
from moar_cli.package import AlignmentRenderer, AuthorDomain, Package, PackageAnalyzer, PackageRenderer
from moar_cli.workspace import workspace_package_dirs

logger = logging.getLogger(__name__)


@app.command(name="status")
def status(
    verify: bool = typer.Option(False, "--verify", "-y", help="Verify signatures"),
) -> None:
    """Display status of all packages from the parent directory."""
    package_dir = package_dir_or_exit()
    settings = load_settings()
    config = PrepareConfig(verify=verify or settings.verify)

    author_domain = AuthorDomain()
    packages: list[Package] = []
    for directory in workspace_package_dirs(package_dir):
        analyzer = PackageAnalyzer(directory, author_domain=author_domain, trace=trace)
        package = analyzer.prepare(config)
        if package.error is not None:
            logger.warning("%s: preparation failed: %s", package.name, package.error)
        packages.append(package)

    packages.sort(key=lambda p: (p.tag.tag, p.head_date))

    theme = theme_for(settings)
    renderers = [PackageRenderer(p, theme, highlight=p.dir == package_dir) for p in packages]
    for line in AlignmentRenderer(renderers).render():
        console.print(line, soft_wrap=True)


__all__ = ["status"]
