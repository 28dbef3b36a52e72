"""The ``moar`` command-line application."""

from __future__ import annotations

from . import commands  # noqa: F401
from .app import app


def main() -> None:
    app()


__all__ = ["app", "main"]
