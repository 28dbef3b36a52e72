"""Terminal line building and styling helpers."""

from .line_builder import LineBuilder, Transform
from .theme import DEFAULT_THEME, PLAIN_THEME, PackageTheme, PlainTheme

__all__ = [
    "DEFAULT_THEME",
    "LineBuilder",
    "PLAIN_THEME",
    "PackageTheme",
    "PlainTheme",
    "Transform",
]
