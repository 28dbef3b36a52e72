"""Styling roles for terminal output.

A theme turns plain text into :class:`rich.text.Text` for each semantic role
the report uses. :class:`PlainTheme` keeps the same interface but applies no
style, which is what width measurement and ``--no-color`` output use.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text


@dataclass(frozen=True)
class PackageTheme:
    """Colorized theme used by the ``moar`` commands."""

    ahead_style: str = "green"
    behind_style: str = "red"
    sign_style: str = "magenta"
    uncommitted_style: str = "cyan"
    unmerged_style: str = "yellow"
    comment_style: str = "green"
    command_style: str = "yellow"
    option_style: str = "cyan"
    emphasis_style: str = "bold"
    error_style: str = "bright_red"

    def _styled(self, text: str, style: str) -> Text:
        return Text(text, style=style)

    def ahead(self, text: str) -> Text:
        return self._styled(text, self.ahead_style)

    def behind(self, text: str) -> Text:
        return self._styled(text, self.behind_style)

    def sign(self, text: str) -> Text:
        return self._styled(text, self.sign_style)

    def uncommitted(self, text: str) -> Text:
        return self._styled(text, self.uncommitted_style)

    def unmerged(self, text: str) -> Text:
        return self._styled(text, self.unmerged_style)

    def comment(self, text: str) -> Text:
        return self._styled(text, self.comment_style)

    def command(self, text: str) -> Text:
        return self._styled(text, self.command_style)

    def option(self, text: str) -> Text:
        return self._styled(text, self.option_style)

    def emphasis(self, text: str) -> Text:
        return self._styled(text, self.emphasis_style)

    def error(self, text: str) -> Text:
        return self._styled(text, self.error_style)


@dataclass(frozen=True)
class PlainTheme(PackageTheme):
    """Theme that leaves every role unstyled."""

    def _styled(self, text: str, style: str) -> Text:
        return Text(text)


DEFAULT_THEME = PackageTheme()
PLAIN_THEME = PlainTheme()
