"""Append-only buffer for one line of terminal output."""

from __future__ import annotations

from typing import Callable

from rich.text import Text

Transform = Callable[[str], Text]

ARROW_CHAR = "━"


class LineBuilder:
    """Build a styled line segment by segment.

    The styled result is available as :attr:`text`; :attr:`content` is the
    same line without styling, which is what column widths are measured on.
    """

    def __init__(self) -> None:
        self._text = Text()

    def push_text(self, text: str, transform: Transform | None = None) -> LineBuilder:
        self._text.append_text(transform(text) if transform else Text(text))
        return self

    def push_arrow_line(self, size: int) -> LineBuilder:
        """Push ``" ━━━> "`` with ``size`` line characters."""
        self._text.append(" " + ARROW_CHAR * size + "> ")
        return self

    def push_counter(
        self,
        glyph: str,
        count: int,
        transform: Transform | None = None,
        *,
        force: bool = False,
        no_pad: bool = False,
    ) -> LineBuilder:
        """Push ``<glyph><count>`` when ``count`` is positive or ``force`` is set."""
        if count > 0 or force:
            if not no_pad:
                self._text.append(" ")
            self.push_text(f"{glyph}{count}", transform)
        return self

    @property
    def text(self) -> Text:
        return self._text

    @property
    def content(self) -> str:
        return self._text.plain

    def __len__(self) -> int:
        return len(self._text.plain)
