"""Branch naming and suppress/hide/show filtering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = [
    "FilterRule",
    "SimplifyNameMode",
    "branch_descriptor",
    "short_name",
    "simplify_ref_name",
]

_DELIMITERS = "-_"

Verdict = Literal["show", "hide", "suppress"]


class SimplifyNameMode(IntEnum):
    SHORT = 0
    RAW = 1
    REMOTE = 2


def short_name(name: str) -> str:
    """Return the display form of a branch name.

    The path up to the last ``/`` is dropped, then the name is cut just
    before the second ``-``/``_`` delimiter: ``feature-123-add-login``
    becomes ``feature-123``.
    """
    name = name.rsplit("/", 1)[-1]
    first = next((i for i, ch in enumerate(name) if ch in _DELIMITERS), None)
    if first is None:
        return name
    for pos in range(first + 1, len(name)):
        if name[pos] in _DELIMITERS:
            return name[:pos]
    return name


def simplify_ref_name(name: str, mode: SimplifyNameMode = SimplifyNameMode.SHORT) -> str:
    if mode is SimplifyNameMode.RAW:
        return name
    if mode is SimplifyNameMode.REMOTE:
        return re.sub(r"^remotes/origin/", "origin/", name)
    return short_name(name)


def branch_descriptor(date: str, name: str, author: str, relative: str, tag: str = "") -> str:
    """Build the line the filter patterns are matched against."""
    raw = f"BRANCH: {date}, {name}, {author}, {relative}"
    if tag:
        raw += f" {tag} "
    return raw


@dataclass(frozen=True)
class FilterRule:
    """Three optional patterns applied in fixed precedence.

    ``suppress`` drops a branch outright. Otherwise ``hide`` marks it hidden
    and a later ``show`` match shows it again. When ``show`` is configured a
    branch must match it to be shown; with neither ``hide`` nor ``show``
    configured every branch is shown.
    """

    suppress: re.Pattern[str] | None = None
    hide: re.Pattern[str] | None = None
    show: re.Pattern[str] | None = None

    @classmethod
    def compile(
        cls,
        suppress: str | None = None,
        hide: str | None = None,
        show: str | None = None,
    ) -> FilterRule:
        return cls(
            suppress=re.compile(suppress) if suppress else None,
            hide=re.compile(hide) if hide else None,
            show=re.compile(show) if show else None,
        )

    def evaluate(self, descriptor: str) -> Verdict:
        if self.suppress is not None and self.suppress.search(descriptor):
            return "suppress"
        verdict: Verdict = "hide" if self.show is not None else "show"
        if self.hide is not None and self.hide.search(descriptor):
            verdict = "hide"
        if self.show is not None and self.show.search(descriptor):
            verdict = "show"
        return verdict

    def shows(self, descriptor: str) -> bool:
        return self.evaluate(descriptor) == "show"
