"""Snapshot types produced by the package analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

# True: verified good signature, False: present but bad or unverifiable,
# None: not checked or unsigned.
SignatureState = bool | None

SIGN_GOOD = "●"
SIGN_BAD = "◑"
SIGN_UNKNOWN = "◌"


def sign_glyph(good: SignatureState) -> str:
    if good is True:
        return SIGN_GOOD
    return SIGN_UNKNOWN if good is None else SIGN_BAD


def tag_glyph(good: SignatureState) -> str:
    """Glyph placed before a ``<tag>`` descriptor."""
    if good is True:
        return "●"
    return "◌" if good is None else "○"


class Mergeability(StrEnum):
    """Outcome of a merge probe for one branch."""

    NOT_EVALUATED = "not_evaluated"
    CONFLICT = "conflict"
    ALREADY_MERGED = "already_merged"
    CLEAN = "clean"
    NEEDS_REVIEW = "needs_review"

    @property
    def glyph(self) -> str:
        return _MERGE_GLYPHS[self]

    @property
    def filter_tag(self) -> str:
        if self in (Mergeability.CONFLICT, Mergeability.ALREADY_MERGED):
            return "#CONFLICT"
        if self is Mergeability.CLEAN:
            return "#MERGE-READY"
        return "#MERGEABLE"


_MERGE_GLYPHS = {
    Mergeability.NOT_EVALUATED: "",
    Mergeability.CONFLICT: "🔥",
    Mergeability.ALREADY_MERGED: "👌",
    Mergeability.CLEAN: "✅",
    Mergeability.NEEDS_REVIEW: "🙏",
}


@dataclass
class RefDescription:
    """Last commit of a ref: relative date, shortened author and signature."""

    relative: str = ""
    author: str = ""
    good: SignatureState = None
    raw: str | None = None

    @property
    def summary(self) -> str:
        return f"{self.relative} by {self.author}"


@dataclass
class TagVerify:
    tag: str = ""
    good: SignatureState = None


@dataclass
class BranchRecord:
    """A branch not merged into HEAD."""

    id: str
    short_name: str
    date: str
    ahead: int = -1
    behind: int = -1
    mergeable: Mergeability = Mergeability.NOT_EVALUATED
    last_commit: RefDescription = field(default_factory=RefDescription)


@dataclass
class Package:
    """Everything known about one package after preparation.

    Fields keep their defaults until the stage that computes them has run, so
    a snapshot whose ``error`` is set still renders. ``status_known`` is only
    set once ``git status`` succeeded; until then ``uncommitted`` says nothing
    about the working tree.
    """

    name: str
    dir: Path
    version: str = ""
    current: str = ""
    uncommitted: int = 0
    status_known: bool = False
    ahead: int = 0
    behind: int = 0
    tracking: str | None = None
    tracking_label: str = ""
    tracking_to_develop: int = 0
    develop_to_tracking: int = 0
    develop_to_master: int = 0
    master_to_develop: int = 0
    status_ahead: int = 0
    status_behind: int = 0
    head_date: str = ""
    head: RefDescription = field(default_factory=RefDescription)
    tracking_ref: RefDescription = field(default_factory=RefDescription)
    develop: RefDescription = field(default_factory=RefDescription)
    master: RefDescription = field(default_factory=RefDescription)
    tag: TagVerify = field(default_factory=TagVerify)
    unmerged_branch_count: int = 0
    no_merged: list[BranchRecord] = field(default_factory=list)
    error: BaseException | None = None
