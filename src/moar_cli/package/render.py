"""Rendering a prepared package as status and branch lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from rich.text import Text

from moar_cli.ansi.line_builder import ARROW_CHAR, LineBuilder, Transform
from moar_cli.ansi.theme import PLAIN_THEME, PackageTheme
from moar_cli.package.branch_filter import short_name
from moar_cli.package.models import Package, sign_glyph, tag_glyph

__all__ = ["Area", "ArrowSizes", "PackageRenderer"]

AHEAD = "▲"
BEHIND = "▼"
UNCOMMITTED = "▶"
UNMERGED = "ᚮ"
ERROR_MARKER = " 💥ERROR"


class Area(StrEnum):
    NAME = "name"
    CURRENT = "current"
    TRACKING = "tracking"
    DEVELOP = "develop"
    MASTER = "master"
    UNMERGED = "unmerged"


@dataclass(frozen=True)
class ArrowSizes:
    """Arrow lengths after each area of a status line.

    ``lead`` is the length of the rule drawn before the unmerged counter.
    """

    name: int = 1
    current: int = 1
    tracking: int = 1
    develop: int = 1
    lead: int = 0


class PackageRenderer:
    """Render one :class:`Package` snapshot."""

    def __init__(
        self,
        package: Package,
        theme: PackageTheme = PLAIN_THEME,
        *,
        highlight: bool = False,
    ) -> None:
        self.package = package
        self.theme = theme
        self.highlight = highlight

    @property
    def _line_transform(self) -> Transform | None:
        return self.theme.emphasis if self.highlight else None

    # -- areas -----------------------------------------------------------

    def push_unmerged_area(self, builder: LineBuilder) -> LineBuilder:
        return builder.push_counter(
            UNMERGED,
            self.package.unmerged_branch_count,
            self.theme.unmerged,
            force=True,
            no_pad=True,
        )

    def push_name_area(self, builder: LineBuilder, transform: Transform | None = None) -> LineBuilder:
        pkg = self.package
        return (
            builder.push_text(pkg.name, transform)
            .push_text(f"@{pkg.version}", self.theme.sign)
            .push_counter(UNCOMMITTED, pkg.uncommitted, self.theme.uncommitted)
        )

    def push_current_area(self, builder: LineBuilder, transform: Transform | None = None) -> LineBuilder:
        pkg = self.package
        return self._push_ref(builder, pkg.head.good, short_name(pkg.current), pkg.ahead, pkg.behind, transform)

    def push_tracking_area(self, builder: LineBuilder, transform: Transform | None = None) -> LineBuilder:
        pkg = self.package
        return self._push_ref(
            builder,
            pkg.tracking_ref.good,
            pkg.tracking_label,
            pkg.develop_to_tracking,
            pkg.tracking_to_develop,
            transform,
        )

    def push_develop_area(self, builder: LineBuilder, transform: Transform | None = None) -> LineBuilder:
        pkg = self.package
        return self._push_ref(
            builder,
            pkg.develop.good,
            "develop",
            pkg.master_to_develop,
            pkg.develop_to_master,
            transform,
        )

    def push_master_area(self, builder: LineBuilder, transform: Transform | None = None) -> LineBuilder:
        return builder.push_text(sign_glyph(self.package.master.good), self.theme.sign).push_text(
            "master", transform
        )

    def _push_ref(
        self,
        builder: LineBuilder,
        good: bool | None,
        label: str,
        ahead: int,
        behind: int,
        transform: Transform | None,
    ) -> LineBuilder:
        return (
            builder.push_text(sign_glyph(good), self.theme.sign)
            .push_text(label, transform)
            .push_counter(AHEAD, ahead, self.theme.ahead)
            .push_counter(BEHIND, behind, self.theme.behind)
        )

    def area_width(self, area: Area) -> int:
        pusher = {
            Area.NAME: self.push_name_area,
            Area.CURRENT: self.push_current_area,
            Area.TRACKING: self.push_tracking_area,
            Area.DEVELOP: self.push_develop_area,
            Area.MASTER: self.push_master_area,
            Area.UNMERGED: self.push_unmerged_area,
        }[area]
        return len(pusher(LineBuilder()).content)

    # -- lines -----------------------------------------------------------

    def status_label(self, arrows: ArrowSizes = ArrowSizes()) -> Text:
        pkg = self.package
        transform = self._line_transform
        builder = LineBuilder()
        if arrows.lead > 0:
            builder.push_text(ARROW_CHAR * arrows.lead).push_text(" ")
        self.push_unmerged_area(builder)
        builder.push_text(" ")
        self.push_name_area(builder, transform)
        builder.push_arrow_line(arrows.name)
        self.push_current_area(builder, transform)
        builder.push_arrow_line(arrows.current)
        self.push_tracking_area(builder, transform)
        builder.push_arrow_line(arrows.tracking)
        self.push_develop_area(builder, transform)
        builder.push_arrow_line(arrows.develop)
        self.push_master_area(builder, transform)
        builder.push_text(" │")
        if pkg.error is not None:
            builder.push_text(ERROR_MARKER, self.theme.error)
        else:
            if pkg.tag.tag:
                builder.push_text(f"{tag_glyph(pkg.tag.good)}<{short_name(pkg.tag.tag)}>", self.theme.sign)
            builder.push_text(" ")
            builder.push_text(pkg.head.summary)
        return builder.text

    def branch_lines(self, *, naked: bool = False) -> list[Text]:
        """Status line followed by one line per shown unmerged branch."""
        pkg = self.package
        branches = pkg.no_merged
        if naked:
            return [Text(branch.id) for branch in branches]

        lines: list[Text] = []
        head = Text("━> " if not branches else "┏━> ")
        head.append_text(self.status_label())
        lines.append(head)

        max_num_len = len(str(len(branches)))
        max_short_len = max([1, *(len(branch.short_name) for branch in branches)])
        last = len(branches) - 1
        for n, branch in enumerate(branches):
            num = str(n + 1)
            builder = LineBuilder()
            builder.push_text("┗━" if n == last else "┣━")
            builder.push_text(ARROW_CHAR * (max_num_len - len(num)))
            builder.push_text(" ")
            builder.push_text(num, self.theme.unmerged)
            builder.push_text(" ")
            builder.push_text(sign_glyph(branch.last_commit.good), self.theme.sign)
            builder.push_text(branch.short_name)
            builder.push_text(" ━")
            builder.push_text(ARROW_CHAR * (max_short_len - len(branch.short_name)))
            builder.push_text(" ")
            builder.push_text(branch.mergeable.glyph)
            builder.push_counter(AHEAD, branch.ahead, self.theme.ahead)
            builder.push_counter(BEHIND, branch.behind, self.theme.behind)
            builder.push_text(" ")
            builder.push_text(branch.last_commit.summary)
            lines.append(builder.text)
        return lines
