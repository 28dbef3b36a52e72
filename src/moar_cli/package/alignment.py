"""Column alignment across the packages of a workspace."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text

from moar_cli.package.render import Area, ArrowSizes, PackageRenderer

__all__ = ["AlignmentRenderer"]


class AlignmentRenderer:
    """Render one status line per package with aligned columns.

    Each area's width is measured on plain content. The arrow after an area
    is ``1 + widest - own`` long, so the next area starts at the same column
    on every line.
    """

    def __init__(self, renderers: Sequence[PackageRenderer]) -> None:
        self.renderers = list(renderers)

    def max_widths(self) -> dict[Area, int]:
        return {
            area: max((renderer.area_width(area) for renderer in self.renderers), default=0)
            for area in Area
        }

    def arrow_sizes(self, renderer: PackageRenderer, widths: dict[Area, int]) -> ArrowSizes:
        def deficit(area: Area) -> int:
            return widths[area] - renderer.area_width(area)

        return ArrowSizes(
            name=1 + deficit(Area.NAME),
            current=1 + deficit(Area.CURRENT),
            tracking=1 + deficit(Area.TRACKING),
            develop=1 + deficit(Area.DEVELOP),
            lead=1 + deficit(Area.MASTER) + deficit(Area.UNMERGED),
        )

    def render(self) -> list[Text]:
        widths = self.max_widths()
        return [renderer.status_label(self.arrow_sizes(renderer, widths)) for renderer in self.renderers]
