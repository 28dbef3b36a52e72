"""Package analysis and rendering.

Usage:
    from moar_cli.package import PackageAnalyzer, PackageRenderer, AlignmentRenderer
"""

from __future__ import annotations

from .alignment import AlignmentRenderer
from .analyzer import STAGES, AuthorDomain, PackageAnalyzer, Stage, parse_author_and_relative
from .branch_filter import FilterRule, SimplifyNameMode, short_name, simplify_ref_name
from .merge_probe import MergeProbe, marker_tag
from .options import PrepareConfig
from .models import (
    BranchRecord,
    Mergeability,
    Package,
    RefDescription,
    SignatureState,
    TagVerify,
    sign_glyph,
)
from .render import Area, ArrowSizes, PackageRenderer

__all__ = [
    "AlignmentRenderer",
    "Area",
    "ArrowSizes",
    "AuthorDomain",
    "BranchRecord",
    "FilterRule",
    "MergeProbe",
    "Mergeability",
    "Package",
    "PrepareConfig",
    "PackageAnalyzer",
    "PackageRenderer",
    "RefDescription",
    "STAGES",
    "SignatureState",
    "SimplifyNameMode",
    "Stage",
    "TagVerify",
    "marker_tag",
    "parse_author_and_relative",
    "short_name",
    "sign_glyph",
    "simplify_ref_name",
]
