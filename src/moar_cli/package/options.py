"""Options for one run of the preparation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

from moar_cli.package.branch_filter import FilterRule, SimplifyNameMode

__all__ = ["PrepareConfig"]


@dataclass(frozen=True)
class PrepareConfig:
    """What :meth:`PackageAnalyzer.prepare` should gather.

    ``full`` adds per-branch ahead/behind counts and sorts branches newest
    first; ``test_merge`` runs a merge probe for every unmerged branch.
    """

    verify: bool = False
    test_merge: bool = False
    full: bool = False
    filter_rule: FilterRule = field(default_factory=FilterRule)
    simplify_name_mode: SimplifyNameMode = SimplifyNameMode.SHORT
    raw_mode: bool = False
    naked: bool = False
