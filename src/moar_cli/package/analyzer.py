"""Preparation pipeline for one package.

:class:`PackageAnalyzer` gathers everything the reports show about a package
by running a fixed sequence of stages against its git repository. Each stage
reads fields written by earlier stages, so the order in :data:`STAGES` must
not change.

Expected failures (no tracking branch, no tag at HEAD, no ``origin/develop``)
surface as :class:`~moar_cli.core.git.GitCommandError` and are absorbed by the
stage that issued the command, leaving its fields at their defaults. Anything
else stops the pipeline and is kept in :attr:`Package.error`; ``prepare``
itself never raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from moar_cli.core.git import GitCommandError, GitRepository
from moar_cli.package.branch_filter import branch_descriptor, short_name, simplify_ref_name
from moar_cli.package.merge_probe import MergeProbe
from moar_cli.package.models import (
    BranchRecord,
    Mergeability,
    Package,
    RefDescription,
    SignatureState,
    TagVerify,
)
from moar_cli.package.options import PrepareConfig
from moar_cli.workspace import read_version

__all__ = [
    "AuthorDomain",
    "PackageAnalyzer",
    "STAGES",
    "Stage",
    "parse_author_and_relative",
]

logger = logging.getLogger(__name__)

DEVELOP = "origin/develop"
MASTER = "origin/master"

GOOD_SIGNATURE = "gpg: Good signature from"
UNCHECKED_SIGNATURE = "gpg: Can't check signature"
TAG_NO_SIGNATURE = "no signature found"
TAG_GOOD_SIGNATURE = "Good signature from"


class AuthorDomain:
    """E-mail domain stripped from author names.

    Shared by every analyzer in a run. The first non-empty value offered wins
    and later offers are ignored.
    """

    def __init__(self, value: str | None = None) -> None:
        self._value = value or None

    @property
    def value(self) -> str | None:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._value is not None

    def offer(self, value: str) -> bool:
        if self._value is not None or not value:
            return False
        self._value = value
        return True


def parse_author_and_relative(text: str | None, domain: str | None = None) -> tuple[str, str]:
    """Extract a shortened author and the ``Date:`` value from ``git show`` output.

    ``Jane Doe <jane.doe@example.com>`` with domain ``example.com`` becomes
    ``jane...``.
    """
    author = ""
    relative = ""
    lines = text.splitlines() if text else []
    for line in lines:
        if line.startswith("Author:"):
            match = re.search(r"<([^>]*)>", line)
            author = (match.group(1) if match else line[len("Author:"):].strip()).lower()
            if domain and author.endswith(domain):
                author = author[: len(author) - len(domain) - 1]
            shortened = re.sub(r"[.\-@+].*", "", author)
            if shortened != author:
                author = shortened + "..."
            break
    for line in lines:
        if line.startswith("Date:"):
            relative = line[len("Date:"):].strip()
            break
    return author, relative


@dataclass(frozen=True)
class Stage:
    """One named step of the pipeline and the package fields it touches."""

    name: str
    run: Callable[[PackageAnalyzer, PrepareConfig], None]
    reads: tuple[str, ...] = ()
    writes: tuple[str, ...] = ()


class PackageAnalyzer:
    """Analyze one package directory.

    Call :meth:`prepare` exactly once before reading :attr:`package`; an
    unprepared analyzer exposes a snapshot holding only defaults.
    """

    def __init__(
        self,
        directory: Path,
        *,
        name: str | None = None,
        version: str | None = None,
        author_domain: AuthorDomain | None = None,
        repo: GitRepository | None = None,
        trace: Callable[[str], None] | None = None,
    ) -> None:
        directory = Path(directory)
        self.repo = repo or GitRepository(directory)
        self.author_domain = author_domain or AuthorDomain()
        self.trace = trace or logger.info
        self.package = Package(
            name=name or directory.name,
            dir=directory,
            version=read_version(directory) if version is None else version,
        )

    def prepare(self, config: PrepareConfig | None = None) -> Package:
        config = config or PrepareConfig()
        for stage in STAGES:
            logger.debug("%s: stage %s", self.package.name, stage.name)
            try:
                stage.run(self, config)
            except Exception as exc:
                logger.debug("%s: stage %s failed", self.package.name, stage.name, exc_info=True)
                self.package.error = exc
                break
        return self.package

    # -- helpers ---------------------------------------------------------

    def describe_ref(self, ref: str | None, config: PrepareConfig) -> RefDescription:
        """Relative date, author and signature state of the commit at ``ref``."""
        if ref is None:
            return RefDescription()
        try:
            text = self.repo.show(ref, name_only=True, date="relative", show_signature=config.verify)
        except GitCommandError as exc:
            logger.debug("%s: cannot describe %s: %s", self.package.name, ref, exc)
            return RefDescription()
        good: SignatureState = None
        if config.verify:
            if GOOD_SIGNATURE in text:
                good = True
            elif UNCHECKED_SIGNATURE in text:
                good = False
        author, relative = parse_author_and_relative(text, self.author_domain.value)
        return RefDescription(relative=relative, author=author, good=good, raw=text)

    def commit_date(self, ref: str) -> str:
        try:
            text = self.repo.show(ref, name_only=True, date="iso")
        except GitCommandError as exc:
            logger.debug("%s: no date for %s: %s", self.package.name, ref, exc)
            return ""
        for line in text.splitlines():
            if line.startswith("Date: "):
                return line[len("Date: "):].strip()
        return ""

    def count(self, from_ref: str, to_ref: str) -> int | None:
        try:
            return self.repo.log_count(from_ref, to_ref)
        except (GitCommandError, ValueError) as exc:
            logger.debug("%s: cannot count %s..%s: %s", self.package.name, from_ref, to_ref, exc)
            return None

    @property
    def tracking_or_head(self) -> str:
        return self.package.tracking or "HEAD"


# -- stages --------------------------------------------------------------


def _init_author_domain(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    if analyzer.author_domain.is_set:
        return
    try:
        email = analyzer.repo.config_value("user.email")
    except GitCommandError:
        return
    analyzer.author_domain.offer(re.sub(r".*@", "", email).strip().lower())


def _prepare_status(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    try:
        status = analyzer.repo.status()
    except GitCommandError as exc:
        logger.debug("%s: no status: %s", pkg.name, exc)
        return
    pkg.uncommitted = status.files
    pkg.current = re.sub(r".*/", "", status.current)
    pkg.tracking = status.tracking
    pkg.status_ahead = status.ahead
    pkg.status_behind = status.behind
    pkg.status_known = True


def _prepare_tracking(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    tracking_to_develop = analyzer.count(analyzer.tracking_or_head, DEVELOP)
    pkg.tracking_to_develop = tracking_to_develop or 0
    pkg.tracking_ref = analyzer.describe_ref(pkg.tracking, config)
    if tracking_to_develop is None:
        pkg.tracking_label = ""
        return
    label = pkg.tracking.replace("HEAD", "") if pkg.tracking else ""
    if label == pkg.current:
        label = ""
    pkg.tracking_label = short_name(label)


def _prepare_describe(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    try:
        tag = analyzer.repo.describe_exact_tag()
    except GitCommandError:
        pkg.tag = TagVerify()
        return
    pkg.tag = TagVerify(tag=tag)
    if not tag or not config.verify:
        return
    result = analyzer.repo.verify_tag(tag)
    out = result.combined
    if TAG_NO_SIGNATURE in out:
        pkg.tag.good = None
    elif result.returncode == 0 and TAG_GOOD_SIGNATURE in out:
        pkg.tag.good = True
    else:
        pkg.tag.good = False


def _prepare_develop_to_x(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    pkg.develop_to_master = analyzer.count(DEVELOP, MASTER) or 0
    pkg.develop_to_tracking = analyzer.count(DEVELOP, analyzer.tracking_or_head) or 0


def _prepare_master_to_develop(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    analyzer.package.master_to_develop = analyzer.count(MASTER, DEVELOP) or 0


def _prepare_head(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    pkg.head_date = analyzer.commit_date("HEAD")
    pkg.head = analyzer.describe_ref("HEAD", config)


def _prepare_develop(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    analyzer.package.develop = analyzer.describe_ref(DEVELOP, config)


def _prepare_master(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    analyzer.package.master = analyzer.describe_ref(MASTER, config)


def _prepare_no_merged(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    rule = config.filter_rule
    if config.raw_mode:
        analyzer.trace(f"SUPPRESS: {rule.suppress.pattern if rule.suppress else None}")
        analyzer.trace(f"SHOW: {rule.show.pattern if rule.show else None}")
        analyzer.trace(f"HIDE: {rule.hide.pattern if rule.hide else None}")
    try:
        branches = analyzer.repo.branch_list(all_remotes=True, no_merged=True)
    except GitCommandError as exc:
        logger.debug("%s: cannot list branches: %s", pkg.name, exc)
        branches = []

    probe = MergeProbe(analyzer.repo)
    shown: list[BranchRecord] = []
    for branch in branches:
        record = BranchRecord(
            id=branch,
            short_name=simplify_ref_name(branch, config.simplify_name_mode),
            date=analyzer.commit_date(branch),
        )
        if config.full:
            behind = analyzer.count(branch, "HEAD")
            ahead = analyzer.count("HEAD", branch)
            record.behind = -1 if behind is None else behind
            record.ahead = -1 if ahead is None else ahead
        if config.test_merge:
            record.mergeable = _probe_branch(probe, branch, pkg)
        record.last_commit = analyzer.describe_ref(branch, config)

        descriptor = branch_descriptor(
            record.date,
            record.short_name,
            record.last_commit.author,
            record.last_commit.relative,
            record.mergeable.filter_tag if config.test_merge else "",
        )
        verdict = rule.evaluate(descriptor)
        if config.raw_mode:
            analyzer.trace(f"RAW: {verdict}: {descriptor}")
        if verdict == "show":
            shown.append(record)
    pkg.no_merged = shown
    pkg.unmerged_branch_count = len(branches)


def _probe_branch(probe: MergeProbe, branch: str, pkg: Package) -> Mergeability:
    uncommitted = pkg.uncommitted if pkg.status_known else None
    try:
        return probe.classify(branch, uncommitted)
    except GitCommandError as exc:
        logger.warning("%s: merge probe of %s failed: %s", pkg.name, branch, exc)
        return Mergeability.NOT_EVALUATED


def _prepare_ahead_behind(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    pkg = analyzer.package
    if pkg.tracking:
        pkg.ahead = pkg.status_ahead
        pkg.behind = pkg.status_behind
    else:
        pkg.ahead = pkg.develop_to_tracking
        pkg.behind = pkg.tracking_to_develop
        pkg.develop_to_tracking = 0
        pkg.tracking_to_develop = 0


def _sort_branches(analyzer: PackageAnalyzer, config: PrepareConfig) -> None:
    if config.full:
        analyzer.package.no_merged.sort(key=lambda branch: branch.date, reverse=True)


STAGES: tuple[Stage, ...] = (
    Stage("author_domain", _init_author_domain, writes=("author_domain",)),
    Stage(
        "status",
        _prepare_status,
        writes=("uncommitted", "status_known", "current", "tracking", "status_ahead", "status_behind"),
    ),
    Stage(
        "tracking",
        _prepare_tracking,
        reads=("tracking", "current"),
        writes=("tracking_to_develop", "tracking_ref", "tracking_label"),
    ),
    Stage("describe", _prepare_describe, writes=("tag",)),
    Stage(
        "develop_to_x",
        _prepare_develop_to_x,
        reads=("tracking",),
        writes=("develop_to_master", "develop_to_tracking"),
    ),
    Stage("master_to_develop", _prepare_master_to_develop, writes=("master_to_develop",)),
    Stage("head", _prepare_head, reads=("author_domain",), writes=("head_date", "head")),
    Stage("develop", _prepare_develop, reads=("author_domain",), writes=("develop",)),
    Stage("master", _prepare_master, reads=("author_domain",), writes=("master",)),
    Stage(
        "no_merged",
        _prepare_no_merged,
        reads=("uncommitted", "status_known", "author_domain"),
        writes=("no_merged", "unmerged_branch_count"),
    ),
    Stage(
        "ahead_behind",
        _prepare_ahead_behind,
        reads=("tracking", "status_ahead", "status_behind", "develop_to_tracking", "tracking_to_develop"),
        writes=("ahead", "behind", "develop_to_tracking", "tracking_to_develop"),
    ),
    Stage("sort_branches", _sort_branches, reads=("no_merged",), writes=("no_merged",)),
)
