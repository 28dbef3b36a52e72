"""Trial merges that leave the working tree as they found it."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from moar_cli.core.git import GitCommandError, GitRepository
from moar_cli.package.models import Mergeability

__all__ = ["MARKER_TAG", "MergeProbe", "marker_tag"]

logger = logging.getLogger(__name__)

MARKER_TAG = "_moar"

CONFLICT_TOKEN = "CONFLICT"
UP_TO_DATE_TOKEN = "Already up to date"


@contextmanager
def marker_tag(repo: GitRepository, name: str = MARKER_TAG) -> Iterator[str]:
    """Tag HEAD with ``name`` and restore the tree to it on exit.

    On every exit path the tree is hard reset to the marker, untracked files
    are removed and the marker is deleted. Each cleanup step runs even if an
    earlier one fails; the first cleanup failure is raised afterwards unless
    an exception is already propagating.
    """
    repo.raw(["tag", "-f", name])
    try:
        yield name
    except BaseException:
        _restore(repo, name)
        raise
    failures = _restore(repo, name)
    if failures:
        raise failures[0]


def _restore(repo: GitRepository, name: str) -> list[GitCommandError]:
    failures: list[GitCommandError] = []
    for args in (["reset", name, "--hard"], ["clean", "-fd"], ["tag", "-d", name]):
        try:
            repo.raw(args)
        except GitCommandError as exc:
            logger.warning("Merge probe cleanup failed in %s: %s", repo.directory, exc)
            failures.append(exc)
    return failures


class MergeProbe:
    """Classify how a branch would merge into the current HEAD."""

    def __init__(self, repo: GitRepository) -> None:
        self.repo = repo

    def classify(self, branch: str, uncommitted: int | None) -> Mergeability:
        """Trial-merge ``branch`` into HEAD.

        ``uncommitted`` is the number of changed files, or ``None`` when the
        state of the working tree is unknown. Only a clean tree is probed.
        """
        if uncommitted is None:
            logger.debug("Skipping merge probe of %s: working tree state unknown", branch)
            return Mergeability.NOT_EVALUATED
        if uncommitted != 0:
            logger.debug("Skipping merge probe of %s: working tree has %d changes", branch, uncommitted)
            return Mergeability.NOT_EVALUATED
        with marker_tag(self.repo) as marker:
            merge = self.repo.run(["merge", "--allow-unrelated-histories", "--no-edit", branch])
            out = merge.combined
            if CONFLICT_TOKEN in out:
                return Mergeability.CONFLICT
            if UP_TO_DATE_TOKEN in out:
                return Mergeability.ALREADY_MERGED
            diff = self.repo.run(["diff", marker, "--shortstat"])
            if (diff.stdout + diff.stderr).strip() == "":
                return Mergeability.CLEAN
            return Mergeability.NEEDS_REVIEW
