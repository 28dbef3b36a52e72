"""Git access for a single package working directory.

Every command runs synchronously through ``subprocess.run`` in the package
directory. Failures are normalised into :class:`GitCommandError` so callers
can treat a missing ref, a missing tag or a missing executable the same way.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "CommandOutput",
    "GitCommandError",
    "GitRepository",
    "StatusResult",
]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


class GitCommandError(RuntimeError):
    """A git command exited non-zero or could not be started."""

    def __init__(self, cmd: list[str], returncode: int, output: str) -> None:
        super().__init__(f"git command failed ({returncode}): {subprocess.list2cmdline(cmd)}")
        self.cmd = cmd
        self.returncode = returncode
        self.output = output


@dataclass
class CommandOutput:
    returncode: int
    stdout: str
    stderr: str

    @property
    def combined(self) -> str:
        return f"{self.stderr}\n{self.stdout}"


@dataclass
class StatusResult:
    """Working tree status as reported by ``git status --porcelain=v2``."""

    current: str = ""
    tracking: str | None = None
    ahead: int = 0
    behind: int = 0
    files: int = 0


def parse_status(text: str) -> StatusResult:
    """Parse ``git status --porcelain=v2 --branch`` output."""
    result = StatusResult()
    for line in text.splitlines():
        if line.startswith("# branch.head "):
            result.current = line[len("# branch.head "):].strip()
        elif line.startswith("# branch.upstream "):
            result.tracking = line[len("# branch.upstream "):].strip() or None
        elif line.startswith("# branch.ab "):
            for part in line[len("# branch.ab "):].split():
                if part.startswith("+"):
                    result.ahead = int(part[1:])
                elif part.startswith("-"):
                    result.behind = int(part[1:])
        elif line[:2] in ("1 ", "2 ", "u ", "? "):
            result.files += 1
    return result


class GitRepository:
    """Thin facade over the git executable for one directory."""

    def __init__(self, directory: Path, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.directory = Path(directory)
        self.timeout = timeout

    def run(self, args: list[str]) -> CommandOutput:
        """Run git and return its output without raising on non-zero exit."""
        cmd = ["git", "--no-pager", *args]
        logger.debug("%s: %s", self.directory, subprocess.list2cmdline(cmd))
        try:
            completed = subprocess.run(
                cmd,
                cwd=str(self.directory),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            return CommandOutput(returncode=127, stdout="", stderr="git executable not found on PATH")
        except subprocess.TimeoutExpired:
            return CommandOutput(
                returncode=124,
                stdout="",
                stderr=f"git command timed out: {subprocess.list2cmdline(cmd)}",
            )
        return CommandOutput(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def raw(self, args: list[str], *, check: bool = True) -> str:
        """Run git and return stdout, raising :class:`GitCommandError` on failure."""
        output = self.run(args)
        if check and output.returncode != 0:
            raise GitCommandError(["git", *args], output.returncode, output.stdout + output.stderr)
        return output.stdout

    def status(self) -> StatusResult:
        return parse_status(self.raw(["status", "--porcelain=v2", "--branch"]))

    def log_count(self, from_ref: str, to_ref: str) -> int:
        """Count commits reachable from ``to_ref`` but not from ``from_ref``."""
        out = self.raw(["rev-list", "--count", f"{from_ref}..{to_ref}"])
        return int(out.strip() or 0)

    def show(
        self,
        ref: str,
        *,
        name_only: bool = True,
        date: str = "relative",
        show_signature: bool = False,
    ) -> str:
        args = ["show", ref, f"--date={date}"]
        if name_only:
            args.append("--name-only")
        if show_signature:
            args.append("--show-signature")
        return self.raw(args)

    def branch_list(self, *, all_remotes: bool = True, no_merged: bool = True) -> list[str]:
        """List branch names in ``git branch -a`` form (``remotes/origin/x``)."""
        args = ["branch", "--format=%(refname)"]
        if all_remotes:
            args.append("-a")
        if no_merged:
            args.append("--no-merged")
        names: list[str] = []
        for line in self.raw(args).splitlines():
            ref = line.strip()
            if not ref or ref.endswith("/HEAD") or not ref.startswith("refs/"):
                continue
            if ref.startswith("refs/heads/"):
                names.append(ref[len("refs/heads/"):])
            else:
                names.append(ref[len("refs/"):])
        return names

    def describe_exact_tag(self) -> str:
        """Return the annotated tag at HEAD; raises when HEAD is not tagged."""
        return self.raw(["describe", "--exact-match", "HEAD"]).strip()

    def verify_tag(self, tag: str) -> CommandOutput:
        return self.run(["tag", "-v", tag])

    def config_value(self, key: str) -> str:
        return self.raw(["config", key]).strip()

    def tag(self, name: str, message: str, *, sign: bool = True) -> None:
        args = ["tag", "-s" if sign else "-a", "-m", message, name]
        self.raw(args)

    def push_tag(self, remote: str, name: str) -> None:
        self.raw(["push", remote, name])

    def rev_parse(self, ref: str = "HEAD") -> str:
        return self.raw(["rev-parse", ref]).strip()
