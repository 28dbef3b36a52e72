from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest


def git(cwd: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout


def commit_file(repo: Path, name: str, content: str, message: str | None = None) -> str:
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    git(repo, "add", name)
    git(repo, "commit", "-m", message or f"Update {name}")
    return git(repo, "rev-parse", "HEAD").strip()


def configure_identity(repo: Path, email: str = "dev@example.com") -> None:
    git(repo, "config", "user.name", "Moar Dev")
    git(repo, "config", "user.email", email)
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")


@pytest.fixture(autouse=True)
def _git_isolation(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global git configuration out of the tests."""
    global_config = tmp_path_factory.mktemp("gitconfig") / "config"
    global_config.write_text("", encoding="utf-8")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("MOAR_HOME", str(tmp_path_factory.mktemp("moar-home")))
    monkeypatch.delenv("MOAR_PACKAGE_DIR", raising=False)


@dataclass
class GitWorkspace:
    """A bare ``origin`` with ``master`` and ``develop`` plus a seed clone to push from."""

    root: Path
    origin: Path
    seed: Path
    workspace: Path

    def clone(self, name: str, branch: str = "develop") -> Path:
        target = self.workspace / name
        git(self.root, "clone", "-q", str(self.origin), str(target))
        configure_identity(target)
        git(target, "checkout", "-q", branch)
        return target

    def push_branch(self, branch: str, base: str, files: dict[str, str]) -> None:
        git(self.seed, "checkout", "-q", "-B", branch, f"origin/{base}")
        for name, content in files.items():
            commit_file(self.seed, name, content, f"{branch}: {name}")
        git(self.seed, "push", "-q", "origin", branch)


@pytest.fixture()
def git_workspace(tmp_path: Path) -> GitWorkspace:
    origin = tmp_path / "origin.git"
    git(tmp_path, "init", "-q", "--bare", str(origin))
    git(origin, "symbolic-ref", "HEAD", "refs/heads/develop")

    seed = tmp_path / "seed"
    seed.mkdir()
    git(seed, "init", "-q")
    configure_identity(seed)
    git(seed, "checkout", "-q", "-b", "master")
    commit_file(seed, "README.md", "moar\n", "Initial commit")
    git(seed, "remote", "add", "origin", str(origin))
    git(seed, "push", "-q", "origin", "master")
    git(seed, "checkout", "-q", "-b", "develop")
    commit_file(seed, "CHANGELOG.md", "develop\n", "Start develop")
    git(seed, "push", "-q", "origin", "develop")
    git(seed, "fetch", "-q", "origin")

    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return GitWorkspace(root=tmp_path, origin=origin, seed=seed, workspace=workspace)
