from __future__ import annotations

import json
from pathlib import Path

import pytest

from moar_cli.workspace import (
    WorkspaceError,
    is_git,
    read_version,
    require_package_dir,
    workspace_package_dirs,
)


def _fake_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    (path / ".git" / "config").write_text("[core]\n", encoding="utf-8")
    return path


def test_is_git(tmp_path: Path) -> None:
    assert not is_git(tmp_path)
    _fake_repo(tmp_path)
    assert is_git(tmp_path)


def test_require_package_dir_rejects_plain_directory(tmp_path: Path) -> None:
    with pytest.raises(WorkspaceError, match="git repository root"):
        require_package_dir(tmp_path)


def test_workspace_siblings_sorted(tmp_path: Path) -> None:
    for name in ("zeta", "alpha", "mid"):
        _fake_repo(tmp_path / name)
    (tmp_path / "not-a-repo").mkdir()
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")

    dirs = workspace_package_dirs(tmp_path / "mid")
    assert [d.name for d in dirs] == ["alpha", "mid", "zeta"]


class TestReadVersion:
    def test_package_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text(json.dumps({"name": "web", "version": "3.1.0"}), encoding="utf-8")
        assert read_version(tmp_path) == "3.1.0"

    def test_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "lib"\nversion = "0.4.2"\n', encoding="utf-8")
        assert read_version(tmp_path) == "0.4.2"

    def test_package_json_wins(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"version": "1.0.0"}', encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text('[project]\nversion = "2.0.0"\n', encoding="utf-8")
        assert read_version(tmp_path) == "1.0.0"

    @pytest.mark.parametrize(
        ("filename", "content"),
        [
            ("package.json", "{not json"),
            ("package.json", '{"name": "web"}'),
            ("pyproject.toml", "[project\n"),
            ("pyproject.toml", "[tool.other]\nx = 1\n"),
        ],
    )
    def test_missing_or_broken(self, tmp_path: Path, filename: str, content: str) -> None:
        (tmp_path / filename).write_text(content, encoding="utf-8")
        assert read_version(tmp_path) == ""

    def test_nothing_declared(self, tmp_path: Path) -> None:
        assert read_version(tmp_path) == ""
