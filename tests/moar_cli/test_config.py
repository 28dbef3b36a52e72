from __future__ import annotations

import logging
from pathlib import Path

import pytest

from moar_cli.cli.commands.branch import build_prepare_config
from moar_cli.config import Settings, get_moar_home, get_package_dir, load_settings
from moar_cli.package import SimplifyNameMode


def test_moar_home_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOAR_HOME", str(tmp_path))
    assert get_moar_home() == tmp_path


def test_moar_home_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MOAR_HOME")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert get_moar_home() == tmp_path / ".moar"


def test_package_dir_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOAR_PACKAGE_DIR", str(tmp_path))
    assert get_package_dir() == tmp_path.resolve()


def test_package_dir_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert get_package_dir() == tmp_path.resolve()


def test_missing_file_gives_defaults() -> None:
    assert load_settings() == Settings()


def test_load_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOAR_HOME", str(tmp_path))
    (tmp_path / "config.toml").write_text(
        '[branch]\nsuppress = ".*WIP.*"\nshow = ""\n\n[display]\ncolor = false\n\n[status]\nverify = true\n',
        encoding="utf-8",
    )
    settings = load_settings()
    assert settings.suppress == ".*WIP.*"
    assert settings.show is None
    assert settings.hide is None
    assert settings.color is False
    assert settings.verify is True


def test_broken_file_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[branch\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="moar_cli.config"):
        assert load_settings(path) == Settings()
    assert "Ignoring unreadable settings file" in caplog.text


class TestBuildPrepareConfig:
    def test_settings_fill_missing_patterns(self) -> None:
        config = build_prepare_config(Settings(suppress="WIP", show="feature"), hide="old")
        rule = config.filter_rule
        assert rule.suppress is not None and rule.suppress.pattern == "WIP"
        assert rule.show is not None and rule.show.pattern == "feature"
        assert rule.hide is not None and rule.hide.pattern == "old"
        assert config.full is True

    def test_command_line_wins(self) -> None:
        config = build_prepare_config(Settings(show="feature"), show="fix")
        assert config.filter_rule.show is not None
        assert config.filter_rule.show.pattern == "fix"

    def test_flags(self) -> None:
        config = build_prepare_config(
            Settings(verify=True), full_name=True, test_merge=True, raw=True, naked=True
        )
        assert config.simplify_name_mode is SimplifyNameMode.REMOTE
        assert config.test_merge and config.raw_mode and config.naked and config.verify

    def test_default_name_mode(self) -> None:
        assert build_prepare_config(Settings()).simplify_name_mode is SimplifyNameMode.SHORT
