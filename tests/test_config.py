# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests covering dispatcher settings and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hookchain.config import DispatcherSettings, git_hooks_dir, user_config_root
from hookchain.errors import ConfigError


@pytest.fixture
def xdg_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


def test_defaults_follow_xdg_config_home(xdg_home: Path) -> None:
    settings = DispatcherSettings.from_environment()

    assert settings.global_config == xdg_home / "pre-commit" / "pre-commit-config.yaml"
    assert settings.hook_dir == xdg_home / "git" / "hooks"
    assert settings.engine == "pre-commit"
    assert settings.hook_type == "pre-commit"
    assert settings.project_config_name == ".pre-commit-config.yaml"
    assert settings.skip_legacy_on_failure is False


def test_relative_xdg_config_home_is_ignored(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert user_config_root({"XDG_CONFIG_HOME": "relative/dir"}) == tmp_path / ".config"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, xdg_home: Path) -> None:
    monkeypatch.setenv("HOOKCHAIN_ENGINE", "prek")
    monkeypatch.setenv("HOOKCHAIN_GLOBAL_CONFIG", str(xdg_home / "global.yaml"))
    monkeypatch.setenv("HOOKCHAIN_LEGACY_HOOK", str(xdg_home / "legacy"))
    monkeypatch.setenv("HOOKCHAIN_SKIP_LEGACY_ON_FAILURE", "true")
    monkeypatch.setenv("HOOKCHAIN_EMOJI", "0")

    settings = DispatcherSettings.from_environment()

    assert settings.engine == "prek"
    assert settings.global_config == xdg_home / "global.yaml"
    assert settings.legacy_hook_path(xdg_home / "repo") == xdg_home / "legacy"
    assert settings.skip_legacy_on_failure is True
    assert settings.emoji is False


def test_project_config_variable_sets_config_name(monkeypatch: pytest.MonkeyPatch, xdg_home: Path) -> None:
    monkeypatch.setenv("HOOKCHAIN_PROJECT_CONFIG", "checks.yaml")

    settings = DispatcherSettings.from_environment()

    assert settings.project_config_path(xdg_home / "repo") == xdg_home / "repo" / "checks.yaml"


def test_empty_environment_value_keeps_default(monkeypatch: pytest.MonkeyPatch, xdg_home: Path) -> None:
    monkeypatch.setenv("HOOKCHAIN_ENGINE", "")

    assert DispatcherSettings.from_environment().engine == "pre-commit"


def test_explicit_overrides_beat_environment(monkeypatch: pytest.MonkeyPatch, xdg_home: Path) -> None:
    monkeypatch.setenv("HOOKCHAIN_HOOK_DIR", str(xdg_home / "env-hooks"))

    settings = DispatcherSettings.from_environment(hook_dir=xdg_home / "cli-hooks", emoji=None)

    assert settings.hook_dir == xdg_home / "cli-hooks"
    assert settings.emoji is True
    assert settings.dispatcher_path() == xdg_home / "cli-hooks" / "pre-commit"


def test_invalid_environment_value_raises_config_error(monkeypatch: pytest.MonkeyPatch, xdg_home: Path) -> None:
    monkeypatch.setenv("HOOKCHAIN_EMOJI", "sometimes")

    with pytest.raises(ConfigError, match="emoji"):
        DispatcherSettings.from_environment()


def test_blank_engine_rejected() -> None:
    with pytest.raises(ValidationError):
        DispatcherSettings(engine="   ")


def test_settings_are_immutable(xdg_home: Path) -> None:
    settings = DispatcherSettings.from_environment()

    with pytest.raises(ValidationError):
        settings.engine = "other"  # type: ignore[misc]


def test_default_legacy_hook_lives_in_repository(xdg_home: Path) -> None:
    settings = DispatcherSettings.from_environment(hook_type="pre-push")

    assert settings.legacy_hook_path(xdg_home / "repo") == xdg_home / "repo" / ".git" / "hooks" / "pre-push"


def test_submodule_hooks_follow_gitdir_file(tmp_path: Path) -> None:
    module_git = tmp_path / "super" / ".git" / "modules" / "lib"
    module_git.mkdir(parents=True)
    checkout = tmp_path / "super" / "lib"
    checkout.mkdir()
    (checkout / ".git").write_text("gitdir: ../.git/modules/lib\n", encoding="utf-8")

    assert git_hooks_dir(checkout).resolve() == (module_git / "hooks").resolve()


def test_linked_worktree_uses_main_repository_hooks(tmp_path: Path) -> None:
    main_git = tmp_path / "main" / ".git"
    worktree_git = main_git / "worktrees" / "feature"
    worktree_git.mkdir(parents=True)
    (worktree_git / "commondir").write_text("../..\n", encoding="utf-8")
    checkout = tmp_path / "feature"
    checkout.mkdir()
    (checkout / ".git").write_text(f"gitdir: {worktree_git}\n", encoding="utf-8")

    settings = DispatcherSettings(hook_type="pre-commit")

    assert settings.legacy_hook_path(checkout).resolve() == (main_git / "hooks" / "pre-commit").resolve()


def test_unreadable_git_file_falls_back_to_dot_git(tmp_path: Path) -> None:
    (tmp_path / ".git").write_text("not a pointer\n", encoding="utf-8")

    assert git_hooks_dir(tmp_path) == tmp_path / ".git" / "hooks"
