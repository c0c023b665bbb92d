# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dispatcher settings shared by the resolver, invoker and legacy hook lookup."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

DEFAULT_HOOK_TYPE: Final[str] = "pre-commit"
DEFAULT_ENGINE: Final[str] = "pre-commit"
DEFAULT_PROJECT_CONFIG: Final[str] = ".pre-commit-config.yaml"
GLOBAL_CONFIG_RELATIVE: Final[Path] = Path("pre-commit") / "pre-commit-config.yaml"
HOOK_DIR_RELATIVE: Final[Path] = Path("git") / "hooks"
ENV_PREFIX: Final[str] = "HOOKCHAIN_"
GITDIR_PREFIX: Final[str] = "gitdir:"


def user_config_root(environ: Mapping[str, str] | None = None) -> Path:
    """Return the per-user configuration directory.

    Args:
        environ: Environment mapping consulted for ``XDG_CONFIG_HOME``.

    Returns:
        Path: ``$XDG_CONFIG_HOME`` when set to an absolute path, otherwise ``~/.config``.
    """

    env = os.environ if environ is None else environ
    xdg = env.get("XDG_CONFIG_HOME", "").strip()
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return Path.home() / ".config"


class DispatcherSettings(BaseSettings):
    """Explicit description of every location and executable the dispatcher uses.

    Every field may be set through a ``HOOKCHAIN_<FIELD>`` environment variable,
    except ``project_config_name`` which reads ``HOOKCHAIN_PROJECT_CONFIG``.
    Empty variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        frozen=True,
        extra="forbid",
    )

    hook_type: str = DEFAULT_HOOK_TYPE
    engine: str = DEFAULT_ENGINE
    search_path: str | None = None
    global_config: Path = Field(default_factory=lambda: user_config_root() / GLOBAL_CONFIG_RELATIVE)
    project_config_name: str = Field(
        default=DEFAULT_PROJECT_CONFIG,
        validation_alias=AliasChoices(f"{ENV_PREFIX}PROJECT_CONFIG", "project_config_name"),
    )
    project_root: Path | None = None
    hook_dir: Path = Field(default_factory=lambda: user_config_root() / HOOK_DIR_RELATIVE)
    legacy_hook: Path | None = None
    skip_legacy_on_failure: bool = False
    emoji: bool = True

    @field_validator("hook_type", "engine", "project_config_name")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("value must not be blank")
        return stripped

    @field_validator("global_config", "hook_dir", "project_root", "legacy_hook")
    @classmethod
    def _expand_user(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    @classmethod
    def from_environment(cls, **overrides: object) -> DispatcherSettings:
        """Build settings from defaults, ``HOOKCHAIN_*`` variables and explicit overrides.

        Explicit keyword overrides win over environment variables, which win over
        defaults. ``None`` overrides are ignored so CLI options can be passed through
        unconditionally.

        Args:
            **overrides: Field values supplied by the caller.

        Returns:
            DispatcherSettings: Validated, immutable settings.

        Raises:
            ConfigError: If any value fails validation.
        """

        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigError(_summarise_validation_error(exc)) from exc

    def project_config_path(self, project_root: Path) -> Path:
        """Return the project configuration location below ``project_root``."""

        return project_root / self.project_config_name

    def legacy_hook_path(self, project_root: Path) -> Path:
        """Return the pre-existing hook path, defaulting to the repository's own hook slot.

        Linked worktrees and submodules are followed to the hooks directory git
        itself uses.
        """

        if self.legacy_hook is not None:
            return self.legacy_hook
        return git_hooks_dir(project_root) / self.hook_type

    def dispatcher_path(self) -> Path:
        """Return where the dispatcher itself lives at the hook slot."""

        return self.hook_dir / self.hook_type


def _read_first_line(path: Path) -> str | None:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        return None
    return lines[0].strip() if lines else None


def git_hooks_dir(project_root: Path) -> Path:
    """Return the directory git reads hooks from for ``project_root``.

    A ``.git`` file (linked worktree or submodule) names the real git directory
    on its ``gitdir:`` line. Linked worktrees share the hooks of the main
    repository, found through the git directory's ``commondir`` file.
    """

    dot_git = project_root / ".git"
    if not dot_git.is_file():
        return dot_git / "hooks"
    line = _read_first_line(dot_git)
    if line is None or not line.startswith(GITDIR_PREFIX):
        return dot_git / "hooks"
    git_dir = project_root / line[len(GITDIR_PREFIX) :].strip()
    common = _read_first_line(git_dir / "commondir")
    if common:
        git_dir = git_dir / common
    return git_dir / "hooks"


def _summarise_validation_error(exc: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}" for error in exc.errors()
    )
    return f"Invalid hookchain settings: {details}"


__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_HOOK_TYPE",
    "DEFAULT_PROJECT_CONFIG",
    "DispatcherSettings",
    "ENV_PREFIX",
    "git_hooks_dir",
    "user_config_root",
]
