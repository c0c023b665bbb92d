# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from hookchain.config import DispatcherSettings
from tests.helpers.stubs import write_executable

SettingsFactory = Callable[..., DispatcherSettings]
EngineFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolate_hookchain_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's ``HOOKCHAIN_*`` variables out of every test."""

    for name in list(os.environ):
        if name.upper().startswith("HOOKCHAIN_"):
            monkeypatch.delenv(name)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / ".git" / "hooks").mkdir(parents=True)
    return root


@pytest.fixture
def settings_factory(tmp_path: Path, project_root: Path) -> SettingsFactory:
    """Return a factory for settings rooted entirely inside ``tmp_path``."""

    def factory(**overrides: object) -> DispatcherSettings:
        values: dict[str, object] = {
            "global_config": tmp_path / "config" / "pre-commit" / "pre-commit-config.yaml",
            "project_root": project_root,
            "hook_dir": tmp_path / "config" / "git" / "hooks",
            "emoji": False,
        }
        values.update(overrides)
        return DispatcherSettings(**values)

    return factory


@pytest.fixture
def engine_log(tmp_path: Path) -> Path:
    return tmp_path / "engine.log"


@pytest.fixture
def fake_engine(tmp_path: Path, engine_log: Path) -> EngineFactory:
    """Return a factory writing a fake ``pre-commit`` that logs its argv.

    Each call appends one line to ``engine.log``. Exit codes are taken from the
    supplied sequence in call order; the last one repeats.
    """

    def factory(exit_codes: Sequence[int] = (0,)) -> Path:
        bin_dir = tmp_path / "bin"
        counter = tmp_path / "engine.count"
        codes = " ".join(str(code) for code in exit_codes)
        body = "\n".join(
            [
                f'echo "$*" >> "{engine_log}"',
                f'n=$(cat "{counter}" 2>/dev/null || echo 0)',
                f'echo $((n + 1)) > "{counter}"',
                f"set -- {codes}",
                'i=0; code=0; for c in "$@"; do code=$c; [ "$i" -eq "$n" ] && break; i=$((i + 1)); done',
                'exit "$code"',
            ]
        )
        write_executable(bin_dir / "pre-commit", body)
        return bin_dir

    return factory
