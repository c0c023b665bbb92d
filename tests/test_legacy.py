# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the file-backed legacy hook."""

from __future__ import annotations

from pathlib import Path

from hookchain.legacy import FileLegacyHook, LegacyHook
from tests.helpers.stubs import write_executable


def test_missing_file_is_absent(tmp_path: Path) -> None:
    hook = FileLegacyHook(tmp_path / "pre-commit")

    assert isinstance(hook, LegacyHook)
    assert not hook.is_present()


def test_non_executable_file_is_absent(tmp_path: Path) -> None:
    path = tmp_path / "pre-commit"
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o644)
    hook = FileLegacyHook(path)

    assert hook.exists()
    assert not hook.is_executable()
    assert not hook.is_present()


def test_dispatcher_never_delegates_to_itself(tmp_path: Path) -> None:
    dispatcher = write_executable(tmp_path / "global" / "pre-commit", "exit 0")
    link = tmp_path / "repo" / "pre-commit"
    link.parent.mkdir()
    link.symlink_to(dispatcher)

    assert not FileLegacyHook(link, dispatcher=dispatcher).is_present()
    assert FileLegacyHook(link, dispatcher=tmp_path / "missing").is_present()


def test_run_forwards_context_and_exit_code(tmp_path: Path) -> None:
    record = tmp_path / "args.txt"
    path = write_executable(tmp_path / "pre-commit", f'echo "$@" > "{record}"\nexit 4')

    exit_code = FileLegacyHook(path).run(("one", "two"))

    assert exit_code == 4
    assert record.read_text(encoding="utf-8").strip() == "one two"


def test_location_provider_is_evaluated_on_access(tmp_path: Path) -> None:
    roots = [tmp_path / "first", tmp_path / "second"]

    def provider() -> Path:
        return roots[0] / "pre-commit"

    hook = FileLegacyHook(provider)
    assert hook.path == tmp_path / "first" / "pre-commit"

    roots[0] = tmp_path / "second"
    assert hook.path == tmp_path / "second" / "pre-commit"


def test_non_executable_file_explains_why_it_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "pre-commit"
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(0o644)

    reason = FileLegacyHook(path).absence_reason()

    assert reason is not None
    assert str(path) in reason
    assert "not set as executable" in reason


def test_missing_or_runnable_hook_has_no_absence_reason(tmp_path: Path) -> None:
    assert FileLegacyHook(tmp_path / "missing").absence_reason() is None
    assert FileLegacyHook(write_executable(tmp_path / "pre-commit", "exit 0")).absence_reason() is None
