# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil
import signal

# Bandit: subprocess usage is intentional; hook processes are launched from
# argument lists with ``shell=True`` disabled.
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper enforces safe execution.
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

SIGNAL_EXIT_BASE: Final[int] = 128


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options.

    Standard streams are always inherited so hook output reaches the terminal
    exactly as the child process wrote it.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    search_path: str | None = None


CommandRunner = Callable[..., CompletedProcess[str]]


def resolve_executable(name: str, *, search_path: str | None = None) -> str:
    """Return the absolute path of ``name`` or raise when it cannot be found.

    Args:
        name: Executable name or path.
        search_path: Optional ``PATH``-style string overriding the process ``PATH``.

    Returns:
        str: Absolute path to the executable.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        PermissionError: If an explicit path lacks the execute permission.
    """

    candidate = Path(name)
    if candidate.is_absolute():
        if not candidate.is_file():
            raise FileNotFoundError(f"Executable '{name}' does not exist")
        if not os.access(candidate, os.X_OK):
            raise PermissionError(f"Executable '{name}' is not executable")
        return str(candidate)

    resolved = shutil.which(name, path=search_path)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{name}' was not found on PATH")
    return resolved


def _normalize_args(args: Sequence[str], search_path: str | None) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Command and arguments supplied by the caller.
        search_path: Optional ``PATH`` override used to resolve the executable.

    Returns:
        list[str]: Argument vector whose head is an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    return [resolve_executable(head, search_path=search_path), *rest]


def normalise_returncode(returncode: int) -> int:
    """Map a negative ``returncode`` (terminated by signal N) to ``128 + N``."""

    if returncode < 0:
        return SIGNAL_EXIT_BASE + abs(returncode)
    return returncode


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` in the foreground after normalising the executable path.

    Blocks until the child terminates. The child inherits stdin, stdout and stderr.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory, environment and search path overrides.

    Returns:
        CompletedProcess: Subprocess execution metadata with a non-negative return code.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args, resolved_options.search_path)

    # Bandit: argument lists come from dispatcher settings and git; no shell expansion.
    completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - controlled arguments, not shell input
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        env=dict(resolved_options.env) if resolved_options.env is not None else None,
        check=False,
        text=True,
    )
    return subprocess.CompletedProcess(
        args=completed.args,
        returncode=normalise_returncode(completed.returncode),
        stdout=completed.stdout,
        stderr=completed.stderr,
    )


def signal_name(returncode: int) -> str | None:
    """Return the signal name encoded in a ``128 + N`` exit code, if any."""

    if returncode <= SIGNAL_EXIT_BASE:
        return None
    try:
        return signal.Signals(returncode - SIGNAL_EXIT_BASE).name
    except ValueError:
        return None


__all__ = [
    "CommandOptions",
    "CommandRunner",
    "normalise_returncode",
    "resolve_executable",
    "run_command",
    "signal_name",
]
