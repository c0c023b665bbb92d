# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects exchanged between the resolver, invoker and chain runner."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

InvocationContext = Sequence[str]

LEGACY_HOOK_LABEL = "legacy hook"


class SourceScope(str, Enum):
    """Enumerate where a configuration source was discovered."""

    GLOBAL = "global"
    PROJECT = "project"


class FailureKind(str, Enum):
    """Classify non-fatal failures folded into the aggregate exit code."""

    CHECK_FAILURE = "check-failure"
    DELEGATION_FAILURE = "delegation-failure"


class RunState(str, Enum):
    """Lifecycle states of a single chain run."""

    NOT_STARTED = "not-started"
    RESOLVING = "resolving"
    INVOKING = "invoking"
    DELEGATING = "delegating"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class ConfigurationSource:
    """Identify one configuration file handed to the checking engine."""

    path: Path
    scope: SourceScope

    def describe(self) -> str:
        """Return a short ``scope: path`` label for console output."""

        return f"{self.scope.value}: {display_path(self.path)}"


@dataclass(frozen=True, slots=True)
class HookOutcome:
    """Exit status reported by one process in the chain.

    ``source`` is ``None`` when the outcome belongs to the legacy hook.
    """

    source: ConfigurationSource | None
    exit_code: int

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the process exited with status zero."""

        return self.exit_code == 0

    @property
    def failure(self) -> FailureKind | None:
        """Return the failure classification, or ``None`` for a successful outcome."""

        if self.succeeded:
            return None
        if self.source is None:
            return FailureKind.DELEGATION_FAILURE
        return FailureKind.CHECK_FAILURE

    @property
    def label(self) -> str:
        return LEGACY_HOOK_LABEL if self.source is None else self.source.describe()


@dataclass(frozen=True, slots=True)
class ChainReport:
    """Record of one chain run: final state, ordered outcomes and exit code."""

    state: RunState
    outcomes: tuple[HookOutcome, ...]
    exit_code: int

    @property
    def failures(self) -> tuple[HookOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.succeeded)


def aggregate_exit_code(outcomes: Sequence[HookOutcome]) -> int:
    """Return ``0`` when every outcome passed, else the first nonzero exit code.

    Args:
        outcomes: Outcomes in execution order.

    Returns:
        int: Aggregate exit status reported to git.
    """

    for outcome in outcomes:
        if not outcome.succeeded:
            return outcome.exit_code
    return 0


def display_path(path: Path) -> str:
    """Return ``path`` shortened relative to the home directory when possible."""

    try:
        return f"~/{path.relative_to(Path.home())}"
    except (RuntimeError, ValueError):
        return str(path)


__all__ = [
    "LEGACY_HOOK_LABEL",
    "ChainReport",
    "ConfigurationSource",
    "FailureKind",
    "HookOutcome",
    "InvocationContext",
    "RunState",
    "SourceScope",
    "aggregate_exit_code",
    "display_path",
]
