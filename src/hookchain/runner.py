# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run every resolved configuration in order, then delegate to the legacy hook."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .config import DispatcherSettings
from .errors import FATAL_EXIT_CODE, EngineNotFoundError, ResolutionError
from .invoker import HookInvoker
from .legacy import FileLegacyHook, LegacyHook
from .logging import fail, info, ok, warn
from .models import (
    ChainReport,
    ConfigurationSource,
    HookOutcome,
    InvocationContext,
    RunState,
    aggregate_exit_code,
)
from .process import CommandRunner, run_command, signal_name
from .protocols import SourceInvoker, SourceResolver
from .resolver import ConfigurationResolver, WorkingDirectoryProvider

LOGGER = logging.getLogger(__name__)

COMMAND_NOT_FOUND_EXIT: Final[int] = 127
COMMAND_NOT_EXECUTABLE_EXIT: Final[int] = 126

_TRANSITIONS: Final[Mapping[RunState, frozenset[RunState]]] = {
    RunState.NOT_STARTED: frozenset({RunState.RESOLVING}),
    RunState.RESOLVING: frozenset({RunState.INVOKING, RunState.DELEGATING, RunState.ABORTED}),
    RunState.INVOKING: frozenset({RunState.INVOKING, RunState.DELEGATING, RunState.ABORTED}),
    RunState.DELEGATING: frozenset({RunState.DONE}),
    RunState.DONE: frozenset(),
    RunState.ABORTED: frozenset(),
}


@dataclass(slots=True)
class _RunTracker:
    """Per-run state: lifecycle position and outcomes in execution order."""

    state: RunState = RunState.NOT_STARTED
    index: int = -1
    outcomes: list[HookOutcome] = field(default_factory=list)

    def advance(self, target: RunState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal chain transition {self.state.value} -> {target.value}")
        if target is RunState.INVOKING:
            self.index += 1
        LOGGER.debug("state %s -> %s index=%s", self.state.value, target.value, self.index)
        self.state = target

    def abort(self, exit_code: int) -> ChainReport:
        self.advance(RunState.ABORTED)
        return ChainReport(state=self.state, outcomes=tuple(self.outcomes), exit_code=exit_code)


class ChainRunner:
    """Orchestrate resolution, ordered engine invocation and legacy delegation."""

    def __init__(
        self,
        resolver: SourceResolver,
        invoker: SourceInvoker,
        legacy_hook: LegacyHook | None = None,
        *,
        skip_legacy_on_failure: bool = False,
        use_emoji: bool = True,
    ) -> None:
        """Wire the chain collaborators.

        Args:
            resolver: Resolver yielding configuration sources for this run.
            invoker: Invoker running the checking engine per source.
            legacy_hook: Optional pre-existing hook executed after every source.
            skip_legacy_on_failure: When ``True`` a failed source prevents delegation.
            use_emoji: Whether console diagnostics include emoji prefixes.
        """

        self._resolver = resolver
        self._invoker = invoker
        self._legacy_hook = legacy_hook
        self._skip_legacy_on_failure = skip_legacy_on_failure
        self._use_emoji = use_emoji

    @classmethod
    def from_settings(
        cls,
        settings: DispatcherSettings,
        *,
        cwd: WorkingDirectoryProvider = Path.cwd,
        runner: CommandRunner = run_command,
    ) -> ChainRunner:
        """Build a runner whose collaborators all share ``settings``.

        The legacy hook location depends on the project root, so it is looked up
        lazily once resolution has succeeded.

        Args:
            settings: Dispatcher settings.
            cwd: Working-directory provider handed to the resolver.
            runner: Command runner shared by the invoker and the legacy hook.

        Returns:
            ChainRunner: Runner ready to execute.
        """

        resolver = ConfigurationResolver(settings, cwd=cwd)
        return cls(
            resolver,
            HookInvoker(settings, runner=runner),
            FileLegacyHook(resolver.legacy_hook_path, dispatcher=settings.dispatcher_path(), runner=runner),
            skip_legacy_on_failure=settings.skip_legacy_on_failure,
            use_emoji=settings.emoji,
        )

    def run(self, ctx: InvocationContext) -> int:
        """Run the chain and return the exit status reported to git."""

        return self.execute(ctx).exit_code

    def execute(self, ctx: InvocationContext) -> ChainReport:
        """Run the chain and return a report of every recorded outcome.

        Args:
            ctx: Arguments git passed to the hook; forwarded unchanged to every process.

        Returns:
            ChainReport: Final state, outcomes in execution order and aggregate exit code.
        """

        tracker = _RunTracker()
        tracker.advance(RunState.RESOLVING)
        try:
            sources = self._resolver.resolve()
        except ResolutionError as exc:
            fail(str(exc), use_emoji=self._use_emoji)
            return tracker.abort(exc.exit_code)

        for source in sources:
            tracker.advance(RunState.INVOKING)
            try:
                outcome = self._invoke(source, ctx)
            except EngineNotFoundError as exc:
                fail(str(exc), use_emoji=self._use_emoji)
                return tracker.abort(FATAL_EXIT_CODE)
            tracker.outcomes.append(outcome)

        tracker.advance(RunState.DELEGATING)
        legacy_outcome = self._delegate(ctx, tracker.outcomes)
        if legacy_outcome is not None:
            tracker.outcomes.append(legacy_outcome)

        tracker.advance(RunState.DONE)
        report = ChainReport(
            state=tracker.state,
            outcomes=tuple(tracker.outcomes),
            exit_code=aggregate_exit_code(tracker.outcomes),
        )
        self._summarise(report)
        return report

    def _invoke(self, source: ConfigurationSource, ctx: InvocationContext) -> HookOutcome:
        info(f"Running {source.describe()}", use_emoji=self._use_emoji)
        return self._invoker.invoke(source, ctx)

    def _delegate(self, ctx: InvocationContext, outcomes: list[HookOutcome]) -> HookOutcome | None:
        """Run the legacy hook when present and return its outcome."""

        legacy = self._legacy_hook
        if legacy is None:
            return None
        if not legacy.is_present():
            reason = legacy.absence_reason()
            if reason is not None:
                warn(reason, use_emoji=self._use_emoji)
            return None
        if self._skip_legacy_on_failure and any(not outcome.succeeded for outcome in outcomes):
            warn("Skipping legacy hook after failed checks", use_emoji=self._use_emoji)
            return None

        info("Running legacy hook", use_emoji=self._use_emoji)
        try:
            exit_code = legacy.run(ctx)
        except FileNotFoundError as exc:
            fail(f"Legacy hook could not be started: {exc}", use_emoji=self._use_emoji)
            exit_code = COMMAND_NOT_FOUND_EXIT
        except OSError as exc:
            fail(f"Legacy hook could not be executed: {exc}", use_emoji=self._use_emoji)
            exit_code = COMMAND_NOT_EXECUTABLE_EXIT
        return HookOutcome(source=None, exit_code=exit_code)

    def _summarise(self, report: ChainReport) -> None:
        if report.outcomes and report.exit_code == 0:
            ok(f"All {len(report.outcomes)} hook run(s) passed", use_emoji=self._use_emoji)
            return
        for outcome in report.failures:
            detail = f"exit code {outcome.exit_code}"
            name = signal_name(outcome.exit_code)
            if name is not None:
                detail = f"{detail}, {name}"
            fail(f"{outcome.label} failed ({detail})", use_emoji=self._use_emoji)


__all__ = ["COMMAND_NOT_EXECUTABLE_EXIT", "COMMAND_NOT_FOUND_EXIT", "ChainRunner"]
