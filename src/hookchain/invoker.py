# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the checking engine against a single configuration source."""

from __future__ import annotations

import logging
import shlex

from .config import DispatcherSettings
from .errors import EngineNotFoundError
from .models import ConfigurationSource, HookOutcome, InvocationContext
from .process import CommandOptions, CommandRunner, run_command

LOGGER = logging.getLogger(__name__)

ENGINE_SUBCOMMAND = "hook-impl"


class HookInvoker:
    """Launch the checking engine in the foreground and capture its exit status."""

    def __init__(self, settings: DispatcherSettings, *, runner: CommandRunner = run_command) -> None:
        self._settings = settings
        self._runner = runner

    def build_command(self, source: ConfigurationSource, ctx: InvocationContext) -> list[str]:
        """Return the engine argument vector for ``source``.

        The layout mirrors the engine's own generated hook scripts:
        ``<engine> hook-impl --hook-type=<type> --hook-dir <dir> --config=<path> -- <ctx...>``.
        """

        return [
            self._settings.engine,
            ENGINE_SUBCOMMAND,
            f"--hook-type={self._settings.hook_type}",
            "--hook-dir",
            str(self._settings.hook_dir),
            f"--config={source.path}",
            "--",
            *ctx,
        ]

    def invoke(self, source: ConfigurationSource, ctx: InvocationContext) -> HookOutcome:
        """Run the engine for ``source`` and block until it exits.

        A nonzero exit is a normal outcome, not an error.

        Args:
            source: Configuration file handed to the engine.
            ctx: Arguments git passed to the hook, forwarded unchanged.

        Returns:
            HookOutcome: Outcome carrying the engine's exit status.

        Raises:
            EngineNotFoundError: If the engine cannot be located or launched.
        """

        command = self.build_command(source, ctx)
        LOGGER.debug("invoke scope=%s command=%s", source.scope.value, shlex.join(command))
        try:
            completed = self._runner(command, options=CommandOptions(search_path=self._settings.search_path))
        except FileNotFoundError as exc:
            raise EngineNotFoundError(self._settings.engine, self._settings.search_path) from exc
        except OSError as exc:
            raise EngineNotFoundError(self._settings.engine, self._settings.search_path, reason=str(exc)) from exc
        LOGGER.debug("engine exited scope=%s returncode=%s", source.scope.value, completed.returncode)
        return HookOutcome(source=source, exit_code=completed.returncode)


__all__ = ["ENGINE_SUBCOMMAND", "HookInvoker"]
