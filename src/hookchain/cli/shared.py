# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, settings)."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Final

import typer

from ..config import DispatcherSettings
from ..errors import HookChainError
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import warn as core_warn

PACKAGE_LOGGER: Final[str] = "hookchain"

EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output (default: HOOKCHAIN_EMOJI or on)."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Trace resolution and process launches on stderr."),
]
HOOK_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--hook-dir", help="Directory the dispatcher was invoked from."),
]
HOOK_TYPE_OPTION = Annotated[
    str | None,
    typer.Option("--hook-type", help="Hook type passed to the checking engine."),
]


@dataclass(slots=True)
class CLILogger:
    """Adapter around console logging helpers respecting CLI emoji settings."""

    use_emoji: bool

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool) -> CLILogger:
    return CLILogger(use_emoji=emoji)


def configure_debug_logging(enabled: bool) -> None:
    """Stream package debug records to stderr when ``enabled``."""

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not enabled or getattr(logger, "_hookchain_debug_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("[debug] %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, "_hookchain_debug_configured", True)


def load_settings(**overrides: object) -> DispatcherSettings:
    """Return settings from the environment plus CLI overrides, exiting on invalid input.

    Raises:
        typer.Exit: When the settings fail validation.
    """

    try:
        return DispatcherSettings.from_environment(**overrides)
    except HookChainError as exc:
        core_fail(str(exc), use_emoji=False)
        raise typer.Exit(code=exc.exit_code) from exc


__all__ = [
    "CLILogger",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "HOOK_DIR_OPTION",
    "HOOK_TYPE_OPTION",
    "build_cli_logger",
    "configure_debug_logging",
    "load_settings",
]
