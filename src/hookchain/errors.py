# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fatal error types raised while dispatching a hook chain."""

from __future__ import annotations

from typing import Final

FATAL_EXIT_CODE: Final[int] = 1


class HookChainError(RuntimeError):
    """Base error for failures that abort the whole chain."""

    def __init__(self, message: str, *, exit_code: int = FATAL_EXIT_CODE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable diagnostic shown on the error stream.
            exit_code: Exit status the dispatcher terminates with.
        """

        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(HookChainError):
    """Raised when dispatcher settings or their overrides are invalid."""


class ResolutionError(HookChainError):
    """Raised when the working directory needed for resolution is unavailable."""


class EngineNotFoundError(HookChainError):
    """Raised when the checking engine cannot be located or launched."""

    def __init__(self, engine: str, search_path: str | None = None, *, reason: str | None = None) -> None:
        """Record the engine name and the search path that was consulted.

        Args:
            engine: Executable name or path of the checking engine.
            search_path: ``PATH``-style string consulted during lookup, when overridden.
            reason: Launch failure detail when the engine was found but could not start.
        """

        if reason is None:
            location = "PATH" if search_path is None else repr(search_path)
            message = f"Checking engine '{engine}' was not found on {location}"
        else:
            message = f"Checking engine '{engine}' could not be started: {reason}"
        super().__init__(message)
        self.engine = engine
        self.search_path = search_path


__all__ = [
    "FATAL_EXIT_CODE",
    "ConfigError",
    "EngineNotFoundError",
    "HookChainError",
    "ResolutionError",
]
