# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capability wrapping a hook that occupied the slot before the dispatcher."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import InvocationContext
from .process import CommandOptions, CommandRunner, run_command

LOGGER = logging.getLogger(__name__)

PathProvider = Callable[[], Path]


@runtime_checkable
class LegacyHook(Protocol):
    """Optional pre-existing hook the chain delegates to last."""

    def is_present(self) -> bool:
        """Return ``True`` when the hook exists and may be executed."""
        ...

    def run(self, ctx: InvocationContext) -> int:
        """Run the hook with ``ctx`` and return its exit status."""
        ...

    def absence_reason(self) -> str | None:
        """Return why an existing hook is being ignored, or ``None`` when there is nothing to report."""
        ...


class FileLegacyHook:
    """Executable file at a fixed path, typically ``.git/hooks/<hook type>``."""

    def __init__(
        self,
        location: Path | PathProvider,
        *,
        dispatcher: Path | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        """Describe the legacy hook location.

        Args:
            location: Path of the pre-existing hook, or a provider evaluated on
                every access when the path depends on the project root.
            dispatcher: Location of the dispatcher itself. A legacy path that
                resolves to the dispatcher is treated as absent.
            runner: Command runner used to execute the hook.
        """

        self._location = location
        self._dispatcher = dispatcher
        self._runner = runner

    @property
    def path(self) -> Path:
        """Return the hook location, evaluating a provider on every access."""

        if isinstance(self._location, Path):
            return self._location
        return self._location()

    def exists(self) -> bool:
        return self.path.is_file()

    def is_executable(self) -> bool:
        return os.access(self.path, os.X_OK)

    def is_dispatcher(self) -> bool:
        """Return ``True`` when ``path`` is the dispatcher, which must never delegate to itself."""

        if self._dispatcher is None or not self._dispatcher.exists():
            return False
        try:
            return self.path.samefile(self._dispatcher)
        except OSError:
            return False

    def is_present(self) -> bool:
        return self.exists() and self.is_executable() and not self.is_dispatcher()

    def absence_reason(self) -> str | None:
        if self.exists() and not self.is_executable() and not self.is_dispatcher():
            return f"Ignoring {self.path}: the hook is not set as executable"
        return None

    def run(self, ctx: InvocationContext) -> int:
        LOGGER.debug("delegate path=%s", self.path)
        completed = self._runner([str(self.path.absolute()), *ctx], options=CommandOptions())
        return completed.returncode

    def __repr__(self) -> str:
        return f"FileLegacyHook(location={self._location!r})"


__all__ = ["FileLegacyHook", "LegacyHook", "PathProvider"]
