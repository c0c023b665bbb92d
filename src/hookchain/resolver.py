# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover the configuration sources that apply to the current invocation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .config import DispatcherSettings
from .errors import ResolutionError
from .models import ConfigurationSource, SourceScope

LOGGER = logging.getLogger(__name__)

WorkingDirectoryProvider = Callable[[], Path]


class ConfigurationResolver:
    """Resolve the global and project configuration files in execution order."""

    def __init__(
        self,
        settings: DispatcherSettings,
        *,
        cwd: WorkingDirectoryProvider = Path.cwd,
    ) -> None:
        """Bind the resolver to explicit settings.

        Args:
            settings: Dispatcher settings naming the configuration locations.
            cwd: Provider for the working directory, used when
                ``settings.project_root`` is unset.
        """

        self._settings = settings
        self._cwd = cwd

    def project_root(self) -> Path:
        """Return the directory the git operation was triggered from.

        Raises:
            ResolutionError: If the working directory cannot be determined.
        """

        if self._settings.project_root is not None:
            return self._settings.project_root
        try:
            return self._cwd()
        except OSError as exc:
            raise ResolutionError(f"Unable to determine the current working directory: {exc}") from exc

    def legacy_hook_path(self) -> Path:
        """Return where a pre-existing hook for this project would live.

        Raises:
            ResolutionError: If the working directory cannot be determined.
        """

        return self._settings.legacy_hook_path(self.project_root())

    def resolve(self) -> tuple[ConfigurationSource, ...]:
        """Return the configuration sources that exist right now.

        The global source always precedes the project source. Missing files are
        skipped; an empty tuple means there is nothing to check.

        Returns:
            tuple[ConfigurationSource, ...]: Sources in execution order.

        Raises:
            ResolutionError: If the working directory cannot be determined.
        """

        candidates = (
            ConfigurationSource(path=self._settings.global_config, scope=SourceScope.GLOBAL),
            ConfigurationSource(
                path=self._settings.project_config_path(self.project_root()),
                scope=SourceScope.PROJECT,
            ),
        )
        sources = tuple(candidate for candidate in candidates if candidate.path.is_file())
        LOGGER.debug(
            "resolved sources=%s",
            ",".join(source.scope.value for source in sources) or "none",
        )
        return sources


__all__ = ["ConfigurationResolver", "WorkingDirectoryProvider"]
