# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Structural interfaces the chain runner depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ConfigurationSource, HookOutcome, InvocationContext


@runtime_checkable
class SourceResolver(Protocol):
    """Produce the configuration sources for one run."""

    def resolve(self) -> tuple[ConfigurationSource, ...]:
        """Return sources in execution order."""
        ...


@runtime_checkable
class SourceInvoker(Protocol):
    """Run the checking engine against one configuration source."""

    def invoke(self, source: ConfigurationSource, ctx: InvocationContext) -> HookOutcome:
        """Return the outcome of checking ``source``."""
        ...


__all__ = ["SourceInvoker", "SourceResolver"]
