# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command listing what the hook chain would run, without running it."""

from __future__ import annotations

import typer

from ...errors import HookChainError
from ...legacy import FileLegacyHook
from ...models import LEGACY_HOOK_LABEL, display_path
from ...process import resolve_executable
from ...resolver import ConfigurationResolver
from ..shared import EMOJI_OPTION, HOOK_DIR_OPTION, HOOK_TYPE_OPTION, build_cli_logger, load_settings


def show_sources(
    hook_dir: HOOK_DIR_OPTION = None,
    hook_type: HOOK_TYPE_OPTION = None,
    emoji: EMOJI_OPTION = None,
) -> None:
    """Print the resolved chain in execution order.

    Raises:
        typer.Exit: With status 1 when resolution fails.
    """

    settings = load_settings(hook_dir=hook_dir, hook_type=hook_type, emoji=emoji)
    logger = build_cli_logger(emoji=settings.emoji)
    resolver = ConfigurationResolver(settings)
    try:
        sources = resolver.resolve()
        legacy = FileLegacyHook(resolver.legacy_hook_path(), dispatcher=settings.dispatcher_path())
    except HookChainError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    try:
        engine = resolve_executable(settings.engine, search_path=settings.search_path)
    except FileNotFoundError:
        logger.warn(f"Checking engine '{settings.engine}' was not found; commits with sources will be blocked")
    except OSError as exc:
        logger.warn(f"Checking engine '{settings.engine}' cannot be started: {exc}")
    else:
        logger.echo(f"engine: {engine}")

    entries = [source.describe() for source in sources]
    if legacy.is_present():
        entries.append(f"{LEGACY_HOOK_LABEL}: {display_path(legacy.path)}")
    else:
        reason = legacy.absence_reason()
        if reason is not None:
            logger.warn(reason)

    if not entries:
        logger.info("Nothing to run: no configuration sources and no legacy hook")
        return
    for position, entry in enumerate(entries, start=1):
        logger.echo(f"{position}. {entry}")


def register(app: typer.Typer) -> None:
    """Register the ``sources`` command on ``app``."""

    app.command(name="sources", help="List the configurations and legacy hook the chain would run.")(show_sources)


__all__ = ["register", "show_sources"]
