# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command executed from the hook slot."""

from __future__ import annotations

from typing import Annotated

import typer

from ...errors import HookChainError
from ...runner import ChainRunner
from ..shared import (
    DEBUG_OPTION,
    EMOJI_OPTION,
    HOOK_DIR_OPTION,
    HOOK_TYPE_OPTION,
    build_cli_logger,
    configure_debug_logging,
    load_settings,
)

CONTEXT_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(help="Arguments git passed to the hook, forwarded after '--'.", show_default=False),
]


def run_hooks(
    hook_dir: HOOK_DIR_OPTION = None,
    hook_type: HOOK_TYPE_OPTION = None,
    emoji: EMOJI_OPTION = None,
    debug: DEBUG_OPTION = False,
    hook_args: CONTEXT_ARGUMENT = None,
) -> None:
    """Run every applicable pre-commit configuration, then the legacy hook.

    Exits with status 0 when every check passed, otherwise with the first
    nonzero status in execution order.

    Raises:
        typer.Exit: Always raised to terminate with the aggregate exit status.
    """

    configure_debug_logging(debug)
    settings = load_settings(hook_dir=hook_dir, hook_type=hook_type, emoji=emoji)
    runner = ChainRunner.from_settings(settings)
    try:
        exit_code = runner.run(tuple(hook_args or ()))
    except HookChainError as exc:
        build_cli_logger(emoji=settings.emoji).fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=exit_code)


def register(app: typer.Typer) -> None:
    """Register the ``run`` command on ``app``."""

    app.command(name="run", help="Run the hook chain (invoked by git).")(run_hooks)


__all__ = ["register", "run_hooks"]
