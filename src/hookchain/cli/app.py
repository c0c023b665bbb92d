# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .commands import register_commands

app = typer.Typer(
    name="hookchain",
    help="Global git hook dispatcher chaining pre-commit configurations.",
    add_completion=False,
    no_args_is_help=True,
)
register_commands(app)


def main() -> None:
    """Console script entry point."""

    app(prog_name="hookchain")


__all__ = ["app", "main"]
