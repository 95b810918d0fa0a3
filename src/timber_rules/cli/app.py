# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .check import check_command
from .roll import roll_command

app = typer.Typer(
    name="timber-rules",
    help="Inspect tree catalogs and simulate loot rolls.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("check")(check_command)
app.command("roll")(roll_command)

__all__ = ["app"]
