# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing message helpers with optional colour and emoji support."""

from __future__ import annotations

from rich.console import Console
from rich.rule import Rule
from rich.text import Text


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(console: Console, msg: str, *, style: str | None) -> None:
    """Render ``msg`` on ``console`` with ``style`` when colour is active."""

    text = Text(msg)
    if style and not console.no_color:
        text.stylize(style)
    console.print(text)


def section(console: Console, title: str) -> None:
    """Render a section header to delineate console output blocks."""

    if console.no_color:
        console.print(f"\n--- {title} ---")
    else:
        console.print()
        console.print(Rule(title))


def info(console: Console, msg: str, *, use_emoji: bool) -> None:
    """Emit an informational message."""

    _print_line(console, f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan")


def ok(console: Console, msg: str, *, use_emoji: bool) -> None:
    """Emit a success message."""

    _print_line(console, f"{emoji('✅ ', use_emoji)}{msg}", style="green")


def warn(console: Console, msg: str, *, use_emoji: bool) -> None:
    """Emit a warning message."""

    _print_line(console, f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow")


def fail(console: Console, msg: str, *, use_emoji: bool) -> None:
    """Emit an error message."""

    _print_line(console, f"{emoji('❌ ', use_emoji)}{msg}", style="red")


__all__ = ["emoji", "fail", "info", "ok", "section", "warn"]
