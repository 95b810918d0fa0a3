# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (console, errors, catalog loading)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from .. import console as messages
from ..errors import ConfigError
from ..loader import TreeCatalogLoader
from ..model_catalog import CatalogSnapshot


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers respecting emoji settings."""

    console: Console
    use_emoji: bool

    def section(self, title: str) -> None:
        messages.section(self.console, title)

    def info(self, message: str) -> None:
        messages.info(self.console, message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        messages.ok(self.console, message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        messages.warn(self.console, message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        messages.fail(self.console, message, use_emoji=self.use_emoji)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated Rich console."""

    console = Console(no_color=no_color, highlight=False)
    return CLILogger(console=console, use_emoji=emoji)


def load_catalog(config: Path) -> CatalogSnapshot:
    """Load ``config`` into a snapshot, converting failures into :class:`CLIError`.

    Raises:
        CLIError: If the file is missing or the configuration is invalid.
    """

    try:
        return TreeCatalogLoader().load_path(config)
    except FileNotFoundError as exc:
        raise CLIError(f"configuration file not found: {config}") from exc
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc


__all__ = ["CLIError", "CLILogger", "build_cli_logger", "load_catalog"]
