# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Validate a tree configuration document and summarise its catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..loader import DEFAULT_CONFIG_PATH
from ..model_catalog import CatalogSnapshot
from .shared import CLIError, CLILogger, build_cli_logger, load_catalog


def build_definitions_table(snapshot: CatalogSnapshot) -> Table:
    """Return a table with one row per tree definition."""

    table = Table(title="Tree definitions")
    table.add_column("Tree", style="bold")
    for column in ("Logs", "Leaves", "Log loot", "Leaf loot", "Tree loot", "Tools"):
        table.add_column(column, justify="right")
    for definition in sorted(snapshot.definitions, key=lambda item: item.key):
        table.add_row(
            definition.key,
            str(len(definition.log_signatures)),
            str(len(definition.leaf_signatures)),
            str(len(definition.log_loot)),
            str(len(definition.leaf_loot)),
            str(len(definition.entire_tree_loot)),
            str(len(definition.required_tools)),
        )
    return table


def build_overlays_table(snapshot: CatalogSnapshot) -> Table:
    """Return a table describing global overlays and engine settings."""

    overlays = snapshot.overlays
    settings = snapshot.settings
    table = Table(title="Global overlays and settings", show_header=False)
    table.add_column("Name", style="bold")
    table.add_column("Value")
    table.add_row("plantable soil", ", ".join(str(soil) for soil in overlays.plantable_soil) or "-")
    table.add_row("log loot entries", str(len(overlays.log_loot)))
    table.add_row("leaf loot entries", str(len(overlays.leaf_loot)))
    table.add_row("entire-tree loot entries", str(len(overlays.entire_tree_loot)))
    table.add_row("required tools", ", ".join(str(tool) for tool in overlays.required_tools) or "-")
    table.add_row("ignore required tools", str(settings.ignore_required_tools))
    table.add_row("add items to inventory", str(settings.add_items_to_inventory))
    table.add_row("apply silk touch", str(settings.apply_silk_touch))
    table.add_row("bonus loot multiplier", f"{settings.bonus_loot_multiplier:g}")
    return table


def run_check(config: Path, *, logger: CLILogger) -> int:
    """Validate ``config`` and print a summary; return the exit status."""

    try:
        snapshot = load_catalog(config)
    except CLIError as exc:
        logger.fail(str(exc))
        return exc.exit_code

    logger.section("Catalog")
    logger.console.print(build_definitions_table(snapshot))
    logger.console.print(build_overlays_table(snapshot))
    if snapshot.is_empty:
        logger.warn(f"{config}: no tree definitions; every query will return an empty result")
    logger.ok(f"{config}: {len(snapshot.definitions)} tree definitions (checksum {snapshot.checksum[:12]})")
    return 0


def check_command(
    config: Annotated[
        Path,
        typer.Argument(help="YAML or JSON tree configuration."),
    ] = DEFAULT_CONFIG_PATH,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate output with emoji.")] = True,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """Validate a tree configuration and summarise the resulting catalog."""

    logger = build_cli_logger(emoji=emoji, no_color=no_color)
    raise typer.Exit(code=run_check(config, logger=logger))


__all__ = ["build_definitions_table", "build_overlays_table", "check_command", "run_check"]
