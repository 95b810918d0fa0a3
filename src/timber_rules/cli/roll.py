# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Simulate loot resolution for one tree definition."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..loader import DEFAULT_CONFIG_PATH
from ..loot import BONUS_LOOT_PERMISSION, BlockPosition, HarvestedBlock, HarvestingPlayer, LootResolver, LootResult
from ..model_catalog import CatalogSnapshot
from ..model_loot import BlockCategory
from .shared import CLIError, CLILogger, build_cli_logger, load_catalog


@dataclass(frozen=True, slots=True)
class SimulatedPlayer:
    """Stand-in player whose permissions come from CLI flags."""

    name: str
    bonus_loot: bool = False

    def has_permission(self, node: str) -> bool:
        return self.bonus_loot and node == BONUS_LOOT_PERMISSION


@dataclass(frozen=True, slots=True)
class RollRequest:
    """Capture CLI parameters prior to resolution."""

    config: Path
    tree: str
    category: BlockCategory
    entire_tree: bool
    silk_touch: bool
    double_drops: bool
    player: SimulatedPlayer
    position: BlockPosition
    seed: int | None
    times: int


def simulate(snapshot: CatalogSnapshot, request: RollRequest) -> list[LootResult]:
    """Resolve ``request.times`` rounds of loot for ``request.tree``.

    Raises:
        CLIError: If the tree is unknown or has no signatures for the category.
    """

    definition = snapshot.definition(request.tree)
    if definition is None:
        known = ", ".join(sorted(item.key for item in snapshot.definitions)) or "none"
        raise CLIError(f"unknown tree '{request.tree}' (known: {known})")
    signatures = definition.signatures_for(request.category)
    if not signatures:
        raise CLIError(f"tree '{request.tree}' declares no {request.category.value} blocks")

    def _double_drops(player: HarvestingPlayer) -> bool:
        return request.double_drops

    resolver = LootResolver(random.Random(request.seed), double_drops=_double_drops)
    block = HarvestedBlock(signature=signatures[0], category=request.category, position=request.position)
    return [
        resolver.resolve(
            snapshot,
            definition,
            block,
            request.player,
            has_silk_touch=request.silk_touch,
            entire_tree=request.entire_tree,
        )
        for _ in range(request.times)
    ]


def build_results_table(results: list[LootResult]) -> Table:
    """Return a table listing the grants of every simulated round."""

    table = Table(title="Loot rolls")
    table.add_column("Round", justify="right")
    table.add_column("Items")
    table.add_column("Commands")
    for index, result in enumerate(results, start=1):
        table.add_row(
            str(index),
            "\n".join(str(item) for item in result.items) or "-",
            "\n".join(result.commands) or "-",
        )
    return table


def run_roll(request: RollRequest, *, logger: CLILogger) -> int:
    """Simulate loot for ``request`` and print the outcome; return the exit status."""

    try:
        snapshot = load_catalog(request.config)
        results = simulate(snapshot, request)
    except CLIError as exc:
        logger.fail(str(exc))
        return exc.exit_code

    logger.console.print(build_results_table(results))
    granted = sum(not result.is_empty for result in results)
    logger.info(f"{granted}/{len(results)} rounds granted loot")
    return 0


def roll_command(
    tree: Annotated[str, typer.Argument(help="Key of the tree definition to harvest.")],
    config: Annotated[Path, typer.Option("--config", "-c", help="Tree configuration.")] = DEFAULT_CONFIG_PATH,
    category: Annotated[BlockCategory, typer.Option("--category", help="Harvested block category.")] = BlockCategory.LOG,
    entire_tree: Annotated[bool, typer.Option("--entire-tree", help="Resolve whole-tree loot.")] = False,
    silk_touch: Annotated[bool, typer.Option("--silk-touch", help="Harvest with silk touch.")] = False,
    bonus: Annotated[bool, typer.Option("--bonus", help="Grant the bonus-loot permission.")] = False,
    double_drops: Annotated[bool, typer.Option("--double-drops", help="Apply double drops.")] = False,
    player: Annotated[str, typer.Option("--player", help="Player name for command placeholders.")] = "Steve",
    x: Annotated[int, typer.Option("--x", help="Block X coordinate.")] = 0,
    y: Annotated[int, typer.Option("--y", help="Block Y coordinate.")] = 64,
    z: Annotated[int, typer.Option("--z", help="Block Z coordinate.")] = 0,
    seed: Annotated[int | None, typer.Option("--seed", help="Seed for reproducible rolls.")] = None,
    times: Annotated[int, typer.Option("--times", min=1, help="Number of rounds to roll.")] = 1,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate output with emoji.")] = True,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
) -> None:
    """Roll loot for a tree definition with a seeded random source."""

    request = RollRequest(
        config=config,
        tree=tree,
        category=category,
        entire_tree=entire_tree,
        silk_touch=silk_touch,
        double_drops=double_drops,
        player=SimulatedPlayer(name=player, bonus_loot=bonus),
        position=BlockPosition(x, y, z),
        seed=seed,
        times=times,
    )
    logger = build_cli_logger(emoji=emoji, no_color=no_color)
    raise typer.Exit(code=run_roll(request, logger=logger))


__all__ = ["RollRequest", "SimulatedPlayer", "build_results_table", "roll_command", "run_roll", "simulate"]
