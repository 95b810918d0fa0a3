# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Interfaces for delivering resolved loot, plus an in-memory implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .loot import HarvestedBlock, HarvestingPlayer, LootResult


@runtime_checkable
class CommandSink(Protocol):
    """Executes rendered loot commands, typically as the server console."""

    def dispatch(self, command: str) -> None:
        """Run ``command``."""


@runtime_checkable
class LootRealizer(Protocol):
    """Places granted items and runs granted commands."""

    def deliver(
        self,
        result: LootResult,
        *,
        player: HarvestingPlayer,
        block: HarvestedBlock,
        add_to_inventory: bool,
    ) -> None:
        """Deliver ``result`` to ``player`` or at ``block``."""


def dispatch_commands(result: LootResult, sink: CommandSink) -> int:
    """Send every command of ``result`` to ``sink`` and return how many were sent."""

    for command in result.commands:
        sink.dispatch(command)
    return len(result.commands)


@dataclass(frozen=True, slots=True)
class Delivery:
    """One recorded hand-off to a realizer."""

    player_name: str
    block: HarvestedBlock
    result: LootResult
    to_inventory: bool


@dataclass(slots=True)
class RecordingRealizer:
    """Realizer that keeps deliveries in memory and forwards commands to a sink."""

    sink: CommandSink | None = None
    deliveries: list[Delivery] = field(default_factory=list)

    def deliver(
        self,
        result: LootResult,
        *,
        player: HarvestingPlayer,
        block: HarvestedBlock,
        add_to_inventory: bool,
    ) -> None:
        self.deliveries.append(
            Delivery(player_name=player.name, block=block, result=result, to_inventory=add_to_inventory),
        )
        if self.sink is not None:
            dispatch_commands(result, self.sink)


__all__ = [
    "CommandSink",
    "Delivery",
    "LootRealizer",
    "RecordingRealizer",
    "dispatch_commands",
]
