# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for loot delivery helpers."""

from __future__ import annotations

from typing import Any

from timber_rules.loot import HarvestedBlock, LootResult
from timber_rules.realizer import CommandSink, LootRealizer, RecordingRealizer, dispatch_commands
from timber_rules.signatures import ItemGrant


class _ListSink:
    def __init__(self) -> None:
        self.commands: list[str] = []

    def dispatch(self, command: str) -> None:
        self.commands.append(command)


def test_dispatch_commands_sends_in_order() -> None:
    sink = _ListSink()
    count = dispatch_commands(LootResult(commands=("a", "b", "a")), sink)
    assert count == 3
    assert sink.commands == ["a", "b", "a"]


def test_recording_realizer_satisfies_protocols(oak_log_block: HarvestedBlock, player: Any) -> None:
    sink = _ListSink()
    realizer = RecordingRealizer(sink=sink)
    assert isinstance(realizer, LootRealizer)
    assert isinstance(sink, CommandSink)

    result = LootResult(items=(ItemGrant("stick"),), commands=("say hi",))
    realizer.deliver(result, player=player, block=oak_log_block, add_to_inventory=False)

    (delivery,) = realizer.deliveries
    assert delivery.to_inventory is False
    assert delivery.block == oak_log_block
    assert sink.commands == ["say hi"]
