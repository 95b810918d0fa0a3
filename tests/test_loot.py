# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for loot pool selection, rolling, and modifiers."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from timber_rules.errors import TemplateError
from timber_rules.loader import TreeCatalogLoader
from timber_rules.loot import (
    HarvestedBlock,
    LootResolver,
    ResolutionMode,
    effective_chance,
    render_command,
    select_mode,
)
from timber_rules.model_catalog import CatalogSnapshot
from timber_rules.model_loot import BlockCategory, LootEntry
from timber_rules.settings import EngineSettings


def _names(result_items: tuple[Any, ...]) -> list[str]:
    return [item.material for item in result_items]


def _oak(snapshot: CatalogSnapshot):
    definition = snapshot.definition("oak")
    assert definition is not None
    return definition


def test_all_pool_entries_succeed_below_threshold(
    snapshot: CatalogSnapshot,
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    resolver = LootResolver(fixed_random(0.05))
    result = resolver.resolve(snapshot, _oak(snapshot), oak_log_block, player)
    assert _names(result.items) == ["oak_log", "stick", "gold_nugget"]
    assert result.commands == ()


def test_no_pool_entry_succeeds_at_half(
    snapshot: CatalogSnapshot,
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    resolver = LootResolver(fixed_random(0.5))
    result = resolver.resolve(snapshot, _oak(snapshot), oak_log_block, player)
    assert _names(result.items) == ["oak_log"]


def test_only_low_draws_pass_each_entry(
    snapshot: CatalogSnapshot,
    oak_log_block: HarvestedBlock,
    player: Any,
    sequence_random: Any,
) -> None:
    resolver = LootResolver(sequence_random([0.49, 0.2]))
    result = resolver.resolve(snapshot, _oak(snapshot), oak_log_block, player)
    assert _names(result.items) == ["oak_log", "stick"]


def test_leaf_harvest_uses_leaf_pool_without_original(
    snapshot: CatalogSnapshot,
    oak_leaf_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    resolver = LootResolver(fixed_random(0.0))
    result = resolver.resolve(snapshot, _oak(snapshot), oak_leaf_block, player)
    assert _names(result.items) == ["apple"]


def test_chance_extremes(oak_log_block: HarvestedBlock, player: Any, fixed_random: Any, sequence_random: Any) -> None:
    always = LootEntry(key="always", category=BlockCategory.LOG, item=None, command="a", chance=100.0)
    never = LootEntry(key="never", category=BlockCategory.LOG, item=None, command="b", chance=0.0)

    high = LootResolver(fixed_random(0.999))
    for _ in range(50):
        assert high.roll((always,), has_bonus=False, multiplier=2.0) == (always,)

    low = LootResolver(sequence_random([0.0, 0.0, 1e-12]))
    assert low.roll((never, never, never), has_bonus=True, multiplier=5.0) == ()


def test_bonus_multiplier_only_applies_with_capability(
    snapshot: CatalogSnapshot,
    oak_log_block: HarvestedBlock,
    player: Any,
    bonus_player: Any,
    fixed_random: Any,
) -> None:
    oak = _oak(snapshot)
    without = LootResolver(fixed_random(0.15)).resolve(snapshot, oak, oak_log_block, player)
    with_bonus = LootResolver(fixed_random(0.15)).resolve(snapshot, oak, oak_log_block, bonus_player)
    assert "gold_nugget" not in _names(without.items)
    assert "gold_nugget" in _names(with_bonus.items)


def test_effective_chance() -> None:
    entry = LootEntry(key="coin", category=BlockCategory.LOG, item=None, command=None, chance=10.0)
    assert effective_chance(entry, has_bonus=True, multiplier=2.5) == 25.0
    assert effective_chance(entry, has_bonus=False, multiplier=2.5) == 10.0


def test_double_drops_duplicate_without_extra_draws(
    snapshot: CatalogSnapshot,
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    single_source = fixed_random(0.05)
    double_source = fixed_random(0.05)
    single = LootResolver(single_source).resolve(snapshot, _oak(snapshot), oak_log_block, player)
    double = LootResolver(double_source, double_drops=lambda _: True).resolve(
        snapshot,
        _oak(snapshot),
        oak_log_block,
        player,
    )
    assert _names(double.items) == ["oak_log", "oak_log", "stick", "stick", "gold_nugget", "gold_nugget"]
    assert len(double.items) == 2 * len(single.items)
    assert single_source.calls == double_source.calls == 2


def test_silk_touch_grants_original_and_skips_pool(
    snapshot: CatalogSnapshot,
    oak_leaf_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    source = fixed_random(0.0)
    result = LootResolver(source).resolve(snapshot, _oak(snapshot), oak_leaf_block, player, has_silk_touch=True)
    assert _names(result.items) == ["oak_leaves"]
    assert source.calls == 0

    doubled = LootResolver(fixed_random(0.0), double_drops=lambda _: True).resolve(
        snapshot,
        _oak(snapshot),
        oak_leaf_block,
        player,
        has_silk_touch=True,
    )
    assert _names(doubled.items) == ["oak_leaves", "oak_leaves"]


def test_silk_touch_ignored_when_switched_off(
    loader: TreeCatalogLoader,
    document: dict[str, Any],
    oak_leaf_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    document["apply-silk-touch"] = False
    snapshot = loader.load_snapshot(document)
    result = LootResolver(fixed_random(0.0)).resolve(
        snapshot,
        _oak(snapshot),
        oak_leaf_block,
        player,
        has_silk_touch=True,
    )
    assert _names(result.items) == ["apple"]


def test_entire_tree_mode_ignores_block_pools_and_original(
    loader: TreeCatalogLoader,
    document: dict[str, Any],
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    document["trees"]["oak"]["entire-tree-loot"] = {
        "reward": {"command": "give %player% diamond 1", "chance": 100},
        "trophy": {"material": "golden_apple", "chance": 100},
    }
    document["global-entire-tree-loot"] = {"tax": {"command": "eco take %player% 1", "chance": 100}}
    snapshot = loader.load_snapshot(document)
    result = LootResolver(fixed_random(0.0)).resolve(
        snapshot,
        _oak(snapshot),
        oak_log_block,
        player,
        has_silk_touch=True,
        entire_tree=True,
    )
    assert _names(result.items) == ["golden_apple"]
    assert result.commands == ("give Alex diamond 1", "eco take Alex 1")


def test_entire_tree_mode_does_not_reuse_log_overlay(
    snapshot: CatalogSnapshot,
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    result = LootResolver(fixed_random(0.0)).resolve(
        snapshot,
        _oak(snapshot),
        oak_log_block,
        player,
        entire_tree=True,
    )
    assert result.is_empty


def test_command_placeholders_are_rendered_per_instance(
    loader: TreeCatalogLoader,
    document: dict[str, Any],
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
) -> None:
    document["trees"]["oak"]["log-loot"]["stick"]["command"] = "summon xp_orb %xPos% %yPos% %zPos% for %player% on %type%"
    snapshot = loader.load_snapshot(document)
    result = LootResolver(fixed_random(0.0), double_drops=lambda _: True).resolve(
        snapshot,
        _oak(snapshot),
        oak_log_block,
        player,
    )
    assert result.commands == ("summon xp_orb 10 64 -3 for Alex on oak",) * 2
    assert _names(result.items).count("stick") == 2


def test_bad_template_is_skipped_and_logged(
    loader: TreeCatalogLoader,
    document: dict[str, Any],
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
    caplog: pytest.LogCaptureFixture,
) -> None:
    document["trees"]["oak"]["log-loot"]["stick"]["command"] = "   "
    document["global-log-loot"]["coin"]["command"] = "say 100% sure %player%"
    snapshot = loader.load_snapshot(document)
    with caplog.at_level(logging.WARNING, logger="timber_rules.loot"):
        result = LootResolver(fixed_random(0.0)).resolve(snapshot, _oak(snapshot), oak_log_block, player)
    assert result.commands == ("say 100% sure Alex",)
    assert _names(result.items) == ["oak_log", "stick", "gold_nugget"]
    assert "empty command" in caplog.text


def test_foreign_placeholders_are_dispatched_verbatim(
    loader: TreeCatalogLoader,
    document: dict[str, Any],
    oak_log_block: HarvestedBlock,
    player: Any,
    fixed_random: Any,
    caplog: pytest.LogCaptureFixture,
) -> None:
    document["global-log-loot"]["coin"]["command"] = "eco give %player% %vault_amount%"
    snapshot = loader.load_snapshot(document)
    with caplog.at_level(logging.WARNING, logger="timber_rules.loot"):
        result = LootResolver(fixed_random(0.0)).resolve(snapshot, _oak(snapshot), oak_log_block, player)
    assert result.commands == ("eco give Alex %vault_amount%",)
    assert caplog.text == ""


def test_render_command_only_replaces_known_tokens() -> None:
    placeholders = {"player": "Alex", "type": "oak"}
    assert render_command("hello %player%", placeholders) == "hello Alex"
    assert render_command("%nope% %type%", placeholders) == "%nope% oak"
    assert render_command("a%b%player%", placeholders) == "a%bAlex"
    assert render_command("say %player%", {}) == "say %player%"
    with pytest.raises(TemplateError, match="empty command"):
        render_command("%player%", {"player": ""})


@pytest.mark.parametrize(
    ("silk", "entire", "apply", "expected"),
    [
        (False, False, True, ResolutionMode.NORMAL),
        (True, False, True, ResolutionMode.SILK_TOUCH),
        (True, False, False, ResolutionMode.NORMAL),
        (True, True, True, ResolutionMode.ENTIRE_TREE),
    ],
)
def test_select_mode(silk: bool, entire: bool, apply: bool, expected: ResolutionMode) -> None:
    settings = EngineSettings(apply_silk_touch=apply)
    assert select_mode(settings, has_silk_touch=silk, entire_tree=entire) is expected
