# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import pytest

from timber_rules.loader import TreeCatalogLoader
from timber_rules.loot import BONUS_LOOT_PERMISSION, BlockPosition, HarvestedBlock
from timber_rules.model_catalog import CatalogSnapshot
from timber_rules.model_loot import BlockCategory
from timber_rules.signatures import NamespacedSignatureAdapter


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


class SequenceRandom:
    """Random source that replays ``values`` in order."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = iter(values)

    def random(self) -> float:
        return next(self._values)


@dataclass
class FakePlayer:
    name: str = "Alex"
    permissions: set[str] = field(default_factory=set)

    def has_permission(self, node: str) -> bool:
        return node in self.permissions


def oak_document() -> dict[str, Any]:
    """Return a small catalog with an oak definition and global overlays."""

    return {
        "trees": {
            "oak": {
                "logs": ["oak_log", "minecraft:oak_wood[axis=y]"],
                "leaves": ["oak_leaves"],
                "sapling": "oak_sapling",
                "plantable-soil": ["farmland"],
                "max-log-distance-from-trunk": 6,
                "max-leaf-distance-from-log": 7,
                "search-for-leaves-diagonally": False,
                "drop-original-log": True,
                "drop-original-leaf": False,
                "log-loot": {"stick": {"material": "stick", "chance": 50}},
                "leaf-loot": {"apple": {"material": "apple", "chance": 25}},
                "entire-tree-loot": {},
                "required-tools": ["diamond_axe"],
            },
            "birch": {
                "logs": ["birch_log"],
                "leaves": ["birch_leaves"],
                "sapling": "birch_sapling",
                "max-log-distance-from-trunk": 4,
                "max-leaf-distance-from-log": 4,
            },
        },
        "global-plantable-soil": ["dirt", "grass_block"],
        "global-log-loot": {"coin": {"material": "gold_nugget", "chance": 10}},
        "global-leaf-loot": {},
        "global-entire-tree-loot": {},
        "global-required-tools": ["iron_axe"],
        "bonus-loot-multiplier": 2,
    }


@pytest.fixture
def document() -> dict[str, Any]:
    return copy.deepcopy(oak_document())


@pytest.fixture
def adapter() -> NamespacedSignatureAdapter:
    return NamespacedSignatureAdapter()


@pytest.fixture
def loader() -> TreeCatalogLoader:
    return TreeCatalogLoader()


@pytest.fixture
def snapshot(loader: TreeCatalogLoader, document: dict[str, Any]) -> CatalogSnapshot:
    return loader.load_snapshot(document)


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def bonus_player() -> FakePlayer:
    return FakePlayer(name="Bonus", permissions={BONUS_LOOT_PERMISSION})


@pytest.fixture
def oak_log_block(adapter: NamespacedSignatureAdapter) -> HarvestedBlock:
    return HarvestedBlock(
        signature=adapter.parse_block("oak_log[axis=y]", context="test"),
        category=BlockCategory.LOG,
        position=BlockPosition(10, 64, -3),
    )


@pytest.fixture
def oak_leaf_block(adapter: NamespacedSignatureAdapter) -> HarvestedBlock:
    return HarvestedBlock(
        signature=adapter.parse_block("oak_leaves[distance=1,persistent=false]", context="test"),
        category=BlockCategory.LEAF,
        position=BlockPosition(10, 70, -3),
    )


@pytest.fixture
def fixed_random() -> type[FixedRandom]:
    return FixedRandom


@pytest.fixture
def sequence_random() -> type[SequenceRandom]:
    return SequenceRandom


@pytest.fixture
def make_player() -> type[FakePlayer]:
    return FakePlayer
