# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tree definition models and helpers for catalog entries."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from .model_loot import BlockCategory, LootEntry, loot_section
from .signatures import BlockSignature, SignatureAdapter, ToolSignature
from .types import JSONValue
from .utils import (
    expect_int,
    expect_mapping,
    expect_number,
    expect_string,
    optional_bool,
    string_array,
)

HashableT = TypeVar("HashableT", bound=Hashable)


def unique(values: Iterable[HashableT]) -> tuple[HashableT, ...]:
    """Return ``values`` without duplicates, keeping first-seen order."""

    return tuple(dict.fromkeys(values))


@dataclass(frozen=True, slots=True)
class TreeSignatures:
    """Block signatures that identify the parts of a tree."""

    logs: tuple[BlockSignature, ...]
    leaves: tuple[BlockSignature, ...]
    sapling: BlockSignature
    plantable_soil: tuple[BlockSignature, ...]


@dataclass(frozen=True, slots=True)
class TreeGeometry:
    """Detection thresholds consumed by the tree detector."""

    max_log_distance_from_trunk: float
    max_leaf_distance_from_log: int
    detect_leaves_diagonally: bool


@dataclass(frozen=True, slots=True)
class TreeDropPolicy:
    """Flags controlling whether harvested blocks drop themselves."""

    drop_original_log: bool
    drop_original_leaf: bool


@dataclass(frozen=True, slots=True)
class TreeLootTable:
    """Loot pools attached to a tree definition."""

    log_loot: tuple[LootEntry, ...]
    leaf_loot: tuple[LootEntry, ...]
    entire_tree_loot: tuple[LootEntry, ...]


@dataclass(frozen=True, slots=True)
class TreeDefinition:
    """Immutable representation of one configured tree species."""

    key: str
    signatures: TreeSignatures
    geometry: TreeGeometry
    drops: TreeDropPolicy
    loot: TreeLootTable
    required_tools: tuple[ToolSignature, ...]

    @property
    def log_signatures(self) -> tuple[BlockSignature, ...]:
        return self.signatures.logs

    @property
    def leaf_signatures(self) -> tuple[BlockSignature, ...]:
        return self.signatures.leaves

    @property
    def sapling_signature(self) -> BlockSignature:
        return self.signatures.sapling

    @property
    def plantable_soil(self) -> tuple[BlockSignature, ...]:
        """Return the soil declared by this definition alone, without global soil."""
        return self.signatures.plantable_soil

    @property
    def max_log_distance_from_trunk(self) -> float:
        return self.geometry.max_log_distance_from_trunk

    @property
    def max_leaf_distance_from_log(self) -> int:
        return self.geometry.max_leaf_distance_from_log

    @property
    def detect_leaves_diagonally(self) -> bool:
        return self.geometry.detect_leaves_diagonally

    @property
    def drop_original_log(self) -> bool:
        return self.drops.drop_original_log

    @property
    def drop_original_leaf(self) -> bool:
        return self.drops.drop_original_leaf

    @property
    def log_loot(self) -> tuple[LootEntry, ...]:
        return self.loot.log_loot

    @property
    def leaf_loot(self) -> tuple[LootEntry, ...]:
        return self.loot.leaf_loot

    @property
    def entire_tree_loot(self) -> tuple[LootEntry, ...]:
        return self.loot.entire_tree_loot

    def signatures_for(self, category: BlockCategory) -> tuple[BlockSignature, ...]:
        """Return the signatures recognised for ``category``."""

        if category is BlockCategory.LOG:
            return self.signatures.logs
        return self.signatures.leaves

    def drops_original(self, category: BlockCategory) -> bool:
        """Return ``True`` when a harvested ``category`` block drops itself."""

        if category is BlockCategory.LOG:
            return self.drops.drop_original_log
        return self.drops.drop_original_leaf

    def loot_for(self, category: BlockCategory) -> tuple[LootEntry, ...]:
        """Return this definition's own loot pool for ``category``."""

        if category is BlockCategory.LOG:
            return self.loot.log_loot
        return self.loot.leaf_loot

    @staticmethod
    def from_mapping(
        data: Mapping[str, JSONValue],
        *,
        key: str,
        adapter: SignatureAdapter,
        context: str,
    ) -> TreeDefinition:
        """Create a ``TreeDefinition`` from a ``trees.<key>`` section.

        Args:
            data: Mapping describing the tree.
            key: Unique key of the tree within the catalog.
            adapter: Adapter used to parse block, item and tool strings.
            context: Dotted path used in error messages.

        Returns:
            TreeDefinition: Frozen definition materialised from the mapping.

        Raises:
            ConfigError: If any key is missing or invalid.
        """

        mapping = expect_mapping(data, key=key, context=context)
        return TreeDefinition(
            key=key,
            signatures=parse_tree_signatures(mapping, adapter=adapter, context=context),
            geometry=TreeGeometry(
                max_log_distance_from_trunk=expect_number(
                    mapping.get("max-log-distance-from-trunk"),
                    key="max-log-distance-from-trunk",
                    context=context,
                    minimum=0.0,
                ),
                max_leaf_distance_from_log=expect_int(
                    mapping.get("max-leaf-distance-from-log"),
                    key="max-leaf-distance-from-log",
                    context=context,
                    minimum=0,
                ),
                detect_leaves_diagonally=optional_bool(
                    mapping.get("search-for-leaves-diagonally"),
                    key="search-for-leaves-diagonally",
                    context=context,
                ),
            ),
            drops=TreeDropPolicy(
                drop_original_log=optional_bool(
                    mapping.get("drop-original-log"),
                    key="drop-original-log",
                    context=context,
                ),
                drop_original_leaf=optional_bool(
                    mapping.get("drop-original-leaf"),
                    key="drop-original-leaf",
                    context=context,
                ),
            ),
            loot=TreeLootTable(
                log_loot=loot_section(
                    mapping.get("log-loot"),
                    key="log-loot",
                    category=BlockCategory.LOG,
                    adapter=adapter,
                    context=context,
                ),
                leaf_loot=loot_section(
                    mapping.get("leaf-loot"),
                    key="leaf-loot",
                    category=BlockCategory.LEAF,
                    adapter=adapter,
                    context=context,
                ),
                entire_tree_loot=loot_section(
                    mapping.get("entire-tree-loot"),
                    key="entire-tree-loot",
                    category=BlockCategory.LOG,
                    adapter=adapter,
                    context=context,
                ),
            ),
            required_tools=tool_array(
                mapping.get("required-tools"),
                key="required-tools",
                adapter=adapter,
                context=context,
            ),
        )


def parse_tree_signatures(
    data: Mapping[str, JSONValue],
    *,
    adapter: SignatureAdapter,
    context: str,
) -> TreeSignatures:
    """Return the :class:`TreeSignatures` declared by a tree section.

    Raises:
        MissingKeyError: If ``sapling`` is absent.
        InvalidSignatureError: If any signature string is malformed.
    """

    sapling = expect_string(data.get("sapling"), key="sapling", context=context)
    return TreeSignatures(
        logs=block_array(data.get("logs"), key="logs", adapter=adapter, context=context),
        leaves=block_array(data.get("leaves"), key="leaves", adapter=adapter, context=context),
        sapling=adapter.parse_block(sapling, context=f"{context}.sapling"),
        plantable_soil=block_array(
            data.get("plantable-soil"),
            key="plantable-soil",
            adapter=adapter,
            context=context,
        ),
    )


def block_array(
    value: JSONValue | None,
    *,
    key: str,
    adapter: SignatureAdapter,
    context: str,
) -> tuple[BlockSignature, ...]:
    """Parse a list of block signature strings into a duplicate-free tuple."""

    raw_values = string_array(value, key=key, context=context)
    return unique(
        adapter.parse_block(raw, context=f"{context}.{key}[{index}]") for index, raw in enumerate(raw_values)
    )


def tool_array(
    value: JSONValue | None,
    *,
    key: str,
    adapter: SignatureAdapter,
    context: str,
) -> tuple[ToolSignature, ...]:
    """Parse a list of tool strings into a duplicate-free tuple of tool types."""

    raw_values = string_array(value, key=key, context=context)
    return unique(
        adapter.parse_tool(raw, context=f"{context}.{key}[{index}]") for index, raw in enumerate(raw_values)
    )


__all__ = [
    "TreeDefinition",
    "TreeDropPolicy",
    "TreeGeometry",
    "TreeLootTable",
    "TreeSignatures",
    "block_array",
    "parse_tree_signatures",
    "tool_array",
    "unique",
]
