# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog aggregate models used by the tree catalog loader."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from .errors import DuplicateDefinitionError
from .model_loot import BlockCategory, LootEntry
from .model_tree import TreeDefinition, unique
from .settings import EngineSettings
from .signatures import BlockSignature, ToolSignature

EMPTY_CHECKSUM: Final[str] = ""


@dataclass(frozen=True, slots=True)
class GlobalOverlays:
    """Catalog-wide rules added to every tree definition."""

    plantable_soil: tuple[BlockSignature, ...] = ()
    log_loot: tuple[LootEntry, ...] = ()
    leaf_loot: tuple[LootEntry, ...] = ()
    entire_tree_loot: tuple[LootEntry, ...] = ()
    required_tools: tuple[ToolSignature, ...] = ()

    def loot_for(self, category: BlockCategory) -> tuple[LootEntry, ...]:
        """Return the global loot pool for harvested ``category`` blocks."""

        if category is BlockCategory.LOG:
            return self.log_loot
        return self.leaf_loot


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Materialised tree definitions, global overlays and engine settings.

    A snapshot is never mutated once built. Reloading produces a new snapshot
    and publishes it in one step, so every query observes a single consistent
    catalog.
    """

    _definitions: tuple[TreeDefinition, ...] = ()
    overlays: GlobalOverlays = field(default_factory=GlobalOverlays)
    settings: EngineSettings = field(default_factory=EngineSettings)
    checksum: str = EMPTY_CHECKSUM
    _by_key: Mapping[str, TreeDefinition] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate definition keys and index them for lookup."""

        by_key: dict[str, TreeDefinition] = {}
        for definition in self._definitions:
            if definition.key in by_key:
                raise DuplicateDefinitionError(
                    f"Duplicate tree definition key '{definition.key}' detected in catalog snapshot",
                )
            by_key[definition.key] = definition
        object.__setattr__(self, "_by_key", by_key)

    @classmethod
    def empty(cls, settings: EngineSettings | None = None) -> CatalogSnapshot:
        """Return a snapshot without definitions or overlays."""

        return cls(settings=settings or EngineSettings())

    @property
    def definitions(self) -> tuple[TreeDefinition, ...]:
        """Return the tree definitions contained in the snapshot."""

        return self._definitions

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the snapshot holds no tree definitions."""

        return not self._definitions

    def definition(self, key: str) -> TreeDefinition | None:
        """Return the definition registered under ``key`` if any."""

        return self._by_key.get(key)

    def effective_pool(
        self,
        definition: TreeDefinition,
        category: BlockCategory,
        *,
        entire_tree: bool = False,
    ) -> tuple[LootEntry, ...]:
        """Return the definition's loot pool followed by the matching global pool.

        Args:
            definition: Tree definition being harvested.
            category: Category of the harvested block; ignored for whole-tree pools.
            entire_tree: Select the whole-tree pools instead of the per-block pools.

        Returns:
            tuple[LootEntry, ...]: Definition entries followed by global entries.
        """

        if entire_tree:
            return definition.entire_tree_loot + self.overlays.entire_tree_loot
        return definition.loot_for(category) + self.overlays.loot_for(category)

    def effective_plantable_soil(self, definition: TreeDefinition) -> frozenset[BlockSignature]:
        """Return the soil a sapling of ``definition`` may be planted on."""

        return frozenset(definition.plantable_soil + self.overlays.plantable_soil)

    def required_tools(self, definition: TreeDefinition | None = None) -> frozenset[ToolSignature]:
        """Return the tools accepted for ``definition``, or for any definition.

        Args:
            definition: Definition to check; ``None`` means any configured tree.

        Returns:
            frozenset[ToolSignature]: Union of the relevant definition tools and
            the global tool overlay.
        """

        if definition is None:
            tools = unique(tool for candidate in self._definitions for tool in candidate.required_tools)
        else:
            tools = definition.required_tools
        return frozenset(tools + self.overlays.required_tools)


__all__ = ["CatalogSnapshot", "EMPTY_CHECKSUM", "GlobalOverlays"]
