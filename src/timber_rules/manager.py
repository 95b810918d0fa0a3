# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Lifecycle owner and public entry point for tree definitions."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path

from .loader import TreeCatalogLoader
from .loot import HarvestedBlock, HarvestingPlayer, LootResolver, LootResult
from .matching import narrow
from .model_catalog import CatalogSnapshot
from .model_loot import BlockCategory
from .model_tree import TreeDefinition
from .realizer import LootRealizer
from .settings import EngineSettings
from .signatures import BlockSignature, ItemGrant, ToolSignature
from .tools import is_tool_valid
from .types import JSONValue

LOGGER = logging.getLogger(__name__)


class TreeDefinitionManager:
    """Own the live catalog snapshot and answer matching, tool, and loot queries.

    Every query reads the live snapshot exactly once, so a call running while
    :meth:`reload` publishes a new catalog sees either the old catalog or the
    new one in full.
    """

    def __init__(
        self,
        *,
        loader: TreeCatalogLoader | None = None,
        resolver: LootResolver | None = None,
        realizer: LootRealizer | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self._loader = loader if loader is not None else TreeCatalogLoader()
        self._resolver = resolver if resolver is not None else LootResolver(adapter=self._loader.adapter)
        self._realizer = realizer
        self._settings = settings
        self._publish_lock = threading.Lock()
        self._snapshot = CatalogSnapshot.empty(settings)

    @property
    def snapshot(self) -> CatalogSnapshot:
        """Return the live catalog snapshot."""

        return self._snapshot

    def reload(self, source: Mapping[str, JSONValue] | str | Path) -> CatalogSnapshot:
        """Rebuild the catalog from ``source`` and publish it.

        The new snapshot is built completely before it replaces the live one.
        When building fails the previous catalog stays live and the error
        propagates.

        Args:
            source: Parsed configuration mapping, or a path (``str`` or
                :class:`~pathlib.Path`) to a YAML/JSON document.

        Returns:
            CatalogSnapshot: The newly published snapshot.

        Raises:
            ConfigError: If the configuration is invalid.
            FileNotFoundError: If ``source`` is a missing path.
        """

        try:
            if isinstance(source, (str, Path)):
                snapshot = self._loader.load_path(Path(source), settings=self._settings)
            else:
                snapshot = self._loader.load_snapshot(source, settings=self._settings)
        except Exception:
            LOGGER.warning("tree catalog reload failed; keeping %d live definitions", len(self._snapshot.definitions))
            raise

        with self._publish_lock:
            previous = self._snapshot
            self._snapshot = snapshot
        if previous.checksum == snapshot.checksum:
            LOGGER.info("tree catalog reloaded without changes (checksum %s)", snapshot.checksum[:12])
        else:
            LOGGER.info(
                "tree catalog reloaded with %d definitions (checksum %s)",
                len(snapshot.definitions),
                snapshot.checksum[:12],
            )
        return snapshot

    def disable(self) -> None:
        """Clear the catalog; later queries return empty results."""

        with self._publish_lock:
            self._snapshot = CatalogSnapshot.empty(self._settings)
        LOGGER.info("tree catalog disabled")

    def definition(self, key: str) -> TreeDefinition | None:
        """Return the live definition registered under ``key``."""

        return self._snapshot.definition(key)

    def match_definitions(
        self,
        observed: BlockSignature,
        category: BlockCategory,
        candidates: Iterable[TreeDefinition] | None = None,
    ) -> frozenset[TreeDefinition]:
        """Narrow ``candidates`` (default: the whole catalog) to those matching ``observed``."""

        pool = self._snapshot.definitions if candidates is None else candidates
        return narrow(pool, observed, category)

    def definitions_for_log(self, observed: BlockSignature) -> frozenset[TreeDefinition]:
        """Return every definition that recognises ``observed`` as one of its logs."""

        return narrow(self._snapshot.definitions, observed, BlockCategory.LOG)

    def is_tool_valid(
        self,
        tool: ToolSignature | ItemGrant,
        definition: TreeDefinition | None = None,
    ) -> bool:
        """Return ``True`` when ``tool`` may fell ``definition`` (or any tree when ``None``).

        Items are narrowed to their type before comparison.
        """

        signature = tool if isinstance(tool, ToolSignature) else ToolSignature.of(tool)
        return is_tool_valid(self._snapshot, definition, signature)

    def effective_plantable_soil(self, definition: TreeDefinition) -> frozenset[BlockSignature]:
        """Return the soil ``definition`` may be replanted on, global soil included."""

        return self._snapshot.effective_plantable_soil(definition)

    def resolve_loot(
        self,
        definition: TreeDefinition,
        block: HarvestedBlock,
        player: HarvestingPlayer,
        *,
        has_silk_touch: bool = False,
        entire_tree: bool = False,
    ) -> LootResult:
        """Resolve loot for ``block`` against the live catalog.

        ``definition`` is looked up again by key in the live snapshot so that a
        definition held from a replaced catalog is never combined with the new
        catalog's global overlays. Unknown keys and a disabled catalog yield an
        empty result.
        """

        return self._resolve(
            self._snapshot,
            definition,
            block,
            player,
            has_silk_touch=has_silk_touch,
            entire_tree=entire_tree,
        )

    def drop_loot(
        self,
        definition: TreeDefinition,
        block: HarvestedBlock,
        player: HarvestingPlayer,
        *,
        has_silk_touch: bool = False,
        entire_tree: bool = False,
    ) -> LootResult:
        """Resolve loot and hand it to the configured realizer.

        Returns:
            LootResult: The result that was delivered.

        Raises:
            RuntimeError: If the manager was created without a realizer.
        """

        if self._realizer is None:
            raise RuntimeError("drop_loot requires a realizer; use resolve_loot instead")
        snapshot = self._snapshot
        result = self._resolve(
            snapshot,
            definition,
            block,
            player,
            has_silk_touch=has_silk_touch,
            entire_tree=entire_tree,
        )
        self._realizer.deliver(
            result,
            player=player,
            block=block,
            add_to_inventory=snapshot.settings.add_items_to_inventory,
        )
        return result

    def _resolve(
        self,
        snapshot: CatalogSnapshot,
        definition: TreeDefinition,
        block: HarvestedBlock,
        player: HarvestingPlayer,
        *,
        has_silk_touch: bool,
        entire_tree: bool,
    ) -> LootResult:
        live_definition = snapshot.definition(definition.key)
        if live_definition is None:
            LOGGER.debug("no live tree definition '%s'; granting nothing", definition.key)
            return LootResult()
        return self._resolver.resolve(
            snapshot,
            live_definition,
            block,
            player,
            has_silk_touch=has_silk_touch,
            entire_tree=entire_tree,
        )


__all__ = ["TreeDefinitionManager"]
