# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High-level loader that materialises tree catalog snapshots."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .checksum import compute_document_checksum
from .io import load_document
from .model_catalog import CatalogSnapshot, GlobalOverlays
from .model_loot import BlockCategory, loot_section
from .model_tree import TreeDefinition, block_array, tool_array
from .schema import SchemaRepository
from .settings import EngineSettings
from .signatures import NamespacedSignatureAdapter, SignatureAdapter
from .types import JSONValue
from .utils import expect_mapping

LOGGER = logging.getLogger(__name__)

ROOT_CONTEXT = "<root>"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "defaults" / "trees.yml"


@dataclass(slots=True)
class TreeCatalogLoader:
    """Loader that validates configuration documents and builds catalog snapshots."""

    adapter: SignatureAdapter = field(default_factory=NamespacedSignatureAdapter)
    schema_root: Path | None = None
    _schemas: SchemaRepository = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Load the schema repository after dataclass setup."""

        self._schemas = SchemaRepository.load(schema_root=self.schema_root)
        self.schema_root = self._schemas.schema_root

    def load_path(self, path: Path, *, settings: EngineSettings | None = None) -> CatalogSnapshot:
        """Read ``path`` and build a snapshot from its contents.

        Args:
            path: YAML or JSON configuration document.
            settings: Explicit settings overriding the document's switches.

        Returns:
            CatalogSnapshot: Snapshot built from the document.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
            ConfigError: If the document is malformed.
        """

        return self.load_snapshot(load_document(path), context=str(path), settings=settings)

    def load_snapshot(
        self,
        document: Mapping[str, JSONValue],
        *,
        context: str = ROOT_CONTEXT,
        settings: EngineSettings | None = None,
    ) -> CatalogSnapshot:
        """Produce a snapshot containing definitions, overlays, and settings.

        Nothing is published here: the snapshot is either returned complete or
        an exception propagates and the caller keeps whatever it had before.

        Args:
            document: Parsed configuration mapping.
            context: Human-readable source label used in error messages.
            settings: Explicit settings overriding the document's switches.

        Returns:
            CatalogSnapshot: Fully built catalog snapshot.

        Raises:
            ConfigError: If the document fails validation or parsing.
        """

        self._schemas.validate(document, context=context)
        definitions = self.load_tree_definitions(document)
        overlays = self.load_overlays(document)
        resolved_settings = settings or EngineSettings.from_document(document, context=context)
        snapshot = CatalogSnapshot(
            _definitions=definitions,
            overlays=overlays,
            settings=resolved_settings,
            checksum=compute_document_checksum(document),
        )
        LOGGER.debug("built catalog snapshot from %s with %d definitions", context, len(definitions))
        return snapshot

    def load_tree_definitions(self, document: Mapping[str, JSONValue]) -> tuple[TreeDefinition, ...]:
        """Parse every ``trees.<key>`` section of ``document``.

        Raises:
            MissingKeyError: If the ``trees`` section is absent.
            ConfigError: If any tree section is invalid.
        """

        trees = expect_mapping(document.get("trees"), key="trees", context=ROOT_CONTEXT)
        return tuple(
            TreeDefinition.from_mapping(
                expect_mapping(section, key=key, context="trees"),
                key=key,
                adapter=self.adapter,
                context=f"trees.{key}",
            )
            for key, section in trees.items()
        )

    def load_overlays(self, document: Mapping[str, JSONValue]) -> GlobalOverlays:
        """Parse the ``global-*`` overlay keys of ``document``."""

        return GlobalOverlays(
            plantable_soil=block_array(
                document.get("global-plantable-soil"),
                key="global-plantable-soil",
                adapter=self.adapter,
                context=ROOT_CONTEXT,
            ),
            log_loot=loot_section(
                document.get("global-log-loot"),
                key="global-log-loot",
                category=BlockCategory.LOG,
                adapter=self.adapter,
                context=ROOT_CONTEXT,
            ),
            leaf_loot=loot_section(
                document.get("global-leaf-loot"),
                key="global-leaf-loot",
                category=BlockCategory.LEAF,
                adapter=self.adapter,
                context=ROOT_CONTEXT,
            ),
            entire_tree_loot=loot_section(
                document.get("global-entire-tree-loot"),
                key="global-entire-tree-loot",
                category=BlockCategory.LOG,
                adapter=self.adapter,
                context=ROOT_CONTEXT,
            ),
            required_tools=tool_array(
                document.get("global-required-tools"),
                key="global-required-tools",
                adapter=self.adapter,
                context=ROOT_CONTEXT,
            ),
        )


__all__ = ["DEFAULT_CONFIG_PATH", "TreeCatalogLoader"]
