# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tree catalog matching, tool gating, and loot resolution."""

from __future__ import annotations

from typing import Final

from .errors import (
    ChanceOutOfRangeError,
    ConfigError,
    ConfigValidationError,
    DuplicateDefinitionError,
    InvalidSignatureError,
    InvalidValueError,
    MissingKeyError,
    TemplateError,
)
from .loader import DEFAULT_CONFIG_PATH, TreeCatalogLoader
from .loot import (
    BONUS_LOOT_PERMISSION,
    BlockPosition,
    HarvestedBlock,
    HarvestingPlayer,
    LootResolver,
    LootResult,
    RandomSource,
)
from .manager import TreeDefinitionManager
from .matching import narrow
from .model_catalog import CatalogSnapshot, GlobalOverlays
from .model_loot import BlockCategory, LootEntry
from .model_tree import TreeDefinition
from .realizer import CommandSink, LootRealizer, RecordingRealizer
from .settings import EngineSettings
from .signatures import BlockSignature, ItemGrant, NamespacedSignatureAdapter, SignatureAdapter, ToolSignature
from .tools import is_tool_valid

__all__: Final[tuple[str, ...]] = (
    "BONUS_LOOT_PERMISSION",
    "DEFAULT_CONFIG_PATH",
    "BlockCategory",
    "BlockPosition",
    "BlockSignature",
    "CatalogSnapshot",
    "ChanceOutOfRangeError",
    "CommandSink",
    "ConfigError",
    "ConfigValidationError",
    "DuplicateDefinitionError",
    "EngineSettings",
    "GlobalOverlays",
    "HarvestedBlock",
    "HarvestingPlayer",
    "InvalidSignatureError",
    "InvalidValueError",
    "ItemGrant",
    "LootEntry",
    "LootRealizer",
    "LootResolver",
    "LootResult",
    "MissingKeyError",
    "NamespacedSignatureAdapter",
    "RandomSource",
    "RecordingRealizer",
    "SignatureAdapter",
    "TemplateError",
    "ToolSignature",
    "TreeCatalogLoader",
    "TreeDefinition",
    "TreeDefinitionManager",
    "is_tool_valid",
    "narrow",
)
