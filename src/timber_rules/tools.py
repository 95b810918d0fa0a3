# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decide whether a tool may fell trees."""

from __future__ import annotations

from .model_catalog import CatalogSnapshot
from .model_tree import TreeDefinition
from .signatures import ToolSignature


def is_tool_valid(
    snapshot: CatalogSnapshot,
    definition: TreeDefinition | None,
    tool: ToolSignature,
) -> bool:
    """Return ``True`` when ``tool`` satisfies the required-tool policy.

    Args:
        snapshot: Catalog providing global tools and the ignore switch.
        definition: Tree being felled, or ``None`` to ask whether the tool
            is usable for any configured tree.
        tool: Type-only signature of the held tool.

    Returns:
        bool: ``True`` when the ignore switch is on or the tool appears in the
        definition's tools, any definition's tools (when ``definition`` is
        ``None``), or the global tools.
    """

    if snapshot.settings.ignore_required_tools:
        return True
    return tool in snapshot.required_tools(definition)


__all__ = ["is_tool_valid"]
