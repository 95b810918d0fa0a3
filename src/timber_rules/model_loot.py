# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Loot entry models for tree catalog definitions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .errors import ChanceOutOfRangeError
from .signatures import ItemGrant, SignatureAdapter
from .types import MAX_CHANCE, MIN_CHANCE, JSONValue
from .utils import expect_mapping, expect_number, optional_mapping, optional_string


class BlockCategory(str, Enum):
    """Enumerate the block categories a tree is built from."""

    LOG = "log"
    LEAF = "leaf"


@dataclass(frozen=True, slots=True)
class LootEntry:
    """One weighted grant: an item, a command, or both."""

    key: str
    category: BlockCategory
    item: ItemGrant | None
    command: str | None
    chance: float

    @staticmethod
    def from_mapping(
        data: Mapping[str, JSONValue],
        *,
        key: str,
        category: BlockCategory,
        adapter: SignatureAdapter,
        context: str,
    ) -> LootEntry:
        """Create a ``LootEntry`` from a configuration section.

        Args:
            data: Mapping holding ``material``, ``command`` and ``chance``.
            key: Entry key within its loot section.
            category: Block category the entry applies to.
            adapter: Adapter used to parse the ``material`` item string.
            context: Dotted path used in error messages.

        Returns:
            LootEntry: Parsed loot entry.

        Raises:
            MissingKeyError: If ``chance`` is absent.
            ChanceOutOfRangeError: If ``chance`` lies outside ``[0, 100]``.
            InvalidSignatureError: If ``material`` is not a valid item string.
        """

        material = optional_string(data.get("material"), key="material", context=context)
        command = optional_string(data.get("command"), key="command", context=context)
        chance = expect_number(data.get("chance"), key="chance", context=context)
        if not MIN_CHANCE <= chance <= MAX_CHANCE:
            raise ChanceOutOfRangeError(
                f"{context}: chance {chance:g} is outside [{MIN_CHANCE:g}, {MAX_CHANCE:g}]",
            )
        item = adapter.parse_item(material, context=f"{context}.material") if material is not None else None
        return LootEntry(key=key, category=category, item=item, command=command, chance=chance)


def loot_section(
    value: JSONValue | None,
    *,
    key: str,
    category: BlockCategory,
    adapter: SignatureAdapter,
    context: str,
) -> tuple[LootEntry, ...]:
    """Parse every entry of a loot section, preserving document order.

    An absent or empty section yields an empty tuple.
    """

    section = optional_mapping(value, key=key, context=context)
    section_context = f"{context}.{key}"
    entries: list[LootEntry] = []
    for entry_key, entry_value in section.items():
        entry_context = f"{section_context}.{entry_key}"
        mapping = expect_mapping(entry_value, key=entry_key, context=section_context)
        entries.append(
            LootEntry.from_mapping(
                mapping,
                key=entry_key,
                category=category,
                adapter=adapter,
                context=entry_context,
            ),
        )
    return tuple(entries)


__all__ = ["BlockCategory", "LootEntry", "loot_section"]
