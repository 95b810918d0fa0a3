# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Loot resolution for harvested tree blocks and felled trees."""

from __future__ import annotations

import logging
import random
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, Protocol, runtime_checkable

from .errors import TemplateError
from .model_catalog import CatalogSnapshot
from .model_loot import BlockCategory, LootEntry
from .model_tree import TreeDefinition
from .settings import EngineSettings
from .signatures import BlockSignature, ItemGrant, NamespacedSignatureAdapter, SignatureAdapter

LOGGER = logging.getLogger(__name__)

BONUS_LOOT_PERMISSION: Final[str] = "timber.bonusloot"


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform draws in ``[0, 1)``; :class:`random.Random` qualifies."""

    def random(self) -> float:
        """Return the next draw."""


@runtime_checkable
class HarvestingPlayer(Protocol):
    """The player breaking blocks or felling a tree."""

    @property
    def name(self) -> str:
        """Return the player's name as used in commands."""

    def has_permission(self, node: str) -> bool:
        """Return ``True`` when the player holds permission ``node``."""


PlayerPredicate = Callable[[HarvestingPlayer], bool]


def holds_bonus_loot(player: HarvestingPlayer) -> bool:
    """Return ``True`` when ``player`` holds the bonus-loot permission."""

    return player.has_permission(BONUS_LOOT_PERMISSION)


def no_double_drops(player: HarvestingPlayer) -> bool:
    """Double-drop predicate used when no double-drop hooks are installed."""

    return False


@dataclass(frozen=True, slots=True)
class BlockPosition:
    """Integer world coordinates of a block."""

    x: int
    y: int
    z: int


@dataclass(frozen=True, slots=True)
class HarvestedBlock:
    """A block of a tree that has been broken."""

    signature: BlockSignature
    category: BlockCategory
    position: BlockPosition


@dataclass(frozen=True, slots=True)
class LootResult:
    """Items and rendered commands granted by one resolution."""

    items: tuple[ItemGrant, ...] = ()
    commands: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when nothing was granted."""
        return not self.items and not self.commands


class ResolutionMode(str, Enum):
    """Enumerate the mutually exclusive ways a pool is chosen."""

    ENTIRE_TREE = "entire-tree"
    SILK_TOUCH = "silk-touch"
    NORMAL = "normal"


def select_mode(settings: EngineSettings, *, has_silk_touch: bool, entire_tree: bool) -> ResolutionMode:
    """Return the resolution mode for the given flags."""

    if entire_tree:
        return ResolutionMode.ENTIRE_TREE
    if has_silk_touch and settings.apply_silk_touch:
        return ResolutionMode.SILK_TOUCH
    return ResolutionMode.NORMAL


def effective_chance(entry: LootEntry, *, has_bonus: bool, multiplier: float) -> float:
    """Return the percentage chance of ``entry`` after the bonus multiplier."""

    return entry.chance * multiplier if has_bonus else entry.chance


def render_command(template: str, placeholders: Mapping[str, str]) -> str:
    """Substitute ``%token%`` placeholders in a command template.

    Only tokens named in ``placeholders`` are replaced, in a single pass.
    Other ``%...%`` text is left for whatever later expands it.

    Args:
        template: Command text from the loot entry.
        placeholders: Values keyed by token name without the percent signs.

    Returns:
        str: Rendered command.

    Raises:
        TemplateError: If the command is blank once rendered.
    """

    rendered = template
    if placeholders:
        pattern = re.compile("|".join(re.escape(f"%{token}%") for token in placeholders))
        rendered = pattern.sub(lambda match: placeholders[match.group(0)[1:-1]], template)
    if not rendered.strip():
        raise TemplateError(f"command '{template}' renders to an empty command")
    return rendered


def command_placeholders(
    player: HarvestingPlayer,
    definition: TreeDefinition,
    block: HarvestedBlock,
) -> dict[str, str]:
    """Return the placeholder values available to loot commands."""

    return {
        "player": player.name,
        "type": definition.key,
        "xPos": str(block.position.x),
        "yPos": str(block.position.y),
        "zPos": str(block.position.z),
    }


class LootResolver:
    """Compose loot pools, roll them against one random source, and apply modifiers.

    The resolver never touches inventories or the world. It returns a
    :class:`LootResult` for a realizer to deliver.
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        *,
        adapter: SignatureAdapter | None = None,
        bonus_loot: PlayerPredicate = holds_bonus_loot,
        double_drops: PlayerPredicate = no_double_drops,
    ) -> None:
        self._random: RandomSource = random_source if random_source is not None else random.Random()
        self._random_lock = threading.Lock()
        self._adapter: SignatureAdapter = adapter if adapter is not None else NamespacedSignatureAdapter()
        self._bonus_loot = bonus_loot
        self._double_drops = double_drops

    def resolve(
        self,
        snapshot: CatalogSnapshot,
        definition: TreeDefinition,
        block: HarvestedBlock,
        player: HarvestingPlayer,
        *,
        has_silk_touch: bool = False,
        entire_tree: bool = False,
    ) -> LootResult:
        """Decide what ``player`` receives for ``block`` of ``definition``.

        Args:
            snapshot: Catalog supplying global pools and engine settings.
            definition: Tree the block belongs to.
            block: Harvested block; its position feeds command placeholders.
            player: Player doing the harvesting.
            has_silk_touch: Whether the tool carries silk touch.
            entire_tree: Resolve the once-per-tree pools instead of per-block pools.

        Returns:
            LootResult: Items and rendered commands to deliver.
        """

        settings = snapshot.settings
        copies = 2 if self._double_drops(player) else 1
        mode = select_mode(settings, has_silk_touch=has_silk_touch, entire_tree=entire_tree)
        items: list[ItemGrant] = []
        queued: list[str] = []

        if mode is ResolutionMode.SILK_TOUCH:
            items.extend(self._original_drops(block, copies))
            pool: tuple[LootEntry, ...] = ()
        elif mode is ResolutionMode.ENTIRE_TREE:
            pool = snapshot.effective_pool(definition, block.category, entire_tree=True)
        else:
            pool = snapshot.effective_pool(definition, block.category)
            if definition.drops_original(block.category):
                items.extend(self._original_drops(block, copies))

        has_bonus = self._bonus_loot(player)
        for entry in self.roll(pool, has_bonus=has_bonus, multiplier=settings.bonus_loot_multiplier):
            if entry.item is not None:
                items.extend([entry.item] * copies)
            if entry.command is not None:
                queued.extend([entry.command] * copies)

        placeholders = command_placeholders(player, definition, block)
        commands: list[str] = []
        for template in queued:
            try:
                commands.append(render_command(template, placeholders))
            except TemplateError as exc:
                LOGGER.warning("skipping loot command for tree '%s': %s", definition.key, exc)

        LOGGER.debug(
            "resolved %s loot for tree=%s player=%s items=%d commands=%d",
            mode.value,
            definition.key,
            player.name,
            len(items),
            len(commands),
        )
        return LootResult(items=tuple(items), commands=tuple(commands))

    def roll(
        self,
        pool: tuple[LootEntry, ...],
        *,
        has_bonus: bool,
        multiplier: float,
    ) -> tuple[LootEntry, ...]:
        """Draw once per entry and return the entries that succeeded.

        An entry succeeds when its draw is strictly below
        ``effective_chance / 100``.
        """

        succeeded: list[LootEntry] = []
        with self._random_lock:
            for entry in pool:
                draw = self._random.random()
                threshold = effective_chance(entry, has_bonus=has_bonus, multiplier=multiplier) / 100
                if draw < threshold:
                    succeeded.append(entry)
                LOGGER.debug("rolled %.4f against %.4f for loot entry '%s'", draw, threshold, entry.key)
        return tuple(succeeded)

    def _original_drops(self, block: HarvestedBlock, copies: int) -> list[ItemGrant]:
        return list(self._adapter.original_drops(block.signature)) * copies


__all__ = [
    "BONUS_LOOT_PERMISSION",
    "BlockPosition",
    "HarvestedBlock",
    "HarvestingPlayer",
    "LootResolver",
    "LootResult",
    "PlayerPredicate",
    "RandomSource",
    "ResolutionMode",
    "command_placeholders",
    "effective_chance",
    "holds_bonus_loot",
    "no_double_drops",
    "render_command",
    "select_mode",
]
