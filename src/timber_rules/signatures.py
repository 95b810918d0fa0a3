# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Block, item, and tool signatures plus the adapter that parses them."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Protocol, runtime_checkable

from .errors import InvalidSignatureError
from .types import DEFAULT_NAMESPACE

_IDENTIFIER: Final[str] = r"[a-z0-9_.\-/]+"
_BLOCK_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?:(?P<namespace>{_IDENTIFIER}):)?(?P<material>{_IDENTIFIER})(?:\[(?P<state>[^\[\]]*)\])?$",
)
_ITEM_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?:(?P<namespace>{_IDENTIFIER}):)?(?P<material>{_IDENTIFIER})(?P<metadata>\{{.*\}})?$",
    re.IGNORECASE | re.DOTALL,
)
_STATE_PAIR_RE: Final[re.Pattern[str]] = re.compile(rf"^(?P<key>{_IDENTIFIER})=(?P<value>{_IDENTIFIER})$")


@dataclass(frozen=True, slots=True)
class BlockSignature:
    """Namespaced material plus block state used to recognise placed blocks.

    A signature loaded from configuration usually names only the properties it
    cares about. :meth:`matches` therefore treats configured properties as a
    subset constraint on the observed block rather than comparing structurally.
    """

    material: str
    namespace: str = DEFAULT_NAMESPACE
    state: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), compare=False)
    _state_key: tuple[tuple[str, str], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        frozen = MappingProxyType(dict(self.state))
        object.__setattr__(self, "state", frozen)
        object.__setattr__(self, "_state_key", tuple(sorted(frozen.items())))

    @property
    def identifier(self) -> str:
        """Return the namespaced material identifier (``namespace:material``)."""
        return f"{self.namespace}:{self.material}"

    def matches(self, observed: BlockSignature) -> bool:
        """Return ``True`` when ``observed`` is the block this signature describes.

        Args:
            observed: Signature of a block present in the world.

        Returns:
            bool: ``True`` when materials agree and every configured state
            property carries the same value on ``observed``.
        """

        if self.identifier != observed.identifier:
            return False
        return all(observed.state.get(key) == value for key, value in self._state_key)

    def __str__(self) -> str:
        if not self._state_key:
            return self.identifier
        state = ",".join(f"{key}={value}" for key, value in self._state_key)
        return f"{self.identifier}[{state}]"


@dataclass(frozen=True, slots=True)
class ItemGrant:
    """Single item granted to a player or dropped into the world.

    ``metadata`` keeps the trailing ``{...}`` text exactly as configured.
    Repeated grants are expressed as repeated entries, never as a count.
    """

    material: str
    namespace: str = DEFAULT_NAMESPACE
    metadata: str | None = None

    @property
    def identifier(self) -> str:
        """Return the namespaced material identifier of the item."""
        return f"{self.namespace}:{self.material}"

    def __str__(self) -> str:
        return self.identifier + (self.metadata or "")


@dataclass(frozen=True, slots=True)
class ToolSignature:
    """Tool identity narrowed to the item type.

    Durability, enchantments and any other metadata are dropped on purpose:
    two tools of the same type are interchangeable for required-tool checks.
    """

    material: str
    namespace: str = DEFAULT_NAMESPACE

    @classmethod
    def of(cls, item: ItemGrant) -> ToolSignature:
        """Return the tool signature for ``item`` using its type only."""
        return cls(material=item.material, namespace=item.namespace)

    @property
    def identifier(self) -> str:
        """Return the namespaced material identifier of the tool."""
        return f"{self.namespace}:{self.material}"

    def __str__(self) -> str:
        return self.identifier


@runtime_checkable
class SignatureAdapter(Protocol):
    """Collaborator that turns configuration strings into signatures."""

    def parse_block(self, raw: str, *, context: str) -> BlockSignature:
        """Parse a block signature string."""

    def parse_item(self, raw: str, *, context: str) -> ItemGrant:
        """Parse an item string."""

    def parse_tool(self, raw: str, *, context: str) -> ToolSignature:
        """Parse a tool string, keeping only its type."""

    def original_drops(self, block: BlockSignature) -> tuple[ItemGrant, ...]:
        """Return the items produced by the unmodified ``block`` itself."""


class NamespacedSignatureAdapter:
    """Parse ``[namespace:]material[key=value,...]`` style signature strings."""

    def __init__(self, default_namespace: str = DEFAULT_NAMESPACE) -> None:
        self.default_namespace = default_namespace

    def parse_block(self, raw: str, *, context: str) -> BlockSignature:
        """Parse ``raw`` into a :class:`BlockSignature`.

        Args:
            raw: Signature string such as ``minecraft:oak_log[axis=y]``.
            context: Dotted path used in error messages.

        Returns:
            BlockSignature: Parsed, normalised signature.

        Raises:
            InvalidSignatureError: If ``raw`` is not a valid block signature.
        """

        match = _BLOCK_RE.match(raw.strip().lower())
        if match is None:
            raise InvalidSignatureError(f"{context}: invalid block signature '{raw}'")
        return BlockSignature(
            material=match["material"],
            namespace=match["namespace"] or self.default_namespace,
            state=self._parse_state(match["state"], raw=raw, context=context),
        )

    def parse_item(self, raw: str, *, context: str) -> ItemGrant:
        """Parse ``raw`` into an :class:`ItemGrant` keeping trailing ``{...}`` metadata.

        Namespace and material are lowercased; metadata is kept verbatim.

        Raises:
            InvalidSignatureError: If ``raw`` is not a valid item string.
        """

        match = _ITEM_RE.match(raw.strip())
        if match is None:
            raise InvalidSignatureError(f"{context}: invalid item signature '{raw}'")
        namespace = match["namespace"]
        return ItemGrant(
            material=match["material"].lower(),
            namespace=namespace.lower() if namespace else self.default_namespace,
            metadata=match["metadata"],
        )

    def parse_tool(self, raw: str, *, context: str) -> ToolSignature:
        """Parse ``raw`` into a :class:`ToolSignature`, discarding metadata."""

        return ToolSignature.of(self.parse_item(raw, context=context))

    def original_drops(self, block: BlockSignature) -> tuple[ItemGrant, ...]:
        """Return the block's own item form."""

        return (ItemGrant(material=block.material, namespace=block.namespace),)

    @staticmethod
    def _parse_state(state: str | None, *, raw: str, context: str) -> dict[str, str]:
        if state is None or not state.strip():
            return {}
        properties: dict[str, str] = {}
        for pair in state.split(","):
            match = _STATE_PAIR_RE.match(pair.strip())
            if match is None:
                raise InvalidSignatureError(f"{context}: invalid block state '{pair}' in '{raw}'")
            properties[match["key"]] = match["value"]
        return properties


__all__ = [
    "BlockSignature",
    "ItemGrant",
    "NamespacedSignatureAdapter",
    "SignatureAdapter",
    "ToolSignature",
]
