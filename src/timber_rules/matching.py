# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Narrow tree definitions down to those that recognise an observed block."""

from __future__ import annotations

from collections.abc import Iterable

from .model_loot import BlockCategory
from .model_tree import TreeDefinition
from .signatures import BlockSignature


def definition_matches(
    definition: TreeDefinition,
    observed: BlockSignature,
    category: BlockCategory,
) -> bool:
    """Return ``True`` when any ``category`` signature of ``definition`` matches ``observed``."""

    return any(signature.matches(observed) for signature in definition.signatures_for(category))


def narrow(
    candidates: Iterable[TreeDefinition],
    observed: BlockSignature,
    category: BlockCategory,
) -> frozenset[TreeDefinition]:
    """Return the candidates whose ``category`` signatures include ``observed``.

    Args:
        candidates: Definitions still under consideration.
        observed: Signature of the block found in the world.
        category: Whether ``observed`` is being checked as a log or a leaf.

    Returns:
        frozenset[TreeDefinition]: Matching definitions; empty when none match.
    """

    return frozenset(
        definition for definition in candidates if definition_matches(definition, observed, category)
    )


__all__ = ["definition_matches", "narrow"]
