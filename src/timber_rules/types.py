# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for the tree catalog."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

DEFAULT_NAMESPACE: Final[str] = "minecraft"
MIN_CHANCE: Final[float] = 0.0
MAX_CHANCE: Final[float] = 100.0

__all__ = [
    "DEFAULT_NAMESPACE",
    "MAX_CHANCE",
    "MIN_CHANCE",
    "JSONPrimitive",
    "JSONValue",
]
