# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Engine-wide switches that shape tool gating and loot resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidValueError
from .types import JSONValue

# Document keys mapped to model field names.
SETTING_KEYS: Final[dict[str, str]] = {
    "ignore-required-tools": "ignore_required_tools",
    "add-items-to-inventory": "add_items_to_inventory",
    "apply-silk-touch": "apply_silk_touch",
    "bonus-loot-multiplier": "bonus_loot_multiplier",
}


class EngineSettings(BaseModel):
    """Explicit settings handed to the engine on construction or reload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ignore_required_tools: bool = False
    add_items_to_inventory: bool = False
    apply_silk_touch: bool = True
    bonus_loot_multiplier: float = Field(default=2.0, ge=1.0)

    @classmethod
    def from_document(cls, document: Mapping[str, JSONValue], *, context: str = "<root>") -> EngineSettings:
        """Build settings from the kebab-case switches of a configuration document.

        Keys that are absent keep their defaults.

        Raises:
            InvalidValueError: If a switch has the wrong type or range.
        """

        values = {field_name: document[key] for key, field_name in SETTING_KEYS.items() if key in document}
        try:
            return cls.model_validate(values, strict=True)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
            )
            raise InvalidValueError(f"{context}: invalid engine settings ({problems})") from exc


__all__ = ["SETTING_KEYS", "EngineSettings"]
