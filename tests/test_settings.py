# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for engine settings parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from timber_rules.errors import InvalidValueError
from timber_rules.settings import EngineSettings


def test_defaults_apply_when_keys_are_absent() -> None:
    settings = EngineSettings.from_document({"trees": {}})
    assert settings == EngineSettings()
    assert settings.apply_silk_touch is True
    assert settings.ignore_required_tools is False
    assert settings.add_items_to_inventory is False
    assert settings.bonus_loot_multiplier == 2.0


def test_kebab_case_keys_are_read() -> None:
    settings = EngineSettings.from_document(
        {
            "ignore-required-tools": True,
            "add-items-to-inventory": True,
            "apply-silk-touch": False,
            "bonus-loot-multiplier": 3,
        },
    )
    assert settings.ignore_required_tools is True
    assert settings.add_items_to_inventory is True
    assert settings.apply_silk_touch is False
    assert settings.bonus_loot_multiplier == 3.0


@pytest.mark.parametrize(
    "document",
    [
        {"bonus-loot-multiplier": 0.5},
        {"apply-silk-touch": "yes"},
        {"ignore-required-tools": 1},
    ],
)
def test_invalid_values_raise_config_error(document: dict[str, object]) -> None:
    with pytest.raises(InvalidValueError, match="invalid engine settings"):
        EngineSettings.from_document(document, context="trees.yml")


def test_settings_are_frozen() -> None:
    settings = EngineSettings()
    with pytest.raises(ValidationError):
        settings.apply_silk_touch = False  # type: ignore[misc]
