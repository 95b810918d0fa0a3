# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while building and querying the tree catalog."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when a configuration document cannot be turned into a catalog."""


class ConfigValidationError(ConfigError):
    """Raised when a configuration document fails structural schema validation."""


class MissingKeyError(ConfigError):
    """Raised when a required configuration key is absent."""


class InvalidSignatureError(ConfigError):
    """Raised when a block, item, or tool signature string cannot be parsed."""


class ChanceOutOfRangeError(ConfigError):
    """Raised when a loot entry declares a chance outside ``[0, 100]``."""


class InvalidValueError(ConfigError):
    """Raised when a configuration value has the wrong type or range."""


class DuplicateDefinitionError(ConfigError):
    """Raised when two tree definitions share the same key."""


class TemplateError(ValueError):
    """Raised when a loot command template cannot be rendered."""


__all__ = (
    "ChanceOutOfRangeError",
    "ConfigError",
    "ConfigValidationError",
    "DuplicateDefinitionError",
    "InvalidSignatureError",
    "InvalidValueError",
    "MissingKeyError",
    "TemplateError",
)
