# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Utility helpers for validating and normalising configuration structures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import InvalidValueError, MissingKeyError
from .types import JSONValue


def expect_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping of JSON values or raise an error.

    Args:
        value: Raw value extracted from the configuration document.
        key: Attribute name used in error messages.
        context: Dotted path describing where ``value`` was found.

    Returns:
        Mapping[str, JSONValue]: Mapping derived from ``value``.

    Raises:
        MissingKeyError: If ``value`` is ``None``.
        InvalidValueError: If ``value`` is not a mapping.
    """
    if value is None:
        raise MissingKeyError(f"{context}: missing required section '{key}'")
    if not isinstance(value, Mapping):
        raise InvalidValueError(f"{context}: expected '{key}' to be a section")
    return value


def optional_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping, treating an absent section as empty.

    Args:
        value: Raw value extracted from the configuration document.
        key: Attribute name used in error messages.
        context: Dotted path describing where ``value`` was found.

    Returns:
        Mapping[str, JSONValue]: Mapping derived from ``value`` or an empty mapping.

    Raises:
        InvalidValueError: If ``value`` is present but not a mapping.
    """
    if value is None:
        return {}
    return expect_mapping(value, key=key, context=context)


def expect_string(value: JSONValue | None, *, key: str, context: str) -> str:
    """Return ``value`` as a string or raise a configuration error.

    Args:
        value: Raw value extracted from the configuration document.
        key: Attribute name used in error messages.
        context: Dotted path describing where ``value`` was found.

    Returns:
        str: Value as a string.

    Raises:
        MissingKeyError: If ``value`` is ``None``.
        InvalidValueError: If ``value`` is not a string.
    """
    if value is None:
        raise MissingKeyError(f"{context}: missing required key '{key}'")
    if not isinstance(value, str):
        raise InvalidValueError(f"{context}: expected '{key}' to be a string")
    return value


def optional_string(value: JSONValue | None, *, key: str, context: str) -> str | None:
    """Return ``value`` as an optional string with validation.

    Args:
        value: Raw value extracted from the configuration document.
        key: Attribute name used in error messages.
        context: Dotted path describing where ``value`` was found.

    Returns:
        str | None: ``value`` when present, otherwise ``None``.

    Raises:
        InvalidValueError: If ``value`` is present but not a string.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidValueError(f"{context}: expected '{key}' to be a string if present")
    return value


def optional_bool(
    value: JSONValue | None,
    *,
    key: str,
    context: str,
    default: bool = False,
) -> bool:
    """Return ``value`` as a ``bool``, falling back to ``default`` when absent.

    Args:
        value: Raw value extracted from the configuration document.
        key: Attribute name used in error messages.
        context: Dotted path describing where ``value`` was found.
        default: Value returned when ``value`` is ``None``.

    Returns:
        bool: Boolean value derived from ``value`` or ``default``.

    Raises:
        InvalidValueError: If ``value`` is present and not a boolean.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise InvalidValueError(f"{context}: expected '{key}' to be a boolean")


def expect_number(value: JSONValue | None, *, key: str, context: str, minimum: float | None = None) -> float:
    """Return ``value`` as a float, optionally enforcing a lower bound.

    Raises:
        MissingKeyError: If ``value`` is ``None``.
        InvalidValueError: If ``value`` is not numeric or falls below ``minimum``.
    """
    if value is None:
        raise MissingKeyError(f"{context}: missing required key '{key}'")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidValueError(f"{context}: expected '{key}' to be a number")
    number = float(value)
    if minimum is not None and number < minimum:
        raise InvalidValueError(f"{context}: expected '{key}' to be at least {minimum:g}, got {number:g}")
    return number


def expect_int(value: JSONValue | None, *, key: str, context: str, minimum: int | None = None) -> int:
    """Return ``value`` as an int, optionally enforcing a lower bound.

    Raises:
        MissingKeyError: If ``value`` is ``None``.
        InvalidValueError: If ``value`` is not an integer or falls below ``minimum``.
    """
    if value is None:
        raise MissingKeyError(f"{context}: missing required key '{key}'")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"{context}: expected '{key}' to be an integer")
    if minimum is not None and value < minimum:
        raise InvalidValueError(f"{context}: expected '{key}' to be at least {minimum}, got {value}")
    return value


def string_array(value: JSONValue | None, *, key: str, context: str) -> tuple[str, ...]:
    """Return ``value`` as a tuple of strings with validation.

    Args:
        value: Raw value extracted from the configuration document.
        key: Attribute name used in error messages.
        context: Dotted path describing where ``value`` was found.

    Returns:
        tuple[str, ...]: Tuple containing all string entries from ``value``.

    Raises:
        InvalidValueError: If ``value`` is not a sequence of strings.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise InvalidValueError(f"{context}: expected '{key}' to be a list of strings")
    result: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise InvalidValueError(f"{context}: expected '{key}[{index}]' to be a string")
        result.append(item)
    return tuple(result)


def thaw_json_value(value: JSONValue) -> JSONValue:
    """Return a plain JSON-compatible representation of ``value``.

    Args:
        value: Value that may contain arbitrary mappings or tuples.

    Returns:
        JSONValue: JSON-compatible value composed of built-in ``dict`` and
        ``list`` containers.
    """

    if isinstance(value, Mapping):
        return {str(key): thaw_json_value(item) for key, item in value.items()}
    if isinstance(value, (tuple, list)):
        return [thaw_json_value(item) for item in value]
    return value


__all__ = [
    "expect_int",
    "expect_mapping",
    "expect_number",
    "expect_string",
    "optional_bool",
    "optional_mapping",
    "optional_string",
    "string_array",
    "thaw_json_value",
]
