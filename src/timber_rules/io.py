# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading tree configuration documents and schemas."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, cast

import yaml

from .errors import ConfigValidationError
from .types import JSONValue

YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yml", ".yaml"})


def load_schema(path: Path) -> Mapping[str, JSONValue]:
    """Load a JSON schema from disk and ensure it is a JSON object.

    Args:
        path: Filesystem path to the schema file.

    Returns:
        Mapping[str, JSONValue]: Parsed JSON schema mapping.

    Raises:
        FileNotFoundError: If the schema file does not exist.
        ConfigValidationError: If the schema cannot be parsed or is not a JSON object.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as stream:
        try:
            payload = cast(JSONValue, json.load(stream))
        except json.JSONDecodeError as exc:  # pragma: no cover - json module provides rich context
            raise ConfigValidationError(f"{path}: failed to parse JSON schema") from exc
    return _ensure_json_object(payload, context=str(path))


def load_document(path: Path) -> Mapping[str, JSONValue]:
    """Load a YAML or JSON configuration document from disk.

    The parser is chosen by suffix: ``.yml``/``.yaml`` are read with
    ``yaml.safe_load`` and everything else is treated as JSON.

    Args:
        path: Filesystem path to the configuration document.

    Returns:
        Mapping[str, JSONValue]: Parsed top-level configuration mapping.

    Raises:
        FileNotFoundError: If the document is missing.
        ConfigValidationError: If the document cannot be parsed or is not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            payload = cast(JSONValue, yaml.safe_load(text))
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"{path}: failed to parse YAML document") from exc
        if payload is None:
            payload = {}
    else:
        try:
            payload = cast(JSONValue, json.loads(text))
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(f"{path}: failed to parse JSON document") from exc
    return _ensure_json_object(payload, context=str(path))


def _ensure_json_object(value: JSONValue, *, context: str) -> Mapping[str, JSONValue]:
    """Ensure ``value`` is a JSON object, raising on type mismatch.

    Args:
        value: Parsed payload to validate.
        context: Human-readable context string used in error messages.

    Returns:
        Mapping[str, JSONValue]: Validated JSON object.

    Raises:
        ConfigValidationError: If ``value`` is not a mapping.
    """

    mapping = _ensure_json_value(value, context=context)
    if not isinstance(mapping, Mapping):
        raise ConfigValidationError(f"{context}: expected a top-level mapping")
    return mapping


def _ensure_json_value(value: object, *, context: str) -> JSONValue:
    """Ensure ``value`` is composed of JSON-compatible structures.

    YAML keys such as ``1`` or ``true`` are coerced to strings so that loot and
    tree keys behave identically regardless of how they were written.

    Raises:
        ConfigValidationError: If ``value`` contains unsupported constructs.
    """

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _ensure_json_value(item, context=f"{context}.{key}") for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [_ensure_json_value(item, context=f"{context}[]") for item in value]
    raise ConfigValidationError(f"{context}: unsupported value of type {type(value).__name__}")


__all__ = ["YAML_SUFFIXES", "load_document", "load_schema"]
