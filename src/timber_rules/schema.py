# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading utilities for validating tree configuration documents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import ConfigValidationError
from .io import load_schema
from .types import JSONValue

SCHEMA_ROOT: Final[Path] = Path(__file__).resolve().parent / "schemas"
TREES_SCHEMA_FILENAME: Final[str] = "trees.schema.json"


@dataclass(slots=True)
class SchemaRepository:
    """Hold the JSON schema validator applied to configuration documents."""

    schema_root: Path
    trees_validator: Draft202012Validator

    @classmethod
    def load(cls, *, schema_root: Path | None = None) -> SchemaRepository:
        """Load schema validators from disk.

        Args:
            schema_root: Optional override for the schema directory.

        Returns:
            SchemaRepository: Repository configured with the tree document validator.
        """
        resolved_root = schema_root or SCHEMA_ROOT
        schema = load_schema(resolved_root / TREES_SCHEMA_FILENAME)
        return cls(schema_root=resolved_root, trees_validator=Draft202012Validator(schema))

    def validate(self, document: Mapping[str, JSONValue], *, context: str) -> None:
        """Validate ``document`` against the tree configuration schema.

        Args:
            document: Parsed configuration mapping.
            context: Human-readable prefix used in error messages.

        Raises:
            ConfigValidationError: When the document fails schema validation.
        """
        try:
            self.trees_validator.validate(document)
        except ValidationError as exc:
            location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
            raise ConfigValidationError(f"{context}: {location}: {exc.message}") from exc


__all__ = ["SCHEMA_ROOT", "SchemaRepository"]
