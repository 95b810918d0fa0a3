# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksum utilities for configuration documents."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping

from .types import JSONValue
from .utils import thaw_json_value


def compute_document_checksum(document: Mapping[str, JSONValue]) -> str:
    """Calculate a checksum of ``document`` that ignores key order and formatting.

    Args:
        document: Parsed configuration mapping.

    Returns:
        str: Hex-encoded SHA-256 checksum of the canonical JSON form.
    """
    canonical = json.dumps(
        thaw_json_value(document),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


__all__ = ["compute_document_checksum"]
