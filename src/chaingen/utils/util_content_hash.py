# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Content hashing utilities.

Provides the deterministic SHA-256 digests used by the generation manifest
(file contents) and the ABI cache (canonical JSON payloads).

Algorithm:
    Text is encoded as UTF-8 before hashing. JSON values are first
    serialized canonically (sorted keys, no insignificant whitespace) so
    equal payloads always hash equally regardless of key order.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

_HASH_CHUNK_SIZE: int = 64 * 1024


def hash_text(content: str) -> str:
    """Return the hex SHA-256 digest of UTF-8 encoded text."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def hash_bytes(content: bytes) -> str:
    """Return the hex SHA-256 digest of raw bytes."""
    return hashlib.sha256(content).hexdigest()


def hash_file(path: Path) -> str | None:
    """Return the hex SHA-256 digest of a file, or None if it does not exist.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    if not path.is_file():
        return None
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def canonical_json(value: object) -> str:
    """Serialize a JSON-compatible value canonically."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_json(value: object) -> str:
    """Return the hex SHA-256 digest of the canonical JSON form of a value."""
    return hash_text(canonical_json(value))


__all__ = [
    "canonical_json",
    "hash_bytes",
    "hash_file",
    "hash_json",
    "hash_text",
]
