# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Utility modules for the code generation pipeline.

This package provides common utilities used across the pipeline:
    - util_address: Contract address checksum validation and normalization
    - util_atomic_write: Temp-file-and-replace writes
    - util_content_hash: Deterministic SHA-256 digests for files and JSON
    - util_event_signature: keccak256 event topics and function selectors
    - util_name_converter: Identifier casing for generated source
"""

from chaingen.utils.util_address import normalize_address, to_checksum
from chaingen.utils.util_atomic_write import write_text_atomic
from chaingen.utils.util_content_hash import (
    canonical_json,
    hash_bytes,
    hash_file,
    hash_json,
    hash_text,
)
from chaingen.utils.util_event_signature import event_topic, function_selector
from chaingen.utils.util_name_converter import NameConverter

__all__: list[str] = [
    "NameConverter",
    "canonical_json",
    "event_topic",
    "function_selector",
    "hash_bytes",
    "hash_file",
    "hash_json",
    "hash_text",
    "normalize_address",
    "to_checksum",
    "write_text_atomic",
]
