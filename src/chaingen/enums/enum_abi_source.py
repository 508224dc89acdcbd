# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Source Enumeration."""

from enum import Enum


class EnumAbiSource(str, Enum):
    """Where a resolved ABI definition came from.

    Attributes:
        CACHE: Valid local cache entry, no network call
        REGISTRY: Freshly fetched from the remote registry
        LOCAL_FILE: Project-local ABI file configured on the contract
        STALE_CACHE: Cache entry returned after a failed fetch
    """

    CACHE = "cache"
    REGISTRY = "registry"
    LOCAL_FILE = "local_file"
    STALE_CACHE = "stale_cache"


__all__ = ["EnumAbiSource"]
