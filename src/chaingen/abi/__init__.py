# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Contract ABI resolution.

Components:
    - AbiRegistryClient: httpx client for the remote ABI registry
    - AbiCache: atomic per-contract file cache
    - AbiParser: raw ABI JSON to typed events and functions
    - AbiResolver: local file, cache, registry and stale-fallback logic
"""

from chaingen.abi.abi_cache import AbiCache
from chaingen.abi.abi_parser import AbiParser
from chaingen.abi.abi_resolver import AbiResolver
from chaingen.abi.registry_client import (
    ABI_ENDPOINT_PATH,
    AbiRegistryClient,
    RegistryAbiPayload,
)
from chaingen.abi.retry_policy import RegistryServerError, create_registry_retry_policy

__all__: list[str] = [
    "ABI_ENDPOINT_PATH",
    "AbiCache",
    "AbiParser",
    "AbiRegistryClient",
    "AbiResolver",
    "RegistryAbiPayload",
    "RegistryServerError",
    "create_registry_retry_policy",
]
