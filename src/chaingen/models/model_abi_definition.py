# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Definition Model.

A resolved contract ABI: the raw payload as served by the registry (or read
from a local file), the parsed events and functions, and the cache metadata
used to decide whether the entry can be reused.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from chaingen.enums import EnumAbiSource
from chaingen.models.model_abi_event import ModelAbiEvent
from chaingen.models.model_abi_function import ModelAbiFunction


class ModelAbiDefinition(BaseModel):
    """Resolved ABI for one contract on one network.

    At most one live cache entry exists per (network, address); the cache
    refreshes it on a miss, an explicit refresh, or a content hash mismatch.

    Attributes:
        address: Canonical lower-case contract address.
        network: Network identifier.
        abi: Raw ABI item list.
        events: Parsed events, in declaration order.
        functions: Parsed functions, in declaration order.
        fetched_at: When the payload was fetched from its source.
        content_hash: SHA-256 of the canonical JSON form of ``abi``.
        etag: Upstream entity tag, when the registry sent one.
        is_stale: Served from cache after a failed refresh.
        source: Where this definition was obtained from.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    address: str
    network: str
    abi: list[dict[str, JsonValue]] = Field(default_factory=list)
    events: tuple[ModelAbiEvent, ...] = Field(default=())
    functions: tuple[ModelAbiFunction, ...] = Field(default=())
    fetched_at: datetime
    content_hash: str = Field(..., min_length=64, max_length=64)
    etag: str | None = Field(default=None)
    is_stale: bool = Field(default=False)
    source: EnumAbiSource = Field(default=EnumAbiSource.REGISTRY)


__all__ = ["ModelAbiDefinition"]
