# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Cache Entry Model.

On-disk form of one cached ABI at ``<cache_dir>/<network>/<address>.json``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class ModelAbiCacheEntry(BaseModel):
    """Cached raw ABI with the metadata needed to trust it.

    ``content_hash`` is recomputed from ``abi`` on every read; an entry whose
    stored hash does not match is treated as corrupt and ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    address: str
    network: str
    abi: list[dict[str, JsonValue]]
    fetched_at: datetime
    content_hash: str = Field(..., min_length=64, max_length=64)
    etag: str | None = Field(default=None)


__all__ = ["ModelAbiCacheEntry"]
