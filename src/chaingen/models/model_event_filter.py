# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Event Filter Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelEventFilter(BaseModel):
    """Log filter descriptor for one event.

    Attributes:
        signature: Canonical event signature.
        topic0: keccak256 of the signature; None for anonymous events.
        indexed_topic_count: Number of indexed parameters.
        address: Emitting contract address.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    signature: str
    topic0: str | None = Field(default=None, pattern=r"^0x[0-9a-f]{64}$")
    indexed_topic_count: int = Field(default=0, ge=0, le=4)
    address: str


__all__ = ["ModelEventFilter"]
