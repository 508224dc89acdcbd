# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Origin Result Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumOriginStatus, EnumWriteAction
from chaingen.models.model_write_result import ModelWriteResult


class ModelOriginResult(BaseModel):
    """Result for one origin of a run: a contract, or the entity schema.

    Attributes:
        origin: Contract name, or the schema path for entities.
        address: Contract address; None for the schema.
        network: Contract network; None for the schema.
        status: Aggregated outcome.
        writes: Per-artifact write outcomes.
        error_type: Error class name when the origin failed.
        error_message: Error message when the origin failed.
        warnings: Non-fatal warnings (stale ABI, skipped conflicts, ...).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    origin: str
    address: str | None = Field(default=None)
    network: str | None = Field(default=None)
    status: EnumOriginStatus
    writes: tuple[ModelWriteResult, ...] = Field(default=())
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)
    warnings: tuple[str, ...] = Field(default=())

    def count(self, action: EnumWriteAction) -> int:
        return sum(1 for w in self.writes if w.action == action)


__all__ = ["ModelOriginResult"]
