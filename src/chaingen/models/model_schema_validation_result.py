# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Schema Validation Result Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelSchemaValidationResult(BaseModel):
    """Outcome of semantic schema validation.

    Errors make the schema unusable for generation; warnings are reported
    and generation proceeds.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    errors: tuple[str, ...] = Field(default=())
    warnings: tuple[str, ...] = Field(default=())

    @property
    def is_valid(self) -> bool:
        return not self.errors


__all__ = ["ModelSchemaValidationResult"]
