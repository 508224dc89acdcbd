# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Schema Directive Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelSchemaDirective(BaseModel):
    """Directive applied to a declaration or field, e.g. ``@derivedFrom(field: "owner")``.

    Argument values are kept as their literal text with string quotes removed.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1)
    arguments: dict[str, str] = Field(default_factory=dict)


__all__ = ["ModelSchemaDirective"]
