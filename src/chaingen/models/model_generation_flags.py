# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generation Flags Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumConflictMode


class ModelGenerationFlags(BaseModel):
    """Per-run options threaded through the generation pipeline.

    Attributes:
        include_handlers: Emit handler stubs for events without one.
        include_bindings: Emit contract bindings.
        include_entities: Emit entity types from the schema.
        force_refresh: Bypass the ABI cache; fetch failures are fatal.
        dry_run: Report what would be written without touching disk.
        conflict_mode: Policy for generated files edited since the last run.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    include_handlers: bool = Field(default=True)
    include_bindings: bool = Field(default=True)
    include_entities: bool = Field(default=True)
    force_refresh: bool = Field(default=False)
    dry_run: bool = Field(default=False)
    conflict_mode: EnumConflictMode = Field(default=EnumConflictMode.SKIP)


__all__ = ["ModelGenerationFlags"]
