# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Manifest Entry Model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumArtifactKind


class ModelManifestEntry(BaseModel):
    """What the tool last wrote to one output path."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    content_hash: str = Field(..., min_length=64, max_length=64)
    origin: str
    kind: EnumArtifactKind
    generated_at: datetime

    def same_output(self, other: ModelManifestEntry) -> bool:
        """Compare ignoring the generation timestamp."""
        return (self.content_hash, self.origin, self.kind) == (
            other.content_hash,
            other.origin,
            other.kind,
        )


__all__ = ["ModelManifestEntry"]
