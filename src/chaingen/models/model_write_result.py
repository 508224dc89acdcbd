# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Write Result Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumArtifactKind, EnumWriteAction


class ModelWriteResult(BaseModel):
    """Outcome of gating one artifact through the conflict resolver."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    path: str
    action: EnumWriteAction
    kind: EnumArtifactKind
    origin: str
    detail: str | None = Field(default=None)

    @property
    def changed_disk(self) -> bool:
        return self.action in (
            EnumWriteAction.WRITTEN,
            EnumWriteAction.OVERWRITTEN_CONFLICT,
        )


__all__ = ["ModelWriteResult"]
