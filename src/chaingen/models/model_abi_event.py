# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Event Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_abi_parameter import ModelAbiParameter


class ModelAbiEvent(BaseModel):
    """Event declared in a contract ABI.

    Attributes:
        name: Event name as declared.
        inputs: Event parameters, in declaration order.
        anonymous: Anonymous events carry no signature topic.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1)
    inputs: tuple[ModelAbiParameter, ...] = Field(default=())
    anonymous: bool = Field(default=False)

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``Transfer(address,address,uint256)``."""
        return f"{self.name}({','.join(p.canonical_type() for p in self.inputs)})"

    @property
    def indexed_count(self) -> int:
        """Number of parameters stored as topics."""
        return sum(1 for p in self.inputs if p.indexed)


__all__ = ["ModelAbiEvent"]
