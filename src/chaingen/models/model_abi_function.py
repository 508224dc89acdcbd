# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Function Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_abi_parameter import ModelAbiParameter


class ModelAbiFunction(BaseModel):
    """Callable function declared in a contract ABI.

    Attributes:
        name: Function name as declared.
        inputs: Call parameters, in declaration order.
        outputs: Return values, in declaration order.
        state_mutability: ``pure``, ``view``, ``nonpayable`` or ``payable``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1)
    inputs: tuple[ModelAbiParameter, ...] = Field(default=())
    outputs: tuple[ModelAbiParameter, ...] = Field(default=())
    state_mutability: str = Field(default="nonpayable")

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. ``transfer(address,uint256)``."""
        return f"{self.name}({','.join(p.canonical_type() for p in self.inputs)})"

    @property
    def is_read_only(self) -> bool:
        return self.state_mutability in ("view", "pure")


__all__ = ["ModelAbiFunction"]
