# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Function Binding Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_binding_field import ModelBindingField


class ModelFunctionBinding(BaseModel):
    """Generated representation of one callable ABI function.

    Attributes:
        name: Function name as declared.
        class_name: Call model class name, overload-suffixed.
        snake_name: snake_case name used for the encoder, overload-suffixed.
        signature: Canonical function signature.
        selector: First four bytes of keccak256(signature), 0x-prefixed.
        state_mutability: Declared state mutability.
        fields: Call parameters.
        outputs: Return values.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    class_name: str
    snake_name: str
    signature: str
    selector: str = Field(..., pattern=r"^0x[0-9a-f]{8}$")
    state_mutability: str = Field(default="nonpayable")
    fields: tuple[ModelBindingField, ...] = Field(default=())
    outputs: tuple[ModelBindingField, ...] = Field(default=())


__all__ = ["ModelFunctionBinding"]
