# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Binding Field Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_type_descriptor import ModelTypeDescriptor


class ModelBindingField(BaseModel):
    """Parameter of an event or function binding.

    Attributes:
        name: Parameter name as declared (synthesized as ``arg<i>`` when unnamed).
        attribute: Python attribute name in the generated model.
        descriptor: Mapped type descriptor.
        indexed: Event parameter stored as a topic.
        topic_hash: Indexed dynamic parameter; only its 32-byte keccak hash
            is recoverable from the log, so it decodes as ``bytes32``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    attribute: str
    descriptor: ModelTypeDescriptor
    indexed: bool = Field(default=False)
    topic_hash: bool = Field(default=False)


__all__ = ["ModelBindingField"]
