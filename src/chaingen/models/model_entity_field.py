# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity Field Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_type_descriptor import ModelTypeDescriptor


class ModelEntityField(BaseModel):
    """Field of a generated entity type.

    Relationship fields are stored by identifier: ``owner: Account!`` becomes
    attribute ``owner_id`` and ``tokens: [Token!]!`` becomes ``tokens_ids``.
    Derived fields are resolved by the runtime and are not stored.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    attribute: str
    descriptor: ModelTypeDescriptor
    derived_from: str | None = Field(default=None)
    relation_target: str | None = Field(default=None)
    unique: bool = Field(default=False)
    indexed: bool = Field(default=False)
    description: str | None = Field(default=None)

    @property
    def is_stored(self) -> bool:
        return self.derived_from is None


__all__ = ["ModelEntityField"]
