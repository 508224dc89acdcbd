# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity Binding Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_entity_field import ModelEntityField
from chaingen.models.model_type_descriptor import ModelTypeDescriptor


class ModelEntityBinding(BaseModel):
    """Typed form of one schema declaration, rendered into an entity module.

    Attributes:
        name: Declaration name.
        class_name: Generated class name.
        module_name: snake_case module name.
        table_name: Storage table name; None for value types.
        timeseries: Timeseries entity.
        immutable: Rows are never updated.
        description: Declaration description.
        fields: All declared fields, derived ones included.
        structs: Value-type structs referenced by fields.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    class_name: str
    module_name: str
    table_name: str | None = Field(default=None)
    timeseries: bool = Field(default=False)
    immutable: bool = Field(default=False)
    description: str | None = Field(default=None)
    fields: tuple[ModelEntityField, ...] = Field(default=())
    structs: tuple[ModelTypeDescriptor, ...] = Field(default=())

    @property
    def persisted(self) -> bool:
        return self.table_name is not None

    @property
    def stored_fields(self) -> tuple[ModelEntityField, ...]:
        return tuple(f for f in self.fields if f.is_stored)


__all__ = ["ModelEntityBinding"]
