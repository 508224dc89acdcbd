# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity Declaration Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumDeclarationKind
from chaingen.models.model_field_declaration import ModelFieldDeclaration
from chaingen.models.model_schema_directive import ModelSchemaDirective


class ModelEntityDeclaration(BaseModel):
    """``type`` declaration from the entity schema.

    Declarations marked ``@entity`` are persisted entities; the rest are value
    types embedded in the fields of other declarations.

    Attributes:
        name: Declaration name.
        kind: Persisted entity or value type.
        timeseries: ``@entity(timeseries: true)``.
        immutable: ``@entity(immutable: true)``; implied for timeseries by convention.
        description: Description string preceding the declaration, if any.
        fields: Fields in declaration order.
        directives: Declaration directives, including ``@entity``.
        line: 1-based source line of the ``type`` keyword.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1)
    kind: EnumDeclarationKind = Field(default=EnumDeclarationKind.ENTITY)
    timeseries: bool = Field(default=False)
    immutable: bool = Field(default=False)
    description: str | None = Field(default=None)
    fields: tuple[ModelFieldDeclaration, ...] = Field(default=())
    directives: tuple[ModelSchemaDirective, ...] = Field(default=())
    line: int = Field(default=0, ge=0)

    @property
    def is_entity(self) -> bool:
        return self.kind == EnumDeclarationKind.ENTITY

    def get_field(self, name: str) -> ModelFieldDeclaration | None:
        return next((f for f in self.fields if f.name == name), None)


__all__ = ["ModelEntityDeclaration"]
