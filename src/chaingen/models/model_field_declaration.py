# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Field Declaration Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumDeclarationKind
from chaingen.models.model_schema_directive import ModelSchemaDirective
from chaingen.models.model_schema_type_ref import ModelSchemaTypeRef


class ModelFieldDeclaration(BaseModel):
    """Field of an entity or value type declaration.

    Attributes:
        name: Field name as declared.
        type_text: Declared type text, e.g. ``[Transfer!]!``.
        type_ref: Parsed and resolved type reference.
        directives: Field directives in declaration order.
        description: Description string preceding the field, if any.
        line: 1-based source line of the field.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(..., min_length=1)
    type_text: str
    type_ref: ModelSchemaTypeRef
    directives: tuple[ModelSchemaDirective, ...] = Field(default=())
    description: str | None = Field(default=None)
    line: int = Field(default=0, ge=0)

    @property
    def nullable(self) -> bool:
        return not self.type_ref.non_null

    @property
    def is_list(self) -> bool:
        return self.type_ref.is_list

    @property
    def relationship_target(self) -> str | None:
        """Name of the entity this field refers to, if it is a relationship."""
        inner = self.type_ref.innermost()
        if inner.declaration_kind == EnumDeclarationKind.ENTITY:
            return inner.name
        return None

    def directive(self, name: str) -> ModelSchemaDirective | None:
        return next((d for d in self.directives if d.name == name), None)

    @property
    def derived_from(self) -> str | None:
        """Back-reference field named by ``@derivedFrom``, if present."""
        directive = self.directive("derivedFrom")
        return directive.arguments.get("field") if directive else None

    @property
    def unique(self) -> bool:
        return self.directive("unique") is not None

    @property
    def indexed(self) -> bool:
        return self.directive("index") is not None


__all__ = ["ModelFieldDeclaration"]
