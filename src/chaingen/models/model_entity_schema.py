# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity Schema Model.

The parsed entity schema file. Derived solely from the file contents and
immutable for the duration of a generation run.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_entity_declaration import ModelEntityDeclaration


class ModelEntitySchema(BaseModel):
    """Ordered entity and value type declarations.

    Attributes:
        declarations: Declarations in file order.
        scalars: Custom ``scalar`` names declared in the file.
        source_path: File the schema was loaded from, if any.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    declarations: tuple[ModelEntityDeclaration, ...] = Field(default=())
    scalars: tuple[str, ...] = Field(default=())
    source_path: str | None = Field(default=None)

    @property
    def entities(self) -> tuple[ModelEntityDeclaration, ...]:
        """Persisted entity declarations, in file order."""
        return tuple(d for d in self.declarations if d.is_entity)

    def get(self, name: str) -> ModelEntityDeclaration | None:
        return next((d for d in self.declarations if d.name == name), None)


__all__ = ["ModelEntitySchema"]
