# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Schema Type Reference Model.

Parsed form of a field type such as ``[Transfer!]!``. Named references are
resolved by the loader: scalars record the built-in scalar they stand for,
object types record whether they name a persisted entity or a value type.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumDeclarationKind


class ModelSchemaTypeRef(BaseModel):
    """Resolved schema type reference.

    Exactly one of ``name`` and ``element`` is set: ``name`` for a named
    type, ``element`` for a list.

    Attributes:
        name: Named type as written (``BigInt``, ``Account``, ``MyScalar``).
        element: Element type of a list.
        non_null: Whether the reference carries ``!``.
        base_scalar: Built-in scalar a named scalar resolves to; custom
            ``scalar`` declarations resolve to ``String``.
        declaration_kind: For named object types, entity or value type.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str | None = Field(default=None)
    element: ModelSchemaTypeRef | None = Field(default=None)
    non_null: bool = Field(default=False)
    base_scalar: str | None = Field(default=None)
    declaration_kind: EnumDeclarationKind | None = Field(default=None)

    @property
    def is_list(self) -> bool:
        return self.element is not None

    def innermost(self) -> ModelSchemaTypeRef:
        """Return the named type at the bottom of any list nesting."""
        ref = self
        while ref.element is not None:
            ref = ref.element
        return ref

    def __str__(self) -> str:
        inner = f"[{self.element}]" if self.element is not None else (self.name or "")
        return f"{inner}!" if self.non_null else inner


__all__ = ["ModelSchemaTypeRef"]
