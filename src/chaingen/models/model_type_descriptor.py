# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Type Descriptor Models.

ModelTypeDescriptor is the closed, tagged representation every ABI type and
schema field type is normalized into before any source text is produced.
Generators branch only on ``kind`` and ``serialization``, never on raw type
strings.

Variants:
    PRIMITIVE: ``type_name`` is a native Python type (int, bool, str, float,
        datetime); ``bit_width`` is set for ABI integers.
    BIG_NUMBER: Integers wider than 64 bits and fixed-point numbers, kept
        as decimal strings; ``bit_width`` is set.
    ARRAY: ``element`` is set; ``array_length`` is set for fixed arrays.
    OPTIONAL: ``element`` is the non-null descriptor.
    TUPLE: ``type_name`` is the synthesized struct class; ``fields`` is set.
    ENTITY_REF: ``reference_target`` names the entity; stored by id.

Schema value types map to TUPLE descriptors without ``fields`` whose
``reference_target`` names the declaration rendering the struct.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chaingen.enums import EnumSerializationStrategy, EnumTypeKind


class ModelTypeDescriptor(BaseModel):
    """Normalized type descriptor.

    Attributes:
        kind: Variant tag.
        type_name: Python annotation text for the generated field.
        serialization: How values convert to the Python representation.
        source_type: ABI type string or schema type text it was mapped from.
        bit_width: Width of ABI integer and fixed-point types.
        array_length: Length of fixed-size ABI arrays.
        element: Element descriptor of ARRAY and OPTIONAL variants.
        fields: Named fields of TUPLE variants.
        reference_target: Declaration name of ENTITY_REF variants and of
            TUPLE variants mapped from schema value types.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    kind: EnumTypeKind
    type_name: str = Field(..., min_length=1)
    serialization: EnumSerializationStrategy
    source_type: str
    bit_width: int | None = Field(default=None)
    array_length: int | None = Field(default=None)
    element: ModelTypeDescriptor | None = Field(default=None)
    fields: tuple[ModelTupleField, ...] = Field(default=())
    reference_target: str | None = Field(default=None)

    def iter_structs(self) -> list[ModelTypeDescriptor]:
        """Return every TUPLE descriptor reachable from this one, innermost first."""
        found: list[ModelTypeDescriptor] = []
        if self.element is not None:
            found.extend(self.element.iter_structs())
        for tuple_field in self.fields:
            found.extend(tuple_field.descriptor.iter_structs())
        if self.kind == EnumTypeKind.TUPLE:
            found.append(self)
        return found


class ModelTupleField(BaseModel):
    """Named field of a TUPLE descriptor.

    Attributes:
        name: Name as declared in the ABI component or schema field.
        attribute: Python attribute name used in generated code.
        descriptor: Field type descriptor.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str
    attribute: str
    descriptor: ModelTypeDescriptor


ModelTypeDescriptor.model_rebuild()


__all__ = ["ModelTupleField", "ModelTypeDescriptor"]
