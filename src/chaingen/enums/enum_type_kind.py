# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Type Descriptor Kind Enumeration.

Tags the closed set of variants a TypeDescriptor can take.
"""

from enum import Enum


class EnumTypeKind(str, Enum):
    """Variant tag for ModelTypeDescriptor.

    Attributes:
        PRIMITIVE: Natively representable scalar (int, bool, str, float, datetime)
        BIG_NUMBER: Fixed-width integer or decimal wider than a native integer,
            serialized as a decimal string
        ARRAY: Dynamic or fixed-length sequence of a single element type
        OPTIONAL: Nullable wrapper around an element type
        TUPLE: Named struct synthesized from an ABI tuple or schema value type
        ENTITY_REF: Reference to a persisted entity, stored by identifier
    """

    PRIMITIVE = "primitive"
    BIG_NUMBER = "big_number"
    ARRAY = "array"
    OPTIONAL = "optional"
    TUPLE = "tuple"
    ENTITY_REF = "entity_ref"


__all__ = ["EnumTypeKind"]
