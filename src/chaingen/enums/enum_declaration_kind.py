# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Schema Declaration Kind Enumeration."""

from enum import Enum


class EnumDeclarationKind(str, Enum):
    """Kind of a named type declared in the entity schema.

    Attributes:
        ENTITY: Persisted record type, marked with the @entity directive
        VALUE: Value type embedded in entities, without persistence identity
    """

    ENTITY = "entity"
    VALUE = "value"


__all__ = ["EnumDeclarationKind"]
