# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Serialization Strategy Enumeration.

Describes how a generated field converts between decoded ABI values and its
Python representation.
"""

from enum import Enum


class EnumSerializationStrategy(str, Enum):
    """Serialization strategy attached to every TypeDescriptor.

    Attributes:
        NATIVE: Value is used as-is (int, bool, str, float)
        DECIMAL_STRING: Big integer or fixed-point value kept as a base-10 string
        HEX_STRING: Raw bytes kept as a 0x-prefixed lower-case hex string
        ADDRESS: 20-byte account address kept as lower-case hex
        IDENTIFIER: Entity identifier string
        TIMESTAMP: Timezone-aware datetime
        SEQUENCE: Element-wise conversion of a list
        OPTIONAL: Element conversion applied only to non-null values
        NESTED: Struct conversion through the generated nested model
        REFERENCE: Entity reference stored as the target identifier
    """

    NATIVE = "native"
    DECIMAL_STRING = "decimal_string"
    HEX_STRING = "hex_string"
    ADDRESS = "address"
    IDENTIFIER = "identifier"
    TIMESTAMP = "timestamp"
    SEQUENCE = "sequence"
    OPTIONAL = "optional"
    NESTED = "nested"
    REFERENCE = "reference"


__all__ = ["EnumSerializationStrategy"]
