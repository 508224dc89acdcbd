# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Item Kind Enumeration.

Defines the entry types that may appear in a contract ABI payload.
"""

from enum import Enum


class EnumAbiItemKind(str, Enum):
    """Kinds of entries in a JSON ABI.

    Attributes:
        FUNCTION: Callable contract function
        EVENT: Log-emitting event
        CONSTRUCTOR: Contract constructor
        FALLBACK: Fallback function
        RECEIVE: Plain ether receive function
        ERROR: Custom error declaration
    """

    FUNCTION = "function"
    EVENT = "event"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    ERROR = "error"


__all__ = ["EnumAbiItemKind"]
