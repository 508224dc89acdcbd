# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Conflict Mode Enumeration.

Selects how the ConflictResolver treats a generated file that was modified
on disk since it was last written.
"""

from enum import Enum


class EnumConflictMode(str, Enum):
    """Policy applied to hand-edited generated files.

    Attributes:
        SKIP: Leave the file untouched and report a non-fatal skipped conflict
        PROMPT: Ask an interactive callback whether to overwrite
        STRICT: Raise ConflictError
        OVERWRITE: Replace the file regardless of local edits
    """

    SKIP = "skip"
    PROMPT = "prompt"
    STRICT = "strict"
    OVERWRITE = "overwrite"


__all__ = ["EnumConflictMode"]
