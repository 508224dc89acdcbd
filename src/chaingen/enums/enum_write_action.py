# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Write Action Enumeration.

Outcome of gating a single generated artifact through the ConflictResolver.
"""

from enum import Enum


class EnumWriteAction(str, Enum):
    """Per-artifact write outcome.

    Attributes:
        WRITTEN: File created or updated
        UNCHANGED: On-disk content already identical, nothing written
        OVERWRITTEN_CONFLICT: Hand-edited file replaced (prompt accepted or overwrite mode)
        SKIPPED_CONFLICT: Hand-edited file left untouched
        SKIPPED_EXISTING: Handler stub path already present on disk
        SKIPPED_DUPLICATE: Path already claimed by an earlier origin in this run
        DRY_RUN: Would have been written; dry-run mode left disk untouched
    """

    WRITTEN = "written"
    UNCHANGED = "unchanged"
    OVERWRITTEN_CONFLICT = "overwritten_conflict"
    SKIPPED_CONFLICT = "skipped_conflict"
    SKIPPED_EXISTING = "skipped_existing"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    DRY_RUN = "dry_run"


__all__ = ["EnumWriteAction"]
