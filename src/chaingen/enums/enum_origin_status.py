# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Origin Status Enumeration.

Aggregated status for one contract (or the entity schema) in a generation run.
"""

from enum import Enum


class EnumOriginStatus(str, Enum):
    """Per-origin outcome in a generation report.

    Attributes:
        SUCCESS: All artifacts written or already up to date
        SKIPPED_CONFLICTS: Succeeded, but at least one hand-edited file was skipped
        FAILED: Fetch, parse, mapping, render, conflict or I/O error
        CANCELLED: Not processed because the run was interrupted
    """

    SUCCESS = "success"
    SKIPPED_CONFLICTS = "skipped_conflicts"
    FAILED = "failed"
    CANCELLED = "cancelled"


__all__ = ["EnumOriginStatus"]
