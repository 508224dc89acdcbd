# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Model for the aggregate generation report."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from chaingen.enums import EnumOriginStatus, EnumWriteAction
from chaingen.models.model_origin_result import ModelOriginResult

__all__: list[str] = [
    "ModelGenerationReport",
]


@dataclass
class ModelGenerationReport:
    """Aggregate report of one generation run.

    Attributes:
        results: Per-origin results in processing order.
        dry_run: Whether this was a dry-run (no changes made).
        correlation_id: Run correlation ID.
    """

    results: list[ModelOriginResult] = field(default_factory=list)
    dry_run: bool = False
    correlation_id: UUID | None = None

    @property
    def failed_count(self) -> int:
        """Number of origins that failed."""
        return sum(1 for r in self.results if r.status == EnumOriginStatus.FAILED)

    @property
    def cancelled_count(self) -> int:
        """Number of origins not processed because the run was cancelled."""
        return sum(1 for r in self.results if r.status == EnumOriginStatus.CANCELLED)

    @property
    def succeeded_count(self) -> int:
        """Number of origins that completed, with or without skipped conflicts."""
        return sum(
            1
            for r in self.results
            if r.status in (EnumOriginStatus.SUCCESS, EnumOriginStatus.SKIPPED_CONFLICTS)
        )

    @property
    def skipped_conflict_count(self) -> int:
        """Number of hand-edited files left untouched."""
        return sum(r.count(EnumWriteAction.SKIPPED_CONFLICT) for r in self.results)

    @property
    def written_count(self) -> int:
        """Number of files created, updated or overwritten."""
        return sum(
            r.count(EnumWriteAction.WRITTEN)
            + r.count(EnumWriteAction.OVERWRITTEN_CONFLICT)
            for r in self.results
        )

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 unless an origin failed or was cancelled."""
        if self.cancelled_count:
            return 130
        return 1 if self.failed_count else 0

    def get(self, origin: str) -> ModelOriginResult | None:
        return next((r for r in self.results if r.origin == origin), None)
