# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generation run orchestration."""

from chaingen.orchestration.generation_orchestrator import (
    GenerationOrchestrator,
    build_resolver,
)

__all__: list[str] = ["GenerationOrchestrator", "build_resolver"]
