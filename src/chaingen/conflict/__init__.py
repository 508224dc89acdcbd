# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Manifest-backed protection of generated files."""

from chaingen.conflict.conflict_resolver import ConflictResolver, PromptCallback
from chaingen.conflict.manifest_store import ManifestStore

__all__: list[str] = ["ConflictResolver", "ManifestStore", "PromptCallback"]
