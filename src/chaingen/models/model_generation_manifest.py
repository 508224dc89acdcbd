# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generation Manifest Model.

Record of every file the tool has generated and the content hash it wrote,
used to tell tool-owned files apart from hand-edited ones. Entries are never
pruned: a generated file the developer deleted is simply regenerated.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field

from chaingen.models.model_manifest_entry import ModelManifestEntry

MANIFEST_FORMAT_VERSION: int = 1


class ModelGenerationManifest(BaseModel):
    """Output path to manifest entry mapping."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(default=MANIFEST_FORMAT_VERSION)
    entries: dict[str, ModelManifestEntry] = Field(default_factory=dict)

    def get(self, path: str) -> ModelManifestEntry | None:
        return self.entries.get(path)

    def record(self, path: str, entry: ModelManifestEntry) -> bool:
        """Store ``entry`` for ``path``.

        Returns:
            True if the manifest changed. An entry that only differs in its
            timestamp leaves the manifest untouched so unchanged runs keep
            the file byte-identical.
        """
        existing = self.entries.get(path)
        if existing is not None and existing.same_output(entry):
            return False
        self.entries[path] = entry
        return True

    def to_json(self) -> str:
        """Serialize with sorted keys and a trailing newline."""
        data = self.model_dump(mode="json")
        return json.dumps(data, indent=2, sort_keys=True) + "\n"


__all__ = ["MANIFEST_FORMAT_VERSION", "ModelGenerationManifest"]
