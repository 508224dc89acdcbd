# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generation manifest persistence.

The manifest lives at ``.chaingen/manifest.json`` (configurable) and is
written as sorted, indented JSON so that an unchanged manifest is
byte-identical across runs. A save that would not change the file is a
no-op.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from chaingen.errors import GenerationIoError, ModelCodegenErrorContext
from chaingen.models import ModelGenerationManifest
from chaingen.utils.util_atomic_write import write_text_atomic

logger = logging.getLogger(__name__)


class ManifestStore:
    """Loads and saves the generation manifest of one project."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> ModelGenerationManifest:
        """Load the manifest; a missing file yields an empty manifest.

        Raises:
            GenerationIoError: If the file cannot be read or is not a valid
                manifest. A corrupt manifest is never treated as empty, since
                that would turn every hand edit into an unconditional write.
        """
        context = ModelCodegenErrorContext(operation="load_manifest", target_name=str(self.path))
        if not self.path.exists():
            logger.debug("No generation manifest yet", extra={"path": str(self.path)})
            return ModelGenerationManifest()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise GenerationIoError(
                f"Failed to read generation manifest {self.path}: {e}",
                context=context,
            ) from e
        try:
            manifest = ModelGenerationManifest.model_validate_json(raw)
        except ValidationError as e:
            raise GenerationIoError(
                f"Generation manifest {self.path} is corrupt; fix or delete it: {e}",
                context=context,
            ) from e
        logger.debug(
            "Loaded generation manifest",
            extra={"path": str(self.path), "entries": len(manifest.entries)},
        )
        return manifest

    def save(self, manifest: ModelGenerationManifest) -> bool:
        """Persist the manifest atomically.

        Returns:
            True if the file was written, False if it already held exactly
            this content.

        Raises:
            GenerationIoError: If the file cannot be written.
        """
        text = manifest.to_json()
        try:
            if self.path.is_file() and self.path.read_text(encoding="utf-8") == text:
                return False
            write_text_atomic(self.path, text)
        except OSError as e:
            raise GenerationIoError(
                f"Failed to write generation manifest {self.path}: {e}",
                context=ModelCodegenErrorContext(
                    operation="save_manifest",
                    target_name=str(self.path),
                ),
            ) from e
        logger.debug(
            "Saved generation manifest",
            extra={"path": str(self.path), "entries": len(manifest.entries)},
        )
        return True


__all__ = ["ManifestStore"]
