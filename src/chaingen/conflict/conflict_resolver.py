# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Write gate protecting hand-edited generated files.

Every artifact of a run is written through ConflictResolver.write, which
decides from three hashes what to do with it: the new content hash, the hash
of the file currently on disk, and the hash the manifest recorded when the
tool last wrote that path.

Decision Table:
    ==============================  ==========================================
    Situation                       Outcome
    ==============================  ==========================================
    path claimed by another origin  SKIPPED_DUPLICATE (first claimant wins)
    disk content equals new content UNCHANGED (manifest adopts the hash)
    no manifest entry               WRITTEN
    file missing                    WRITTEN
    disk hash equals recorded hash  WRITTEN
    disk hash differs from record   conflict, resolved by EnumConflictMode
    ==============================  ==========================================

Conflict Modes:
    SKIP: leave the file, report SKIPPED_CONFLICT (non-fatal)
    PROMPT: ask the prompt callback; a refusal behaves like SKIP
    STRICT: raise ConflictError
    OVERWRITE: replace the file, report OVERWRITTEN_CONFLICT

Each path is handled under its own asyncio.Lock, so the read-compare-write
sequence for a path cannot interleave with another write to it within one
process. In dry-run mode the same decisions are made and reported, but
neither the disk nor the manifest is touched.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path

from chaingen.enums import EnumConflictMode, EnumWriteAction
from chaingen.errors import ConflictError, GenerationIoError, ModelCodegenErrorContext
from chaingen.models import (
    ModelGeneratedArtifact,
    ModelGenerationManifest,
    ModelManifestEntry,
    ModelWriteResult,
)
from chaingen.utils.util_atomic_write import write_text_atomic
from chaingen.utils.util_content_hash import hash_file

logger = logging.getLogger(__name__)

# Receives the artifact path, returns True to overwrite.
PromptCallback = Callable[[str], bool | Awaitable[bool]]


class ConflictResolver:
    """Gates artifact writes against the generation manifest.

    Args:
        project_root: Directory artifact paths are relative to.
        manifest: Manifest of the current run; updated in place.
        mode: Policy for files edited since the tool last wrote them.
        prompt: Callback consulted in PROMPT mode. Without one, PROMPT
            behaves like SKIP.
        dry_run: Decide and report without writing.
    """

    def __init__(
        self,
        project_root: Path,
        manifest: ModelGenerationManifest,
        *,
        mode: EnumConflictMode = EnumConflictMode.SKIP,
        prompt: PromptCallback | None = None,
        dry_run: bool = False,
    ) -> None:
        self.project_root = Path(project_root)
        self.manifest = manifest
        self.mode = mode
        self.prompt = prompt
        self.dry_run = dry_run
        self.manifest_changed = False
        self._claims: dict[str, str] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, path: str) -> asyncio.Lock:
        lock = self._locks.get(path)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[path] = lock
        return lock

    async def write(self, artifact: ModelGeneratedArtifact) -> ModelWriteResult:
        """Write ``artifact`` unless that would destroy a local edit.

        Raises:
            ConflictError: In STRICT mode, when the file was edited since the
                tool last wrote it.
            GenerationIoError: If the file cannot be read or written.
        """
        async with self._lock_for(artifact.path):
            return await self._write_locked(artifact)

    async def _write_locked(self, artifact: ModelGeneratedArtifact) -> ModelWriteResult:
        path = artifact.path
        claimant = self._claims.setdefault(path, artifact.origin)
        if claimant != artifact.origin:
            logger.warning(
                "Output path already generated by another origin, skipping",
                extra={"path": path, "origin": artifact.origin, "claimed_by": claimant},
            )
            return self._result(
                artifact,
                EnumWriteAction.SKIPPED_DUPLICATE,
                f"path already generated for {claimant}",
            )

        target = self.project_root / path
        context = ModelCodegenErrorContext(
            operation="write_artifact",
            target_name=path,
            contract_name=artifact.origin,
        )
        try:
            disk_hash = hash_file(target)
        except OSError as e:
            raise GenerationIoError(f"Failed to read {path}: {e}", context=context) from e

        if disk_hash == artifact.content_hash:
            if not self.dry_run:
                self._record(artifact)
            return self._result(artifact, EnumWriteAction.UNCHANGED)

        entry = self.manifest.get(path)
        edited = (
            disk_hash is not None and entry is not None and entry.content_hash != disk_hash
        )
        untracked = disk_hash is not None and entry is None

        if self.dry_run:
            detail = "edited since last generation" if edited else None
            return self._result(artifact, EnumWriteAction.DRY_RUN, detail)

        if not edited:
            self._replace(artifact, target, context)
            if untracked:
                logger.warning(
                    "Replaced a file the manifest did not track",
                    extra={"path": path, "origin": artifact.origin},
                )
                return self._result(
                    artifact, EnumWriteAction.WRITTEN, "replaced untracked file"
                )
            return self._result(artifact, EnumWriteAction.WRITTEN)

        return await self._resolve_conflict(artifact, target, context)

    async def _resolve_conflict(
        self,
        artifact: ModelGeneratedArtifact,
        target: Path,
        context: ModelCodegenErrorContext,
    ) -> ModelWriteResult:
        path = artifact.path
        if self.mode == EnumConflictMode.STRICT:
            raise ConflictError(
                f"{path} was modified since it was last generated",
                path=path,
                context=context,
            )

        overwrite = self.mode == EnumConflictMode.OVERWRITE
        if self.mode == EnumConflictMode.PROMPT and self.prompt is not None:
            decision = self.prompt(path)
            if inspect.isawaitable(decision):
                decision = await decision
            overwrite = bool(decision)

        if overwrite:
            self._replace(artifact, target, context)
            logger.info(
                "Overwrote locally modified file",
                extra={"path": path, "origin": artifact.origin},
            )
            return self._result(artifact, EnumWriteAction.OVERWRITTEN_CONFLICT)

        logger.warning(
            "Skipped locally modified file",
            extra={"path": path, "origin": artifact.origin},
        )
        return self._result(
            artifact,
            EnumWriteAction.SKIPPED_CONFLICT,
            "modified since last generation",
        )

    def _replace(
        self,
        artifact: ModelGeneratedArtifact,
        target: Path,
        context: ModelCodegenErrorContext,
    ) -> None:
        try:
            write_text_atomic(target, artifact.content)
        except OSError as e:
            raise GenerationIoError(
                f"Failed to write {artifact.path}: {e}",
                context=context,
            ) from e
        self._record(artifact)
        logger.debug(
            "Wrote artifact",
            extra={"path": artifact.path, "content_hash": artifact.content_hash},
        )

    def _record(self, artifact: ModelGeneratedArtifact) -> None:
        entry = ModelManifestEntry(
            content_hash=artifact.content_hash,
            origin=artifact.origin,
            kind=artifact.kind,
            generated_at=datetime.now(UTC),
        )
        if self.manifest.record(artifact.path, entry):
            self.manifest_changed = True

    @staticmethod
    def _result(
        artifact: ModelGeneratedArtifact,
        action: EnumWriteAction,
        detail: str | None = None,
    ) -> ModelWriteResult:
        return ModelWriteResult(
            path=artifact.path,
            action=action,
            kind=artifact.kind,
            origin=artifact.origin,
            detail=detail,
        )


__all__ = ["ConflictResolver", "PromptCallback"]
