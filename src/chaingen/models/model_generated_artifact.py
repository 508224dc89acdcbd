# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Generated Artifact Model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chaingen.enums import EnumArtifactKind
from chaingen.utils.util_content_hash import hash_text


class ModelGeneratedArtifact(BaseModel):
    """Source file produced by a generator, not yet written.

    ``path`` is relative to the project root, POSIX-separated, and a pure
    function of the origin name and artifact kind.

    Example:
        >>> artifact = ModelGeneratedArtifact.create(
        ...     path="src/generated/bindings/dai.py",
        ...     content=source,
        ...     kind=EnumArtifactKind.BINDING,
        ...     origin="Dai",
        ... )
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    path: str = Field(..., min_length=1)
    content: str
    kind: EnumArtifactKind
    origin: str
    content_hash: str = Field(..., min_length=64, max_length=64)

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        if "\\" in value or value.startswith("/") or ".." in value.split("/"):
            raise ValueError(f"Artifact path must be relative and POSIX-separated: {value!r}")
        return value

    @classmethod
    def create(
        cls,
        path: str,
        content: str,
        kind: EnumArtifactKind,
        origin: str,
    ) -> ModelGeneratedArtifact:
        """Build an artifact, computing its content hash."""
        return cls(
            path=path,
            content=content,
            kind=kind,
            origin=origin,
            content_hash=hash_text(content),
        )


__all__ = ["ModelGeneratedArtifact"]
