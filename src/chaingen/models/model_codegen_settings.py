# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code Generation Settings Model.

The ``codegen`` section of ``chaingen.yaml``. Paths are relative to the
project root unless absolute.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REGISTRY_URL: str = "https://api.sentio.xyz"
DEFAULT_ABI_CACHE_DIR: str = str(Path("~/.cache/chaingen/abi"))


class ModelCodegenSettings(BaseModel):
    """Settings controlling where generation reads and writes.

    Attributes:
        schema_path: Entity schema file.
        output_dir: Root directory for generated bindings and entities.
        handlers_dir: Root directory for handler stubs.
        generated_package: Import path of ``output_dir`` used by handler stubs.
        manifest_path: Generation manifest file.
        registry_url: Base URL of the remote ABI registry.
        abi_cache_dir: ABI cache directory, shared across projects.
        request_timeout: Registry request timeout in seconds.
        abi_cache_max_age: Seconds after which a cached ABI is refreshed;
            None keeps entries until an explicit refresh.
        max_concurrent_fetches: Upper bound on concurrent ABI fetches.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    schema_path: str = Field(default="schema.graphql")
    output_dir: str = Field(default="src/generated")
    handlers_dir: str = Field(default="src/handlers")
    generated_package: str = Field(
        default="generated",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$",
    )
    manifest_path: str = Field(default=".chaingen/manifest.json")
    registry_url: str = Field(default=DEFAULT_REGISTRY_URL, min_length=1)
    abi_cache_dir: str = Field(default=DEFAULT_ABI_CACHE_DIR)
    request_timeout: float = Field(default=30.0, gt=0)
    abi_cache_max_age: float | None = Field(default=None, gt=0)
    max_concurrent_fetches: int = Field(default=4, ge=1, le=64)

    def resolve_cache_dir(self) -> Path:
        """Return the ABI cache directory with ``~`` expanded."""
        return Path(self.abi_cache_dir).expanduser()


__all__ = ["DEFAULT_ABI_CACHE_DIR", "DEFAULT_REGISTRY_URL", "ModelCodegenSettings"]
