# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""On-disk ABI cache.

Layout:
    ``<cache_dir>/<network>/<address>.json``, one file per contract, holding a
    serialized ModelAbiCacheEntry.

The cache is shared by every project on the machine. Entries are replaced
atomically (write to a temporary file in the same directory, then
``os.replace``), so a reader sees either the old or the new entry, never a
partial one. There is no cross-process locking: two processes refreshing the
same entry simply race, and the last complete write wins.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from chaingen.errors import GenerationIoError, ModelCodegenErrorContext
from chaingen.models import ModelAbiCacheEntry
from chaingen.utils.util_atomic_write import write_text_atomic
from chaingen.utils.util_content_hash import hash_json

logger = logging.getLogger(__name__)

_SAFE_SEGMENT = re.compile(r"[^0-9A-Za-z._-]")


class AbiCache:
    """File-backed ABI cache keyed by (network, address)."""

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, network: str, address: str) -> Path:
        """Return the cache file path for a contract."""
        network_segment = _SAFE_SEGMENT.sub("_", network) or "_"
        return self._cache_dir / network_segment / f"{address.lower()}.json"

    def get(self, network: str, address: str) -> ModelAbiCacheEntry | None:
        """Return the cached entry, or None on a miss.

        Unreadable, malformed and hash-mismatched entries count as misses and
        are logged; they are overwritten by the next successful fetch.
        """
        path = self.path_for(network, address)
        if not path.is_file():
            return None
        try:
            entry = ModelAbiCacheEntry.model_validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning(
                "Ignoring unreadable ABI cache entry",
                extra={"path": str(path), "error": str(e)},
            )
            return None

        if hash_json(entry.abi) != entry.content_hash:
            logger.warning(
                "Ignoring ABI cache entry with mismatched content hash",
                extra={"path": str(path), "stored_hash": entry.content_hash},
            )
            return None
        if entry.address != address.lower() or entry.network != network:
            logger.warning(
                "Ignoring ABI cache entry stored under the wrong key",
                extra={"path": str(path)},
            )
            return None
        return entry

    def put(self, entry: ModelAbiCacheEntry) -> Path:
        """Atomically store ``entry``.

        Raises:
            GenerationIoError: If the entry cannot be written.
        """
        path = self.path_for(entry.network, entry.address)
        payload = json.dumps(entry.model_dump(mode="json"), indent=2, sort_keys=True) + "\n"
        try:
            write_text_atomic(path, payload)
        except OSError as e:
            raise GenerationIoError(
                f"Failed to write ABI cache entry {path}: {e}",
                context=ModelCodegenErrorContext(
                    operation="write_abi_cache",
                    target_name=str(path),
                ),
            ) from e
        logger.debug(
            "Stored ABI cache entry",
            extra={"path": str(path), "content_hash": entry.content_hash},
        )
        return path

    def invalidate(self, network: str, address: str) -> bool:
        """Remove a cached entry. Returns True if one existed."""
        path = self.path_for(network, address)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise GenerationIoError(
                f"Failed to remove ABI cache entry {path}: {e}",
                context=ModelCodegenErrorContext(
                    operation="invalidate_abi_cache",
                    target_name=str(path),
                ),
            ) from e
        return True


__all__ = ["AbiCache"]
