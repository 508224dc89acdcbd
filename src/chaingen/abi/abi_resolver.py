# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI resolution with caching and stale fallback.

Resolution Order:
    1. A configured local ABI file short-circuits everything else.
    2. Unless a refresh is forced, a valid cache entry (stored hash matches
       the recomputed hash, not older than ``max_age``) is returned without
       any network call.
    3. Otherwise the registry is queried. A successful, well-formed response
       replaces the cache entry atomically.
    4. If the registry cannot be reached and a cache entry exists, that entry
       is returned marked stale, unless the refresh was forced.

Concurrency:
    Different contracts resolve in parallel. A per-key ``asyncio.Lock``
    serializes resolution of the same (network, address), so two concurrent
    requests for one contract issue at most one registry call.

Negative Results:
    A contract the registry reported as unknown is remembered for the
    lifetime of the resolver and not requested again.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import UUID

from chaingen.abi.abi_cache import AbiCache
from chaingen.abi.abi_parser import AbiParser
from chaingen.abi.registry_client import AbiRegistryClient
from chaingen.enums import EnumAbiSource
from chaingen.errors import (
    AbiFetchError,
    AbiNotFoundError,
    AbiParseError,
    GenerationIoError,
    ModelCodegenErrorContext,
    ProjectConfigurationError,
)
from chaingen.models import ModelAbiCacheEntry, ModelAbiDefinition
from chaingen.utils.util_address import normalize_address
from chaingen.utils.util_content_hash import hash_json

logger = logging.getLogger(__name__)


class AbiResolver:
    """Resolves contract ABIs from local files, the cache or the registry.

    Args:
        client: Registry client; owned by the caller.
        cache: ABI cache.
        parser: ABI parser (a default instance if omitted).
        max_age: Age after which a cached entry is refreshed; None keeps
            entries until an explicit refresh.
        project_root: Base directory for relative local ABI paths.
    """

    def __init__(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        parser: AbiParser | None = None,
        max_age: timedelta | None = None,
        project_root: Path | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._parser = parser or AbiParser()
        self._max_age = max_age
        self._project_root = project_root
        self._key_locks: dict[tuple[str, str], asyncio.Lock] = {}
        self._not_found: set[tuple[str, str]] = set()

    def _get_key_lock(self, key: tuple[str, str]) -> asyncio.Lock:
        """Get or create the lock serializing resolution of one contract."""
        if key not in self._key_locks:
            self._key_locks[key] = asyncio.Lock()
        return self._key_locks[key]

    async def resolve(
        self,
        address: str,
        network: str,
        force_refresh: bool = False,
        local_abi_path: str | Path | None = None,
        contract_name: str | None = None,
        correlation_id: UUID | None = None,
    ) -> ModelAbiDefinition:
        """Resolve the ABI of one contract.

        Args:
            address: Contract address (any valid casing).
            network: Network identifier.
            force_refresh: Skip the cache and fail instead of serving stale data.
            local_abi_path: Local ABI file; bypasses cache and registry.
            contract_name: Contract name for error context.
            correlation_id: Generation run correlation ID.

        Returns:
            The resolved definition.

        Raises:
            AbiFetchError: Registry unreachable with nothing usable cached,
                or any registry failure when ``force_refresh`` is set.
            AbiNotFoundError: Registry does not know the contract.
            AbiParseError: Payload is not well-formed ABI JSON.
        """
        context = ModelCodegenErrorContext(
            operation="resolve_abi",
            target_name=address,
            contract_name=contract_name,
            correlation_id=correlation_id,
        )
        try:
            canonical = normalize_address(address)
        except ValueError as e:
            raise ProjectConfigurationError(str(e), context=context) from e

        if local_abi_path is not None:
            return self._load_local(Path(local_abi_path), canonical, network, context)

        key = (network, canonical)
        async with self._get_key_lock(key):
            cached = self._cache.get(network, canonical)
            if cached is not None and not force_refresh and not self._is_expired(cached):
                logger.debug(
                    "ABI cache hit",
                    extra={"address": canonical, "network": network},
                )
                return self._to_definition(cached, EnumAbiSource.CACHE)

            if key in self._not_found and not force_refresh:
                raise AbiNotFoundError(
                    f"Contract {canonical} on network {network} is unknown to the ABI registry",
                    context=context,
                )

            try:
                payload = await self._client.fetch_abi(canonical, network, correlation_id)
            except AbiNotFoundError:
                self._not_found.add(key)
                raise
            except AbiFetchError as e:
                if cached is None or force_refresh:
                    raise
                logger.warning(
                    "ABI registry unavailable, using stale cache entry",
                    extra={
                        "address": canonical,
                        "network": network,
                        "fetched_at": cached.fetched_at.isoformat(),
                        "error": str(e),
                    },
                )
                return self._to_definition(cached, EnumAbiSource.STALE_CACHE, is_stale=True)

            items = self._parser.extract_items(payload.abi, source=f"registry:{canonical}")
            entry = ModelAbiCacheEntry(
                address=canonical,
                network=network,
                abi=items,
                fetched_at=datetime.now(UTC),
                content_hash=hash_json(items),
                etag=payload.etag,
            )
            definition = self._to_definition(entry, EnumAbiSource.REGISTRY)
            self._not_found.discard(key)
            try:
                self._cache.put(entry)
            except GenerationIoError as e:
                logger.warning(
                    "Failed to update ABI cache",
                    extra={"address": canonical, "network": network, "error": str(e)},
                )
            logger.info(
                "Resolved ABI from registry",
                extra={
                    "address": canonical,
                    "network": network,
                    "event_count": len(definition.events),
                    "function_count": len(definition.functions),
                },
            )
            return definition

    def _is_expired(self, entry: ModelAbiCacheEntry) -> bool:
        if self._max_age is None:
            return False
        return datetime.now(UTC) - entry.fetched_at > self._max_age

    def _to_definition(
        self,
        entry: ModelAbiCacheEntry,
        source: EnumAbiSource,
        is_stale: bool = False,
    ) -> ModelAbiDefinition:
        events, functions = self._parser.parse(entry.abi, source=f"{source.value}:{entry.address}")
        return ModelAbiDefinition(
            address=entry.address,
            network=entry.network,
            abi=entry.abi,
            events=events,
            functions=functions,
            fetched_at=entry.fetched_at,
            content_hash=entry.content_hash,
            etag=entry.etag,
            is_stale=is_stale,
            source=source,
        )

    def _load_local(
        self,
        path: Path,
        address: str,
        network: str,
        context: ModelCodegenErrorContext,
    ) -> ModelAbiDefinition:
        if not path.is_absolute() and self._project_root is not None:
            path = self._project_root / path
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise AbiNotFoundError(f"Local ABI file not found: {path}", context=context) from e
        except OSError as e:
            raise AbiFetchError(f"Failed to read local ABI file {path}: {e}", context=context) from e
        except json.JSONDecodeError as e:
            raise AbiParseError(
                f"Local ABI file {path} is not valid JSON: {e.msg}",
                context=context,
            ) from e

        items = self._parser.extract_items(raw, source=str(path))
        entry = ModelAbiCacheEntry(
            address=address,
            network=network,
            abi=items,
            fetched_at=datetime.fromtimestamp(path.stat().st_mtime, UTC),
            content_hash=hash_json(items),
        )
        logger.debug("Loaded local ABI", extra={"path": str(path), "address": address})
        return self._to_definition(entry, EnumAbiSource.LOCAL_FILE)


__all__ = ["AbiResolver"]
