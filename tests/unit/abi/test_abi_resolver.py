# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for AbiCache and AbiResolver.

Covers the resolution order (local file, cache, registry, stale cache),
forced refreshes, negative caching and per-contract request coalescing.
"""

from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import httpx
import pytest

from chaingen.abi import AbiCache, AbiRegistryClient, AbiResolver
from chaingen.enums import EnumAbiSource
from chaingen.errors import AbiFetchError, AbiNotFoundError, AbiParseError
from chaingen.models import ModelAbiCacheEntry
from chaingen.utils import hash_json


class _Registry:
    """Scriptable registry behind an httpx.MockTransport."""

    def __init__(self, abi: list[dict[str, object]]) -> None:
        self.abi = abi
        self.status = 200
        self.calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.status != 200:
            return httpx.Response(self.status)
        return httpx.Response(200, json={"abi": self.abi, "etag": f"v{self.calls}"})


@pytest.fixture
def registry(token_abi: list[dict[str, object]]) -> _Registry:
    return _Registry(token_abi)


@pytest.fixture
def cache(tmp_path: Path) -> AbiCache:
    return AbiCache(tmp_path / "cache")


@pytest.fixture
def client(registry: _Registry) -> AbiRegistryClient:
    return AbiRegistryClient(
        "https://registry.test",
        max_attempts=1,
        retry_wait_min=0,
        retry_wait_max=0,
        transport=httpx.MockTransport(registry.handler),
    )


def _entry(abi: list[dict[str, object]], address: str, fetched_at: datetime) -> ModelAbiCacheEntry:
    return ModelAbiCacheEntry(
        address=address,
        network="1",
        abi=abi,
        fetched_at=fetched_at,
        content_hash=hash_json(abi),
    )


class TestAbiCache:
    def test_round_trip(
        self,
        cache: AbiCache,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        entry = _entry(token_abi, token_address, datetime.now(UTC))
        path = cache.put(entry)

        assert path == cache.cache_dir / "1" / f"{token_address}.json"
        assert cache.get("1", token_address) == entry

    def test_miss(self, cache: AbiCache, token_address: str) -> None:
        assert cache.get("1", token_address) is None

    def test_hash_mismatch_is_a_miss(
        self,
        cache: AbiCache,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        path = cache.put(_entry(token_abi, token_address, datetime.now(UTC)))
        data = json.loads(path.read_text(encoding="utf-8"))
        data["abi"] = data["abi"][:1]
        path.write_text(json.dumps(data), encoding="utf-8")

        assert cache.get("1", token_address) is None

    def test_corrupt_file_is_a_miss(self, cache: AbiCache, token_address: str) -> None:
        path = cache.path_for("1", token_address)
        path.parent.mkdir(parents=True)
        path.write_text("{truncated", encoding="utf-8")
        assert cache.get("1", token_address) is None

    def test_invalidate(
        self,
        cache: AbiCache,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        cache.put(_entry(token_abi, token_address, datetime.now(UTC)))
        assert cache.invalidate("1", token_address) is True
        assert cache.invalidate("1", token_address) is False


class TestAbiResolver:
    @pytest.mark.asyncio
    async def test_registry_then_cache(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_address: str,
    ) -> None:
        resolver = AbiResolver(client, cache)

        first = await resolver.resolve(token_address, "1")
        second = await resolver.resolve(token_address, "1")

        assert first.source == EnumAbiSource.REGISTRY
        assert first.etag == "v1"
        assert second.source == EnumAbiSource.CACHE
        assert second.content_hash == first.content_hash
        assert [e.name for e in second.events] == ["Transfer", "Approval"]
        assert registry.calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_checksummed_address_shares_cache_entry(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
    ) -> None:
        resolver = AbiResolver(client, cache)
        await resolver.resolve("0x6b175474e89094c44da98b954eedeac495271d0f", "1")
        definition = await resolver.resolve("0x6B175474E89094C44Da98b954EedeAC495271d0F", "1")

        assert definition.address == "0x6b175474e89094c44da98b954eedeac495271d0f"
        assert registry.calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_stale_cache_when_registry_down(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        fetched_at = datetime.now(UTC) - timedelta(days=2)
        cache.put(_entry(token_abi, token_address, fetched_at))
        registry.status = 503
        resolver = AbiResolver(client, cache, max_age=timedelta(hours=1))

        definition = await resolver.resolve(token_address, "1")

        assert definition.is_stale
        assert definition.source == EnumAbiSource.STALE_CACHE
        assert definition.fetched_at == fetched_at
        assert registry.calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_expired_entry_is_refreshed(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        cache.put(_entry(token_abi[:1], token_address, datetime.now(UTC) - timedelta(days=2)))
        resolver = AbiResolver(client, cache, max_age=timedelta(hours=1))

        definition = await resolver.resolve(token_address, "1")

        assert definition.source == EnumAbiSource.REGISTRY
        assert len(definition.events) == 2
        cached = cache.get("1", token_address)
        assert cached is not None
        assert cached.content_hash == definition.content_hash
        await client.close()

    @pytest.mark.asyncio
    async def test_force_refresh_bypasses_cache(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        cache.put(_entry(token_abi, token_address, datetime.now(UTC)))
        resolver = AbiResolver(client, cache)

        definition = await resolver.resolve(token_address, "1", force_refresh=True)

        assert definition.source == EnumAbiSource.REGISTRY
        assert registry.calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_force_refresh_failure_is_fatal(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_abi: list[dict[str, object]],
        token_address: str,
    ) -> None:
        cache.put(_entry(token_abi, token_address, datetime.now(UTC)))
        registry.status = 500
        resolver = AbiResolver(client, cache)

        with pytest.raises(AbiFetchError):
            await resolver.resolve(token_address, "1", force_refresh=True)
        await client.close()

    @pytest.mark.asyncio
    async def test_registry_down_without_cache(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_address: str,
    ) -> None:
        registry.status = 503
        with pytest.raises(AbiFetchError):
            await AbiResolver(client, cache).resolve(token_address, "1")
        await client.close()

    @pytest.mark.asyncio
    async def test_not_found_is_remembered(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_address: str,
    ) -> None:
        registry.status = 404
        resolver = AbiResolver(client, cache)

        with pytest.raises(AbiNotFoundError):
            await resolver.resolve(token_address, "1")
        with pytest.raises(AbiNotFoundError):
            await resolver.resolve(token_address, "1")

        assert registry.calls == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_fetch(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_address: str,
    ) -> None:
        resolver = AbiResolver(client, cache)

        results = await asyncio.gather(
            *(resolver.resolve(token_address, "1") for _ in range(5))
        )

        assert registry.calls == 1
        assert {r.content_hash for r in results} == {results[0].content_hash}
        await client.close()

    @pytest.mark.asyncio
    async def test_local_file(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        registry: _Registry,
        token_abi: list[dict[str, object]],
        token_address: str,
        tmp_path: Path,
    ) -> None:
        (tmp_path / "abis").mkdir()
        (tmp_path / "abis" / "token.json").write_text(
            json.dumps({"abi": token_abi}), encoding="utf-8"
        )
        resolver = AbiResolver(client, cache, project_root=tmp_path)

        definition = await resolver.resolve(
            token_address, "1", local_abi_path="abis/token.json"
        )

        assert definition.source == EnumAbiSource.LOCAL_FILE
        assert [f.name for f in definition.functions] == ["transfer", "balanceOf"]
        assert registry.calls == 0
        assert cache.get("1", token_address) is None
        await client.close()

    @pytest.mark.asyncio
    async def test_local_file_errors(
        self,
        client: AbiRegistryClient,
        cache: AbiCache,
        token_address: str,
        tmp_path: Path,
    ) -> None:
        resolver = AbiResolver(client, cache, project_root=tmp_path)
        (tmp_path / "broken.json").write_text("{", encoding="utf-8")

        with pytest.raises(AbiNotFoundError, match="Local ABI file not found"):
            await resolver.resolve(token_address, "1", local_abi_path="missing.json")
        with pytest.raises(AbiParseError):
            await resolver.resolve(token_address, "1", local_abi_path="broken.json")
        await client.close()
