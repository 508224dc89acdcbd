# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for ManifestStore."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from chaingen.conflict import ManifestStore
from chaingen.enums import EnumArtifactKind
from chaingen.errors import GenerationIoError
from chaingen.models import ModelGenerationManifest, ModelManifestEntry
from chaingen.utils import hash_text


def _entry(content: str, generated_at: datetime | None = None) -> ModelManifestEntry:
    return ModelManifestEntry(
        content_hash=hash_text(content),
        origin="Token@1:0x6b175474e89094c44da98b954eedeac495271d0f",
        kind=EnumArtifactKind.BINDING,
        generated_at=generated_at or datetime(2026, 1, 5, 10, 0, tzinfo=UTC),
    )


@pytest.fixture
def store(tmp_path: Path) -> ManifestStore:
    return ManifestStore(tmp_path / ".chaingen" / "manifest.json")


class TestManifestStore:
    def test_missing_file_is_empty(self, store: ManifestStore) -> None:
        manifest = store.load()
        assert manifest.entries == {}

    def test_round_trip(self, store: ManifestStore) -> None:
        manifest = ModelGenerationManifest()
        manifest.record("src/generated/bindings/token.py", _entry("a"))

        assert store.save(manifest) is True
        assert store.load() == manifest
        assert store.path.read_text(encoding="utf-8").endswith("}\n")

    def test_unchanged_save_is_a_noop(self, store: ManifestStore) -> None:
        manifest = ModelGenerationManifest()
        manifest.record("a.py", _entry("a"))
        store.save(manifest)

        assert store.save(store.load()) is False

    def test_corrupt_manifest_is_an_error(self, store: ManifestStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text('{"entries": ', encoding="utf-8")

        with pytest.raises(GenerationIoError, match="corrupt"):
            store.load()


class TestModelGenerationManifest:
    def test_record_ignores_timestamp_only_changes(self) -> None:
        manifest = ModelGenerationManifest()
        assert manifest.record("a.py", _entry("a")) is True
        later = _entry("a", generated_at=datetime(2026, 2, 1, tzinfo=UTC))

        assert manifest.record("a.py", later) is False
        assert manifest.record("a.py", _entry("b")) is True

    def test_json_is_sorted(self) -> None:
        manifest = ModelGenerationManifest()
        manifest.record("z.py", _entry("z"))
        manifest.record("a.py", _entry("a"))

        text = manifest.to_json()
        assert text.index('"a.py"') < text.index('"z.py"')
