# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for EntityGenerator."""

from __future__ import annotations

import pytest

from chaingen.enums import EnumArtifactKind, EnumSerializationStrategy
from chaingen.errors import SchemaParseError
from chaingen.generators import EntityGenerator
from chaingen.models import ModelCodegenSettings, ModelEntitySchema
from chaingen.rendering import TemplateEngine
from chaingen.schema import SchemaLoader


@pytest.fixture
def generator() -> EntityGenerator:
    return EntityGenerator(TemplateEngine(), ModelCodegenSettings())


@pytest.fixture
def schema(sample_schema: str) -> ModelEntitySchema:
    return SchemaLoader().parse(sample_schema)


class TestBuildEntity:
    def test_transfer_fields(self, generator: EntityGenerator, schema: ModelEntitySchema) -> None:
        declaration = schema.get("Transfer")
        assert declaration is not None

        binding = generator.build_entity(declaration)

        by_name = {f.name: f for f in binding.fields}
        assert [f.attribute for f in binding.fields] == [
            "id",
            "sender_id",
            "from_",
            "value",
            "memo",
            "meta",
        ]
        assert by_name["id"].descriptor.serialization == EnumSerializationStrategy.IDENTIFIER
        assert by_name["from"].descriptor.serialization == EnumSerializationStrategy.NATIVE
        assert by_name["value"].descriptor.serialization == EnumSerializationStrategy.DECIMAL_STRING
        assert by_name["sender"].relation_target == "Account"
        assert by_name["meta"].descriptor.type_name == "TransferMeta | None"
        assert binding.immutable is True
        assert binding.table_name == "transfer"
        assert [s.type_name for s in binding.structs] == ["TransferMeta"]

    def test_derived_fields_are_not_stored(
        self, generator: EntityGenerator, schema: ModelEntitySchema
    ) -> None:
        declaration = schema.get("Account")
        assert declaration is not None

        binding = generator.build_entity(declaration)

        assert [f.attribute for f in binding.stored_fields] == ["id", "balance"]
        derived = binding.fields[-1]
        assert derived.derived_from == "sender"
        assert not derived.is_stored

    def test_value_type_is_not_persisted(
        self, generator: EntityGenerator, schema: ModelEntitySchema
    ) -> None:
        declaration = schema.get("TransferMeta")
        assert declaration is not None

        binding = generator.build_entity(declaration)

        assert not binding.persisted
        assert [f.attribute for f in binding.fields] == ["block_number", "timestamp"]


class TestGenerateEntities:
    def test_artifacts(self, generator: EntityGenerator, schema: ModelEntitySchema) -> None:
        artifacts = generator.generate(schema)

        assert [a.path for a in artifacts] == [
            "src/generated/entities/account.py",
            "src/generated/entities/transfer.py",
            "src/generated/entities/transfer_meta.py",
            "src/generated/entities/__init__.py",
        ]
        assert {a.kind for a in artifacts} == {EnumArtifactKind.ENTITY}
        assert {a.origin for a in artifacts} == {"schema.graphql"}
        for artifact in artifacts:
            compile(artifact.content, artifact.path, "exec")

    def test_transfer_module_source(
        self, generator: EntityGenerator, schema: ModelEntitySchema
    ) -> None:
        transfer = generator.generate(schema)[1].content

        assert "from .transfer_meta import TransferMeta" in transfer
        assert "model_config = ConfigDict(frozen=True, populate_by_name=True)" in transfer
        assert '__table_name__: ClassVar[str] = "transfer"' in transfer
        assert 'sender_id: str = Field(alias="sender")' in transfer
        assert 'from_: str = Field(alias="from")' in transfer
        assert "memo: str | None = None" in transfer
        assert "meta: TransferMeta | None = None" in transfer

    def test_account_module_lists_derived_fields(
        self, generator: EntityGenerator, schema: ModelEntitySchema
    ) -> None:
        account = generator.generate(schema)[0].content

        assert '"""A token account."""' in account
        assert '"transfers": ("Transfer", "sender"),' in account
        assert "transfers:" not in account
        assert "frozen=False" in account

    def test_value_type_module(self, generator: EntityGenerator, schema: ModelEntitySchema) -> None:
        meta = generator.generate(schema)[2].content

        assert "from datetime import datetime" in meta
        assert "__table_name__" not in meta
        assert 'block_number: int = Field(alias="blockNumber")' in meta
        assert "timestamp: datetime" in meta

    def test_init_exports_persisted_entities(
        self, generator: EntityGenerator, schema: ModelEntitySchema
    ) -> None:
        init = generator.generate(schema)[-1].content

        assert "from .account import Account" in init
        assert '"Account": Account,' in init
        assert '"Transfer": Transfer,' in init
        assert '"TransferMeta": TransferMeta,' not in init
        assert '"TransferMeta",' in init

    def test_generation_is_deterministic(
        self, generator: EntityGenerator, schema: ModelEntitySchema
    ) -> None:
        first = [a.content_hash for a in generator.generate(schema)]
        second = [a.content_hash for a in generator.generate(schema)]
        assert first == second

    def test_empty_schema(self, generator: EntityGenerator) -> None:
        assert generator.generate(ModelEntitySchema()) == []

    def test_module_name_collision(self, generator: EntityGenerator) -> None:
        schema = SchemaLoader().parse(
            "type FooBar @entity { id: ID! }\ntype Foo_Bar @entity { id: ID! }\n"
        )
        with pytest.raises(SchemaParseError, match="both generate module 'foo_bar'"):
            generator.generate(schema)
