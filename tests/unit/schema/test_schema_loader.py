# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for SchemaLoader: entity schema parsing and structural rules."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from chaingen.enums import EnumDeclarationKind
from chaingen.errors import SchemaParseError
from chaingen.schema import SchemaLoader


@pytest.fixture
def loader() -> SchemaLoader:
    return SchemaLoader()


class TestSchemaLoaderParsing:
    def test_parses_sample_schema(self, loader: SchemaLoader, sample_schema: str) -> None:
        schema = loader.parse(sample_schema)

        assert [d.name for d in schema.declarations] == ["Account", "Transfer", "TransferMeta"]
        assert [d.name for d in schema.entities] == ["Account", "Transfer"]
        meta = schema.get("TransferMeta")
        assert meta is not None
        assert meta.kind == EnumDeclarationKind.VALUE

    def test_description_and_directives(self, loader: SchemaLoader, sample_schema: str) -> None:
        schema = loader.parse(sample_schema)
        account = schema.get("Account")
        transfer = schema.get("Transfer")
        assert account is not None and transfer is not None

        assert account.description == "A token account."
        assert transfer.immutable is True
        transfers = account.get_field("transfers")
        assert transfers is not None
        assert transfers.derived_from == "sender"
        assert transfers.relationship_target == "Transfer"

    def test_forward_references_resolve(self, loader: SchemaLoader) -> None:
        schema = loader.parse(
            """
            type Pool @entity {
              id: ID!
              token: Token!
            }
            type Token @entity {
              id: ID!
            }
            """
        )
        pool = schema.get("Pool")
        assert pool is not None
        token = pool.get_field("token")
        assert token is not None
        assert token.relationship_target == "Token"

    def test_custom_scalars_and_enums_are_strings(self, loader: SchemaLoader) -> None:
        schema = loader.parse(
            """
            scalar Hash
            enum Side { BUY SELL }
            type Trade @entity {
              id: ID!
              hash: Hash!
              side: Side!
            }
            """
        )
        trade = schema.get("Trade")
        assert trade is not None
        side = trade.get_field("side")
        assert side is not None
        assert side.type_ref.base_scalar == "String"
        assert schema.scalars == ("Hash", "Side")

    def test_comments_and_directive_definitions_are_skipped(self, loader: SchemaLoader) -> None:
        schema = loader.parse(
            """
            # leading comment
            directive @entity(immutable: Boolean) on OBJECT
            type Block @entity {
              id: ID! # trailing comment
            }
            """
        )
        assert [d.name for d in schema.declarations] == ["Block"]

    def test_timeseries_entity(self, loader: SchemaLoader) -> None:
        schema = loader.parse(
            """
            type Price @entity(timeseries: true, immutable: true) {
              id: Int8!
              timestamp: Timestamp!
              price: BigDecimal!
            }
            """
        )
        price = schema.get("Price")
        assert price is not None
        assert price.timeseries is True

    def test_load_reads_file(self, loader: SchemaLoader, tmp_path: Path, sample_schema: str) -> None:
        path = tmp_path / "schema.graphql"
        path.write_text(sample_schema, encoding="utf-8")
        schema = loader.load(path)
        assert schema.source_path == str(path)
        assert loader.load(path) == schema

    def test_load_missing_file(self, loader: SchemaLoader, tmp_path: Path) -> None:
        with pytest.raises(SchemaParseError, match="Failed to read schema"):
            loader.load(tmp_path / "missing.graphql")


class TestSchemaLoaderErrors:
    @pytest.mark.parametrize(
        ("text", "message"),
        [
            (
                "type A @entity { id: ID! }\ntype A @entity { id: ID! }",
                "Duplicate type 'A'",
            ),
            (
                "type A @entity {\n  id: ID!\n  id: ID!\n}",
                "Duplicate field 'id' in type 'A'",
            ),
            (
                "type A @entity { id: ID! owner: Missing! }",
                "Unknown type 'Missing' in 'A.owner'",
            ),
            ("type A @entity", "Type 'A' declares no fields"),
            ("enum Side", "Enum 'Side' declares no values"),
            ("type A @entity { name: String! }", "Entity 'A' must have 'id: ID!' field"),
            ("type A @entity { id: String! }", "Entity 'A' must have 'id: ID!' field"),
            (
                "type A @entity(timeseries: true) { id: Int8! }",
                "Timeseries entity 'A' must have 'timestamp: Timestamp!' field",
            ),
            (
                "type A @entity { id: ID! bs: [A!]! @derivedFrom }",
                "must have a 'field' argument",
            ),
            (
                "type A @entity { id: ID! b: A! @derivedFrom(field: \"a\") }",
                "Derived field 'A.b' must be a list type",
            ),
            ("interface Node { id: ID! }", "Unsupported definition 'interface'"),
            ("type A @entity { id(x: Int): ID! }", "Field arguments are not supported"),
            ("type A @entity { id: ID! % }", "Unexpected character"),
            ("type A @entity { id: ID!", "Syntax Error"),
            ("union U = A | B", "Unsupported definition 'union'"),
            ("input I { x: Int }", "Unsupported definition 'input'"),
            (
                "type A @entity(immutable: [true]) { id: ID! }",
                "Unsupported value '[true]' for argument 'immutable' of @entity",
            ),
        ],
    )
    def test_invalid_schema(self, loader: SchemaLoader, text: str, message: str) -> None:
        with pytest.raises(SchemaParseError, match=re.escape(message)):
            loader.parse(text)

    def test_error_carries_location(self, loader: SchemaLoader) -> None:
        with pytest.raises(SchemaParseError) as exc_info:
            loader.parse("type A @entity {\n  id: ID!\n  id: ID!\n}", source_path="schema.graphql")
        assert exc_info.value.message.startswith("schema.graphql:3: ")

    def test_syntax_error_carries_location(self, loader: SchemaLoader) -> None:
        with pytest.raises(SchemaParseError) as exc_info:
            loader.parse("type A @entity {\n  id: ID!\n  name String\n}", source_path="s.graphql")
        assert exc_info.value.message.startswith("s.graphql:3: Syntax Error")


class TestSchemaLoaderEmptyInput:
    @pytest.mark.parametrize("text", ["", "\n  \n", "# only a comment\n"])
    def test_empty_schema(self, loader: SchemaLoader, text: str) -> None:
        schema = loader.parse(text, source_path="schema.graphql")
        assert schema.declarations == ()
        assert schema.source_path == "schema.graphql"

    def test_type_text_is_kept(self, loader: SchemaLoader, sample_schema: str) -> None:
        account = loader.parse(sample_schema).get("Account")
        assert account is not None
        transfers = account.get_field("transfers")
        assert transfers is not None
        assert transfers.type_text == "[Transfer!]!"
