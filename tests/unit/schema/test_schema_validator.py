# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for SchemaValidator: semantic errors and style warnings."""

from __future__ import annotations

import pytest

from chaingen.schema import SchemaLoader, SchemaValidator


def _validate(text: str):
    return SchemaValidator().validate(SchemaLoader().parse(text))


class TestSchemaValidator:
    def test_sample_schema_is_clean(self, sample_schema: str) -> None:
        result = _validate(sample_schema)
        assert result.is_valid
        assert result.errors == ()
        assert result.warnings == ()

    def test_derived_from_scalar_list_is_an_error(self) -> None:
        result = _validate(
            """
            type A @entity {
              id: ID!
              names: [String!]! @derivedFrom(field: "a")
            }
            """
        )
        assert not result.is_valid
        assert result.errors == (
            "@derivedFrom on 'A.names' must reference a list of persisted entities, "
            "found '[String!]!'",
        )

    def test_derived_from_missing_field_is_an_error(self) -> None:
        result = _validate(
            """
            type A @entity {
              id: ID!
              bs: [B!]! @derivedFrom(field: "owner")
            }
            type B @entity {
              id: ID!
            }
            """
        )
        assert not result.is_valid
        assert "references non-existent field 'owner' in 'B'" in result.errors[0]

    def test_derived_from_not_pointing_back_warns(self) -> None:
        result = _validate(
            """
            type A @entity {
              id: ID!
              bs: [B!]! @derivedFrom(field: "other")
            }
            type B @entity {
              id: ID!
              other: C!
            }
            type C @entity {
              id: ID!
            }
            """
        )
        assert result.is_valid
        assert any("which does not point back to 'A'" in w for w in result.warnings)

    @pytest.mark.parametrize(
        ("text", "warning"),
        [
            (
                "type account @entity { id: ID! }",
                "Type name 'account' should start with an uppercase letter",
            ),
            (
                "type A @entity @cached { id: ID! }",
                "Unknown directive '@cached' on type 'A'",
            ),
            (
                "type A @entity(ttl: 5) { id: ID! }",
                "Unknown argument 'ttl' in @entity directive on 'A'",
            ),
            (
                "type A @entity(timeseries: true) { id: Int8! timestamp: Timestamp! }",
                "Timeseries entity 'A' should be immutable",
            ),
            (
                "type A @entity { id: ID! Name: String! }",
                "Field name 'A.Name' should start with a lowercase letter",
            ),
            (
                "type A @entity { id: ID! name: String! @search }",
                "Unknown directive '@search' on field 'A.name'",
            ),
            (
                "type A @entity { id: ID! name: String! @unique }",
                "Unique field 'A.name' should also carry @index",
            ),
        ],
    )
    def test_warnings(self, text: str, warning: str) -> None:
        result = _validate(text)
        assert result.is_valid
        assert any(w.startswith(warning) for w in result.warnings), result.warnings

    def test_circular_relationship_warns_once(self) -> None:
        result = _validate(
            """
            type A @entity {
              id: ID!
              b: B!
            }
            type B @entity {
              id: ID!
              a: A
            }
            """
        )
        cycles = [w for w in result.warnings if w.startswith("Circular relationship detected")]
        assert cycles == ["Circular relationship detected: A -> B -> A"]

    def test_derived_fields_do_not_form_cycles(self, sample_schema: str) -> None:
        result = _validate(sample_schema)
        assert not any("Circular" in w for w in result.warnings)
