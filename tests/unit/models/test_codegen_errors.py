# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for the CodegenError hierarchy and its structured context."""

from __future__ import annotations

from uuid import uuid4

import pytest

from chaingen.enums import EnumCodegenErrorCode
from chaingen.errors import (
    AbiFetchError,
    AbiNotFoundError,
    AbiParseError,
    CodegenError,
    ConflictError,
    GenerationIoError,
    ModelCodegenErrorContext,
    ProjectConfigurationError,
    SchemaParseError,
    TemplateRenderError,
    TypeMappingError,
)


class TestCodegenError:
    def test_context_is_flattened(self) -> None:
        correlation_id = uuid4()
        context = ModelCodegenErrorContext(
            operation="render",
            target_name="binding.py.j2",
            contract_name="Token",
            correlation_id=correlation_id,
        )
        error = CodegenError("Rendering failed", context=context, line=12)

        assert str(error) == "Rendering failed"
        assert error.error_code == EnumCodegenErrorCode.OPERATION_FAILED
        assert error.correlation_id == correlation_id
        assert error.context == {
            "line": 12,
            "operation": "render",
            "target_name": "binding.py.j2",
            "contract_name": "Token",
        }

    def test_without_context(self) -> None:
        error = CodegenError("boom")
        assert error.context == {}
        assert error.correlation_id is None

    @pytest.mark.parametrize(
        ("error_cls", "code"),
        [
            (ProjectConfigurationError, EnumCodegenErrorCode.INVALID_CONFIGURATION),
            (SchemaParseError, EnumCodegenErrorCode.SCHEMA_PARSE_ERROR),
            (AbiFetchError, EnumCodegenErrorCode.ABI_FETCH_ERROR),
            (AbiNotFoundError, EnumCodegenErrorCode.ABI_NOT_FOUND),
            (AbiParseError, EnumCodegenErrorCode.ABI_PARSE_ERROR),
            (TemplateRenderError, EnumCodegenErrorCode.TEMPLATE_RENDER_ERROR),
            (GenerationIoError, EnumCodegenErrorCode.IO_ERROR),
        ],
    )
    def test_subclass_error_codes(self, error_cls: type[CodegenError], code: EnumCodegenErrorCode) -> None:
        error = error_cls("failed")
        assert isinstance(error, CodegenError)
        assert error.error_code == code

    def test_type_mapping_error_message(self) -> None:
        error = TypeMappingError(
            "uint7",
            contract_name="Pool",
            item_name="Swap",
            reason="bit width must be a multiple of 8",
        )
        assert str(error) == (
            "Unsupported type 'uint7' in Pool.Swap: bit width must be a multiple of 8"
        )
        assert error.type_string == "uint7"
        assert error.context["type_string"] == "uint7"
        assert error.error_code == EnumCodegenErrorCode.TYPE_MAPPING_ERROR

    def test_type_mapping_error_without_origin(self) -> None:
        assert str(TypeMappingError("mapping")) == "Unsupported type 'mapping'"

    def test_conflict_error_keeps_path(self) -> None:
        error = ConflictError("edited by hand", path="src/generated/bindings/token.py")
        assert error.path == "src/generated/bindings/token.py"
        assert error.context["path"] == error.path
        assert error.error_code == EnumCodegenErrorCode.CONFLICT_ERROR


class TestModelCodegenErrorContext:
    def test_with_correlation_generates_id(self) -> None:
        context = ModelCodegenErrorContext.with_correlation(operation="resolve_abi")
        assert context.correlation_id is not None
        assert context.operation == "resolve_abi"

    def test_with_correlation_propagates_id(self) -> None:
        correlation_id = uuid4()
        context = ModelCodegenErrorContext.with_correlation(correlation_id=correlation_id)
        assert context.correlation_id == correlation_id
