# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code Generation Errors Module.

Exports:
    ModelCodegenErrorContext: Configuration model for bundled error context
    CodegenError: Base pipeline error class
    ProjectConfigurationError: Project configuration loading/validation errors
    SchemaParseError: Entity schema errors (abort the whole run)
    AbiFetchError: Registry unreachable or failing
    AbiNotFoundError: Contract unknown to the registry
    AbiParseError: Malformed ABI JSON
    TypeMappingError: Unsupported ABI or schema type
    TemplateRenderError: Template rendering failures
    ConflictError: Hand-edited generated file in strict mode
    GenerationIoError: File system failures

Correlation ID Assignment:
    A generation run creates one correlation ID and propagates it into every
    error context it raises, so all failures of one run can be grouped::

        context = ModelCodegenErrorContext.with_correlation(
            correlation_id=run_id,
            operation="resolve_abi",
            contract_name=contract.name,
        )
        raise AbiFetchError("Registry unreachable", context=context) from e
"""

from chaingen.errors.codegen_errors import (
    AbiFetchError,
    AbiNotFoundError,
    AbiParseError,
    CodegenError,
    ConflictError,
    GenerationIoError,
    ProjectConfigurationError,
    SchemaParseError,
    TemplateRenderError,
    TypeMappingError,
)
from chaingen.errors.model_codegen_error_context import ModelCodegenErrorContext

__all__: list[str] = [
    "ModelCodegenErrorContext",
    "CodegenError",
    "ProjectConfigurationError",
    "SchemaParseError",
    "AbiFetchError",
    "AbiNotFoundError",
    "AbiParseError",
    "TypeMappingError",
    "TemplateRenderError",
    "ConflictError",
    "GenerationIoError",
]
