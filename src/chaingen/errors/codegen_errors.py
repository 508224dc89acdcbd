# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code Generation Error Classes.

Error Hierarchy:
    CodegenError (base pipeline error)
    ├── ProjectConfigurationError
    ├── SchemaParseError
    ├── AbiFetchError
    ├── AbiNotFoundError
    ├── AbiParseError
    ├── TypeMappingError
    ├── TemplateRenderError
    ├── ConflictError
    └── GenerationIoError

Propagation:
    SchemaParseError aborts a whole generation run because the schema is
    shared by every origin. All other errors are scoped to the contract or
    entity set being processed and are caught at the orchestrator boundary.

All errors:
    - Carry an EnumCodegenErrorCode for classification
    - Support proper error chaining with `raise ... from e`
    - Accept ModelCodegenErrorContext for bundled context parameters
    - Keep additional keyword context in ``error.context``
"""

from __future__ import annotations

from uuid import UUID

from chaingen.enums import EnumCodegenErrorCode
from chaingen.errors.model_codegen_error_context import ModelCodegenErrorContext


class CodegenError(Exception):
    """Base error class for the code generation pipeline.

    Structured Fields (via ModelCodegenErrorContext):
        operation: Operation being performed
        target_name: Resource the operation acted on
        contract_name: Contract or entity the failure is scoped to
        correlation_id: Generation run correlation ID

    Example:
        >>> context = ModelCodegenErrorContext(
        ...     operation="render",
        ...     target_name="binding.py.j2",
        ... )
        >>> raise CodegenError("Rendering failed", context=context, line=12)
    """

    def __init__(
        self,
        message: str,
        error_code: EnumCodegenErrorCode | None = None,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize CodegenError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled error context (operation, target_name, ...)
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or EnumCodegenErrorCode.OPERATION_FAILED
        self.correlation_id: UUID | None = None

        structured_context: dict[str, object] = dict(extra_context)
        if context is not None:
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            if context.contract_name is not None:
                structured_context["contract_name"] = context.contract_name
            self.correlation_id = context.correlation_id
        self.context = structured_context

    def __str__(self) -> str:
        return self.message


class ProjectConfigurationError(CodegenError):
    """Raised when the project configuration cannot be loaded or is invalid.

    Used for a missing ``chaingen.yaml``, YAML syntax errors, schema
    validation failures, duplicate contracts and unknown contract addresses.
    """

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


class SchemaParseError(CodegenError):
    """Raised when the entity schema is malformed or inconsistent.

    Covers syntax errors, unknown type names, duplicate entity or field
    names, and structural rules (missing ``id`` field, bad ``@derivedFrom``).

    Example:
        >>> raise SchemaParseError(
        ...     "Duplicate field 'owner' in entity 'Account'",
        ...     context=context,
        ...     line=14,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.SCHEMA_PARSE_ERROR,
            context=context,
            **extra_context,
        )


class AbiFetchError(CodegenError):
    """Raised when the ABI registry cannot be reached or answers with an error.

    Used for connection failures, timeouts and server errors that persist
    after retries. A cached entry, when present, is served as a stale
    fallback instead unless a refresh was forced.
    """

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.ABI_FETCH_ERROR,
            context=context,
            **extra_context,
        )


class AbiNotFoundError(CodegenError):
    """Raised when the registry does not know the contract (unverified or unknown)."""

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.ABI_NOT_FOUND,
            context=context,
            **extra_context,
        )


class AbiParseError(CodegenError):
    """Raised when an ABI payload is not well-formed ABI JSON."""

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.ABI_PARSE_ERROR,
            context=context,
            **extra_context,
        )


class TypeMappingError(CodegenError):
    """Raised when an ABI or schema type string has no Python mapping.

    The offending type string and its origin are kept as attributes so that
    reports can point at the exact parameter.

    Example:
        >>> raise TypeMappingError(
        ...     "uint7",
        ...     contract_name="Pool",
        ...     item_name="Swap",
        ... )
    """

    def __init__(
        self,
        type_string: str,
        contract_name: str | None = None,
        item_name: str | None = None,
        reason: str | None = None,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        self.type_string = type_string
        self.contract_name = contract_name
        self.item_name = item_name
        origin = ".".join(part for part in (contract_name, item_name) if part)
        message = f"Unsupported type '{type_string}'"
        if origin:
            message += f" in {origin}"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.TYPE_MAPPING_ERROR,
            context=context,
            type_string=type_string,
            **extra_context,
        )


class TemplateRenderError(CodegenError):
    """Raised when a template is missing, references an absent variable,
    or is rendered against structurally mismatched variables."""

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.TEMPLATE_RENDER_ERROR,
            context=context,
            **extra_context,
        )


class ConflictError(CodegenError):
    """Raised in strict mode when a generated file was edited since the last run."""

    def __init__(
        self,
        message: str,
        path: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        self.path = path
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.CONFLICT_ERROR,
            context=context,
            path=path,
            **extra_context,
        )


class GenerationIoError(CodegenError):
    """Raised when reading or writing a project, cache or manifest file fails."""

    def __init__(
        self,
        message: str,
        context: ModelCodegenErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCodegenErrorCode.IO_ERROR,
            context=context,
            **extra_context,
        )


__all__ = [
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
