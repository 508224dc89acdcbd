# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code Generation Error Context Model.

This module defines the model bundling the structured fields attached to
every CodegenError, keeping error constructors short while preserving
strong typing.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class ModelCodegenErrorContext(BaseModel):
    """Structured context for code generation errors.

    Attributes:
        operation: Operation being performed (load_schema, resolve_abi, render, ...)
        target_name: Resource the operation acted on (file path, template, URL)
        contract_name: Contract or entity the failure is scoped to, if any
        correlation_id: Generation run correlation ID

    Example:
        >>> context = ModelCodegenErrorContext.with_correlation(
        ...     operation="resolve_abi",
        ...     target_name="0x6b175474e89094c44da98b954eedeac495271d0f",
        ...     contract_name="Dai",
        ... )
        >>> raise AbiFetchError("Registry unreachable", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    operation: str | None = Field(
        default=None,
        description="Operation being performed (load_schema, resolve_abi, render, ...)",
    )
    target_name: str | None = Field(
        default=None,
        description="Resource the operation acted on",
    )
    contract_name: str | None = Field(
        default=None,
        description="Contract or entity the failure is scoped to",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Generation run correlation ID",
    )

    @classmethod
    def with_correlation(
        cls,
        correlation_id: UUID | None = None,
        **kwargs: str | None,
    ) -> ModelCodegenErrorContext:
        """Create a context, generating a correlation ID when none is given.

        Args:
            correlation_id: Existing correlation ID to propagate.
            **kwargs: Remaining context fields.

        Returns:
            ModelCodegenErrorContext with a non-null correlation_id.
        """
        return cls(correlation_id=correlation_id or uuid4(), **kwargs)


__all__ = ["ModelCodegenErrorContext"]
