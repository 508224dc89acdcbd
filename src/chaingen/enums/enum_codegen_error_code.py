# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code Generation Error Code Enumeration.

Classifies CodegenError instances for reporting and exit-status decisions.
"""

from enum import Enum


class EnumCodegenErrorCode(str, Enum):
    """Error codes for the code generation pipeline."""

    SCHEMA_PARSE_ERROR = "SCHEMA_PARSE_ERROR"
    ABI_FETCH_ERROR = "ABI_FETCH_ERROR"
    ABI_NOT_FOUND = "ABI_NOT_FOUND"
    ABI_PARSE_ERROR = "ABI_PARSE_ERROR"
    TYPE_MAPPING_ERROR = "TYPE_MAPPING_ERROR"
    TEMPLATE_RENDER_ERROR = "TEMPLATE_RENDER_ERROR"
    CONFLICT_ERROR = "CONFLICT_ERROR"
    IO_ERROR = "IO_ERROR"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    OPERATION_FAILED = "OPERATION_FAILED"


__all__ = ["EnumCodegenErrorCode"]
