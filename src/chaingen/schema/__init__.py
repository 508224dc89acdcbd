# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity schema loading and validation."""

from chaingen.schema.schema_loader import BUILTIN_SCALARS, SchemaLoader
from chaingen.schema.schema_validator import SchemaValidator

__all__: list[str] = [
    "BUILTIN_SCALARS",
    "SchemaLoader",
    "SchemaValidator",
]
