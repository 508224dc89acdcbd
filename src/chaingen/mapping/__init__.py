# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI and schema type mapping."""

from chaingen.mapping.type_mapper import (
    NATIVE_INT_MAX_BITS,
    clear_type_cache,
    map_abi_type,
    map_schema_type,
    model_attribute_name,
)

__all__: list[str] = [
    "NATIVE_INT_MAX_BITS",
    "clear_type_cache",
    "map_abi_type",
    "map_schema_type",
    "model_attribute_name",
]
