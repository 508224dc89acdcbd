# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Source generators for bindings, handler stubs and entity types."""

from chaingen.generators.binding_generator import (
    BindingGenerator,
    binding_module_name,
    binding_path,
    field_declaration,
)
from chaingen.generators.entity_generator import EntityGenerator
from chaingen.generators.handler_generator import HandlerGenerator

__all__: list[str] = [
    "BindingGenerator",
    "EntityGenerator",
    "HandlerGenerator",
    "binding_module_name",
    "binding_path",
    "field_declaration",
]
