# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code Generation Enumerations Module.

Provides the enumerations shared across the generation pipeline: ABI entry
kinds, type descriptor variants, serialization strategies, artifact kinds,
conflict policies, write outcomes and report statuses.

Exports:
    EnumAbiItemKind: ABI entry type (function, event, constructor, ...)
    EnumAbiSource: Origin of a resolved ABI definition
    EnumArtifactKind: Generated artifact kind (binding, handler, entity)
    EnumCodegenErrorCode: Error classification for CodegenError
    EnumConflictMode: Policy for hand-edited generated files
    EnumDeclarationKind: Schema declaration kind (entity, value type)
    EnumOriginStatus: Per-contract outcome in a generation report
    EnumSerializationStrategy: Field conversion strategy
    EnumTypeKind: TypeDescriptor variant tag
    EnumWriteAction: Per-artifact write outcome
"""

from chaingen.enums.enum_abi_item_kind import EnumAbiItemKind
from chaingen.enums.enum_abi_source import EnumAbiSource
from chaingen.enums.enum_artifact_kind import EnumArtifactKind
from chaingen.enums.enum_codegen_error_code import EnumCodegenErrorCode
from chaingen.enums.enum_conflict_mode import EnumConflictMode
from chaingen.enums.enum_declaration_kind import EnumDeclarationKind
from chaingen.enums.enum_origin_status import EnumOriginStatus
from chaingen.enums.enum_serialization_strategy import EnumSerializationStrategy
from chaingen.enums.enum_type_kind import EnumTypeKind
from chaingen.enums.enum_write_action import EnumWriteAction

__all__: list[str] = [
    "EnumAbiItemKind",
    "EnumAbiSource",
    "EnumArtifactKind",
    "EnumCodegenErrorCode",
    "EnumConflictMode",
    "EnumDeclarationKind",
    "EnumOriginStatus",
    "EnumSerializationStrategy",
    "EnumTypeKind",
    "EnumWriteAction",
]
