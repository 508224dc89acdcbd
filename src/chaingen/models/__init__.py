# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Code generation models.

Configuration:
    ModelContractConfig, ModelCodegenSettings, ModelProjectConfig

ABI:
    ModelAbiParameter, ModelAbiEvent, ModelAbiFunction, ModelAbiDefinition,
    ModelAbiCacheEntry

Entity schema:
    ModelSchemaTypeRef, ModelSchemaDirective, ModelFieldDeclaration,
    ModelEntityDeclaration, ModelEntitySchema, ModelSchemaValidationResult

Typed intermediate form:
    ModelTypeDescriptor, ModelTupleField, ModelBindingField, ModelEventFilter,
    ModelEventBinding, ModelFunctionBinding, ModelContractBinding,
    ModelEntityField, ModelEntityBinding

Run state and results:
    ModelGeneratedArtifact, ModelManifestEntry, ModelGenerationManifest,
    ModelGenerationFlags, ModelWriteResult, ModelOriginResult,
    ModelGenerationReport
"""

from chaingen.models.model_abi_cache_entry import ModelAbiCacheEntry
from chaingen.models.model_abi_definition import ModelAbiDefinition
from chaingen.models.model_abi_event import ModelAbiEvent
from chaingen.models.model_abi_function import ModelAbiFunction
from chaingen.models.model_abi_parameter import ModelAbiParameter
from chaingen.models.model_binding_field import ModelBindingField
from chaingen.models.model_codegen_settings import ModelCodegenSettings
from chaingen.models.model_contract_binding import ModelContractBinding
from chaingen.models.model_contract_config import ModelContractConfig
from chaingen.models.model_entity_binding import ModelEntityBinding
from chaingen.models.model_entity_declaration import ModelEntityDeclaration
from chaingen.models.model_entity_field import ModelEntityField
from chaingen.models.model_entity_schema import ModelEntitySchema
from chaingen.models.model_event_binding import ModelEventBinding
from chaingen.models.model_event_filter import ModelEventFilter
from chaingen.models.model_field_declaration import ModelFieldDeclaration
from chaingen.models.model_function_binding import ModelFunctionBinding
from chaingen.models.model_generated_artifact import ModelGeneratedArtifact
from chaingen.models.model_generation_flags import ModelGenerationFlags
from chaingen.models.model_generation_manifest import ModelGenerationManifest
from chaingen.models.model_generation_report import ModelGenerationReport
from chaingen.models.model_manifest_entry import ModelManifestEntry
from chaingen.models.model_origin_result import ModelOriginResult
from chaingen.models.model_project_config import CONFIG_FILE_NAME, ModelProjectConfig
from chaingen.models.model_schema_directive import ModelSchemaDirective
from chaingen.models.model_schema_type_ref import ModelSchemaTypeRef
from chaingen.models.model_schema_validation_result import (
    ModelSchemaValidationResult,
)
from chaingen.models.model_type_descriptor import ModelTupleField, ModelTypeDescriptor
from chaingen.models.model_write_result import ModelWriteResult

__all__: list[str] = [
    "CONFIG_FILE_NAME",
    "ModelAbiCacheEntry",
    "ModelAbiDefinition",
    "ModelAbiEvent",
    "ModelAbiFunction",
    "ModelAbiParameter",
    "ModelBindingField",
    "ModelCodegenSettings",
    "ModelContractBinding",
    "ModelContractConfig",
    "ModelEntityBinding",
    "ModelEntityDeclaration",
    "ModelEntityField",
    "ModelEntitySchema",
    "ModelEventBinding",
    "ModelEventFilter",
    "ModelFieldDeclaration",
    "ModelFunctionBinding",
    "ModelGeneratedArtifact",
    "ModelGenerationFlags",
    "ModelGenerationManifest",
    "ModelGenerationReport",
    "ModelManifestEntry",
    "ModelOriginResult",
    "ModelProjectConfig",
    "ModelSchemaDirective",
    "ModelSchemaTypeRef",
    "ModelSchemaValidationResult",
    "ModelTupleField",
    "ModelTypeDescriptor",
    "ModelWriteResult",
]
