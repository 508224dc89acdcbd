# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity type generation from the entity schema.

Every schema declaration becomes one pydantic model in
``<output_dir>/entities/<name_snake>.py``; ``entities/__init__.py``
re-exports them and lists persisted entities in ``ENTITY_TYPES``.

Field rules:
    - attributes are snake_case, aliased to the schema field name
    - relationships are stored by id: ``owner: Account!`` becomes
      ``owner_id: str``, ``tokens: [Token!]!`` becomes ``tokens_ids``
    - ``@derivedFrom`` fields are not stored; they are listed in
      ``__derived_fields__`` for the runtime to resolve
    - value types (declarations without ``@entity``) are imported from
      their own module and embedded as nested models
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import PurePosixPath

from chaingen.enums import EnumArtifactKind, EnumSerializationStrategy, EnumTypeKind
from chaingen.errors import ModelCodegenErrorContext, SchemaParseError
from chaingen.generators.binding_generator import field_declaration
from chaingen.mapping import map_schema_type, model_attribute_name
from chaingen.models import (
    ModelCodegenSettings,
    ModelEntityBinding,
    ModelEntityDeclaration,
    ModelEntityField,
    ModelEntitySchema,
    ModelGeneratedArtifact,
    ModelTypeDescriptor,
)
from chaingen.rendering import TemplateEngine
from chaingen.utils.util_name_converter import NameConverter

logger = logging.getLogger(__name__)


def _walk(descriptor: ModelTypeDescriptor) -> Iterator[ModelTypeDescriptor]:
    yield descriptor
    if descriptor.element is not None:
        yield from _walk(descriptor.element)
    for tuple_field in descriptor.fields:
        yield from _walk(tuple_field.descriptor)


class EntityGenerator:
    """Generates entity modules for every schema declaration.

    Args:
        engine: Template engine used to render the entity templates.
        settings: Code generation settings (output directory, schema path).
    """

    ENTITY_TEMPLATE = "entity.py.j2"
    INIT_TEMPLATE = "entities_init.py.j2"

    def __init__(self, engine: TemplateEngine, settings: ModelCodegenSettings) -> None:
        self.engine = engine
        self.settings = settings

    @property
    def entities_dir(self) -> PurePosixPath:
        return PurePosixPath(self.settings.output_dir) / "entities"

    def build_entity(self, declaration: ModelEntityDeclaration) -> ModelEntityBinding:
        """Build the typed form of one declaration.

        Raises:
            TypeMappingError: If a field type cannot be mapped.
        """
        used: set[str] = set()
        fields: list[ModelEntityField] = []
        structs: dict[str, ModelTypeDescriptor] = {}
        for field in declaration.fields:
            descriptor = map_schema_type(field.type_ref)
            relation_target = field.relationship_target
            if relation_target is not None and field.derived_from is None:
                suffix = "_ids" if field.is_list else "_id"
                attribute = model_attribute_name(
                    f"{NameConverter.to_snake_case(field.name)}{suffix}", used
                )
            else:
                attribute = model_attribute_name(field.name, used)
            for nested in descriptor.iter_structs():
                structs.setdefault(nested.type_name, nested)
            fields.append(
                ModelEntityField(
                    name=field.name,
                    attribute=attribute,
                    descriptor=descriptor,
                    derived_from=field.derived_from,
                    relation_target=relation_target,
                    unique=field.unique,
                    indexed=field.indexed,
                    description=field.description,
                )
            )

        return ModelEntityBinding(
            name=declaration.name,
            class_name=NameConverter.to_pascal_case(declaration.name),
            module_name=NameConverter.to_python_identifier(declaration.name),
            table_name=declaration.name.lower() if declaration.is_entity else None,
            timeseries=declaration.timeseries,
            immutable=declaration.immutable,
            description=declaration.description,
            fields=tuple(fields),
            structs=tuple(structs.values()),
        )

    def generate(self, schema: ModelEntitySchema) -> list[ModelGeneratedArtifact]:
        """Generate entity modules and the package ``__init__``.

        Raises:
            SchemaParseError: If two declarations map to the same module.
            TypeMappingError: If a field type cannot be mapped.
            TemplateRenderError: If rendering fails.
        """
        if not schema.declarations:
            return []

        origin = self.settings.schema_path
        bindings = [self.build_entity(declaration) for declaration in schema.declarations]
        self._check_module_names(bindings, origin)

        artifacts: list[ModelGeneratedArtifact] = []
        for binding in bindings:
            content = self.engine.render(self.ENTITY_TEMPLATE, self._entity_variables(binding))
            artifacts.append(
                ModelGeneratedArtifact.create(
                    path=(self.entities_dir / f"{binding.module_name}.py").as_posix(),
                    content=content,
                    kind=EnumArtifactKind.ENTITY,
                    origin=origin,
                )
            )

        init_content = self.engine.render(
            self.INIT_TEMPLATE,
            {
                "schema_path": origin,
                "declarations": [
                    {
                        "module": binding.module_name,
                        "class_name": binding.class_name,
                        "name": binding.name,
                        "persisted": binding.persisted,
                    }
                    for binding in bindings
                ],
            },
        )
        artifacts.append(
            ModelGeneratedArtifact.create(
                path=(self.entities_dir / "__init__.py").as_posix(),
                content=init_content,
                kind=EnumArtifactKind.ENTITY,
                origin=origin,
            )
        )
        logger.debug(
            "Generated entity modules",
            extra={"declarations": len(bindings), "schema": origin},
        )
        return artifacts

    @staticmethod
    def _check_module_names(bindings: list[ModelEntityBinding], origin: str) -> None:
        seen: dict[str, str] = {}
        for binding in bindings:
            other = seen.setdefault(binding.module_name, binding.name)
            if other != binding.name:
                raise SchemaParseError(
                    f"Types '{other}' and '{binding.name}' both generate module "
                    f"'{binding.module_name}'",
                    context=ModelCodegenErrorContext(operation="generate_entities"),
                    schema_path=origin,
                )

    def _entity_variables(self, binding: ModelEntityBinding) -> dict[str, object]:
        descriptors = [d for f in binding.stored_fields for d in _walk(f.descriptor)]
        dependencies: dict[str, str] = {}
        for struct in binding.structs:
            target = struct.reference_target or struct.type_name
            module = NameConverter.to_python_identifier(target)
            if module != binding.module_name:
                dependencies.setdefault(module, struct.type_name)

        if binding.persisted:
            kind = "Timeseries entity" if binding.timeseries else "Entity"
            default_doc = f"{kind} {binding.name}."
        else:
            default_doc = f"Value type {binding.name}."

        return {
            "module_doc": f"Schema type {binding.name}.",
            "uses_datetime": any(
                d.serialization == EnumSerializationStrategy.TIMESTAMP for d in descriptors
            ),
            "dependencies": [
                {"module": module, "class_name": class_name}
                for module, class_name in sorted(dependencies.items())
            ],
            "class_name": binding.class_name,
            "class_doc": binding.description or default_doc,
            "immutable": binding.immutable,
            "persisted": binding.persisted,
            "name": binding.name,
            "table_name": binding.table_name,
            "timeseries": binding.timeseries,
            "derived_fields": [
                {"name": f.attribute, "target": f.relation_target, "field": f.derived_from}
                for f in binding.fields
                if not f.is_stored
            ],
            "fields": [
                {
                    "declaration": field_declaration(
                        f.attribute,
                        f.name,
                        f.descriptor.type_name,
                        optional=f.descriptor.kind == EnumTypeKind.OPTIONAL,
                    )
                }
                for f in binding.stored_fields
            ],
        }


__all__ = ["EntityGenerator"]
