# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity Schema Loader.

Parses the entity schema file, a GraphQL SDL subset, into a ModelEntitySchema.
Syntax is handled by graphql-core's parser; this module walks the resulting
document and applies the entity rules on top of it.

Supported Definitions:
    - ``type Name @entity(timeseries: true, immutable: true) { ... }``:
      persisted entity
    - ``type Name { ... }``: value type embedded in other declarations
    - ``scalar Name``: custom scalar, stored as a string
    - ``enum Name { A B }``: treated like a custom scalar
    - ``directive @name(...) on ...``: skipped

Loading happens in two passes. The first pass collects every definition; the
second resolves each field's named type against the built-in scalars and the
declarations of the whole file, so declarations may reference types defined
further down.

Structural Rules:
    - Declaration and field names are unique (case-sensitive)
    - Every named type resolves to a scalar or a declaration
    - Persisted entities declare ``id: ID!``; timeseries entities declare
      ``id: Int8!`` and ``timestamp: Timestamp!``
    - ``@derivedFrom`` takes a ``field`` argument and annotates a list field

Any violation raises SchemaParseError; the loader has no side effects
besides reading the file.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from graphql import GraphQLSyntaxError, parse
from graphql.language import (
    BooleanValueNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    EnumTypeDefinitionNode,
    EnumValueNode,
    FieldDefinitionNode,
    FloatValueNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    IntValueNode,
    ListTypeNode,
    Node,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    print_ast,
)

from chaingen.enums import EnumDeclarationKind
from chaingen.errors import ModelCodegenErrorContext, SchemaParseError
from chaingen.models import (
    ModelEntityDeclaration,
    ModelEntitySchema,
    ModelFieldDeclaration,
    ModelSchemaDirective,
    ModelSchemaTypeRef,
)

logger = logging.getLogger(__name__)

BUILTIN_SCALARS: Final[frozenset[str]] = frozenset(
    {
        "ID",
        "String",
        "Int",
        "Int8",
        "Float",
        "Boolean",
        "BigInt",
        "BigDecimal",
        "Timestamp",
        "Bytes",
    }
)

_CUSTOM_SCALAR_BASE: Final[str] = "String"

_DEFINITION_KEYWORDS: Final[dict[type[Node], str]] = {
    InterfaceTypeDefinitionNode: "interface",
    UnionTypeDefinitionNode: "union",
    InputObjectTypeDefinitionNode: "input",
    SchemaDefinitionNode: "schema",
}


def _line(node: Node) -> int:
    return node.loc.start_token.line if node.loc is not None else 1


def _description(node: ObjectTypeDefinitionNode | FieldDefinitionNode) -> str | None:
    return node.description.value if node.description is not None else None


class SchemaLoader:
    """Loads entity schema files into ModelEntitySchema.

    The loader is stateless; a single instance can be reused for any number
    of files, and loading the same file twice yields equal schemas.

    Example:
        >>> schema = SchemaLoader().load(Path("schema.graphql"))
        >>> [d.name for d in schema.entities]
        ['Account', 'Transfer']
    """

    def load(self, path: Path) -> ModelEntitySchema:
        """Read and parse a schema file.

        Raises:
            SchemaParseError: If the file cannot be read or is invalid.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaParseError(
                f"Failed to read schema {path}: {e}",
                context=ModelCodegenErrorContext(
                    operation="load_schema",
                    target_name=str(path),
                ),
            ) from e
        return self.parse(text, source_path=str(path))

    def parse(self, text: str, source_path: str | None = None) -> ModelEntitySchema:
        """Parse schema text.

        Args:
            text: Schema source.
            source_path: File the text came from, for messages.

        Raises:
            SchemaParseError: If the schema is malformed or inconsistent.
        """
        source = source_path or "<schema>"
        if not any(line.split("#", 1)[0].strip() for line in text.splitlines()):
            return ModelEntitySchema(source_path=source_path)
        try:
            document = parse(text)
        except GraphQLSyntaxError as e:
            line = e.locations[0].line if e.locations else 1
            raise self._error(source, line, e.message) from e

        type_nodes: list[ObjectTypeDefinitionNode] = []
        scalar_nodes: list[tuple[str, int]] = []
        for definition in document.definitions:
            if isinstance(definition, ObjectTypeDefinitionNode):
                type_nodes.append(definition)
            elif isinstance(definition, ScalarTypeDefinitionNode):
                scalar_nodes.append((definition.name.value, _line(definition.name)))
            elif isinstance(definition, EnumTypeDefinitionNode):
                if not definition.values:
                    raise self._error(
                        source,
                        _line(definition.name),
                        f"Enum '{definition.name.value}' declares no values",
                    )
                scalar_nodes.append((definition.name.value, _line(definition.name)))
            elif not isinstance(definition, DirectiveDefinitionNode):
                keyword = _DEFINITION_KEYWORDS.get(
                    type(definition), definition.kind.replace("_", " ")
                )
                raise self._error(
                    source, _line(definition), f"Unsupported definition '{keyword}'"
                )

        scalars = self._collect_scalars(scalar_nodes, source)
        kinds = self._collect_declaration_kinds(type_nodes, scalars, source)

        declarations = tuple(
            self._build_declaration(node, scalars, kinds, source) for node in type_nodes
        )
        schema = ModelEntitySchema(
            declarations=declarations,
            scalars=tuple(scalars),
            source_path=source_path,
        )
        logger.debug(
            "Parsed entity schema",
            extra={
                "source": source,
                "entity_count": len(schema.entities),
                "declaration_count": len(declarations),
            },
        )
        return schema

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _error(source: str, line: int, message: str) -> SchemaParseError:
        return SchemaParseError(
            f"{source}:{line}: {message}",
            context=ModelCodegenErrorContext(
                operation="parse_schema",
                target_name=source,
            ),
            line=line,
        )

    def _collect_scalars(self, scalar_nodes: list[tuple[str, int]], source: str) -> list[str]:
        custom: list[str] = []
        for name, line in scalar_nodes:
            if name in BUILTIN_SCALARS:
                continue
            if name in custom:
                raise self._error(source, line, f"Duplicate scalar '{name}'")
            custom.append(name)
        return custom

    def _collect_declaration_kinds(
        self,
        type_nodes: list[ObjectTypeDefinitionNode],
        scalars: list[str],
        source: str,
    ) -> dict[str, EnumDeclarationKind]:
        kinds: dict[str, EnumDeclarationKind] = {}
        for node in type_nodes:
            name = node.name.value
            line = _line(node.name)
            if name in kinds:
                raise self._error(source, line, f"Duplicate type '{name}'")
            if name in BUILTIN_SCALARS or name in scalars:
                raise self._error(
                    source, line, f"Type '{name}' conflicts with a scalar of the same name"
                )
            is_entity = any(d.name.value == "entity" for d in node.directives or ())
            kinds[name] = EnumDeclarationKind.ENTITY if is_entity else EnumDeclarationKind.VALUE
        return kinds

    def _directives(
        self,
        nodes: Sequence[DirectiveNode] | None,
        source: str,
    ) -> tuple[ModelSchemaDirective, ...]:
        directives: list[ModelSchemaDirective] = []
        for node in nodes or ():
            arguments: dict[str, str] = {}
            for argument in node.arguments or ():
                value = argument.value
                if isinstance(value, BooleanValueNode):
                    arguments[argument.name.value] = "true" if value.value else "false"
                elif isinstance(
                    value, StringValueNode | IntValueNode | FloatValueNode | EnumValueNode
                ):
                    arguments[argument.name.value] = value.value
                else:
                    raise self._error(
                        source,
                        _line(value),
                        f"Unsupported value '{print_ast(value)}' for argument "
                        f"'{argument.name.value}' of @{node.name.value}",
                    )
            directives.append(ModelSchemaDirective(name=node.name.value, arguments=arguments))
        return tuple(directives)

    def _resolve_type(
        self,
        node: TypeNode,
        scalars: list[str],
        kinds: dict[str, EnumDeclarationKind],
        source: str,
        line: int,
        owner: str,
        non_null: bool = False,
    ) -> ModelSchemaTypeRef:
        if isinstance(node, NonNullTypeNode):
            return self._resolve_type(node.type, scalars, kinds, source, line, owner, True)
        if isinstance(node, ListTypeNode):
            return ModelSchemaTypeRef(
                element=self._resolve_type(node.type, scalars, kinds, source, line, owner),
                non_null=non_null,
            )
        name = node.name.value
        if name in BUILTIN_SCALARS:
            return ModelSchemaTypeRef(name=name, non_null=non_null, base_scalar=name)
        if name in scalars:
            return ModelSchemaTypeRef(
                name=name, non_null=non_null, base_scalar=_CUSTOM_SCALAR_BASE
            )
        if name in kinds:
            return ModelSchemaTypeRef(name=name, non_null=non_null, declaration_kind=kinds[name])
        raise self._error(source, line, f"Unknown type '{name}' in {owner}")

    def _build_declaration(
        self,
        node: ObjectTypeDefinitionNode,
        scalars: list[str],
        kinds: dict[str, EnumDeclarationKind],
        source: str,
    ) -> ModelEntityDeclaration:
        name = node.name.value
        line = _line(node.name)
        if not node.fields:
            raise self._error(source, line, f"Type '{name}' declares no fields")

        fields: list[ModelFieldDeclaration] = []
        seen: set[str] = set()
        for field_node in node.fields:
            field_name = field_node.name.value
            field_line = _line(field_node.name)
            if field_node.arguments:
                raise self._error(
                    source, field_line, f"Field arguments are not supported on '{field_name}'"
                )
            if field_name in seen:
                raise self._error(
                    source, field_line, f"Duplicate field '{field_name}' in type '{name}'"
                )
            seen.add(field_name)
            fields.append(
                ModelFieldDeclaration(
                    name=field_name,
                    type_text=print_ast(field_node.type),
                    type_ref=self._resolve_type(
                        field_node.type,
                        scalars,
                        kinds,
                        source,
                        field_line,
                        f"'{name}.{field_name}'",
                    ),
                    directives=self._directives(field_node.directives, source),
                    description=_description(field_node),
                    line=field_line,
                )
            )

        directives = self._directives(node.directives, source)
        entity_directive = next((d for d in directives if d.name == "entity"), None)
        timeseries = entity_directive is not None and (
            entity_directive.arguments.get("timeseries") == "true"
        )
        immutable = entity_directive is not None and (
            entity_directive.arguments.get("immutable") == "true"
        )
        declaration = ModelEntityDeclaration(
            name=name,
            kind=kinds[name],
            timeseries=timeseries,
            immutable=immutable,
            description=_description(node),
            fields=tuple(fields),
            directives=directives,
            line=line,
        )
        if declaration.is_entity:
            self._check_entity_structure(declaration, source)
        self._check_derived_fields(declaration, source)
        return declaration

    def _check_entity_structure(self, declaration: ModelEntityDeclaration, source: str) -> None:
        id_field = declaration.get_field("id")
        expected_id = "Int8" if declaration.timeseries else "ID"
        if (
            id_field is None
            or id_field.type_ref.base_scalar != expected_id
            or id_field.type_ref.name != expected_id
            or not id_field.type_ref.non_null
        ):
            kind = "Timeseries entity" if declaration.timeseries else "Entity"
            raise self._error(
                source,
                declaration.line,
                f"{kind} '{declaration.name}' must have 'id: {expected_id}!' field",
            )
        if declaration.timeseries:
            timestamp = declaration.get_field("timestamp")
            if (
                timestamp is None
                or timestamp.type_ref.name != "Timestamp"
                or not timestamp.type_ref.non_null
            ):
                raise self._error(
                    source,
                    declaration.line,
                    f"Timeseries entity '{declaration.name}' must have "
                    "'timestamp: Timestamp!' field",
                )

    def _check_derived_fields(self, declaration: ModelEntityDeclaration, source: str) -> None:
        for schema_field in declaration.fields:
            directive = schema_field.directive("derivedFrom")
            if directive is None:
                continue
            if not directive.arguments.get("field"):
                raise self._error(
                    source,
                    schema_field.line,
                    f"@derivedFrom on '{declaration.name}.{schema_field.name}' "
                    "must have a 'field' argument",
                )
            if not schema_field.is_list:
                raise self._error(
                    source,
                    schema_field.line,
                    f"Derived field '{declaration.name}.{schema_field.name}' must be a list type",
                )


__all__ = ["BUILTIN_SCALARS", "SchemaLoader"]
