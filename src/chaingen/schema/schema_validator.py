# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Entity Schema Validator.

Semantic checks run on a schema the loader has already accepted. Structural
rules (unique names, resolvable types, ``id`` fields) are enforced by the
loader; this module looks at relationships and conventions.

Errors:
    - ``@derivedFrom`` on a field that does not reference a persisted entity
    - ``@derivedFrom`` naming a field the target entity does not declare

Warnings:
    - Type names not starting upper-case, field names not starting lower-case
    - Unknown directives and unknown ``@entity`` arguments
    - ``@unique`` fields without ``@index``
    - Derived fields whose back-reference points at another entity
    - Timeseries entities not marked immutable
    - Circular relationships between persisted entities
"""

from __future__ import annotations

import logging
from typing import Final

from chaingen.models import (
    ModelEntityDeclaration,
    ModelEntitySchema,
    ModelFieldDeclaration,
    ModelSchemaValidationResult,
)

logger = logging.getLogger(__name__)

KNOWN_FIELD_DIRECTIVES: Final[frozenset[str]] = frozenset({"derivedFrom", "unique", "index"})
KNOWN_ENTITY_ARGUMENTS: Final[frozenset[str]] = frozenset({"timeseries", "immutable"})


class SchemaValidator:
    """Validates relationships and conventions of an entity schema.

    Example:
        >>> result = SchemaValidator().validate(schema)
        >>> if not result.is_valid:
        ...     raise SchemaParseError("; ".join(result.errors))
    """

    def validate(self, schema: ModelEntitySchema) -> ModelSchemaValidationResult:
        """Validate ``schema``.

        Returns:
            Errors and warnings, each in schema declaration order.
        """
        errors: list[str] = []
        warnings: list[str] = []

        for declaration in schema.declarations:
            self._check_declaration(declaration, warnings)
            for schema_field in declaration.fields:
                self._check_field(schema, declaration, schema_field, errors, warnings)

        warnings.extend(self._find_cycles(schema))

        result = ModelSchemaValidationResult(errors=tuple(errors), warnings=tuple(warnings))
        logger.debug(
            "Validated entity schema",
            extra={"error_count": len(errors), "warning_count": len(warnings)},
        )
        return result

    def _check_declaration(
        self,
        declaration: ModelEntityDeclaration,
        warnings: list[str],
    ) -> None:
        if not declaration.name[0].isupper():
            warnings.append(f"Type name '{declaration.name}' should start with an uppercase letter")

        for directive in declaration.directives:
            if directive.name != "entity":
                warnings.append(
                    f"Unknown directive '@{directive.name}' on type '{declaration.name}'"
                )
                continue
            for argument in directive.arguments:
                if argument not in KNOWN_ENTITY_ARGUMENTS:
                    warnings.append(
                        f"Unknown argument '{argument}' in @entity directive on '{declaration.name}'"
                    )

        if declaration.timeseries and not declaration.immutable:
            warnings.append(
                f"Timeseries entity '{declaration.name}' should be immutable "
                "(@entity(timeseries: true, immutable: true))"
            )

    def _check_field(
        self,
        schema: ModelEntitySchema,
        declaration: ModelEntityDeclaration,
        schema_field: ModelFieldDeclaration,
        errors: list[str],
        warnings: list[str],
    ) -> None:
        qualified = f"{declaration.name}.{schema_field.name}"
        if not schema_field.name[0].islower() and schema_field.name[0] != "_":
            warnings.append(f"Field name '{qualified}' should start with a lowercase letter")

        for directive in schema_field.directives:
            if directive.name not in KNOWN_FIELD_DIRECTIVES:
                warnings.append(f"Unknown directive '@{directive.name}' on field '{qualified}'")

        if schema_field.unique and not schema_field.indexed:
            warnings.append(f"Unique field '{qualified}' should also carry @index")

        back_reference = schema_field.derived_from
        if back_reference is None:
            return

        target_name = schema_field.relationship_target
        target = schema.get(target_name) if target_name else None
        if target is None:
            errors.append(
                f"@derivedFrom on '{qualified}' must reference a list of persisted entities, "
                f"found '{schema_field.type_text}'"
            )
            return

        target_field = target.get_field(back_reference)
        if target_field is None:
            errors.append(
                f"@derivedFrom on '{qualified}' references non-existent field "
                f"'{back_reference}' in '{target.name}'"
            )
        elif target_field.relationship_target != declaration.name:
            warnings.append(
                f"@derivedFrom on '{qualified}' references '{target.name}.{back_reference}', "
                f"which does not point back to '{declaration.name}'"
            )

    def _find_cycles(self, schema: ModelEntitySchema) -> list[str]:
        """Return one warning per distinct cycle of stored entity relationships."""
        edges: dict[str, list[str]] = {}
        for entity in schema.entities:
            targets: list[str] = []
            for schema_field in entity.fields:
                target = schema_field.relationship_target
                if target is not None and schema_field.derived_from is None and target not in targets:
                    targets.append(target)
            edges[entity.name] = targets

        warnings: list[str] = []
        reported: set[frozenset[str]] = set()

        def visit(node: str, path: list[str]) -> None:
            for target in edges.get(node, []):
                if target in path:
                    cycle = path[path.index(target) :]
                    key = frozenset(cycle)
                    if key not in reported:
                        reported.add(key)
                        chain = " -> ".join([*cycle, target])
                        warnings.append(f"Circular relationship detected: {chain}")
                    continue
                visit(target, [*path, target])

        for entity_name in edges:
            visit(entity_name, [entity_name])
        return warnings


__all__ = ["KNOWN_ENTITY_ARGUMENTS", "KNOWN_FIELD_DIRECTIVES", "SchemaValidator"]
