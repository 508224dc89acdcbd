# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Contract binding generation.

A binding module exposes, for one contract:

- a pydantic model per event and per function (overloads are suffixed
  ``Transfer``, ``Transfer1``, ... in declaration order, skipping names the
  ABI itself declares)
- the tuple structs those models reference
- ``decode_<event>_log(topics, data)`` and ``encode_<function>_call(call)``
- ``EVENT_FILTERS``: signature, topic0, indexed topic count and address
  per event

The structured form (ModelContractBinding) is built first from mapped type
descriptors; the source text is a projection of it through the
``binding.py.j2`` template. Conversion expressions between raw ``eth_abi``
values and model fields are derived from each descriptor's serialization
strategy.
"""

from __future__ import annotations

import json
import logging
from pathlib import PurePosixPath

from chaingen.enums import EnumArtifactKind, EnumSerializationStrategy, EnumTypeKind
from chaingen.errors import TypeMappingError
from chaingen.mapping import map_abi_type, model_attribute_name
from chaingen.models import (
    ModelAbiDefinition,
    ModelAbiParameter,
    ModelBindingField,
    ModelCodegenSettings,
    ModelContractBinding,
    ModelContractConfig,
    ModelEventBinding,
    ModelEventFilter,
    ModelFunctionBinding,
    ModelGeneratedArtifact,
    ModelTypeDescriptor,
)
from chaingen.rendering import TemplateEngine
from chaingen.utils.util_event_signature import event_topic, function_selector
from chaingen.utils.util_name_converter import NameConverter

logger = logging.getLogger(__name__)

TOPIC_HASH_TYPE = "bytes32"


def field_declaration(
    attribute: str,
    name: str,
    annotation: str,
    *,
    optional: bool = False,
) -> str:
    """Class-body declaration for a generated model field.

    The attribute is aliased to the declared name when they differ, and
    optional fields default to None.
    """
    declaration = f"{attribute}: {annotation}"
    if attribute != name:
        alias = json.dumps(name, ensure_ascii=False)
        if optional:
            return f"{declaration} = Field(default=None, alias={alias})"
        return f"{declaration} = Field(alias={alias})"
    if optional:
        return f"{declaration} = None"
    return declaration


def binding_module_name(contract_name: str) -> str:
    return NameConverter.to_python_identifier(contract_name)


def binding_path(settings: ModelCodegenSettings, contract_name: str) -> str:
    """Output path of a contract's binding module, relative to the project root."""
    module = binding_module_name(contract_name)
    return (PurePosixPath(settings.output_dir) / "bindings" / f"{module}.py").as_posix()


def _is_dynamic(parameter: ModelAbiParameter) -> bool:
    type_string = parameter.type
    return (
        type_string in ("string", "bytes")
        or type_string.endswith("]")
        or type_string.startswith("tuple")
    )


def _overload_names(names: list[str], declared: list[str]) -> list[str]:
    """Suffix repeated names with the next free overload index (1, 2, ...).

    Names are repeated when their class-name spellings match, so ``order``
    and ``Order`` are overloads of each other.

    An index is free when neither its class-name nor its snake_case spelling
    matches a name in ``declared``, so an overload never shadows a declared
    ``Transfer1``.
    """
    taken = {NameConverter.to_pascal_case(name) for name in declared}
    taken_snake = {NameConverter.to_snake_case(name) for name in declared}
    first: set[str] = set()
    keys: list[str] = []
    for name in names:
        pascal = NameConverter.to_pascal_case(name)
        if pascal not in first:
            first.add(pascal)
            keys.append(name)
            continue
        snake = NameConverter.to_snake_case(name)
        suffix = 1
        while (
            NameConverter.to_pascal_case(f"{name}{suffix}") in taken
            or f"{snake}_{suffix}" in taken_snake
        ):
            suffix += 1
        taken.add(NameConverter.to_pascal_case(f"{name}{suffix}"))
        taken_snake.add(f"{snake}_{suffix}")
        keys.append(f"{name}{suffix}")
    return keys


def _overload_suffix(name: str, snake_name: str) -> str:
    return snake_name.removeprefix(NameConverter.to_snake_case(name)).lstrip("_")


def _from_abi(descriptor: ModelTypeDescriptor, value: str, depth: int = 0) -> str:
    """Expression converting a decoded eth_abi value to the model field value."""
    strategy = descriptor.serialization
    if strategy == EnumSerializationStrategy.SEQUENCE and descriptor.element is not None:
        item = f"item{depth}"
        inner = _from_abi(descriptor.element, item, depth + 1)
        return f"[{inner} for {item} in {value}]"
    if strategy == EnumSerializationStrategy.NESTED:
        parts = ", ".join(
            f"{tuple_field.attribute}={_from_abi(tuple_field.descriptor, f'{value}[{i}]', depth)}"
            for i, tuple_field in enumerate(descriptor.fields)
        )
        return f"{descriptor.type_name}({parts})"
    if strategy == EnumSerializationStrategy.DECIMAL_STRING:
        return f"str({value})"
    if strategy == EnumSerializationStrategy.ADDRESS:
        return f"{value}.lower()"
    if strategy == EnumSerializationStrategy.HEX_STRING:
        return f"_hex({value})"
    return value


def _to_abi(descriptor: ModelTypeDescriptor, value: str, depth: int = 0) -> str:
    """Expression converting a model field value to an eth_abi encoder input."""
    strategy = descriptor.serialization
    if strategy == EnumSerializationStrategy.SEQUENCE and descriptor.element is not None:
        item = f"item{depth}"
        inner = _to_abi(descriptor.element, item, depth + 1)
        return f"[{inner} for {item} in {value}]"
    if strategy == EnumSerializationStrategy.NESTED:
        parts = [
            _to_abi(tuple_field.descriptor, f"{value}.{tuple_field.attribute}", depth)
            for tuple_field in descriptor.fields
        ]
        return "(" + ", ".join(parts) + ",)"
    if strategy == EnumSerializationStrategy.DECIMAL_STRING:
        if _is_fixed_point(descriptor):
            return f"Decimal({value})"
        return f"int({value})"
    if strategy == EnumSerializationStrategy.HEX_STRING:
        return f"_as_bytes({value})"
    return value


def _is_fixed_point(descriptor: ModelTypeDescriptor) -> bool:
    return descriptor.source_type.lstrip("u").startswith("fixed")


def _uses_fixed_point(descriptor: ModelTypeDescriptor) -> bool:
    if descriptor.kind == EnumTypeKind.BIG_NUMBER and _is_fixed_point(descriptor):
        return True
    if descriptor.element is not None and _uses_fixed_point(descriptor.element):
        return True
    return any(_uses_fixed_point(f.descriptor) for f in descriptor.fields)


class BindingGenerator:
    """Generates one binding module per contract.

    Args:
        engine: Template engine used to render ``binding.py.j2``.
        settings: Code generation settings (output directory).
    """

    TEMPLATE_NAME = "binding.py.j2"

    def __init__(self, engine: TemplateEngine, settings: ModelCodegenSettings) -> None:
        self.engine = engine
        self.settings = settings

    def build_binding(
        self,
        contract: ModelContractConfig,
        abi: ModelAbiDefinition,
    ) -> ModelContractBinding:
        """Build the structured binding for a contract.

        Raises:
            TypeMappingError: If an event or function uses an unsupported type.
        """
        declared = [event.name for event in abi.events] + [f.name for f in abi.functions]
        events: list[ModelEventBinding] = []
        event_keys = _overload_names([event.name for event in abi.events], declared)
        for event, key in zip(abi.events, event_keys, strict=True):
            used: set[str] = set()
            fields: list[ModelBindingField] = []
            for index, parameter in enumerate(event.inputs):
                name = parameter.name or f"arg{index}"
                topic_hash = parameter.indexed and _is_dynamic(parameter)
                if topic_hash:
                    descriptor = map_abi_type(TOPIC_HASH_TYPE)
                else:
                    descriptor = map_abi_type(
                        parameter,
                        contract_name=contract.name,
                        item_name=key,
                        index=index,
                        scope="Event",
                    )
                fields.append(
                    ModelBindingField(
                        name=name,
                        attribute=model_attribute_name(name, used),
                        descriptor=descriptor,
                        indexed=parameter.indexed,
                        topic_hash=topic_hash,
                    )
                )
            signature = event.signature
            events.append(
                ModelEventBinding(
                    name=event.name,
                    class_name=f"{NameConverter.to_pascal_case(key)}Event",
                    snake_name=self._overload_snake(event.name, key),
                    anonymous=event.anonymous,
                    fields=tuple(fields),
                    filter=ModelEventFilter(
                        signature=signature,
                        topic0=None if event.anonymous else event_topic(signature),
                        indexed_topic_count=event.indexed_count,
                        address=contract.address,
                    ),
                )
            )

        functions: list[ModelFunctionBinding] = []
        function_keys = _overload_names([function.name for function in abi.functions], declared)
        for function, key in zip(abi.functions, function_keys, strict=True):
            functions.append(
                ModelFunctionBinding(
                    name=function.name,
                    class_name=f"{NameConverter.to_pascal_case(key)}Call",
                    snake_name=self._overload_snake(function.name, key),
                    signature=function.signature,
                    selector=function_selector(function.signature),
                    state_mutability=function.state_mutability,
                    fields=self._parameter_fields(contract, key, function.inputs, "arg", "Call"),
                    outputs=self._parameter_fields(
                        contract, key, function.outputs, "output", "Output"
                    ),
                )
            )

        structs: dict[str, ModelTypeDescriptor] = {}
        for binding_field in self._all_fields(events, functions):
            for struct in binding_field.descriptor.iter_structs():
                existing = structs.setdefault(struct.type_name, struct)
                if existing != struct:
                    raise TypeMappingError(
                        struct.source_type,
                        contract_name=contract.name,
                        reason=(
                            f"struct {struct.type_name} already generated for "
                            f"{existing.source_type}"
                        ),
                    )

        binding = ModelContractBinding(
            contract_name=contract.name,
            module_name=binding_module_name(contract.name),
            address=contract.address,
            network=contract.network,
            events=tuple(events),
            functions=tuple(functions),
            structs=tuple(structs.values()),
        )
        logger.debug(
            "Built contract binding",
            extra={
                "contract": contract.name,
                "events": len(events),
                "functions": len(functions),
                "structs": len(structs),
            },
        )
        return binding

    def generate(
        self,
        contract: ModelContractConfig,
        abi: ModelAbiDefinition,
    ) -> list[ModelGeneratedArtifact]:
        """Generate the binding module for a contract.

        Raises:
            TypeMappingError: If the ABI uses an unsupported type.
            TemplateRenderError: If rendering fails.
        """
        return [self.render(self.build_binding(contract, abi), origin=contract.origin)]

    def render(self, binding: ModelContractBinding, origin: str) -> ModelGeneratedArtifact:
        """Render a structured binding into its module artifact."""
        content = self.engine.render(self.TEMPLATE_NAME, self.template_variables(binding))
        return ModelGeneratedArtifact.create(
            path=binding_path(self.settings, binding.contract_name),
            content=content,
            kind=EnumArtifactKind.BINDING,
            origin=origin,
        )

    def template_variables(self, binding: ModelContractBinding) -> dict[str, object]:
        descriptors = [f.descriptor for f in self._all_fields(binding.events, binding.functions)]
        return {
            "contract_name": binding.contract_name,
            "address": binding.address,
            "network": binding.network,
            "uses_decimal": any(_uses_fixed_point(d) for d in descriptors),
            "structs": [self._struct_variables(struct) for struct in binding.structs],
            "events": [self._event_variables(event) for event in binding.events],
            "functions": [self._function_variables(function) for function in binding.functions],
        }

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _overload_snake(name: str, key: str) -> str:
        suffix = key.removeprefix(name)
        snake = NameConverter.to_snake_case(name)
        return f"{snake}_{suffix}" if suffix else snake

    @staticmethod
    def _parameter_fields(
        contract: ModelContractConfig,
        item_name: str,
        parameters: tuple[ModelAbiParameter, ...],
        placeholder: str,
        scope: str,
    ) -> tuple[ModelBindingField, ...]:
        used: set[str] = set()
        fields: list[ModelBindingField] = []
        for index, parameter in enumerate(parameters):
            name = parameter.name or f"{placeholder}{index}"
            fields.append(
                ModelBindingField(
                    name=name,
                    attribute=model_attribute_name(name, used),
                    descriptor=map_abi_type(
                        parameter,
                        contract_name=contract.name,
                        item_name=item_name,
                        index=index,
                        scope=scope,
                    ),
                )
            )
        return tuple(fields)

    @staticmethod
    def _all_fields(
        events: list[ModelEventBinding] | tuple[ModelEventBinding, ...],
        functions: list[ModelFunctionBinding] | tuple[ModelFunctionBinding, ...],
    ) -> list[ModelBindingField]:
        fields: list[ModelBindingField] = []
        for event in events:
            fields.extend(event.fields)
        for function in functions:
            fields.extend(function.fields)
            fields.extend(function.outputs)
        return fields

    @staticmethod
    def _struct_variables(struct: ModelTypeDescriptor) -> dict[str, object]:
        return {
            "class_name": struct.type_name,
            "source_type": struct.source_type,
            "fields": [
                {
                    "declaration": field_declaration(
                        tuple_field.attribute,
                        tuple_field.name,
                        tuple_field.descriptor.type_name,
                    )
                }
                for tuple_field in struct.fields
            ],
        }

    @staticmethod
    def _event_variables(event: ModelEventBinding) -> dict[str, object]:
        topic_offset = 0 if event.anonymous else 1
        data_types: list[str] = []
        assignments: list[str] = []
        topic_index = topic_offset
        for binding_field in event.fields:
            if binding_field.topic_hash:
                value = f"_hex(topic_values[{topic_index}])"
                topic_index += 1
            elif binding_field.indexed:
                raw = (
                    f"decode([{json.dumps(binding_field.descriptor.source_type)}], "
                    f"topic_values[{topic_index}])[0]"
                )
                value = _from_abi(binding_field.descriptor, raw)
                topic_index += 1
            else:
                value = _from_abi(binding_field.descriptor, f"values[{len(data_types)}]")
                data_types.append(binding_field.descriptor.source_type)
            assignments.append(f"{binding_field.attribute}={value}")

        return {
            "class_name": event.class_name,
            "signature": event.filter.signature,
            "constant_prefix": NameConverter.to_constant_case(event.snake_name),
            "topic0": event.filter.topic0,
            "snake_name": event.snake_name,
            "topic_count": topic_offset + event.filter.indexed_topic_count,
            "anonymous": event.anonymous,
            "data_types": data_types,
            "assignments": assignments,
            "key": event.name + _overload_suffix(event.name, event.snake_name),
            "indexed_count": event.filter.indexed_topic_count,
            "fields": [
                {
                    "declaration": field_declaration(
                        f.attribute, f.name, f.descriptor.type_name
                    )
                }
                for f in event.fields
            ],
        }

    @staticmethod
    def _function_variables(function: ModelFunctionBinding) -> dict[str, object]:
        outputs = function.outputs
        if len(outputs) == 1:
            result_annotation = outputs[0].descriptor.type_name
            result_expression = _from_abi(outputs[0].descriptor, "values[0]")
        else:
            result_annotation = (
                "tuple[" + ", ".join(o.descriptor.type_name for o in outputs) + "]"
            )
            result_expression = (
                "("
                + ", ".join(
                    _from_abi(o.descriptor, f"values[{i}]") for i, o in enumerate(outputs)
                )
                + ",)"
            )
        return {
            "class_name": function.class_name,
            "signature": function.signature,
            "state_mutability": function.state_mutability,
            "constant_prefix": NameConverter.to_constant_case(function.snake_name),
            "selector": function.selector,
            "snake_name": function.snake_name,
            "arg_types": [f.descriptor.source_type for f in function.fields],
            "arg_expressions": [
                _to_abi(f.descriptor, f"call.{f.attribute}") for f in function.fields
            ],
            "output_types": [o.descriptor.source_type for o in outputs],
            "result_annotation": result_annotation,
            "result_expression": result_expression,
            "fields": [
                {
                    "declaration": field_declaration(
                        f.attribute, f.name, f.descriptor.type_name
                    )
                }
                for f in function.fields
            ],
        }


__all__ = [
    "BindingGenerator",
    "binding_module_name",
    "binding_path",
    "field_declaration",
]
