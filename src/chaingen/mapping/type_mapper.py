# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Type mapping from ABI and schema types to ModelTypeDescriptor.

Both functions are pure and memoised: equal inputs always produce equal
descriptors, and no I/O happens here.

ABI Types:
    ===========================  ==========  ==============================
    ABI type                     Python      Strategy
    ===========================  ==========  ==============================
    ``uint<M>``/``int<M>`` M<=64 ``int``     native
    ``uint<M>``/``int<M>`` M>64  ``str``     decimal string (big number)
    ``fixed<M>x<N>``/``ufixed``  ``str``     decimal string (big number)
    ``address``                  ``str``     address (lower-case hex)
    ``bool``                     ``bool``    native
    ``string``                   ``str``     native
    ``bytes``/``bytes<M>``       ``str``     hex string
    ``function``                 ``str``     hex string
    ``tuple``                    struct      nested
    ``T[]``/``T[k]``             ``list``    sequence
    ===========================  ==========  ==============================

    M is 8..256 in steps of 8 (bare ``int``/``uint`` mean 256), bytes<M>
    is 1..32, fixed N is 1..80 (bare ``fixed``/``ufixed`` mean 128x18).

Struct Naming:
    Anonymous ABI tuples are named from the contract, the item and the
    parameter position: parameter 1 of ``Pool.swap`` becomes
    ``PoolSwapParam1``, its third component ``PoolSwapParam1Field2``.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import BaseModel

from chaingen.enums import (
    EnumDeclarationKind,
    EnumSerializationStrategy,
    EnumTypeKind,
)
from chaingen.errors import TypeMappingError
from chaingen.models import (
    ModelAbiParameter,
    ModelSchemaTypeRef,
    ModelTupleField,
    ModelTypeDescriptor,
)
from chaingen.utils.util_name_converter import NameConverter

_ARRAY_SUFFIX = re.compile(r"^(?P<element>.+)\[(?P<length>\d*)\]$")
_INTEGER = re.compile(r"^(?P<unsigned>u?)int(?P<bits>\d*)$")
_FIXED = re.compile(r"^(?P<unsigned>u?)fixed(?:(?P<bits>\d+)x(?P<decimals>\d+))?$")
_FIXED_BYTES = re.compile(r"^bytes(?P<size>\d+)$")

NATIVE_INT_MAX_BITS: int = 64

# Pydantic model attributes plus names generated modules use in annotations.
_RESERVED_ATTRIBUTES: frozenset[str] = frozenset(dir(BaseModel)) | frozenset(
    {"bool", "datetime", "float", "int", "list", "str", "tuple"}
)


class _UnsupportedType(Exception):
    def __init__(self, type_string: str, reason: str) -> None:
        super().__init__(reason)
        self.type_string = type_string
        self.reason = reason


# ----------------------------------------------------------------------
# ABI types
# ----------------------------------------------------------------------


def map_abi_type(
    parameter: ModelAbiParameter | str,
    *,
    contract_name: str = "",
    item_name: str = "",
    index: int = 0,
    scope: str = "",
) -> ModelTypeDescriptor:
    """Map an ABI parameter (or bare type string) to a type descriptor.

    Args:
        parameter: ABI parameter, or a type string. Type strings may spell
            tuples inline as ``(uint256,address)[]``.
        contract_name: Contract the parameter belongs to.
        item_name: Event or function the parameter belongs to.
        index: Parameter position, used to name anonymous structs.
        scope: Struct name qualifier separating an item's roles, e.g.
            ``Event`` or ``Call``.

    Returns:
        The descriptor.

    Raises:
        TypeMappingError: If the type (or any nested type) is unsupported.
            ``type_string`` names the declared type of the offending
            parameter or tuple component.
    """
    if isinstance(parameter, str):
        try:
            parameter = _parameter_from_type_string(parameter.strip(), parameter)
        except _UnsupportedType as e:
            raise TypeMappingError(
                e.type_string,
                contract_name=contract_name or None,
                item_name=item_name or None,
                reason=e.reason,
            ) from None
    return _map_abi_cached(parameter, contract_name, item_name, index, scope)


@lru_cache(maxsize=4096)
def _map_abi_cached(
    parameter: ModelAbiParameter,
    contract_name: str,
    item_name: str,
    index: int,
    scope: str,
) -> ModelTypeDescriptor:
    struct_name = (
        f"{NameConverter.to_pascal_case(contract_name)}"
        f"{NameConverter.to_pascal_case(item_name)}{scope}Param{index}"
    )
    try:
        return _map_abi(parameter, parameter.type, struct_name)
    except _UnsupportedType as e:
        raise TypeMappingError(
            e.type_string,
            contract_name=contract_name or None,
            item_name=item_name or None,
            reason=e.reason,
        ) from None


def _map_abi(
    parameter: ModelAbiParameter,
    display: str,
    struct_name: str,
) -> ModelTypeDescriptor:
    type_string = parameter.type
    if not type_string or type_string != type_string.strip():
        raise _UnsupportedType(display, "malformed type string")

    array = _ARRAY_SUFFIX.match(type_string)
    if array is not None:
        length_text = array.group("length")
        length = int(length_text) if length_text else None
        if length == 0:
            raise _UnsupportedType(display, "fixed array length must be positive")
        element = _map_abi(
            parameter.model_copy(update={"type": array.group("element")}),
            display,
            struct_name,
        )
        return ModelTypeDescriptor(
            kind=EnumTypeKind.ARRAY,
            type_name=f"list[{element.type_name}]",
            serialization=EnumSerializationStrategy.SEQUENCE,
            source_type=f"{element.source_type}[{length_text}]",
            array_length=length,
            element=element,
        )

    if type_string == "tuple":
        if not parameter.components:
            raise _UnsupportedType(display, "tuple without components")
        fields: list[ModelTupleField] = []
        used: set[str] = set()
        for position, component in enumerate(parameter.components):
            name = component.name or f"field{position}"
            attribute = model_attribute_name(name, used)
            fields.append(
                ModelTupleField(
                    name=name,
                    attribute=attribute,
                    descriptor=_map_abi(component, component.type, f"{struct_name}Field{position}"),
                )
            )
        return ModelTypeDescriptor(
            kind=EnumTypeKind.TUPLE,
            type_name=struct_name,
            serialization=EnumSerializationStrategy.NESTED,
            source_type=parameter.canonical_type(),
            fields=tuple(fields),
        )

    return _map_elementary(type_string, display)


def _map_elementary(type_string: str, display: str) -> ModelTypeDescriptor:
    integer = _INTEGER.match(type_string)
    if integer is not None:
        bits = _bit_width(integer.group("bits"), display, default=256)
        canonical = f"{integer.group('unsigned')}int{bits}"
        if bits <= NATIVE_INT_MAX_BITS:
            return _primitive("int", EnumSerializationStrategy.NATIVE, canonical, bits)
        return ModelTypeDescriptor(
            kind=EnumTypeKind.BIG_NUMBER,
            type_name="str",
            serialization=EnumSerializationStrategy.DECIMAL_STRING,
            source_type=canonical,
            bit_width=bits,
        )

    fixed = _FIXED.match(type_string)
    if fixed is not None:
        bits = _bit_width(fixed.group("bits") or "128", display, default=128)
        decimals = int(fixed.group("decimals") or "18")
        if not 1 <= decimals <= 80:
            raise _UnsupportedType(display, "fixed-point decimals must be 1..80")
        return ModelTypeDescriptor(
            kind=EnumTypeKind.BIG_NUMBER,
            type_name="str",
            serialization=EnumSerializationStrategy.DECIMAL_STRING,
            source_type=f"{fixed.group('unsigned')}fixed{bits}x{decimals}",
            bit_width=bits,
        )

    if type_string == "address":
        return _primitive("str", EnumSerializationStrategy.ADDRESS, type_string, 160)
    if type_string == "bool":
        return _primitive("bool", EnumSerializationStrategy.NATIVE, type_string)
    if type_string == "string":
        return _primitive("str", EnumSerializationStrategy.NATIVE, type_string)
    if type_string == "bytes":
        return _primitive("str", EnumSerializationStrategy.HEX_STRING, type_string)
    if type_string == "function":
        return _primitive("str", EnumSerializationStrategy.HEX_STRING, type_string, 192)

    fixed_bytes = _FIXED_BYTES.match(type_string)
    if fixed_bytes is not None:
        size_text = fixed_bytes.group("size")
        size = int(size_text)
        if size_text.startswith("0") or not 1 <= size <= 32:
            raise _UnsupportedType(display, "bytes<M> requires 1 <= M <= 32")
        return _primitive("str", EnumSerializationStrategy.HEX_STRING, type_string, size * 8)

    raise _UnsupportedType(display, "not a recognized ABI type")


def _bit_width(bits_text: str, display: str, default: int) -> int:
    if not bits_text:
        return default
    bits = int(bits_text)
    if bits_text.startswith("0") or bits % 8 != 0 or not 8 <= bits <= 256:
        raise _UnsupportedType(display, "bit width must be a multiple of 8 in 8..256")
    return bits


def _primitive(
    type_name: str,
    serialization: EnumSerializationStrategy,
    source_type: str,
    bit_width: int | None = None,
) -> ModelTypeDescriptor:
    return ModelTypeDescriptor(
        kind=EnumTypeKind.PRIMITIVE,
        type_name=type_name,
        serialization=serialization,
        source_type=source_type,
        bit_width=bit_width,
    )


def model_attribute_name(name: str, used: set[str] | None = None) -> str:
    """Return a generated-model attribute name for a declared name.

    The name is converted to a snake_case identifier, suffixed with '_' when
    it would shadow a pydantic BaseModel attribute, and, when ``used`` is
    given, made unique within it (``amount``, ``amount_1``, ...).
    """
    attribute = NameConverter.to_python_identifier(name)
    if attribute in _RESERVED_ATTRIBUTES or attribute.startswith("model_"):
        attribute = f"{attribute}_"
    if used is None:
        return attribute
    return _unique_attribute(attribute, used)


def _unique_attribute(attribute: str, used: set[str]) -> str:
    candidate = attribute
    suffix = 1
    while candidate in used:
        candidate = f"{attribute}_{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _parameter_from_type_string(type_string: str, display: str) -> ModelAbiParameter:
    """Build a parameter from a type string, expanding inline ``(a,b)`` tuples."""
    if not type_string.startswith("("):
        if not type_string:
            raise _UnsupportedType(display, "empty type string")
        return ModelAbiParameter(type=type_string)

    depth = 0
    close = -1
    for position, char in enumerate(type_string):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                close = position
                break
    if close == -1:
        raise _UnsupportedType(display, "unbalanced parentheses")

    inner = type_string[1:close]
    suffix = type_string[close + 1 :]
    if suffix and not re.fullmatch(r"(\[\d*\])+", suffix):
        raise _UnsupportedType(display, "malformed array suffix")

    parts: list[str] = []
    depth = 0
    start = 0
    for position, char in enumerate(inner):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(inner[start:position])
            start = position + 1
    parts.append(inner[start:])
    if not inner or any(not part.strip() for part in parts):
        raise _UnsupportedType(display, "empty tuple component")

    components = tuple(
        _parameter_from_type_string(part.strip(), part.strip()) for part in parts
    )
    return ModelAbiParameter(type=f"tuple{suffix}", components=components)


# ----------------------------------------------------------------------
# Schema types
# ----------------------------------------------------------------------

_SCHEMA_SCALARS: dict[str, tuple[EnumTypeKind, str, EnumSerializationStrategy, int | None]] = {
    "ID": (EnumTypeKind.PRIMITIVE, "str", EnumSerializationStrategy.IDENTIFIER, None),
    "String": (EnumTypeKind.PRIMITIVE, "str", EnumSerializationStrategy.NATIVE, None),
    "Int": (EnumTypeKind.PRIMITIVE, "int", EnumSerializationStrategy.NATIVE, 32),
    "Int8": (EnumTypeKind.PRIMITIVE, "int", EnumSerializationStrategy.NATIVE, 64),
    "Float": (EnumTypeKind.PRIMITIVE, "float", EnumSerializationStrategy.NATIVE, None),
    "Boolean": (EnumTypeKind.PRIMITIVE, "bool", EnumSerializationStrategy.NATIVE, None),
    "BigInt": (EnumTypeKind.BIG_NUMBER, "str", EnumSerializationStrategy.DECIMAL_STRING, None),
    "BigDecimal": (EnumTypeKind.BIG_NUMBER, "str", EnumSerializationStrategy.DECIMAL_STRING, None),
    "Timestamp": (EnumTypeKind.PRIMITIVE, "datetime", EnumSerializationStrategy.TIMESTAMP, None),
    "Bytes": (EnumTypeKind.PRIMITIVE, "str", EnumSerializationStrategy.HEX_STRING, None),
}


@lru_cache(maxsize=4096)
def map_schema_type(type_ref: ModelSchemaTypeRef) -> ModelTypeDescriptor:
    """Map a resolved schema type reference to a type descriptor.

    Nullable references become OPTIONAL wrappers, lists become ARRAY,
    persisted entities become ENTITY_REF (stored by id) and value types
    become TUPLE descriptors naming the generated struct.

    Raises:
        TypeMappingError: If a named type was not resolved by the loader.
    """
    source_type = str(type_ref)
    if not type_ref.non_null:
        inner = map_schema_type(type_ref.model_copy(update={"non_null": True}))
        return ModelTypeDescriptor(
            kind=EnumTypeKind.OPTIONAL,
            type_name=f"{inner.type_name} | None",
            serialization=EnumSerializationStrategy.OPTIONAL,
            source_type=source_type,
            element=inner,
        )

    if type_ref.element is not None:
        element = map_schema_type(type_ref.element)
        return ModelTypeDescriptor(
            kind=EnumTypeKind.ARRAY,
            type_name=f"list[{element.type_name}]",
            serialization=EnumSerializationStrategy.SEQUENCE,
            source_type=source_type,
            element=element,
        )

    name = type_ref.name or ""
    if type_ref.base_scalar is not None:
        scalar = _SCHEMA_SCALARS.get(type_ref.base_scalar)
        if scalar is None:
            raise TypeMappingError(source_type, item_name=name, reason="unknown scalar")
        kind, type_name, serialization, bits = scalar
        return ModelTypeDescriptor(
            kind=kind,
            type_name=type_name,
            serialization=serialization,
            source_type=source_type,
            bit_width=bits,
        )

    if type_ref.declaration_kind == EnumDeclarationKind.ENTITY:
        return ModelTypeDescriptor(
            kind=EnumTypeKind.ENTITY_REF,
            type_name="str",
            serialization=EnumSerializationStrategy.REFERENCE,
            source_type=source_type,
            reference_target=name,
        )
    if type_ref.declaration_kind == EnumDeclarationKind.VALUE:
        return ModelTypeDescriptor(
            kind=EnumTypeKind.TUPLE,
            type_name=NameConverter.to_pascal_case(name),
            serialization=EnumSerializationStrategy.NESTED,
            source_type=source_type,
            reference_target=name,
        )

    raise TypeMappingError(source_type, item_name=name, reason="unresolved type reference")


def clear_type_cache() -> None:
    """Drop memoised descriptors."""
    _map_abi_cached.cache_clear()
    map_schema_type.cache_clear()


__all__ = [
    "NATIVE_INT_MAX_BITS",
    "clear_type_cache",
    "map_abi_type",
    "map_schema_type",
    "model_attribute_name",
]
