# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI JSON parsing.

Turns a raw ABI payload into typed events and functions. Accepts a bare item
list or a compiler artifact object carrying the list under ``abi``. Type
strings are checked structurally only; whether a type is supported is the
type mapper's decision.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from chaingen.enums import EnumAbiItemKind
from chaingen.errors import AbiParseError, ModelCodegenErrorContext
from chaingen.models import ModelAbiEvent, ModelAbiFunction, ModelAbiParameter

logger = logging.getLogger(__name__)


class AbiParser:
    """Parses ABI JSON values into ModelAbiEvent and ModelAbiFunction lists."""

    def extract_items(self, payload: object, source: str = "<abi>") -> list[dict[str, object]]:
        """Return the ABI item list from a bare list or an artifact object.

        Raises:
            AbiParseError: If no item list can be found.
        """
        items = payload
        if isinstance(payload, Mapping):
            items = payload.get("abi")
        if not isinstance(items, list):
            raise AbiParseError(
                f"ABI in {source} must be a list of items or an object with an 'abi' list",
                context=ModelCodegenErrorContext(operation="parse_abi", target_name=source),
            )
        for index, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise AbiParseError(
                    f"ABI item {index} in {source} is not an object",
                    context=ModelCodegenErrorContext(operation="parse_abi", target_name=source),
                )
        return [dict(item) for item in items]

    def parse(
        self,
        payload: object,
        source: str = "<abi>",
    ) -> tuple[tuple[ModelAbiEvent, ...], tuple[ModelAbiFunction, ...]]:
        """Parse an ABI payload.

        Args:
            payload: Raw ABI list or artifact object.
            source: Where the payload came from, for messages.

        Returns:
            Events and functions in declaration order. Constructors, fallback,
            receive and error items are accepted and dropped.

        Raises:
            AbiParseError: If the payload is not well-formed ABI JSON.
        """
        events: list[ModelAbiEvent] = []
        functions: list[ModelAbiFunction] = []
        skipped = 0
        for index, item in enumerate(self.extract_items(payload, source)):
            kind = self._item_kind(item, index, source)
            if kind == EnumAbiItemKind.EVENT:
                events.append(
                    ModelAbiEvent(
                        name=self._item_name(item, index, source),
                        inputs=self._parameters(item.get("inputs"), index, source),
                        anonymous=bool(item.get("anonymous", False)),
                    )
                )
            elif kind == EnumAbiItemKind.FUNCTION:
                functions.append(
                    ModelAbiFunction(
                        name=self._item_name(item, index, source),
                        inputs=self._parameters(item.get("inputs"), index, source),
                        outputs=self._parameters(item.get("outputs"), index, source),
                        state_mutability=self._state_mutability(item),
                    )
                )
            else:
                skipped += 1

        logger.debug(
            "Parsed ABI",
            extra={
                "source": source,
                "event_count": len(events),
                "function_count": len(functions),
                "skipped_items": skipped,
            },
        )
        return tuple(events), tuple(functions)

    @staticmethod
    def _error(message: str, source: str) -> AbiParseError:
        return AbiParseError(
            f"{message} in {source}",
            context=ModelCodegenErrorContext(operation="parse_abi", target_name=source),
        )

    def _item_kind(self, item: Mapping[str, object], index: int, source: str) -> EnumAbiItemKind:
        raw_kind = item.get("type", EnumAbiItemKind.FUNCTION.value)
        try:
            return EnumAbiItemKind(raw_kind)
        except ValueError:
            raise self._error(f"Unknown ABI item type {raw_kind!r} at item {index}", source) from None

    def _item_name(self, item: Mapping[str, object], index: int, source: str) -> str:
        name = item.get("name")
        if not isinstance(name, str) or not name:
            raise self._error(f"ABI item {index} has no name", source)
        return name

    @staticmethod
    def _state_mutability(item: Mapping[str, object]) -> str:
        mutability = item.get("stateMutability")
        if isinstance(mutability, str):
            return mutability
        if item.get("constant") is True:
            return "view"
        return "payable" if item.get("payable") is True else "nonpayable"

    def _parameters(
        self,
        raw: object,
        index: int,
        source: str,
    ) -> tuple[ModelAbiParameter, ...]:
        if raw is None:
            return ()
        if not isinstance(raw, list):
            raise self._error(f"Parameters of ABI item {index} must be a list", source)
        return tuple(self._parameter(p, index, source) for p in raw)

    def _parameter(self, raw: object, index: int, source: str) -> ModelAbiParameter:
        if not isinstance(raw, Mapping):
            raise self._error(f"Parameter of ABI item {index} is not an object", source)
        type_string = raw.get("type")
        if not isinstance(type_string, str) or not type_string:
            raise self._error(f"Parameter of ABI item {index} has no type", source)
        name = raw.get("name") or ""
        if not isinstance(name, str):
            raise self._error(f"Parameter name of ABI item {index} must be a string", source)

        components: tuple[ModelAbiParameter, ...] = ()
        if type_string.startswith("tuple"):
            raw_components = raw.get("components")
            if not isinstance(raw_components, list) or not raw_components:
                raise self._error(
                    f"Tuple parameter '{name}' of ABI item {index} has no components",
                    source,
                )
            components = tuple(self._parameter(c, index, source) for c in raw_components)

        internal_type = raw.get("internalType")
        return ModelAbiParameter(
            name=name,
            type=type_string,
            indexed=bool(raw.get("indexed", False)),
            components=components,
            internal_type=internal_type if isinstance(internal_type, str) else None,
        )


__all__ = ["AbiParser"]
