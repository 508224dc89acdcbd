# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""ABI Parameter Model.

A single input, output or tuple component of an ABI item. The model is frozen
and hashable so type mapping over parameters can be memoised.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

# Shorthand spellings and their canonical forms.
_TYPE_ALIASES: dict[str, str] = {
    "uint": "uint256",
    "int": "int256",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
}
_BASE_AND_SUFFIX = re.compile(r"^(?P<base>[a-z0-9]+)(?P<suffix>(?:\[\d*\])*)$")


class ModelAbiParameter(BaseModel):
    """Typed ABI parameter.

    Attributes:
        name: Parameter name; empty for unnamed parameters.
        type: Solidity type string (``uint256``, ``tuple[]``, ``bytes32[4]``).
        indexed: Whether an event parameter is stored as a log topic.
        components: Tuple components, in declaration order.
        internal_type: Compiler-provided type hint (``struct Pool.Key``).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    name: str = Field(default="")
    type: str = Field(..., min_length=1)
    indexed: bool = Field(default=False)
    components: tuple[ModelAbiParameter, ...] = Field(default=())
    internal_type: str | None = Field(default=None)

    def canonical_type(self) -> str:
        """Return the type as it appears in a canonical signature.

        Tuples are expanded to their component list, keeping any array
        suffix: ``tuple[]`` with components ``(address, uint256)`` becomes
        ``(address,uint256)[]``. Shorthand integer and fixed-point spellings
        are expanded, so ``uint[]`` becomes ``uint256[]``.
        """
        if self.type.startswith("tuple"):
            inner = ",".join(c.canonical_type() for c in self.components)
            return f"({inner}){self.type[len('tuple'):]}"
        match = _BASE_AND_SUFFIX.match(self.type)
        if match is None:
            return self.type
        base = _TYPE_ALIASES.get(match.group("base"), match.group("base"))
        return f"{base}{match.group('suffix')}"


__all__ = ["ModelAbiParameter"]
