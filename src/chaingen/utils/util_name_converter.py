# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Name conversion helpers for generated identifiers."""

from __future__ import annotations

import keyword
import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z_]+")


class NameConverter:
    """Convert contract, event, entity and field names between casings.

    All conversions are pure; equal input always produces equal output so
    generated paths and identifiers stay stable across runs.
    """

    @staticmethod
    def to_snake_case(name: str) -> str:
        """Convert ERC20Token/balanceOf/my-pool to snake_case.

        Example:
            >>> NameConverter.to_snake_case("ERC20Token")
            'erc20_token'
            >>> NameConverter.to_snake_case("balanceOf")
            'balance_of'
        """
        cleaned = _NON_IDENTIFIER.sub("_", name)
        cleaned = _ACRONYM_BOUNDARY.sub(r"\1_\2", cleaned)
        cleaned = _WORD_BOUNDARY.sub(r"\1_\2", cleaned)
        cleaned = re.sub(r"_+", "_", cleaned).strip("_")
        return cleaned.lower()

    @staticmethod
    def to_pascal_case(name: str) -> str:
        """Convert a name to PascalCase, keeping inner capitals.

        Example:
            >>> NameConverter.to_pascal_case("uniswap_v3-pool")
            'UniswapV3Pool'
            >>> NameConverter.to_pascal_case("swapExactTokens")
            'SwapExactTokens'
        """
        parts = [p for p in _NON_IDENTIFIER.sub("_", name).split("_") if p]
        return "".join(p[0].upper() + p[1:] for p in parts)

    @staticmethod
    def to_constant_case(name: str) -> str:
        """Convert a name to UPPER_SNAKE_CASE."""
        return NameConverter.to_snake_case(name).upper()

    @staticmethod
    def to_python_identifier(name: str) -> str:
        """Make a snake_case attribute name safe to use in generated Python.

        Keywords and soft keywords get a trailing underscore; names that are
        empty or start with a digit get a leading field_ prefix.

        Example:
            >>> NameConverter.to_python_identifier("from")
            'from_'
            >>> NameConverter.to_python_identifier("transactionHash")
            'transaction_hash'
        """
        snake = NameConverter.to_snake_case(name)
        if not snake or snake[0].isdigit():
            snake = f"field_{snake}"
        if keyword.iskeyword(snake) or keyword.issoftkeyword(snake):
            snake = f"{snake}_"
        return snake


__all__ = ["NameConverter"]
