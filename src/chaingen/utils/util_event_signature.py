# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Event topic and function selector derivation."""

from __future__ import annotations

from web3 import Web3


def event_topic(signature: str) -> str:
    """Return topic0 for an event signature: 0x-prefixed keccak256 hex.

    Example:
        >>> event_topic("Transfer(address,address,uint256)")
        '0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef'
    """
    return Web3.to_hex(Web3.keccak(text=signature))


def function_selector(signature: str) -> str:
    """Return the 4-byte selector of a function signature, 0x-prefixed.

    Example:
        >>> function_selector("transfer(address,uint256)")
        '0xa9059cbb'
    """
    return event_topic(signature)[:10]


__all__ = ["event_topic", "function_selector"]
