# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Contract address validation and normalization.

Addresses are stored in canonical lower-case hex. Mixed-case input is treated
as an EIP-55 checksummed address and must pass the checksum; all-lower and
all-upper input carries no checksum and is accepted as-is.
"""

from __future__ import annotations

import re

from web3 import Web3

_HEX_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(address: str) -> str:
    """Validate an address and return its canonical lower-case form.

    Args:
        address: 0x-prefixed 20-byte hex address.

    Returns:
        Lower-case 0x-prefixed address.

    Raises:
        ValueError: If the address is malformed or its checksum is wrong.

    Example:
        >>> normalize_address("0x6B175474E89094C44Da98b954EedeAC495271d0F")
        '0x6b175474e89094c44da98b954eedeac495271d0f'
    """
    candidate = address.strip()
    if not _HEX_ADDRESS_PATTERN.match(candidate):
        raise ValueError(f"Invalid contract address: {address!r}")
    digits = candidate[2:]
    is_mixed_case = digits != digits.lower() and digits != digits.upper()
    if is_mixed_case and not Web3.is_checksum_address(candidate):
        raise ValueError(f"Address checksum mismatch: {address!r}")
    return "0x" + digits.lower()


def to_checksum(address: str) -> str:
    """Return the EIP-55 checksummed form of a valid address."""
    return Web3.to_checksum_address(normalize_address(address))


__all__ = ["normalize_address", "to_checksum"]
