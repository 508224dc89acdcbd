# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Contract Configuration Model.

One tracked contract in a project: where it is deployed, what it is called
and, optionally, where a local copy of its ABI lives.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chaingen.utils.util_address import normalize_address


class ModelContractConfig(BaseModel):
    """Contract tracked by a project configuration.

    Exactly one ModelContractConfig may exist per (address, network) pair in
    a project; ModelProjectConfig.add_contract enforces this.

    Attributes:
        address: Canonical lower-case 0x-prefixed address. Mixed-case input
            must carry a valid EIP-55 checksum.
        name: Contract name, used for generated module and class names.
        network: Network identifier (chain id or network slug).
        abi_path: Optional local ABI file, relative to the project root.
        added_at: When the contract was added to the project.

    Example:
        >>> contract = ModelContractConfig(
        ...     address="0x6B175474E89094C44Da98b954EedeAC495271d0F",
        ...     name="Dai",
        ...     network="1",
        ... )
        >>> contract.address
        '0x6b175474e89094c44da98b954eedeac495271d0f'
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    address: str = Field(
        ...,
        description="Canonical lower-case contract address",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Contract name used for generated identifiers",
    )
    network: str = Field(
        ...,
        min_length=1,
        description="Network identifier (chain id or slug)",
    )
    abi_path: str | None = Field(
        default=None,
        description="Optional local ABI file relative to the project root",
    )
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the contract was added to the project",
    )

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, value: object) -> str:
        # Unquoted hex in YAML loads as an integer.
        if isinstance(value, int) and not isinstance(value, bool):
            value = f"0x{value:040x}"
        if not isinstance(value, str):
            raise ValueError(f"Contract address must be a string, got {type(value).__name__}")
        return normalize_address(value)

    @field_validator("network", mode="before")
    @classmethod
    def _coerce_network(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped or not any(ch.isalpha() for ch in stripped):
            raise ValueError(f"Contract name must contain a letter: {value!r}")
        return stripped

    @property
    def origin(self) -> str:
        """Origin label used in manifests and reports."""
        return f"{self.name}@{self.network}:{self.address}"

    def matches(self, address: str, network: str | None = None) -> bool:
        """Check whether this contract is the one at address (on network).

        Raises:
            ValueError: If address is not a valid contract address.
        """
        if normalize_address(address) != self.address:
            return False
        return network is None or network == self.network


__all__ = ["ModelContractConfig"]
