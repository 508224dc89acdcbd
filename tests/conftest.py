# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Global test fixtures for chaingen.

Provides sample ABIs, an entity schema and a ready-to-generate project
directory. Everything is written to pytest's ``tmp_path``; no fixture
touches the network or the user's ABI cache.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from chaingen.abi import AbiParser
from chaingen.enums import EnumAbiSource
from chaingen.mapping import clear_type_cache
from chaingen.models import (
    CONFIG_FILE_NAME,
    ModelAbiDefinition,
    ModelCodegenSettings,
    ModelContractConfig,
    ModelProjectConfig,
)
from chaingen.utils import hash_json

TOKEN_ADDRESS = "0x6b175474e89094c44da98b954eedeac495271d0f"
POOL_ADDRESS = "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640"

TOKEN_ABI: list[dict[str, object]] = [
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
    {
        "type": "event",
        "name": "Approval",
        "anonymous": False,
        "inputs": [
            {"name": "owner", "type": "address", "indexed": True},
            {"name": "spender", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {"type": "constructor", "inputs": []},
]

POOL_ABI: list[dict[str, object]] = [
    {
        "type": "event",
        "name": "Swap",
        "inputs": [
            {"name": "sender", "type": "address", "indexed": True},
            {"name": "amount0", "type": "int256", "indexed": False},
            {"name": "tick", "type": "int24", "indexed": False},
            {"name": "memo", "type": "string", "indexed": True},
        ],
    },
    {
        "type": "function",
        "name": "positions",
        "stateMutability": "view",
        "inputs": [{"name": "key", "type": "bytes32"}],
        "outputs": [
            {
                "name": "position",
                "type": "tuple",
                "components": [
                    {"name": "liquidity", "type": "uint128"},
                    {"name": "owner", "type": "address"},
                ],
            },
            {"name": "tokensOwed", "type": "uint128[2]"},
        ],
    },
]

SAMPLE_SCHEMA = '''
"""A token account."""
type Account @entity {
  id: ID!
  balance: BigInt!
  transfers: [Transfer!]! @derivedFrom(field: "sender")
}

type Transfer @entity(immutable: true) {
  id: ID!
  sender: Account!
  from: String!
  value: BigDecimal!
  memo: String
  meta: TransferMeta
}

type TransferMeta {
  blockNumber: Int8!
  timestamp: Timestamp!
}
'''


@pytest.fixture(autouse=True)
def _clear_type_cache() -> Iterator[None]:
    yield
    clear_type_cache()


@pytest.fixture
def token_address() -> str:
    return TOKEN_ADDRESS


@pytest.fixture
def pool_address() -> str:
    return POOL_ADDRESS


@pytest.fixture
def token_abi() -> list[dict[str, object]]:
    return json.loads(json.dumps(TOKEN_ABI))


@pytest.fixture
def pool_abi() -> list[dict[str, object]]:
    return json.loads(json.dumps(POOL_ABI))


@pytest.fixture
def sample_schema() -> str:
    return SAMPLE_SCHEMA


@pytest.fixture
def codegen_settings(tmp_path: Path) -> ModelCodegenSettings:
    return ModelCodegenSettings(abi_cache_dir=str(tmp_path / "abi-cache"))


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project directory with two contracts backed by local ABI files."""
    root = tmp_path / "project"
    (root / "abis").mkdir(parents=True)
    (root / "abis" / "token.json").write_text(json.dumps(TOKEN_ABI), encoding="utf-8")
    (root / "abis" / "pool.json").write_text(
        json.dumps({"contractName": "Pool", "abi": POOL_ABI}), encoding="utf-8"
    )
    (root / "schema.graphql").write_text(SAMPLE_SCHEMA, encoding="utf-8")

    project = ModelProjectConfig(
        name="sample-processor",
        contracts=[
            ModelContractConfig(
                address=TOKEN_ADDRESS,
                name="Token",
                network="1",
                abi_path="abis/token.json",
            ),
            ModelContractConfig(
                address=POOL_ADDRESS,
                name="Pool",
                network="1",
                abi_path="abis/pool.json",
            ),
        ],
        codegen=ModelCodegenSettings(abi_cache_dir=str(tmp_path / "abi-cache")),
    )
    project.save(root / CONFIG_FILE_NAME)
    return root


@pytest.fixture
def project_config(project_dir: Path) -> ModelProjectConfig:
    return ModelProjectConfig.load(project_dir / CONFIG_FILE_NAME, apply_env=False)


def _definition(abi: list[dict[str, object]], address: str) -> ModelAbiDefinition:
    events, functions = AbiParser().parse(abi)
    return ModelAbiDefinition(
        address=address,
        network="1",
        abi=abi,
        events=tuple(events),
        functions=tuple(functions),
        fetched_at=datetime(2026, 1, 5, 10, 0, tzinfo=UTC),
        content_hash=hash_json(abi),
        source=EnumAbiSource.LOCAL_FILE,
    )


@pytest.fixture
def token_contract() -> ModelContractConfig:
    return ModelContractConfig(address=TOKEN_ADDRESS, name="Token", network="1")


@pytest.fixture
def pool_contract() -> ModelContractConfig:
    return ModelContractConfig(address=POOL_ADDRESS, name="Pool", network="1")


@pytest.fixture
def token_definition(token_abi: list[dict[str, object]]) -> ModelAbiDefinition:
    return _definition(token_abi, TOKEN_ADDRESS)


@pytest.fixture
def pool_definition(pool_abi: list[dict[str, object]]) -> ModelAbiDefinition:
    return _definition(pool_abi, POOL_ADDRESS)
