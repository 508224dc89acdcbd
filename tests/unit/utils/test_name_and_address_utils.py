# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Tests for name conversion, address normalization and signature hashing."""

from __future__ import annotations

from pathlib import Path

import pytest

from chaingen.utils import (
    NameConverter,
    event_topic,
    function_selector,
    hash_file,
    hash_json,
    hash_text,
    normalize_address,
    to_checksum,
    write_text_atomic,
)


class TestNameConverter:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("ERC20Token", "erc20_token"),
            ("balanceOf", "balance_of"),
            ("uniswap-v3-pool", "uniswap_v3_pool"),
            ("NFTMarket", "nft_market"),
            ("Transfer", "transfer"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_to_snake_case(self, name: str, expected: str) -> None:
        assert NameConverter.to_snake_case(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("uniswap_v3-pool", "UniswapV3Pool"),
            ("swapExactTokens", "SwapExactTokens"),
            ("transfer", "Transfer"),
        ],
    )
    def test_to_pascal_case(self, name: str, expected: str) -> None:
        assert NameConverter.to_pascal_case(name) == expected

    def test_to_constant_case(self) -> None:
        assert NameConverter.to_constant_case("balanceOf") == "BALANCE_OF"

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("from", "from_"),
            ("transactionHash", "transaction_hash"),
            ("0x", "field_0x"),
            ("", "field_"),
        ],
    )
    def test_to_python_identifier(self, name: str, expected: str) -> None:
        assert NameConverter.to_python_identifier(name) == expected


class TestNormalizeAddress:
    def test_checksummed_address_is_lowercased(self) -> None:
        assert (
            normalize_address("0x6B175474E89094C44Da98b954EedeAC495271d0F")
            == "0x6b175474e89094c44da98b954eedeac495271d0f"
        )

    def test_uppercase_address_carries_no_checksum(self) -> None:
        assert (
            normalize_address("0x6B175474E89094C44DA98B954EEDEAC495271D0F")
            == "0x6b175474e89094c44da98b954eedeac495271d0f"
        )

    def test_bad_checksum_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="checksum mismatch"):
            normalize_address("0x6B175474E89094C44Da98b954EedeAC495271d0f")

    @pytest.mark.parametrize("address", ["", "0x1234", "6b175474e89094c44da98b954eedeac495271d0f"])
    def test_malformed_address_is_rejected(self, address: str) -> None:
        with pytest.raises(ValueError, match="Invalid contract address"):
            normalize_address(address)

    def test_to_checksum(self) -> None:
        assert (
            to_checksum("0x6b175474e89094c44da98b954eedeac495271d0f")
            == "0x6B175474E89094C44Da98b954EedeAC495271d0F"
        )


class TestSignatures:
    def test_transfer_topic(self) -> None:
        assert (
            event_topic("Transfer(address,address,uint256)")
            == "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        )

    def test_transfer_selector(self) -> None:
        assert function_selector("transfer(address,uint256)") == "0xa9059cbb"

    def test_balance_of_selector(self) -> None:
        assert function_selector("balanceOf(address)") == "0x70a08231"


class TestContentHash:
    def test_hash_json_ignores_key_order(self) -> None:
        assert hash_json({"a": 1, "b": [1, 2]}) == hash_json({"b": [1, 2], "a": 1})

    def test_hash_file_matches_hash_text(self, tmp_path: Path) -> None:
        path = tmp_path / "module.py"
        path.write_text("x = 1\n", encoding="utf-8")
        assert hash_file(path) == hash_text("x = 1\n")

    def test_hash_file_missing_returns_none(self, tmp_path: Path) -> None:
        assert hash_file(tmp_path / "missing.py") is None


class TestWriteTextAtomic:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.py"
        write_text_atomic(target, "print('hi')\n")
        assert target.read_text(encoding="utf-8") == "print('hi')\n"

    def test_replaces_existing_file_without_leftovers(self, tmp_path: Path) -> None:
        target = tmp_path / "out.py"
        target.write_text("old\n", encoding="utf-8")
        write_text_atomic(target, "new\n")
        assert target.read_text(encoding="utf-8") == "new\n"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.py"]

    def test_keeps_lf_newlines(self, tmp_path: Path) -> None:
        target = tmp_path / "out.py"
        write_text_atomic(target, "a\nb\n")
        assert target.read_bytes() == b"a\nb\n"
