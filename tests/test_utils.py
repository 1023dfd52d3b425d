"""Unit tests for hashing and byte helpers, and network configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from subnet_bridge.chain import network as networks
from subnet_bridge.chain.network import CHAIN_ID_TESTNET, DEFAULT_RPC_URL, get_chain_id, mainnet, mocknet
from subnet_bridge.errors import ConstructionError
from subnet_bridge.utils import hash160, sha512_256, strip_hex_prefix, u8, u32, u64


class TestHashes:
    def test_sha512_256_is_not_truncated_sha512(self) -> None:
        # FIPS 180-4 test vector
        assert sha512_256(b"abc").hex() == (
            "53048e2681941ef99b2e29b76b4c7dabe4c2d0c634fc6d46e0e2f13107e7af23"
        )

    def test_hash160_empty(self) -> None:
        assert hash160(b"").hex() == "b472a266d0bd89c13706a4132ccfb16f7c3b9fcb"


class TestBytes:
    def test_big_endian(self) -> None:
        assert u8(1) == b"\x01"
        assert u32(1) == b"\x00\x00\x00\x01"
        assert u64(256) == b"\x00" * 6 + b"\x01\x00"

    def test_strip_hex_prefix(self) -> None:
        assert strip_hex_prefix("0xab") == "ab"
        assert strip_hex_prefix("0Xab") == "ab"
        assert strip_hex_prefix("ab") == "ab"


class TestNetwork:
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}):
            os.environ.pop("STACKS_NODE_URL", None)
            os.environ.pop("CHAIN_ID", None)
            network = networks.testnet()
        assert network.url == DEFAULT_RPC_URL
        assert network.chain_id == CHAIN_ID_TESTNET
        assert network.transaction_version == 0x80

    def test_environment(self) -> None:
        with patch.dict(os.environ, {"STACKS_NODE_URL": "http://node:20443/", "CHAIN_ID": "0x12345678"}):
            network = networks.testnet()
        assert network.url == "http://node:20443"
        assert network.chain_id == 0x12345678

    def test_decimal_chain_id(self) -> None:
        with patch.dict(os.environ, {"CHAIN_ID": "2147483648"}):
            assert get_chain_id() == CHAIN_ID_TESTNET

    def test_bad_chain_id(self) -> None:
        with patch.dict(os.environ, {"CHAIN_ID": "subnet"}):
            with pytest.raises(ConstructionError):
                get_chain_id()

    def test_mainnet_and_mocknet(self) -> None:
        assert mainnet().transaction_version == 0x00
        assert mainnet().chain_id == 1
        assert mocknet().url == DEFAULT_RPC_URL

    @pytest.mark.parametrize("chain_id", [-1, 0x100000000])
    def test_chain_id_must_fit_u32(self, chain_id: int) -> None:
        with pytest.raises(ConstructionError, match="out of range"):
            networks.testnet("http://node", chain_id)

    def test_out_of_range_chain_id_env(self) -> None:
        with patch.dict(os.environ, {"CHAIN_ID": "0x100000000"}):
            with pytest.raises(ConstructionError):
                networks.testnet()
