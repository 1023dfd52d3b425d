"""Tests for c32check addresses."""

from __future__ import annotations

import pytest

from subnet_bridge.clarity.address import (
    AddressVersion,
    c32_address,
    c32_decode,
    c32_encode,
    parse_address,
)
from subnet_bridge.errors import AddressError

ZERO_HASH = b"\x00" * 20


class TestC32:
    def test_encode_keeps_leading_zero_bytes(self) -> None:
        assert c32_encode(b"\x00\x01") == "01"
        assert c32_encode(b"") == ""

    def test_decode_normalizes_lookalikes(self) -> None:
        assert c32_decode("O1") == c32_decode("01")
        assert c32_decode("L") == c32_decode("1") == c32_decode("I")

    def test_decode_rejects_invalid_character(self) -> None:
        with pytest.raises(AddressError):
            c32_decode("U")


class TestAddress:
    def test_boot_addresses(self) -> None:
        assert c32_address(AddressVersion.TESTNET_SINGLE_SIG, ZERO_HASH) == "ST000000000000000000002AMW42H"
        assert c32_address(AddressVersion.MAINNET_SINGLE_SIG, ZERO_HASH) == "SP000000000000000000002Q6VF78"

    def test_parse_round_trip(self) -> None:
        address = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
        version, hash_bytes = parse_address(address)
        assert version == AddressVersion.TESTNET_SINGLE_SIG
        assert len(hash_bytes) == 20
        assert c32_address(version, hash_bytes) == address

    def test_parse_boot_address(self) -> None:
        assert parse_address("ST000000000000000000002AMW42H") == (26, ZERO_HASH)

    def test_bad_checksum(self) -> None:
        with pytest.raises(AddressError):
            parse_address("ST000000000000000000002AMW42J")

    @pytest.mark.parametrize("value", ["", "S", "XT000000000000000000002AMW42H", "ST0", "not-an-address"])
    def test_invalid_addresses(self, value: str) -> None:
        with pytest.raises(AddressError):
            parse_address(value)

    def test_version_out_of_range(self) -> None:
        with pytest.raises(AddressError):
            c32_address(32, ZERO_HASH)

    def test_hash_length(self) -> None:
        with pytest.raises(AddressError):
            c32_address(AddressVersion.TESTNET_SINGLE_SIG, b"\x00" * 19)
