"""Shared fixtures: devnet keys and an in-memory node."""

from __future__ import annotations

from typing import Optional

import pytest

from subnet_bridge.chain.rpc import ReadOnlyCall
from subnet_bridge.chain.tx import deserialize_transaction
from subnet_bridge.clarity.address import AddressVersion, c32_address
from subnet_bridge.clarity.values import (
    NONE,
    ClarityValue,
    OptionalSome,
    ResponseErr,
    ResponseOk,
    UIntValue,
)
from subnet_bridge.errors import ReadOnlyCallError, TransactionRejectedError
from subnet_bridge.identity.keys import get_address

# Devnet deployer (compressed key) and its well-known address
DEPLOYER_KEY = "753b7cc01a1a2e86221266a154af739463fce51219d97e4f856cd7200c3bd2a601"
DEPLOYER_ADDR = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"

ALT_KEY = "ab" * 32 + "01"
MINER_KEY = "cd" * 32 + "01"

BOOT_ADDR = "ST000000000000000000002AMW42H"


class FakeNode:
    """
    In-memory NodeClient.

    Tracks account nonces, applies NFT deposits / withdrawals and FT
    deposits so read-only queries see their effects.
    """

    def __init__(self) -> None:
        self.nonces: dict[str, int] = {}
        self.owners: dict[tuple[str, int], ClarityValue] = {}
        self.balances: dict[tuple[str, str], int] = {}
        self.broadcasts: list = []
        self.read_calls: list[ReadOnlyCall] = []

    def get_nonce(self, address: str) -> int:
        return self.nonces.get(address, 0)

    def broadcast_transaction(self, raw_tx: bytes) -> str:
        tx = deserialize_transaction(raw_tx)
        condition = tx.spending_condition
        sender = c32_address(AddressVersion.TESTNET_SINGLE_SIG, condition.signer)

        expected = self.nonces.get(sender, 0)
        if condition.nonce < expected:
            raise TransactionRejectedError(
                reason="BadNonce",
                reason_data={"expected": expected, "actual": condition.nonce},
            )
        self.nonces[sender] = condition.nonce + 1
        self.broadcasts.append(tx)

        payload = tx.payload
        args = payload.function_args
        if payload.function_name == "deposit-nft-asset":
            self.owners[(args[0].contract_id, args[1].value)] = args[2]
        elif payload.function_name == "nft-withdraw?":
            self.owners.pop((args[0].contract_id, args[1].value), None)
        elif payload.function_name == "deposit-ft-asset":
            key = (args[0].contract_id, args[2].address)
            self.balances[key] = self.balances.get(key, 0) + args[1].value

        return tx.txid()

    def call_read_only(self, call: ReadOnlyCall) -> ClarityValue:
        self.read_calls.append(call)
        contract_id = f"{call.contract_address}.{call.contract_name}"
        if call.function_name == "get-owner":
            owner: Optional[ClarityValue] = self.owners.get(
                (contract_id, call.function_args[0].value)
            )
            return ResponseOk(OptionalSome(owner) if owner else NONE)
        if call.function_name == "get-balance":
            owner_addr = call.function_args[0].address
            return ResponseOk(UIntValue(self.balances.get((contract_id, owner_addr), 0)))
        if call.function_name == "always-err":
            return ResponseErr(UIntValue(1))
        raise ReadOnlyCallError(f"Unknown function {call.function_name}")


@pytest.fixture()
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def alt_addr() -> str:
    return get_address(ALT_KEY, AddressVersion.TESTNET_SINGLE_SIG)


@pytest.fixture()
def miner_addr() -> str:
    return get_address(MINER_KEY, AddressVersion.TESTNET_SINGLE_SIG)


@pytest.fixture()
def deployer_key() -> str:
    return DEPLOYER_KEY


@pytest.fixture()
def alt_key() -> str:
    return ALT_KEY


@pytest.fixture()
def miner_key() -> str:
    return MINER_KEY
