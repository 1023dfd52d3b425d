"""
Network configuration.

A network ties a node URL to the chain id, transaction version and
address version that transactions sent to it must carry.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..clarity.address import AddressVersion
from ..errors import ConstructionError

DEFAULT_RPC_URL = "http://localhost:3999"  # local mocknet node
MAINNET_RPC_URL = "https://api.mainnet.hiro.so"
TESTNET_RPC_URL = "https://api.testnet.hiro.so"

CHAIN_ID_MAINNET = 0x00000001
CHAIN_ID_TESTNET = 0x80000000
CHAIN_ID_MAX = 0xFFFFFFFF

TX_VERSION_MAINNET = 0x00
TX_VERSION_TESTNET = 0x80


@dataclass(frozen=True)
class Network:
    url: str
    chain_id: int
    transaction_version: int
    address_version: int

    def __post_init__(self) -> None:
        # chain ids are serialized as u32
        if not 0 <= self.chain_id <= CHAIN_ID_MAX:
            raise ConstructionError(f"Chain id out of range: {self.chain_id:#x}")


def get_rpc_url() -> str:
    """Get the node URL from environment or default."""
    return os.environ.get("STACKS_NODE_URL", DEFAULT_RPC_URL)


def get_chain_id() -> int:
    """Get the chain ID from environment or default. Accepts decimal or 0x-hex."""
    raw = os.environ.get("CHAIN_ID")
    if not raw:
        return CHAIN_ID_TESTNET
    try:
        return int(raw, 0)
    except ValueError as exc:
        raise ConstructionError(f"Invalid CHAIN_ID: {raw!r}") from exc


def testnet(url: Optional[str] = None, chain_id: Optional[int] = None) -> Network:
    return Network(
        url=(url or get_rpc_url()).rstrip("/"),
        chain_id=chain_id if chain_id is not None else get_chain_id(),
        transaction_version=TX_VERSION_TESTNET,
        address_version=AddressVersion.TESTNET_SINGLE_SIG,
    )


def mainnet(url: Optional[str] = None) -> Network:
    return Network(
        url=(url or MAINNET_RPC_URL).rstrip("/"),
        chain_id=CHAIN_ID_MAINNET,
        transaction_version=TX_VERSION_MAINNET,
        address_version=AddressVersion.MAINNET_SINGLE_SIG,
    )


def mocknet() -> Network:
    return testnet(DEFAULT_RPC_URL, CHAIN_ID_TESTNET)
