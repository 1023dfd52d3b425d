"""
Transaction Builder - Build, sign, and serialize contract-call transactions.

Only the single-sig, standard-authorization, contract-call shape is
supported. Signing uses eth-keys (secp256k1); hashes use pycryptodome.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Sequence

from ..clarity.address import parse_address
from ..clarity.values import (
    ByteReader,
    ClarityValue,
    read_address,
    read_name,
    read_value,
    validate_clarity_name,
    validate_contract_name,
)
from ..errors import AddressError, ClarityValueError, ConstructionError
from ..identity.keys import StacksPrivateKey, parse_private_key, sign_hash
from ..utils import sha512_256, u8, u32, u64
from .network import Network, testnet
from .rpc import NodeClient

UINT64_MAX = 2**64 - 1
EMPTY_SIGNATURE = b"\x00" * 65


class AnchorMode(IntEnum):
    ON_CHAIN_ONLY = 0x01
    OFF_CHAIN_ONLY = 0x02
    ANY = 0x03


class PostConditionMode(IntEnum):
    ALLOW = 0x01
    DENY = 0x02


class AuthType(IntEnum):
    STANDARD = 0x04
    SPONSORED = 0x05


class HashMode(IntEnum):
    P2PKH = 0x00


class KeyEncoding(IntEnum):
    COMPRESSED = 0x00
    UNCOMPRESSED = 0x01


class PayloadType(IntEnum):
    CONTRACT_CALL = 0x02


@dataclass(frozen=True)
class ContractCallRequest:
    """
    Everything needed to build one signed contract call.

    Attributes:
        contract_address: Issuer address of the target contract
        contract_name: Target contract name
        function_name: Public function to call
        function_args: Arguments in declared order
        sender_key: Hex private key of the sender
        fee: Fee in micro-STX
        nonce: Sender account nonce
        network: Target network
        anchor_mode: Block anchoring preference
        post_condition_mode: ALLOW or DENY unchecked asset movement
    """
    contract_address: str
    contract_name: str
    function_name: str
    function_args: Sequence[ClarityValue]
    sender_key: str
    fee: int
    nonce: int
    network: Network = field(default_factory=testnet)
    anchor_mode: AnchorMode = AnchorMode.ANY
    post_condition_mode: PostConditionMode = PostConditionMode.DENY

    @property
    def contract_id(self) -> str:
        return f"{self.contract_address}.{self.contract_name}"


@dataclass(frozen=True)
class SingleSigSpendingCondition:
    signer: bytes
    nonce: int
    fee: int
    key_encoding: KeyEncoding
    signature: bytes = EMPTY_SIGNATURE
    hash_mode: HashMode = HashMode.P2PKH

    def serialize(self) -> bytes:
        return (
            u8(self.hash_mode)
            + self.signer
            + u64(self.nonce)
            + u64(self.fee)
            + u8(self.key_encoding)
            + self.signature
        )

    def cleared(self) -> "SingleSigSpendingCondition":
        return replace(self, nonce=0, fee=0, signature=EMPTY_SIGNATURE)


@dataclass(frozen=True)
class ContractCallPayload:
    contract_address: str
    contract_name: str
    function_name: str
    function_args: tuple[ClarityValue, ...]

    def serialize(self) -> bytes:
        version, hash_bytes = parse_address(self.contract_address)
        contract_name = self.contract_name.encode("ascii")
        function_name = self.function_name.encode("ascii")
        return (
            u8(PayloadType.CONTRACT_CALL)
            + u8(version)
            + hash_bytes
            + u8(len(contract_name))
            + contract_name
            + u8(len(function_name))
            + function_name
            + u32(len(self.function_args))
            + b"".join(arg.encode() for arg in self.function_args)
        )


@dataclass(frozen=True)
class StacksTransaction:
    version: int
    chain_id: int
    spending_condition: SingleSigSpendingCondition
    anchor_mode: AnchorMode
    post_condition_mode: PostConditionMode
    payload: ContractCallPayload
    auth_type: AuthType = AuthType.STANDARD

    def serialize(self) -> bytes:
        return (
            u8(self.version)
            + u32(self.chain_id)
            + u8(self.auth_type)
            + self.spending_condition.serialize()
            + u8(self.anchor_mode)
            + u8(self.post_condition_mode)
            + u32(0)  # post-conditions
            + self.payload.serialize()
        )

    def txid(self) -> str:
        return sha512_256(self.serialize()).hex()


def _require_u64(value: object, name: str) -> int:
    # bool is an int subclass; reject it along with strings and floats
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConstructionError(f"{name} must be an integer, got {type(value).__name__}: {value!r}")
    if not 0 <= value <= UINT64_MAX:
        raise ConstructionError(f"{name} out of range: {value}")
    return value


def _validate_request(request: ContractCallRequest) -> None:
    _require_u64(request.nonce, "nonce")
    _require_u64(request.fee, "fee")
    try:
        parse_address(request.contract_address)
        validate_contract_name(request.contract_name)
        validate_clarity_name(request.function_name)
    except (AddressError, ClarityValueError) as exc:
        raise ConstructionError(f"Invalid contract identifier: {exc}") from exc
    for position, arg in enumerate(request.function_args):
        if not isinstance(arg, ClarityValue):
            raise ConstructionError(
                f"Argument {position} of {request.function_name} is not a Clarity value: {arg!r}"
            )


def presign_sighash(sighash: bytes, auth_type: AuthType, fee: int, nonce: int) -> bytes:
    return sha512_256(sighash + u8(auth_type) + u64(fee) + u64(nonce))


def sign_transaction(tx: StacksTransaction, key: StacksPrivateKey) -> StacksTransaction:
    """
    Sign the origin spending condition of a transaction.

    The initial sighash is the txid of the transaction with nonce, fee and
    signature cleared; the signature covers the presign hash derived from it.
    """
    condition = tx.spending_condition
    if condition.signer != key.public_key_hash:
        raise ConstructionError("Private key does not match the transaction signer")

    initial = replace(tx, spending_condition=condition.cleared())
    sighash = bytes.fromhex(initial.txid())
    presign = presign_sighash(sighash, tx.auth_type, condition.fee, condition.nonce)
    signature = sign_hash(key, presign)

    return replace(tx, spending_condition=replace(condition, signature=signature))


def make_unsigned_contract_call(request: ContractCallRequest) -> StacksTransaction:
    """
    Build a contract call transaction (unsigned).

    Raises:
        ConstructionError: On malformed arguments, key, contract identifier,
            nonce or fee
    """
    _validate_request(request)
    key = parse_private_key(request.sender_key)
    network = request.network

    condition = SingleSigSpendingCondition(
        signer=key.public_key_hash,
        nonce=request.nonce,
        fee=request.fee,
        key_encoding=KeyEncoding.COMPRESSED if key.compressed else KeyEncoding.UNCOMPRESSED,
    )
    payload = ContractCallPayload(
        contract_address=request.contract_address,
        contract_name=request.contract_name,
        function_name=request.function_name,
        function_args=tuple(request.function_args),
    )
    return StacksTransaction(
        version=network.transaction_version,
        chain_id=network.chain_id,
        spending_condition=condition,
        anchor_mode=request.anchor_mode,
        post_condition_mode=request.post_condition_mode,
        payload=payload,
    )


def make_contract_call(request: ContractCallRequest) -> StacksTransaction:
    """Build and sign a contract call transaction."""
    tx = make_unsigned_contract_call(request)
    return sign_transaction(tx, parse_private_key(request.sender_key))


def deserialize_transaction(raw: bytes) -> StacksTransaction:
    """
    Decode a serialized single-sig contract-call transaction.

    Raises:
        ConstructionError: If the bytes hold any other transaction shape
    """
    reader = ByteReader(raw)
    try:
        version = reader.read_u8()
        chain_id = reader.read_u32()
        auth_type = AuthType(reader.read_u8())
        if auth_type != AuthType.STANDARD:
            raise ConstructionError("Only standard authorization is supported")
        hash_mode = HashMode(reader.read_u8())
        condition = SingleSigSpendingCondition(
            signer=reader.read(20),
            nonce=int.from_bytes(reader.read(8), "big"),
            fee=int.from_bytes(reader.read(8), "big"),
            key_encoding=KeyEncoding(reader.read_u8()),
            signature=reader.read(65),
            hash_mode=hash_mode,
        )
        anchor_mode = AnchorMode(reader.read_u8())
        post_condition_mode = PostConditionMode(reader.read_u8())
        if reader.read_u32() != 0:
            raise ConstructionError("Post-conditions are not supported")
        if reader.read_u8() != PayloadType.CONTRACT_CALL:
            raise ConstructionError("Only contract-call payloads are supported")
        contract_address = read_address(reader)
        contract_name = read_name(reader)
        function_name = read_name(reader)
        args = tuple(read_value(reader) for _ in range(reader.read_u32()))
    except ValueError as exc:
        # unknown enum byte
        raise ConstructionError(f"Malformed transaction: {exc}") from exc

    if reader.pos != len(raw):
        raise ConstructionError("Trailing bytes after transaction")

    return StacksTransaction(
        version=version,
        chain_id=chain_id,
        spending_condition=condition,
        anchor_mode=anchor_mode,
        post_condition_mode=post_condition_mode,
        payload=ContractCallPayload(contract_address, contract_name, function_name, args),
        auth_type=auth_type,
    )


def send_contract_call(request: ContractCallRequest, client: NodeClient) -> str:
    """
    Build, sign, and broadcast a contract call.

    Convenience function combining build + sign + send.

    Returns:
        Transaction id reported by the node
    """
    tx = make_contract_call(request)
    return client.broadcast_transaction(tx.serialize())
