__all__ = [
    # Errors
    "BridgeError",
    "ConstructionError",
    "AddressError",
    "ClarityValueError",
    "InvalidKeyError",
    "NetworkError",
    "RejectedError",
    "TransactionRejectedError",
    "ReadOnlyCallError",
    # Clarity values
    "ClarityValue",
    "IntValue",
    "UIntValue",
    "Buffer",
    "Bool",
    "StandardPrincipal",
    "ContractPrincipal",
    "ResponseOk",
    "ResponseErr",
    "OptionalNone",
    "OptionalSome",
    "ListValue",
    "TupleValue",
    "StringAscii",
    "StringUtf8",
    "principal",
    "serialize",
    "deserialize",
    "cv_to_string",
    # Addresses
    "c32_address",
    "parse_address",
    # Network
    "Network",
    "testnet",
    "mainnet",
    "mocknet",
    # Transactions
    "AnchorMode",
    "PostConditionMode",
    "ContractCallRequest",
    "StacksTransaction",
    "make_contract_call",
    "send_contract_call",
    # Node client
    "NodeClient",
    "HttpNodeClient",
    "ReadOnlyCall",
    # Identity
    "load_private_key",
    "parse_private_key",
    "get_address",
]

from .errors import (
    AddressError,
    BridgeError,
    ClarityValueError,
    ConstructionError,
    InvalidKeyError,
    NetworkError,
    ReadOnlyCallError,
    RejectedError,
    TransactionRejectedError,
)
from .clarity.address import c32_address, parse_address
from .clarity.values import (
    Bool,
    Buffer,
    ClarityValue,
    ContractPrincipal,
    IntValue,
    ListValue,
    OptionalNone,
    OptionalSome,
    ResponseErr,
    ResponseOk,
    StandardPrincipal,
    StringAscii,
    StringUtf8,
    TupleValue,
    UIntValue,
    cv_to_string,
    deserialize,
    principal,
    serialize,
)
from .chain.network import Network, mainnet, mocknet, testnet
from .chain.rpc import HttpNodeClient, NodeClient, ReadOnlyCall
from .chain.tx import (
    AnchorMode,
    ContractCallRequest,
    PostConditionMode,
    StacksTransaction,
    make_contract_call,
    send_contract_call,
)
from .identity.keys import get_address, load_private_key, parse_private_key
