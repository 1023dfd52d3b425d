"""
Subnet contract calls - argument assembly for the NFT and FT use cases.

Each builder returns the target contract, function name and the typed
arguments in the order the contract declares them. Nothing here touches
the network or a credential.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .chain.rpc import ReadOnlyCall
from .clarity.values import (
    NONE,
    ClarityValue,
    ContractPrincipal,
    StandardPrincipal,
    StringAscii,
    UIntValue,
    principal,
)
from .errors import ClarityValueError

# Devnet deployer of the L1 subnet contracts
DEVNET_DEPLOYER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
# Boot address on testnet-versioned chains; owns the L2 `subnet` contract
BOOT_ADDRESS = "ST000000000000000000002AMW42H"

L1_SUBNET_CONTRACT = f"{DEVNET_DEPLOYER}.subnet"
L1_SUBNET_ALPHA_CONTRACT = f"{DEVNET_DEPLOYER}.subnet-alpha"
L2_SUBNET_CONTRACT = f"{BOOT_ADDRESS}.subnet"

DEFAULT_DEPOSIT_FUNCTION = "subnet-deposit-nft-token"

# Declared parameter types of the subnet and asset contract functions
SIGNATURES: dict[str, tuple[type, ...]] = {
    "register-new-nft-contract": (ContractPrincipal, StringAscii),
    "deposit-nft-asset": (ContractPrincipal, UIntValue, StandardPrincipal),
    "nft-withdraw?": (ContractPrincipal, UIntValue, StandardPrincipal),
    "get-owner": (UIntValue,),
    "register-new-ft-contract": (ContractPrincipal, ContractPrincipal),
    "deposit-ft-asset": (ContractPrincipal, UIntValue, StandardPrincipal, ClarityValue),
    "ft-withdraw?": (ContractPrincipal, UIntValue, StandardPrincipal),
    "get-balance": (StandardPrincipal,),
}


@dataclass(frozen=True)
class ContractCall:
    contract_address: str
    contract_name: str
    function_name: str
    function_args: tuple[ClarityValue, ...]

    @property
    def contract_id(self) -> str:
        return f"{self.contract_address}.{self.contract_name}"


def parse_contract_id(contract_id: str) -> ContractPrincipal:
    """Parse ``ADDRESS.contract-name`` into a contract principal."""
    value = principal(contract_id)
    if not isinstance(value, ContractPrincipal):
        raise ClarityValueError(f"Expected ADDRESS.contract-name, got {contract_id!r}")
    return value


def _call(contract_id: str, function_name: str, args: Sequence[ClarityValue]) -> ContractCall:
    target = parse_contract_id(contract_id)
    return ContractCall(
        contract_address=target.address,
        contract_name=target.contract_name,
        function_name=function_name,
        function_args=tuple(args),
    )


def _read_only(
    contract_id: str,
    function_name: str,
    args: Sequence[ClarityValue],
    sender: str,
) -> ReadOnlyCall:
    target = parse_contract_id(contract_id)
    StandardPrincipal(sender)  # validate the caller address up front
    return ReadOnlyCall(
        contract_address=target.address,
        contract_name=target.contract_name,
        function_name=function_name,
        function_args=tuple(args),
        sender_address=sender,
    )


# ============ NFT ============


def register_nft_contract(
    nft_contract: str,
    deposit_function: str = DEFAULT_DEPOSIT_FUNCTION,
    subnet_contract: str = L1_SUBNET_ALPHA_CONTRACT,
) -> ContractCall:
    """Allow an L1 NFT contract to be deposited into the subnet."""
    return _call(
        subnet_contract,
        "register-new-nft-contract",
        [parse_contract_id(nft_contract), StringAscii(deposit_function)],
    )


def deposit_nft_asset(
    nft_contract: str,
    asset_id: int,
    sender: str,
    subnet_contract: str = L1_SUBNET_CONTRACT,
) -> ContractCall:
    """Move an NFT from L1 into the subnet."""
    return _call(
        subnet_contract,
        "deposit-nft-asset",
        [parse_contract_id(nft_contract), UIntValue(asset_id), StandardPrincipal(sender)],
    )


def nft_withdraw(
    nft_contract: str,
    asset_id: int,
    recipient: str,
    subnet_contract: str = L2_SUBNET_CONTRACT,
) -> ContractCall:
    """Start an NFT withdrawal on the subnet (L2 side)."""
    return _call(
        subnet_contract,
        "nft-withdraw?",
        [parse_contract_id(nft_contract), UIntValue(asset_id), StandardPrincipal(recipient)],
    )


def get_owner(nft_contract: str, asset_id: int, sender: str) -> ReadOnlyCall:
    return _read_only(nft_contract, "get-owner", [UIntValue(asset_id)], sender)


# ============ FT ============


def register_ft_contract(
    ft_contract: str,
    subnet_ft_contract: str,
    subnet_contract: str = L1_SUBNET_CONTRACT,
) -> ContractCall:
    """Pair an L1 fungible token contract with its subnet counterpart."""
    return _call(
        subnet_contract,
        "register-new-ft-contract",
        [parse_contract_id(ft_contract), parse_contract_id(subnet_ft_contract)],
    )


def deposit_ft_asset(
    ft_contract: str,
    amount: int,
    sender: str,
    subnet_contract: str = L1_SUBNET_CONTRACT,
) -> ContractCall:
    """Move fungible tokens from L1 into the subnet. The memo is always none."""
    return _call(
        subnet_contract,
        "deposit-ft-asset",
        [parse_contract_id(ft_contract), UIntValue(amount), StandardPrincipal(sender), NONE],
    )


def ft_withdraw(
    ft_contract: str,
    amount: int,
    recipient: str,
    subnet_contract: str = L2_SUBNET_CONTRACT,
) -> ContractCall:
    return _call(
        subnet_contract,
        "ft-withdraw?",
        [parse_contract_id(ft_contract), UIntValue(amount), StandardPrincipal(recipient)],
    )


def get_balance(ft_contract: str, owner: str, sender: str) -> ReadOnlyCall:
    return _read_only(ft_contract, "get-balance", [StandardPrincipal(owner)], sender)


def matches_signature(function_name: str, args: Sequence[ClarityValue]) -> bool:
    """Check argument count and variant types against SIGNATURES."""
    expected = SIGNATURES.get(function_name)
    if expected is None or len(expected) != len(args):
        return False
    return all(isinstance(arg, kind) for arg, kind in zip(args, expected))
