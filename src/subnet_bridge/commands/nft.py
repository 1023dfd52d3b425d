"""
NFT use case - register, deposit, withdraw and verify an NFT across
L1 and a subnet.

Environment:
  AUTH_SUBNET_MINER_KEY  key allowed to register asset contracts
  USER_KEY / USER_ADDR   depositor (also deployer of the NFT contracts)
  ALT_USER_KEY / ALT_USER_ADDR  second account (L2 withdrawer, query caller)
  SUBNET_URL             subnet node RPC URL (withdraw-nft-l2)

Order is up to the operator: register, deposit, then withdraw on L2.
"""

from __future__ import annotations

from typing import Optional

import click

from ..calls import (
    DEFAULT_DEPOSIT_FUNCTION,
    L1_SUBNET_ALPHA_CONTRACT,
    L1_SUBNET_CONTRACT,
    L2_SUBNET_CONTRACT,
    deposit_nft_asset,
    get_owner,
    nft_withdraw,
    register_nft_contract,
)
from ..chain.tx import PostConditionMode
from ..errors import BridgeError
from .common import (
    DEFAULT_ASSET_ID,
    fail,
    fee_option,
    l1_rpc_option,
    l2_rpc_option,
    network_for,
    nonce_argument,
    parse_nonce,
    parse_uint,
    query_read_only,
    require_env,
    submit_contract_call,
    verbose_option,
)

asset_id_option = click.option(
    "--asset-id",
    default=str(DEFAULT_ASSET_ID),
    show_default=True,
    type=str,
    help="NFT identifier",
)


@click.command("register-nft")
@nonce_argument
@click.option("--subnet-contract", default=L1_SUBNET_ALPHA_CONTRACT, show_default=True)
@click.option("--nft-contract-name", default="simple-nft-l1", show_default=True)
@click.option("--deposit-function", default=DEFAULT_DEPOSIT_FUNCTION, show_default=True)
@fee_option
@l1_rpc_option
@verbose_option
def register_nft(
    nonce: Optional[str],
    subnet_contract: str,
    nft_contract_name: str,
    deposit_function: str,
    fee: str,
    rpc_url: str,
    verbose: bool,
) -> None:
    """Register USER_ADDR's L1 NFT contract with the subnet (miner key)."""
    try:
        user_addr = require_env("USER_ADDR")
        call = register_nft_contract(
            f"{user_addr}.{nft_contract_name}",
            deposit_function,
            subnet_contract=subnet_contract,
        )
        submit_contract_call(
            call,
            key_env="AUTH_SUBNET_MINER_KEY",
            network=network_for(rpc_url),
            fee=parse_uint(fee, "Fee"),
            nonce=parse_nonce(nonce),
            post_condition_mode=PostConditionMode.DENY,
            verbose=verbose,
        )
    except BridgeError as exc:
        fail(exc)


@click.command("deposit-nft")
@nonce_argument
@asset_id_option
@click.option("--subnet-contract", default=L1_SUBNET_CONTRACT, show_default=True)
@click.option("--nft-contract-name", default="simple-nft-l1", show_default=True)
@fee_option
@l1_rpc_option
@verbose_option
def deposit_nft(
    nonce: Optional[str],
    asset_id: str,
    subnet_contract: str,
    nft_contract_name: str,
    fee: str,
    rpc_url: str,
    verbose: bool,
) -> None:
    """Deposit an NFT owned by USER_ADDR from L1 into the subnet."""
    try:
        user_addr = require_env("USER_ADDR")
        call = deposit_nft_asset(
            f"{user_addr}.{nft_contract_name}",
            parse_uint(asset_id, "Asset id"),
            user_addr,
            subnet_contract=subnet_contract,
        )
        submit_contract_call(
            call,
            key_env="USER_KEY",
            network=network_for(rpc_url),
            fee=parse_uint(fee, "Fee"),
            nonce=parse_nonce(nonce),
            verbose=verbose,
        )
    except BridgeError as exc:
        fail(exc)


@click.command("withdraw-nft-l2")
@nonce_argument
@asset_id_option
@click.option("--subnet-contract", default=L2_SUBNET_CONTRACT, show_default=True)
@click.option("--nft-contract-name", default="simple-nft-l2", show_default=True)
@fee_option
@l2_rpc_option
@verbose_option
def withdraw_nft_l2(
    nonce: Optional[str],
    asset_id: str,
    subnet_contract: str,
    nft_contract_name: str,
    fee: str,
    rpc_url: Optional[str],
    chain_id: Optional[str],
    verbose: bool,
) -> None:
    """Withdraw an NFT on the subnet to ALT_USER_ADDR (signed with ALT_USER_KEY)."""
    try:
        contract_addr = require_env("USER_ADDR")
        recipient = require_env("ALT_USER_ADDR")
        call = nft_withdraw(
            f"{contract_addr}.{nft_contract_name}",
            parse_uint(asset_id, "Asset id"),
            recipient,
            subnet_contract=subnet_contract,
        )
        submit_contract_call(
            call,
            key_env="ALT_USER_KEY",
            network=network_for(rpc_url, chain_id),
            fee=parse_uint(fee, "Fee"),
            nonce=parse_nonce(nonce),
            verbose=verbose,
        )
    except BridgeError as exc:
        fail(exc)


@click.command()
@asset_id_option
@click.option("--nft-contract-name", default="simple-nft-l1", show_default=True)
@l1_rpc_option
@verbose_option
def verify(asset_id: str, nft_contract_name: str, rpc_url: str, verbose: bool) -> None:
    """Print the owner of an NFT on L1 (read-only, caller ALT_USER_ADDR)."""
    try:
        contract_addr = require_env("USER_ADDR")
        caller = require_env("ALT_USER_ADDR")
        call = get_owner(
            f"{contract_addr}.{nft_contract_name}", parse_uint(asset_id, "Asset id"), caller
        )
        query_read_only(call, rpc_url, verbose=verbose)
    except BridgeError as exc:
        fail(exc)
