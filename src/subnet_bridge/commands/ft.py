"""
FT use case - the fungible-token counterpart of the NFT commands.

Same environment variables as the NFT commands; amounts replace asset ids.
"""

from __future__ import annotations

from typing import Optional

import click

from ..calls import (
    L1_SUBNET_CONTRACT,
    L2_SUBNET_CONTRACT,
    deposit_ft_asset,
    ft_withdraw,
    get_balance,
    register_ft_contract,
)
from ..chain.tx import PostConditionMode
from ..errors import BridgeError
from .common import (
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

amount_option = click.option(
    "--amount",
    default="1",
    show_default=True,
    type=str,
    help="Token amount (base units)",
)


@click.command("register-ft")
@nonce_argument
@click.option("--subnet-contract", default=L1_SUBNET_CONTRACT, show_default=True)
@click.option("--ft-contract-name", default="simple-ft-l1", show_default=True)
@click.option("--subnet-ft-contract-name", default="simple-ft-l2", show_default=True)
@fee_option
@l1_rpc_option
@verbose_option
def register_ft(
    nonce: Optional[str],
    subnet_contract: str,
    ft_contract_name: str,
    subnet_ft_contract_name: str,
    fee: str,
    rpc_url: str,
    verbose: bool,
) -> None:
    """Pair USER_ADDR's L1 token contract with its subnet contract (miner key)."""
    try:
        user_addr = require_env("USER_ADDR")
        call = register_ft_contract(
            f"{user_addr}.{ft_contract_name}",
            f"{user_addr}.{subnet_ft_contract_name}",
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


@click.command("deposit-ft")
@nonce_argument
@amount_option
@click.option("--subnet-contract", default=L1_SUBNET_CONTRACT, show_default=True)
@click.option("--ft-contract-name", default="simple-ft-l1", show_default=True)
@fee_option
@l1_rpc_option
@verbose_option
def deposit_ft(
    nonce: Optional[str],
    amount: str,
    subnet_contract: str,
    ft_contract_name: str,
    fee: str,
    rpc_url: str,
    verbose: bool,
) -> None:
    """Deposit tokens held by USER_ADDR from L1 into the subnet."""
    try:
        user_addr = require_env("USER_ADDR")
        call = deposit_ft_asset(
            f"{user_addr}.{ft_contract_name}",
            parse_uint(amount, "Amount"),
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


@click.command("withdraw-ft-l2")
@nonce_argument
@amount_option
@click.option("--subnet-contract", default=L2_SUBNET_CONTRACT, show_default=True)
@click.option("--ft-contract-name", default="simple-ft-l2", show_default=True)
@fee_option
@l2_rpc_option
@verbose_option
def withdraw_ft_l2(
    nonce: Optional[str],
    amount: str,
    subnet_contract: str,
    ft_contract_name: str,
    fee: str,
    rpc_url: Optional[str],
    chain_id: Optional[str],
    verbose: bool,
) -> None:
    """Withdraw tokens on the subnet to ALT_USER_ADDR (signed with ALT_USER_KEY)."""
    try:
        contract_addr = require_env("USER_ADDR")
        recipient = require_env("ALT_USER_ADDR")
        call = ft_withdraw(
            f"{contract_addr}.{ft_contract_name}",
            parse_uint(amount, "Amount"),
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


@click.command("ft-balance")
@click.option("--owner", default=None, help="Account to query (default: ALT_USER_ADDR)")
@click.option("--ft-contract-name", default="simple-ft-l1", show_default=True)
@l1_rpc_option
@verbose_option
def ft_balance(owner: Optional[str], ft_contract_name: str, rpc_url: str, verbose: bool) -> None:
    """Print a token balance on L1 (read-only, caller ALT_USER_ADDR)."""
    try:
        contract_addr = require_env("USER_ADDR")
        caller = require_env("ALT_USER_ADDR")
        call = get_balance(f"{contract_addr}.{ft_contract_name}", owner or caller, caller)
        query_read_only(call, rpc_url, verbose=verbose)
    except BridgeError as exc:
        fail(exc)
