"""
Shared plumbing for the transaction and query commands.

Every command follows the same straight line: resolve configuration,
assemble the call, build and sign, submit (or evaluate), print one line.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, NoReturn, Optional

import click

from ..calls import ContractCall
from ..chain.network import DEFAULT_RPC_URL, Network, testnet
from ..chain.rpc import HttpNodeClient, NodeClient, ReadOnlyCall
from ..chain.tx import ContractCallRequest, PostConditionMode, make_contract_call
from ..clarity.values import ResponseOk, cv_to_string
from ..errors import BridgeError, ConstructionError
from ..identity.keys import get_address, load_private_key, parse_private_key

DEFAULT_FEE = 10_000
DEFAULT_ASSET_ID = 5


def make_client(rpc_url: str) -> NodeClient:
    return HttpNodeClient(rpc_url)


def require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ConstructionError(f"{name} must be set.")
    return value


def fail(exc: BridgeError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


def debug(verbose: bool, message: str) -> None:
    if verbose:
        click.echo(message, err=True)


# ============ Options ============


def nonce_argument(func: Callable) -> Callable:
    # numeric arguments are validated by parse_uint, not by click
    return click.argument("nonce", required=False, type=str)(func)


def fee_option(func: Callable) -> Callable:
    return click.option(
        "--fee",
        default=str(DEFAULT_FEE),
        show_default=True,
        type=str,
        help="Transaction fee in micro-STX",
    )(func)


def l1_rpc_option(func: Callable) -> Callable:
    return click.option(
        "--rpc-url",
        envvar="STACKS_NODE_URL",
        default=DEFAULT_RPC_URL,
        show_default=True,
        help="L1 node RPC URL",
    )(func)


def l2_rpc_option(func: Callable) -> Callable:
    func = click.option(
        "--chain-id",
        envvar="SUBNET_CHAIN_ID",
        default=None,
        type=str,
        help="Subnet chain id (decimal or 0x-hex; default: CHAIN_ID or 0x80000000)",
    )(func)
    return click.option(
        "--rpc-url",
        envvar="SUBNET_URL",
        default=None,
        help="Subnet node RPC URL",
    )(func)


def verbose_option(func: Callable) -> Callable:
    return click.option(
        "--verbose", "-v", is_flag=True, help="Print request details to stderr"
    )(func)


def network_for(rpc_url: Optional[str], chain_id: Optional[str] = None) -> Network:
    if not rpc_url:
        raise ConstructionError("Node RPC URL must be set (--rpc-url or SUBNET_URL).")
    if chain_id is None:
        return testnet(rpc_url)
    try:
        return testnet(rpc_url, int(chain_id, 0))
    except ValueError as exc:
        raise ConstructionError(f"Invalid chain id: {chain_id!r}") from exc


# ============ Argument parsing and nonce policy ============


def parse_uint(value: str, name: str) -> int:
    """Parse a numeric argument. No coercion: ``"5"`` only, never ``"5.0"`` or ``"0x5"``."""
    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        raise ConstructionError(f"{name} must be a non-negative integer, got {value!r}")
    return int(text)


def parse_nonce(value: Optional[str]) -> Optional[int]:
    """Parse the optional NONCE argument."""
    if value is None:
        return None
    return parse_uint(value, "Nonce")


def resolve_nonce(
    explicit: Optional[int],
    client: NodeClient,
    address: str,
) -> int:
    """An explicit nonce wins; otherwise ask the node for the account's next nonce."""
    if explicit is not None:
        return explicit
    return client.get_nonce(address)


# ============ Runners ============


def submit_contract_call(
    call: ContractCall,
    key_env: str,
    network: Network,
    fee: int,
    nonce: Optional[int],
    post_condition_mode: PostConditionMode = PostConditionMode.ALLOW,
    verbose: bool = False,
) -> str:
    """
    Sign ``call`` with the credential in ``key_env``, broadcast it and
    print the transaction id.
    """
    sender_key = load_private_key(key_env)
    key = parse_private_key(sender_key)
    sender = get_address(key, network.address_version)

    client = make_client(network.url)
    nonce = resolve_nonce(nonce, client, sender)

    debug(verbose, f"  Sender:   {sender}")
    debug(verbose, f"  Target:   {call.contract_id}")
    debug(verbose, f"  Function: {call.function_name}")
    debug(verbose, "  Args:     " + " ".join(cv_to_string(a) for a in call.function_args))
    debug(verbose, f"  Nonce:    {nonce}  Fee: {fee}")

    request = ContractCallRequest(
        contract_address=call.contract_address,
        contract_name=call.contract_name,
        function_name=call.function_name,
        function_args=call.function_args,
        sender_key=sender_key,
        fee=fee,
        nonce=nonce,
        network=network,
        post_condition_mode=post_condition_mode,
    )
    tx = make_contract_call(request)
    debug(verbose, f"  Local txid: {tx.txid()}")

    txid = client.broadcast_transaction(tx.serialize())
    click.echo(txid)
    return txid


def query_read_only(call: ReadOnlyCall, rpc_url: str, verbose: bool = False) -> str:
    """Evaluate a read-only call and print its decoded result."""
    debug(verbose, f"  Caller:   {call.sender_address}")
    debug(verbose, f"  Target:   {call.contract_address}.{call.contract_name}")
    debug(verbose, f"  Function: {call.function_name}")

    result = make_client(rpc_url).call_read_only(call)
    # (ok X) prints as X; errors keep their wrapper
    if isinstance(result, ResponseOk):
        result = result.value
    text = cv_to_string(result)
    click.echo(text)
    return text
