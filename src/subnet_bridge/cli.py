"""
subnet-bridge CLI

Command-line interface for moving assets between a Stacks L1 and a
subnet. Each command builds one contract call (or read-only query),
signs it with a credential taken from the environment, submits it and
prints a single line: the transaction id or the decoded result.

Commands:
  register-nft     - Register an L1 NFT contract with the subnet
  deposit-nft      - Deposit an NFT into the subnet
  withdraw-nft-l2  - Withdraw an NFT on the subnet
  verify           - Show the L1 owner of an NFT
  register-ft      - Register an L1 token contract with the subnet
  deposit-ft       - Deposit tokens into the subnet
  withdraw-ft-l2   - Withdraw tokens on the subnet
  ft-balance       - Show an L1 token balance
  whoami           - Show the address of a credential
  nonce            - Show the next nonce of an address
"""

from __future__ import annotations

import click

from .chain.network import DEFAULT_RPC_URL, testnet
from .commands import common
from .commands.common import fail
from .errors import BridgeError
from .identity.keys import get_address, load_private_key


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="subnet-bridge")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """subnet-bridge: Stacks L1 / subnet asset transfer commands."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.nft import deposit_nft, register_nft, verify, withdraw_nft_l2
from .commands.ft import deposit_ft, ft_balance, register_ft, withdraw_ft_l2

cli.add_command(register_nft)
cli.add_command(deposit_nft)
cli.add_command(withdraw_nft_l2)
cli.add_command(verify)
cli.add_command(register_ft)
cli.add_command(deposit_ft)
cli.add_command(withdraw_ft_l2)
cli.add_command(ft_balance)


# ============ Identity ============


@cli.command()
@click.option("--key-env", default="USER_KEY", show_default=True, help="Variable holding the key")
def whoami(key_env: str) -> None:
    """Show the testnet address of a credential."""
    try:
        private_key = load_private_key(key_env)
        click.echo(get_address(private_key, testnet().address_version))
    except BridgeError as exc:
        fail(exc)


@cli.command()
@click.argument("address")
@click.option("--rpc-url", envvar="STACKS_NODE_URL", default=DEFAULT_RPC_URL, show_default=True)
def nonce(address: str, rpc_url: str) -> None:
    """Show the next nonce the node expects from ADDRESS."""
    try:
        click.echo(common.make_client(rpc_url).get_nonce(address))
    except BridgeError as exc:
        fail(exc)


# ============ Entry Points ============


def main() -> None:
    """subnet-bridge CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
