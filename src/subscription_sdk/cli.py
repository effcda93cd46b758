"""
subscription-sdk CLI

Command-line interface for the SubscriptionManager contract on Sui.

Transactions are never signed here: the transaction commands print an
unsigned descriptor as JSON for an external signer.

Commands:
  networks      - List known networks and their defaults
  manager       - Show the manager object (admin, total collected)
  subscription  - Show a user's subscription record
  status        - Check whether a user's subscription is active
  events        - List SubscriptionEvents, newest first
  buy           - Build a buy_subscription transaction
  withdraw      - Build a withdraw_all_funds transaction
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from .commands import CliState
from .config import DEFAULT_NETWORK, NETWORKS, load_env_file


# ============ Constants ============

VERSION = "0.3.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="subscription-sdk")
@click.option(
    "--network",
    envvar="SUI_NETWORK",
    default=DEFAULT_NETWORK,
    type=click.Choice(sorted(NETWORKS)),
    show_default=True,
    help="Sui network",
)
@click.option("--rpc-url", envvar="SUI_RPC_URL", default=None, help="Fullnode JSON-RPC URL")
@click.option(
    "--package-id",
    envvar="SUBSCRIPTION_PACKAGE_ID",
    default=None,
    help="SubscriptionManager package id",
)
@click.option(
    "--manager-id",
    envvar="SUBSCRIPTION_MANAGER_ID",
    default=None,
    help="SubscriptionManager object id",
)
@click.option("-v", "--verbose", is_flag=True, help="Log RPC traffic to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    network: str,
    rpc_url: Optional[str],
    package_id: Optional[str],
    manager_id: Optional[str],
    verbose: bool,
) -> None:
    """Subscription manager SDK for Sui."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    ctx.obj = CliState(
        network=network,
        rpc_url=rpc_url,
        package_id=package_id,
        manager_id=manager_id,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Commands ============

from .commands.events import events
from .commands.manager import manager
from .commands.status import status, subscription
from .commands.transact import buy, withdraw

cli.add_command(manager)
cli.add_command(subscription)
cli.add_command(status)
cli.add_command(events)
cli.add_command(buy)
cli.add_command(withdraw)


@cli.command()
def networks() -> None:
    """List known networks and their default ids."""
    for name, defaults in NETWORKS.items():
        click.secho(name, fg="cyan", bold=True)
        click.echo(f"  RPC URL:     {defaults.rpc_url or '(none)'}")
        click.echo(f"  Package:     {defaults.package_id or '(not deployed)'}")
        click.echo(f"  Manager:     {defaults.manager_id or '(not deployed)'}")


# ============ Entry Points ============


def main() -> None:
    """subscription-sdk CLI entry point."""
    load_env_file()
    cli()


if __name__ == "__main__":
    main()
