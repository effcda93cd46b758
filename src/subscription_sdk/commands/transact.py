"""
Commands Transact - Build unsigned transactions.

Prints the transaction descriptor as JSON. Nothing is signed or
submitted; pipe the output into your signer.
"""

from __future__ import annotations

from typing import Optional

import click

from ..chain.tx import TransactionBlock
from ..models import Tier
from . import CliState


def _parse_tier(ctx: click.Context, param: click.Parameter, value: str) -> int:
    if value.upper() in Tier.__members__:
        return int(Tier[value.upper()])
    try:
        tier = int(value)
    except ValueError:
        raise click.BadParameter(
            f"expected one of {', '.join(t.name.lower() for t in Tier)} or an integer"
        )
    if not 0 <= tier <= 255:
        raise click.BadParameter("tier must fit in a u8 (0-255)")
    return tier


def _finish(tx: TransactionBlock, sender: Optional[str], gas_budget: Optional[int]) -> None:
    try:
        if sender:
            tx.set_sender(sender)
        if gas_budget:
            tx.set_gas_budget(gas_budget)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    click.echo(tx.to_json())


@click.command()
@click.option(
    "--tier",
    required=True,
    callback=_parse_tier,
    help="free, tier1, tier2 (or the raw tier number)",
)
@click.option("--sender", default=None, help="Sender address to record in the descriptor")
@click.option("--gas-budget", type=click.IntRange(min=1), default=None, help="Gas budget in MIST")
@click.pass_obj
def buy(state: CliState, tier: int, sender: Optional[str], gas_budget: Optional[int]) -> None:
    """Build a buy_subscription transaction."""
    tx = state.client().build_purchase_transaction(tier)
    _finish(tx, sender, gas_budget)


@click.command()
@click.option("--admin", "admin_address", required=True, help="Admin address to receive funds")
@click.option("--sender", default=None, help="Sender address to record in the descriptor")
@click.option("--gas-budget", type=click.IntRange(min=1), default=None, help="Gas budget in MIST")
@click.pass_obj
def withdraw(
    state: CliState,
    admin_address: str,
    sender: Optional[str],
    gas_budget: Optional[int],
) -> None:
    """Build a withdraw_all_funds transaction."""
    try:
        tx = state.client().build_withdraw_all_funds_transaction(admin_address)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--admin")
    _finish(tx, sender, gas_budget)
