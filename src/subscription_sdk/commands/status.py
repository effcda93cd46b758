"""
Commands Status - Per-user subscription lookups.

- subscription: print the raw record (tier, expiration)
- status:       compare the record against the network clock
"""

from __future__ import annotations

import datetime
import json
import sys

import click
import httpx

from ..errors import SubscriptionSdkError
from ..models import Tier
from . import CliState, fail


def _tier_name(tier: int) -> str:
    try:
        return Tier(tier).name
    except ValueError:
        return f"UNKNOWN({tier})"


def _format_ms(ms: int) -> str:
    ts = datetime.datetime.fromtimestamp(ms / 1000, tz=datetime.timezone.utc)
    return ts.isoformat()


@click.command()
@click.argument("address")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_obj
def subscription(state: CliState, address: str, as_json: bool) -> None:
    """Show the subscription record of ADDRESS."""
    client = state.client()
    try:
        record = client.get_subscription(address)
    except ValueError as exc:
        click.secho(f"ERROR: Invalid address: {exc}", fg="red", err=True)
        sys.exit(1)
    except (SubscriptionSdkError, httpx.HTTPError) as exc:
        fail(exc)

    if as_json:
        payload = None
        if record is not None:
            payload = {"tier": record.tier, "expirationTime": record.expiration_time_ms}
        click.echo(json.dumps(payload))
        return

    if record is None:
        click.echo("No subscription.")
        return

    click.echo(f"  Tier:        {_tier_name(record.tier)}")
    click.echo(f"  Expires:     {_format_ms(record.expiration_time_ms)}")


@click.command()
@click.argument("address")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_obj
def status(state: CliState, address: str, as_json: bool) -> None:
    """Check whether the subscription of ADDRESS is active."""
    client = state.client()
    try:
        result = client.is_subscription_active(address)
    except ValueError as exc:
        click.secho(f"ERROR: Invalid address: {exc}", fg="red", err=True)
        sys.exit(1)
    except (SubscriptionSdkError, httpx.HTTPError) as exc:
        fail(exc)

    if as_json:
        click.echo(json.dumps(result.to_dict()))
        return

    if result.active:
        click.secho(f"ACTIVE ({_tier_name(result.tier)})", fg="green", bold=True)
    else:
        click.secho(f"INACTIVE ({_tier_name(result.tier)})", fg="yellow")
