"""
Commands Events - SubscriptionEvent history.

Lists events emitted by buy_subscription, newest first, optionally
bounded by a time range in milliseconds since the epoch.
"""

from __future__ import annotations

import itertools
import json
from typing import Optional

import click
import httpx

from ..errors import SubscriptionSdkError
from . import CliState, fail


@click.command()
@click.option("--start-time", type=int, default=None, help="Lower bound (ms since epoch)")
@click.option("--end-time", type=int, default=None, help="Upper bound (ms since epoch)")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum events")
@click.option("--all", "follow", is_flag=True, help="Follow cursors through every page")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON lines")
@click.pass_obj
def events(
    state: CliState,
    start_time: Optional[int],
    end_time: Optional[int],
    limit: Optional[int],
    follow: bool,
    as_json: bool,
) -> None:
    """List SubscriptionEvents, newest first."""
    client = state.client()
    try:
        if follow:
            found = list(
                itertools.islice(
                    client.iter_subscription_events(start_time, end_time), limit
                )
            )
        else:
            found = client.get_subscription_events(start_time, end_time, limit)
    except (SubscriptionSdkError, httpx.HTTPError) as exc:
        fail(exc)

    if not found and not as_json:
        click.echo("No events.")
        return

    for event in found:
        if as_json:
            click.echo(json.dumps(event.to_dict()))
        else:
            click.echo(
                f"  {event.user}  tier={event.tier}  expires={event.expiration_time}"
            )
