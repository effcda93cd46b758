"""
Commands Manager - Show SubscriptionManager state.

Reads the manager singleton and prints its admin, the funds collected so
far and the id of the table holding per-user subscriptions.
"""

from __future__ import annotations

import json

import click
import httpx

from ..errors import SubscriptionSdkError
from . import CliState, fail, format_sui


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_obj
def manager(state: CliState, as_json: bool) -> None:
    """Show the manager object (admin, total collected)."""
    client = state.client()
    try:
        snapshot = client.get_manager_object()
    except (SubscriptionSdkError, httpx.HTTPError) as exc:
        fail(exc)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "objectId": snapshot.object_id,
                    "version": snapshot.version,
                    "digest": snapshot.digest,
                    "admin": snapshot.admin,
                    "totalCollected": snapshot.total_collected,
                    "subscriptionsTableId": snapshot.subscriptions_table_id,
                },
                indent=2,
            )
        )
        return

    click.echo(f"  Manager:          {snapshot.object_id} (v{snapshot.version})")
    click.echo(f"  Admin:            {snapshot.admin}")
    click.echo(f"  Total Collected:  {format_sui(snapshot.total_collected)}")
    click.echo(f"  Subscriptions:    {snapshot.subscriptions_table_id}")
