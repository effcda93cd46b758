"""
Commands - CLI command implementations.

Each module corresponds to a top-level CLI command family:
- manager:  Manager object state (admin, total collected)
- status:   Per-user subscription record and active check
- events:   SubscriptionEvent history
- transact: Unsigned buy / withdraw transactions
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import NoReturn, Optional

import click
import httpx

from ..client import SubscriptionManagerClient
from ..config import ClientConfig
from ..errors import SubscriptionSdkError

MIST_PER_SUI = 1_000_000_000


@dataclass
class CliState:
    """Global CLI options; the client is only built when a command needs it."""
    network: str
    rpc_url: Optional[str] = None
    package_id: Optional[str] = None
    manager_id: Optional[str] = None
    _client: Optional[SubscriptionManagerClient] = field(default=None, repr=False)

    def config(self) -> ClientConfig:
        return ClientConfig.for_network(
            self.network,
            rpc_url=self.rpc_url,
            package_id=self.package_id,
            manager_id=self.manager_id,
        )

    def client(self) -> SubscriptionManagerClient:
        if self._client is None:
            try:
                self._client = SubscriptionManagerClient(self.config())
            except SubscriptionSdkError as exc:
                fail(exc)
        return self._client


def fail(exc: Exception) -> NoReturn:
    """Print an error and exit with the error's exit code."""
    if isinstance(exc, SubscriptionSdkError):
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        for detail in getattr(exc, "errors", []):
            click.secho(f"  - {detail}", fg="red", err=True)
        sys.exit(exc.exit_code)
    if isinstance(exc, httpx.HTTPError):
        click.secho(f"ERROR: RPC request failed: {exc}", fg="red", err=True)
        sys.exit(1)
    raise exc


def format_sui(mist: int) -> str:
    return f"{mist / MIST_PER_SUI:,.9f} SUI"
