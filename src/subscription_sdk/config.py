"""
Network configuration for the SubscriptionManager contract.

The per-network table is static. A ClientConfig is resolved from it once
and never changes afterwards; callers may override any field.

Environment (optionally loaded from ~/.subscription-sdk/.env):
    SUI_NETWORK              testnet | devnet | mainnet
    SUI_RPC_URL              fullnode JSON-RPC endpoint
    SUBSCRIPTION_PACKAGE_ID  published package id
    SUBSCRIPTION_MANAGER_ID  SubscriptionManager object id
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .utils import normalize_sui_address

SDK_DIR = Path.home() / ".subscription-sdk"
SDK_ENV = SDK_DIR / ".env"

DEFAULT_NETWORK = "testnet"

MODULE_NAME = "SubscriptionManager"


@dataclass(frozen=True)
class NetworkDefaults:
    rpc_url: str
    package_id: str
    manager_id: str


NETWORKS: Mapping[str, NetworkDefaults] = MappingProxyType(
    {
        "testnet": NetworkDefaults(
            rpc_url="https://fullnode.testnet.sui.io:443",
            package_id="0x9dc94dd2222c559d2c3e30ddb43cea0517a4d4f01b13e0fc655c65c8d209e456",
            manager_id="0x917c24d6cbb368b3ad4cae5d550bfe744e488d4b94987188217258b1518dde3c",
        ),
        # Not deployed yet: package and manager ids must be supplied
        "devnet": NetworkDefaults(
            rpc_url="https://fullnode.devnet.sui.io:443",
            package_id="",
            manager_id="",
        ),
        "mainnet": NetworkDefaults(
            rpc_url="https://fullnode.mainnet.sui.io:443",
            package_id="",
            manager_id="",
        ),
    }
)


@dataclass(frozen=True)
class ClientConfig:
    rpc_url: str
    package_id: str
    manager_id: str
    network: Optional[str] = None

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("rpc_url", "package_id", "manager_id")
            if not getattr(self, name)
        ]
        if missing:
            where = f" for network '{self.network}'" if self.network else ""
            raise ConfigurationError(
                f"Missing {', '.join(missing)}{where}. "
                f"Pass it explicitly or set it in {SDK_ENV}."
            )
        for name in ("package_id", "manager_id"):
            try:
                normalize_sui_address(getattr(self, name))
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"Invalid {name}: {exc}") from exc

    @classmethod
    def for_network(
        cls,
        network: str = DEFAULT_NETWORK,
        rpc_url: Optional[str] = None,
        package_id: Optional[str] = None,
        manager_id: Optional[str] = None,
    ) -> "ClientConfig":
        """
        Resolve the configuration for a network.

        Args:
            network: One of NETWORKS
            rpc_url: Override the fullnode URL
            package_id: Override the published package id
            manager_id: Override the manager object id

        Raises:
            ConfigurationError: Unknown network or unresolved ids
        """
        defaults = NETWORKS.get(network)
        if defaults is None:
            raise ConfigurationError(
                f"Unknown network '{network}'. Expected one of: {', '.join(NETWORKS)}"
            )
        return cls(
            rpc_url=rpc_url or defaults.rpc_url,
            package_id=package_id or defaults.package_id,
            manager_id=manager_id or defaults.manager_id,
            network=network,
        )

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "ClientConfig":
        load_env_file(env_path)

        return cls.for_network(
            os.environ.get("SUI_NETWORK", DEFAULT_NETWORK),
            rpc_url=os.environ.get("SUI_RPC_URL"),
            package_id=os.environ.get("SUBSCRIPTION_PACKAGE_ID"),
            manager_id=os.environ.get("SUBSCRIPTION_MANAGER_ID"),
        )

    def target(self, function: str) -> str:
        return f"{self.package_id}::{MODULE_NAME}::{function}"

    @property
    def event_type(self) -> str:
        return f"{self.package_id}::{MODULE_NAME}::SubscriptionEvent"


def load_env_file(env_path: Optional[Path] = None) -> bool:
    """
    Load SDK settings from a .env file into os.environ.

    Variables already set in the environment win over the file.

    Returns:
        True if the file existed and was loaded
    """
    env_path = env_path or SDK_ENV
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=False)
