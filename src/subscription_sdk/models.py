from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Tier(IntEnum):
    FREE = 0
    TIER1 = 1
    TIER2 = 2


FREE = Tier.FREE
TIER1 = Tier.TIER1
TIER2 = Tier.TIER2

# Prices in MIST (1 SUI = 1_000_000_000 MIST)
PRICE_TIER1 = 10_000_000
PRICE_TIER2 = 50_000_000

TIER_PRICES: Mapping[int, int] = MappingProxyType(
    {
        Tier.FREE: 0,
        Tier.TIER1: PRICE_TIER1,
        Tier.TIER2: PRICE_TIER2,
    }
)


def tier_cost(tier: int) -> int:
    """Cost of a tier in MIST. Tiers outside the pricing table cost nothing."""
    return TIER_PRICES.get(tier, 0)


@dataclass(frozen=True)
class ManagerObject:
    """
    Snapshot of the on-chain SubscriptionManager singleton.

    Attributes:
        object_id: Manager object id
        version: Object version the snapshot was read at
        digest: Object digest
        admin: Admin address allowed to withdraw funds
        total_collected: Accumulated payments in MIST
        subscriptions_table_id: Id of the Table holding per-user records
    """
    object_id: str
    version: str
    digest: str
    admin: str
    total_collected: int
    subscriptions_table_id: str


@dataclass(frozen=True)
class SubscriptionRecord:
    tier: int
    expiration_time_ms: int

    def is_active_at(self, now_ms: int) -> bool:
        return self.expiration_time_ms > now_ms


@dataclass(frozen=True)
class SubscriptionStatus:
    active: bool
    tier: int

    def to_dict(self) -> dict[str, Any]:
        return {"active": self.active, "tier": self.tier}


@dataclass(frozen=True)
class SubscriptionEvent:
    """A SubscriptionEvent as emitted by the contract, fields copied verbatim."""
    user: str
    tier: Any
    expiration_time: Any

    @classmethod
    def from_parsed_json(cls, parsed: Mapping[str, Any]) -> "SubscriptionEvent":
        return cls(
            user=parsed["user"],
            tier=parsed["tier"],
            expiration_time=parsed["expiration_time"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user,
            "tier": self.tier,
            "expiration_time": self.expiration_time,
        }


@dataclass(frozen=True)
class EventPage:
    events: list[SubscriptionEvent] = field(default_factory=list)
    next_cursor: Optional[dict[str, Any]] = None
    has_next_page: bool = False
