"""
SubscriptionManager client.

Builds unsigned transactions for the SubscriptionManager Move module and
reads its on-chain state. Holds nothing but an immutable ClientConfig and
an RPC handle; every read fetches a fresh snapshot.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterator, Optional

from .chain.rpc import Failed, NotFound, SuiRpcClient
from .chain.tx import Argument, TransactionBlock
from .config import DEFAULT_NETWORK, ClientConfig
from .errors import ManagerObjectError, RpcError, StructuralError
from .models import (
    EventPage,
    ManagerObject,
    SubscriptionEvent,
    SubscriptionRecord,
    SubscriptionStatus,
    TIER_PRICES,
    Tier,
    tier_cost,
)
from .spec.schemas import (
    CLOCK_OBJECT,
    MANAGER_OBJECT,
    SUBSCRIPTION_EVENT,
    SUBSCRIPTION_FIELD,
    Invalid,
    SchemaRegistry,
)
from .utils import as_int, normalize_sui_address

logger = logging.getLogger(__name__)

CLOCK_ADDRESS = "0x6"


class SubscriptionManagerClient:
    """
    Client for one deployed SubscriptionManager.

    Args:
        config: Resolved configuration (default: the network's defaults)
        rpc: RPC client to use (default: a SuiRpcClient for config.rpc_url)
        network: Network to resolve when no config is given
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        rpc: Optional[SuiRpcClient] = None,
        network: str = DEFAULT_NETWORK,
        registry: Optional[SchemaRegistry] = None,
    ) -> None:
        self.config = config or ClientConfig.for_network(network)
        self.rpc = rpc or SuiRpcClient(self.config.rpc_url)
        self.registry = registry or SchemaRegistry.default()

    @property
    def package_id(self) -> str:
        return self.config.package_id

    @property
    def manager_id(self) -> str:
        return self.config.manager_id

    # ============ Transactions ============

    def build_purchase_transaction(self, tier: int) -> TransactionBlock:
        """
        Build an unsigned buy_subscription transaction.

        The payment coin is always split from gas, even for a zero cost, so
        buy_subscription always receives exactly one Coin<SUI>.

        Args:
            tier: Tier to buy (see Tier); unknown tiers are priced at 0

        Raises:
            ValueError: tier cannot be encoded as u8
        """
        tx = TransactionBlock()
        cost = tier_cost(tier)
        if tier not in TIER_PRICES:
            logger.warning("Unknown tier %r, pricing as free", tier)

        payment = self._split_gas_coin(tx, cost)

        tx.move_call(
            self.config.target("buy_subscription"),
            arguments=[
                tx.object(self.manager_id),
                tx.pure(tier, "u8"),
                payment,
                tx.object(CLOCK_ADDRESS),
            ],
        )
        logger.debug("Built buy_subscription tx: tier=%s cost=%s", tier, cost)
        return tx

    def build_withdraw_all_funds_transaction(self, admin_address: str) -> TransactionBlock:
        """Build an unsigned withdraw_all_funds transaction. Only the admin can execute it."""
        tx = TransactionBlock()
        tx.move_call(
            self.config.target("withdraw_all_funds"),
            arguments=[
                tx.object(self.manager_id),
                tx.pure(normalize_sui_address(admin_address), "address"),
            ],
        )
        logger.debug("Built withdraw_all_funds tx: admin=%s", admin_address)
        return tx

    @staticmethod
    def _split_gas_coin(tx: TransactionBlock, amount: int) -> Argument:
        [coin] = tx.split_coins(tx.gas, [tx.pure(amount, "u64")])
        return coin

    # ============ Reads ============

    def get_manager_object(self) -> ManagerObject:
        """
        Fetch and validate the SubscriptionManager object.

        Raises:
            ManagerObjectError: Object missing, or content is not the
                SubscriptionManager struct (usually a wrong id or network)
            RpcError: The node rejected the call
        """
        outcome = self.rpc.get_object_result(self.manager_id, show_content=True)
        if isinstance(outcome, NotFound):
            raise ManagerObjectError(
                f"Subscription manager object not found: {self.manager_id} ({outcome.message})"
            )
        if isinstance(outcome, Failed):
            raise RpcError(
                f"RPC error {outcome.code}: {outcome.message}",
                code=outcome.code,
                data=outcome.data,
            )

        response = outcome.data
        data = response.get("data") if isinstance(response, dict) else None
        if not data or not data.get("content"):
            raise ManagerObjectError(
                f"Subscription manager object not found: {self.manager_id}"
            )

        parsed = self.registry.parse(data, MANAGER_OBJECT)
        if isinstance(parsed, Invalid):
            raise ManagerObjectError(
                f"Invalid subscription manager content structure: {parsed.message}",
                errors=parsed.errors,
            )

        fields = data["content"]["fields"]
        return ManagerObject(
            object_id=data["objectId"],
            version=str(data["version"]),
            digest=data["digest"],
            admin=fields["admin"],
            total_collected=as_int(fields["total_collected"], "total_collected"),
            subscriptions_table_id=fields["subscriptions"]["fields"]["id"]["id"],
        )

    def get_subscription(self, user_address: str) -> Optional[SubscriptionRecord]:
        """
        Look up a user's subscription.

        Returns:
            The record, or None when the user has no entry

        Raises:
            ValueError: user_address is not a Sui address
            StructuralError: Entry exists but is not a Subscription
            RpcError: Any RPC failure other than not-found
        """
        name = {"type": "address", "value": normalize_sui_address(user_address)}
        manager = self.get_manager_object()

        outcome = self.rpc.get_dynamic_field_object(manager.subscriptions_table_id, name)
        if isinstance(outcome, NotFound):
            logger.debug("No subscription for %s", user_address)
            return None
        if isinstance(outcome, Failed):
            raise RpcError(
                f"RPC error {outcome.code}: {outcome.message}",
                code=outcome.code,
                data=outcome.data,
            )

        data = (outcome.data or {}).get("data")
        if not data or not data.get("content"):
            return None

        return self._parse_subscription(data["content"])

    def _parse_subscription(self, content: Any) -> SubscriptionRecord:
        parsed = self.registry.parse(content, SUBSCRIPTION_FIELD)
        if isinstance(parsed, Invalid):
            raise StructuralError(
                f"Invalid subscription entry: {parsed.message}", errors=parsed.errors
            )
        value = content["fields"]["value"]["fields"]
        return SubscriptionRecord(
            tier=as_int(value["tier"], "tier"),
            expiration_time_ms=as_int(value["expiration_time"], "expiration_time"),
        )

    def get_clock_timestamp_ms(self) -> int:
        """Current network time from the shared Clock object at 0x6."""
        response = self.rpc.get_object(CLOCK_ADDRESS, show_content=True)
        data = response.get("data") if isinstance(response, dict) else None
        if not data or not data.get("content"):
            raise StructuralError("Clock object not found")

        parsed = self.registry.parse(data, CLOCK_OBJECT)
        if isinstance(parsed, Invalid):
            raise StructuralError(
                f"Invalid clock content structure: {parsed.message}", errors=parsed.errors
            )
        return as_int(data["content"]["fields"]["timestamp_ms"], "timestamp_ms")

    def is_subscription_active(self, user_address: str) -> SubscriptionStatus:
        subscription = self.get_subscription(user_address)
        if subscription is None:
            return SubscriptionStatus(active=False, tier=Tier.FREE)

        now_ms = self.get_clock_timestamp_ms()
        return SubscriptionStatus(
            active=subscription.is_active_at(now_ms),
            tier=subscription.tier,
        )

    def get_total_collected(self) -> int:
        return self.get_manager_object().total_collected

    def get_admin(self) -> str:
        return self.get_manager_object().admin

    # ============ Events ============

    def event_query(self) -> dict[str, Any]:
        """Event filter for this package's SubscriptionEvent."""
        return {"MoveEventType": self.config.event_type}

    def get_subscription_events_page(
        self,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        limit: Optional[int] = None,
        cursor: Optional[dict[str, Any]] = None,
    ) -> EventPage:
        """
        Fetch one node page of SubscriptionEvents, newest first, keeping those in range.

        The node cannot combine an event type with a time range, so the
        bounds are applied to each event's timestampMs here. Events newer
        than end_time are skipped; the first event older than start_time
        ends the stream and clears has_next_page. A page may therefore hold
        fewer than limit events while more remain.

        Args:
            start_time: Inclusive lower bound, ms since epoch
            end_time: Inclusive upper bound, ms since epoch
            limit: Node page size (node default when None)
            cursor: nextCursor of the previous page
        """
        page = self.rpc.query_events(
            self.event_query(),
            cursor=cursor,
            limit=limit,
            descending=True,
        )
        events = []
        exhausted = False
        for event in page.get("data", []):
            timestamp = event.get("timestampMs")
            if timestamp is not None:
                timestamp = as_int(timestamp, "timestampMs")
                if end_time is not None and timestamp > end_time:
                    continue
                if start_time is not None and timestamp < start_time:
                    exhausted = True
                    break
            events.append(self._parse_event(event))

        return EventPage(
            events=events,
            next_cursor=page.get("nextCursor"),
            has_next_page=bool(page.get("hasNextPage")) and not exhausted,
        )

    def _parse_event(self, event: dict[str, Any]) -> SubscriptionEvent:
        parsed = self.registry.parse(event.get("parsedJson"), SUBSCRIPTION_EVENT)
        if isinstance(parsed, Invalid):
            raise StructuralError(
                f"Invalid SubscriptionEvent: {parsed.message}", errors=parsed.errors
            )
        return SubscriptionEvent.from_parsed_json(event["parsedJson"])

    def get_subscription_events(
        self,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[SubscriptionEvent]:
        """
        Query SubscriptionEvents, newest first.

        Pages are followed until limit matching events are collected or the
        time range is exhausted. Without a limit or a start_time there is no
        natural stop, so only the node's first page is read.

        Args:
            start_time: Inclusive lower bound, ms since epoch
            end_time: Inclusive upper bound, ms since epoch
            limit: Maximum number of events (node default when None)
        """
        if limit is None and start_time is None:
            return self.get_subscription_events_page(end_time=end_time).events

        found = self.iter_subscription_events(start_time, end_time, page_size=limit)
        return list(itertools.islice(found, limit))

    def iter_subscription_events(
        self,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Iterator[SubscriptionEvent]:
        """Walk every matching event, newest first, following the node's cursor."""
        cursor = None
        while True:
            page = self.get_subscription_events_page(
                start_time, end_time, limit=page_size, cursor=cursor
            )
            yield from page.events
            if not page.has_next_page or page.next_cursor is None:
                return
            cursor = page.next_cursor


__all__ = ["CLOCK_ADDRESS", "SubscriptionManagerClient"]
