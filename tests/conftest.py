"""Shared fixtures: canned Sui RPC responses and an in-memory RPC stand-in."""

from __future__ import annotations

from typing import Any, Optional

import pytest

from subscription_sdk.chain.rpc import NotFound, Ok, RpcResult, classify_object_error
from subscription_sdk.client import SubscriptionManagerClient
from subscription_sdk.config import ClientConfig
from subscription_sdk.utils import normalize_sui_address

PACKAGE_ID = "0x" + "ab" * 32
MANAGER_ID = "0x" + "cd" * 32
TABLE_ID = "0x" + "ef" * 32
ADMIN = "0x" + "11" * 32
USER = "0xabc"
CLOCK_ID = normalize_sui_address("0x6")


def manager_fields(**overrides: Any) -> dict[str, Any]:
    fields = {
        "id": {"id": MANAGER_ID},
        "admin": ADMIN,
        "total_collected": "60000000",
        "subscriptions": {
            "type": "0x2::table::Table<address, Subscription>",
            "fields": {"id": {"id": TABLE_ID}, "size": "2"},
        },
    }
    fields.update(overrides)
    return fields


def manager_response(fields: Any = None, data_type: str = "moveObject") -> dict[str, Any]:
    return {
        "data": {
            "objectId": MANAGER_ID,
            "version": "42",
            "digest": "5dKd9kF8dQyWb1uVt9nHq3mFz",
            "type": f"{PACKAGE_ID}::SubscriptionManager::SubscriptionManager",
            "content": {
                "dataType": data_type,
                "type": f"{PACKAGE_ID}::SubscriptionManager::SubscriptionManager",
                "hasPublicTransfer": False,
                "fields": manager_fields() if fields is None else fields,
            },
        }
    }


def clock_response(timestamp_ms: int) -> dict[str, Any]:
    return {
        "data": {
            "objectId": CLOCK_ID,
            "version": "1",
            "digest": "ClockDigest",
            "content": {
                "dataType": "moveObject",
                "type": "0x2::clock::Clock",
                "hasPublicTransfer": False,
                "fields": {"id": {"id": CLOCK_ID}, "timestamp_ms": str(timestamp_ms)},
            },
        }
    }


def subscription_response(tier: Any, expiration_time: Any) -> dict[str, Any]:
    return {
        "data": {
            "objectId": "0x" + "99" * 32,
            "version": "7",
            "digest": "FieldDigest",
            "content": {
                "dataType": "moveObject",
                "type": "0x2::dynamic_field::Field<address, Subscription>",
                "hasPublicTransfer": False,
                "fields": {
                    "id": {"id": "0x" + "99" * 32},
                    "name": normalize_sui_address(USER),
                    "value": {
                        "type": f"{PACKAGE_ID}::SubscriptionManager::Subscription",
                        "fields": {"tier": tier, "expiration_time": expiration_time},
                    },
                },
            },
        }
    }


def event(user: str, tier: Any, expiration_time: Any, seq: int = 0) -> dict[str, Any]:
    return {
        "id": {"txDigest": f"Tx{seq}", "eventSeq": str(seq)},
        "packageId": PACKAGE_ID,
        "transactionModule": "SubscriptionManager",
        "sender": user,
        "type": f"{PACKAGE_ID}::SubscriptionManager::SubscriptionEvent",
        "parsedJson": {"user": user, "tier": tier, "expiration_time": expiration_time},
        "timestampMs": str(1_700_000_000_000 + seq),
    }


class FakeRpc:
    """Answers the read calls the client makes and records them."""

    def __init__(
        self,
        objects: Optional[dict[str, Any]] = None,
        dynamic_field: Optional[RpcResult] = None,
        event_pages: Optional[list[dict[str, Any]]] = None,
        object_results: Optional[dict[str, RpcResult]] = None,
    ) -> None:
        self.objects = objects if objects is not None else {MANAGER_ID: manager_response()}
        self.dynamic_field = dynamic_field if dynamic_field is not None else NotFound(code=-32602)
        self.event_pages = list(event_pages or [])
        self.object_results = dict(object_results or {})
        self.calls: list[tuple] = []

    def get_object(self, object_id: str, show_content: bool = True) -> dict[str, Any]:
        self.calls.append(("get_object", object_id))
        return self.objects.get(object_id, {"error": {"code": "notExists", "object_id": object_id}})

    def get_object_result(self, object_id: str, show_content: bool = True) -> RpcResult:
        self.calls.append(("get_object_result", object_id))
        if object_id in self.object_results:
            return self.object_results[object_id]
        if object_id not in self.objects:
            return classify_object_error({"code": "notExists", "object_id": object_id})
        return Ok(self.objects[object_id])

    def get_dynamic_field_object(self, parent_id: str, name: dict[str, Any]) -> RpcResult:
        self.calls.append(("get_dynamic_field_object", parent_id, name))
        return self.dynamic_field

    def query_events(
        self,
        query: dict[str, Any],
        cursor: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
        descending: bool = True,
    ) -> dict[str, Any]:
        self.calls.append(("query_events", query, cursor, limit, descending))
        if self.event_pages:
            return self.event_pages.pop(0)
        return {"data": [], "nextCursor": None, "hasNextPage": False}

    def methods(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(
        rpc_url="https://rpc.test",
        package_id=PACKAGE_ID,
        manager_id=MANAGER_ID,
        network="testnet",
    )


@pytest.fixture()
def fake_rpc() -> FakeRpc:
    return FakeRpc()


@pytest.fixture()
def client(config: ClientConfig, fake_rpc: FakeRpc) -> SubscriptionManagerClient:
    return SubscriptionManagerClient(config, rpc=fake_rpc)  # type: ignore[arg-type]
