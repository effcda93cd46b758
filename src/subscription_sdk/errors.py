"""
Exception taxonomy for the subscription SDK.

Configuration problems (wrong network, package or object id) are fatal and
never retried. A dynamic-field miss is not an error at all: it surfaces as
``None`` from ``get_subscription``. Anything else the node reports is an
``RpcError`` passed through unchanged.
"""

from __future__ import annotations

from typing import Any, Optional


class SubscriptionSdkError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(SubscriptionSdkError):
    exit_code = 2


class ManagerObjectError(ConfigurationError):
    """The manager object is missing or does not look like the contract's object."""

    exit_code = 3

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class StructuralError(SubscriptionSdkError):
    """On-chain content does not match the expected Move struct layout."""

    exit_code = 3

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class RpcError(SubscriptionSdkError):
    exit_code = 4

    def __init__(
        self,
        message: str,
        code: Optional[int | str] = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.data = data
