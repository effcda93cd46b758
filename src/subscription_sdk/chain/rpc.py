"""
JSON-RPC client for a Sui fullnode.

Lightweight alternative to a full node SDK: uses httpx for HTTP and only
implements the handful of read methods this package consumes.

Every call produces an RpcResult instead of raising on RPC-level errors:
    Ok(data)                  the call succeeded
    NotFound(code, message)   the node reports the requested entry does not exist
    Failed(code, message)     any other RPC error
HTTP/transport failures are not RPC results and propagate as httpx errors.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from ..errors import RpcError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# JSON-RPC "invalid params": what the node returns for a missing dynamic field key
INVALID_PARAMS_CODE = -32602
INVALID_PARAMS_KIND = "InvalidParams"

# Object-level error codes reported inside an otherwise successful result
OBJECT_NOT_FOUND_CODES = frozenset({"dynamicFieldNotFound", "notExists", "deleted"})


@dataclass(frozen=True)
class Ok:
    data: Any

    def unwrap(self) -> Any:
        return self.data


@dataclass(frozen=True)
class NotFound:
    code: Optional[Union[int, str]] = None
    message: str = "not found"

    def unwrap(self) -> Any:
        raise RpcError(f"RPC not found: {self.message}", code=self.code)


@dataclass(frozen=True)
class Failed:
    code: Optional[Union[int, str]]
    message: str
    data: Any = None

    def unwrap(self) -> Any:
        raise RpcError(f"RPC error {self.code}: {self.message}", code=self.code, data=self.data)


RpcResult = Union[Ok, NotFound, Failed]


def classify_error(error: Any) -> RpcResult:
    """Map a JSON-RPC error object to NotFound or Failed by its code/kind."""
    if not isinstance(error, dict):
        return Failed(code=None, message=str(error))

    code = error.get("code")
    kind = error.get("type")
    message = str(error.get("message", ""))

    if code == INVALID_PARAMS_CODE or kind == INVALID_PARAMS_KIND:
        return NotFound(code=code, message=message or "invalid params")
    return Failed(code=code, message=message, data=error.get("data"))


def classify_object_error(error: Any) -> RpcResult:
    """Map an object-level error (``result.error``) to NotFound or Failed."""
    if not isinstance(error, dict):
        return Failed(code=None, message=str(error))
    code = error.get("code")
    if code in OBJECT_NOT_FOUND_CODES:
        return NotFound(code=code, message=str(code))
    return Failed(code=code, message=str(error.get("message", code)), data=error)


def _object_outcome(outcome: RpcResult) -> RpcResult:
    # An Ok body can still carry {"error": ...} with no data for a missing object.
    if isinstance(outcome, Ok) and isinstance(outcome.data, dict):
        error = outcome.data.get("error")
        if error is not None and not outcome.data.get("data"):
            return classify_object_error(error)
    return outcome


class SuiRpcClient:
    """
    Minimal Sui JSON-RPC client.

    Args:
        url: Fullnode JSON-RPC URL
        timeout: Request timeout in seconds
        http_client: Pre-built httpx.Client (tests pass one with a MockTransport)
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.url = url
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "SuiRpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def call(self, method: str, params: list) -> RpcResult:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "sui_getObject")
            params: Positional RPC parameters

        Returns:
            Ok, NotFound or Failed

        Raises:
            httpx.HTTPError: Transport failure or non-2xx HTTP status
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        logger.debug("-> %s %s", method, params)

        response = self._http.post(self.url, json=payload)
        response.raise_for_status()
        body = response.json()

        if "error" in body:
            outcome = classify_error(body["error"])
            logger.debug("<- %s %s", method, outcome)
            return outcome

        logger.debug("<- %s ok", method)
        return Ok(body.get("result"))

    # ----- read methods -----

    def get_object(self, object_id: str, show_content: bool = True) -> dict[str, Any]:
        """
        Fetch an object by id (sui_getObject).

        Returns:
            The raw SuiObjectResponse: {"data": {...}} or {"error": {...}}

        Raises:
            RpcError: The node rejected the call
        """
        options = {"showContent": show_content, "showType": True}
        return self.call("sui_getObject", [object_id, options]).unwrap()

    def get_object_result(self, object_id: str, show_content: bool = True) -> RpcResult:
        """
        Fetch an object by id, keeping the outcome tagged.

        Returns:
            Ok(SuiObjectResponse), NotFound when the node rejects the id or
            reports the object missing or deleted, or Failed
        """
        options = {"showContent": show_content, "showType": True}
        return _object_outcome(self.call("sui_getObject", [object_id, options]))

    def get_dynamic_field_object(self, parent_id: str, name: dict[str, Any]) -> RpcResult:
        """
        Look up a dynamic field by parent object and typed key.

        Args:
            parent_id: Parent object (for a Table, its UID)
            name: DynamicFieldName, e.g. {"type": "address", "value": "0x..."}

        Returns:
            Ok(SuiObjectResponse), NotFound when the key is absent, or Failed
        """
        return _object_outcome(self.call("suix_getDynamicFieldObject", [parent_id, name]))

    def query_events(
        self,
        query: dict[str, Any],
        cursor: Optional[dict[str, Any]] = None,
        limit: Optional[int] = None,
        descending: bool = True,
    ) -> dict[str, Any]:
        """
        Query events (suix_queryEvents).

        Returns:
            Page dict: {"data": [...], "nextCursor": ..., "hasNextPage": bool}
        """
        return self.call("suix_queryEvents", [query, cursor, limit, descending]).unwrap()
