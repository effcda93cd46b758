"""
Transaction Builder - Build unsigned Sui programmable transaction blocks.

A TransactionBlock here is only a descriptor: a list of inputs and a list
of commands that reference them. Object inputs are left unresolved (id
only); the signer's tooling resolves versions, sets gas and signs.

Pure inputs are BCS-encoded on the spot, so an out-of-range value fails
while building rather than at submission.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from ..utils import normalize_sui_address


UINT_BITS = {"u8": 8, "u16": 16, "u32": 32, "u64": 64, "u128": 128, "u256": 256}
PURE_TYPES = frozenset({*UINT_BITS, "bool", "address"})

_TARGET_RE = re.compile(r"^(0x[0-9a-fA-F]+)::([A-Za-z_][A-Za-z0-9_]*)::([A-Za-z_][A-Za-z0-9_]*)$")


def encode_pure(value: Any, type_name: str) -> bytes:
    """
    BCS-encode a pure Move value.

    Args:
        value: Python value (int, bool or address string)
        type_name: Move primitive type ("u8" ... "u256", "bool", "address")

    Returns:
        BCS bytes

    Raises:
        ValueError: Unsupported type or value out of range
    """
    if type_name in UINT_BITS:
        bits = UINT_BITS[type_name]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{type_name} value must be an int, got {value!r}")
        if value < 0 or value >= 1 << bits:
            raise ValueError(f"{value} out of range for {type_name}")
        return value.to_bytes(bits // 8, "little")

    if type_name == "bool":
        if not isinstance(value, bool):
            raise ValueError(f"bool value must be a bool, got {value!r}")
        return b"\x01" if value else b"\x00"

    if type_name == "address":
        address = normalize_sui_address(value)
        return bytes.fromhex(address[2:])

    raise ValueError(f"Unsupported pure type: {type_name}")


# ----- arguments -----


@dataclass(frozen=True)
class GasCoin:
    def to_dict(self) -> dict[str, Any]:
        return {"kind": "GasCoin"}


@dataclass(frozen=True)
class Input:
    index: int
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "Input", "index": self.index, "type": self.type}


@dataclass(frozen=True)
class Result:
    index: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "Result", "index": self.index}


@dataclass(frozen=True)
class NestedResult:
    index: int
    result_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "NestedResult", "index": self.index, "resultIndex": self.result_index}


Argument = Union[GasCoin, Input, Result, NestedResult]


# ----- inputs / commands -----


@dataclass(frozen=True)
class ObjectInput:
    object_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "object", "objectId": self.object_id}


@dataclass(frozen=True)
class PureInput:
    value_type: str
    value: Any
    bcs: bytes

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "pure",
            "valueType": self.value_type,
            "value": self.value,
            "Pure": list(self.bcs),
        }


@dataclass(frozen=True)
class SplitCoins:
    coin: Argument
    amounts: tuple[Argument, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "SplitCoins",
            "coin": self.coin.to_dict(),
            "amounts": [a.to_dict() for a in self.amounts],
        }


@dataclass(frozen=True)
class MoveCall:
    target: str
    arguments: tuple[Argument, ...]
    type_arguments: tuple[str, ...] = ()

    @property
    def function(self) -> str:
        return self.target.rsplit("::", 1)[1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "MoveCall",
            "target": self.target,
            "typeArguments": list(self.type_arguments),
            "arguments": [a.to_dict() for a in self.arguments],
        }


Command = Union[SplitCoins, MoveCall]


@dataclass
class TransactionBlock:
    """
    Unsigned programmable transaction descriptor.

    Build it with object()/pure()/split_coins()/move_call(), then hand
    to_dict() or to_json() to whatever signs and executes transactions.
    """
    inputs: list[Union[ObjectInput, PureInput]] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
    sender: Optional[str] = None
    gas_budget: Optional[int] = None

    @property
    def gas(self) -> GasCoin:
        return GasCoin()

    def object(self, object_id: str) -> Input:
        normalized = normalize_sui_address(object_id)
        for index, existing in enumerate(self.inputs):
            if isinstance(existing, ObjectInput) and existing.object_id == normalized:
                return Input(index=index, type="object")
        self.inputs.append(ObjectInput(object_id=normalized))
        return Input(index=len(self.inputs) - 1, type="object")

    def pure(self, value: Any, type_name: str) -> Input:
        if type_name not in PURE_TYPES:
            raise ValueError(f"Unsupported pure type: {type_name}")
        encoded = encode_pure(value, type_name)
        if type_name == "address":
            value = normalize_sui_address(value)
        self.inputs.append(PureInput(value_type=type_name, value=value, bcs=encoded))
        return Input(index=len(self.inputs) - 1, type="pure")

    def split_coins(self, coin: Argument, amounts: Sequence[Argument]) -> list[NestedResult]:
        """Split one coin into len(amounts) new coins; returns one argument per new coin."""
        if not amounts:
            raise ValueError("split_coins needs at least one amount")
        self.commands.append(SplitCoins(coin=coin, amounts=tuple(amounts)))
        index = len(self.commands) - 1
        return [NestedResult(index=index, result_index=i) for i in range(len(amounts))]

    def move_call(
        self,
        target: str,
        arguments: Sequence[Argument] = (),
        type_arguments: Sequence[str] = (),
    ) -> Result:
        match = _TARGET_RE.match(target)
        if match is None:
            raise ValueError(f"Invalid Move call target: {target}")
        package, module, function = match.groups()
        target = f"{normalize_sui_address(package)}::{module}::{function}"

        self.commands.append(
            MoveCall(target=target, arguments=tuple(arguments), type_arguments=tuple(type_arguments))
        )
        return Result(index=len(self.commands) - 1)

    def set_sender(self, sender: str) -> None:
        self.sender = normalize_sui_address(sender)

    def set_gas_budget(self, budget: int) -> None:
        if budget <= 0:
            raise ValueError("Gas budget must be positive")
        self.gas_budget = budget

    def move_calls(self) -> list[MoveCall]:
        return [c for c in self.commands if isinstance(c, MoveCall)]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "version": 1,
            "inputs": [i.to_dict() for i in self.inputs],
            "commands": [c.to_dict() for c in self.commands],
        }
        if self.sender is not None:
            result["sender"] = self.sender
        if self.gas_budget is not None:
            result["gasBudget"] = str(self.gas_budget)
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


__all__ = [
    "Argument",
    "GasCoin",
    "Input",
    "MoveCall",
    "NestedResult",
    "ObjectInput",
    "PureInput",
    "Result",
    "SplitCoins",
    "TransactionBlock",
    "encode_pure",
]
