from __future__ import annotations

import re
from typing import Any

SUI_ADDRESS_LENGTH = 32

_HEX_RE = re.compile(r"^[0-9a-f]*$")


def normalize_sui_address(value: str) -> str:
    """
    Normalize a Sui address or object id to its full 0x-prefixed form.

    Lowercases, strips the 0x prefix and left-pads with zeros to 32 bytes,
    so "0x6" becomes "0x000...006".
    """
    if not isinstance(value, str):
        raise TypeError(f"Address must be a string, got {type(value).__name__}")
    address = value.strip().lower()
    if address.startswith("0x"):
        address = address[2:]
    if not address:
        raise ValueError("Address must not be empty")
    if not _HEX_RE.match(address):
        raise ValueError(f"Address is not hex: {value}")
    if len(address) > SUI_ADDRESS_LENGTH * 2:
        raise ValueError(f"Address longer than {SUI_ADDRESS_LENGTH} bytes: {value}")
    return "0x" + address.rjust(SUI_ADDRESS_LENGTH * 2, "0")


def is_valid_sui_address(value: Any) -> bool:
    try:
        normalize_sui_address(value)
    except (TypeError, ValueError):
        return False
    return True


def as_int(value: Any, name: str = "value") -> int:
    """Coerce a JSON number or decimal string (u64 fields arrive as strings) to int."""
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"{name} must be an integer, got {value!r}")
