"""
Input validation and unit helpers shared by registry callers.

Pure functions, no I/O.
"""

import hashlib
import math
import re
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Union

# 1 coin = 10^8 base units (octas)
BASE_UNITS_PER_COIN = 100_000_000

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

_PHONE_RE = re.compile(r"^\+[1-9]\d{1,14}$")
_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{64}$")


def is_valid_phone_number(phone: str) -> bool:
    """E.164: leading '+', no leading zero, at most 15 digits."""
    return bool(phone) and _PHONE_RE.match(phone) is not None


def is_valid_address(address: str) -> bool:
    """0x followed by 64 hex digits."""
    return bool(address) and _ADDRESS_RE.match(address) is not None


def is_valid_name(name: str) -> bool:
    if not name:
        return False
    return NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH


def is_valid_amount(value: Union[str, int, float, Decimal]) -> bool:
    """Positive, finite number. Strings must parse in full, so "1abc" is rejected."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(amount) and amount > 0


def to_base_units(amount: Union[str, int, float, Decimal]) -> int:
    """
    Convert a coin amount to base units, rounding down.

    Raises:
        ValueError: amount is not a number
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    units = (value * BASE_UNITS_PER_COIN).to_integral_value(rounding=ROUND_FLOOR)
    return int(units)


def from_base_units(units: int) -> Decimal:
    return Decimal(units) / BASE_UNITS_PER_COIN


def format_balance(units: int) -> str:
    """Base units as a fixed 8-decimal coin string, e.g. 150000000 -> '1.50000000'."""
    return f"{from_base_units(units):.8f}"


def shorten_address(address: str, length: int = 6) -> str:
    """'0x1234...abcdef' for display; short inputs come back unchanged."""
    if not address or len(address) < length * 2:
        return address
    return f"{address[:length]}...{address[-length:]}"


def hash_phone_number(phone: str) -> bytes:
    """SHA-256 digest of the phone, the on-chain registry key."""
    return hashlib.sha256(phone.encode("utf-8")).digest()
