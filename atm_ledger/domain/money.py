"""Conversions between major-unit amounts and integer minor units.

Balances live as integer minor units everywhere inside the core; these
helpers are the only place where a decimal amount is turned into minor
units or back.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..core.errors import ValidationError

MINOR_UNITS_PER_MAJOR = 100

# Largest balance a signed 64-bit INTEGER column can hold.
MAX_MINOR_UNITS = 2**63 - 1

_QUANT = Decimal("0.01")

AmountLike = Union[int, float, Decimal, str]


def parse_amount(value: AmountLike) -> Decimal:
    """Parse a caller-supplied amount into a finite Decimal.

    Accepts ints, floats, Decimals and numeric strings ("12.34", "12,34").
    A comma is read as the decimal separator, so thousands separators
    ("1,000.00") are not supported.
    NaN and infinities are rejected, as are booleans.
    """
    if isinstance(value, bool):
        raise ValidationError("Amount must be a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # repr of a float is its shortest round-tripping form
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        raw = value.strip().replace(",", ".")
        if raw == "":
            raise ValidationError("Amount cannot be empty")
        try:
            amount = Decimal(raw)
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid amount: {value!r}") from exc
    else:
        raise ValidationError("Amount must be a number")

    if not amount.is_finite():
        raise ValidationError("Amount must be finite")
    return amount


def to_minor_units(value: AmountLike) -> int:
    amount = parse_amount(value)
    try:
        minor = (amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError("Amount is too large") from exc
    return int(minor)


def from_minor_units(minor_units: int) -> Decimal:
    return (Decimal(minor_units) / MINOR_UNITS_PER_MAJOR).quantize(_QUANT)


def _require_within_limit(minor: int) -> int:
    if minor > MAX_MINOR_UNITS:
        raise ValidationError("Amount is too large")
    return minor


def require_positive_minor_units(value: AmountLike) -> int:
    minor = _require_within_limit(to_minor_units(value))
    if minor <= 0:
        raise ValidationError("Amount must be positive and finite")
    return minor


def require_non_negative_minor_units(value: AmountLike) -> int:
    minor = _require_within_limit(to_minor_units(value))
    if minor < 0:
        raise ValidationError("Amount must be finite and >= 0")
    return minor
