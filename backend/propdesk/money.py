# Overview: Conversions between wire amounts, stored decimals and report floats.

"""
Monetary values are stored as NUMERIC(10, 2) and travel over the wire as
strings with exactly two fraction digits ("1250.00"). Clients may send
numbers or numeric strings; both are normalized here before persisting.
The report engine works in floats (its figures are estimates, not ledger
balances), so `to_float` is the only way amounts leave Decimal-land.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

TWO_PLACES = Decimal("0.01")

# NUMERIC(10, 2) upper bound
MAX_AMOUNT = Decimal("99999999.99")


class MoneyFormatError(ValueError):
    """Raised when a value cannot be read as an amount."""


class AmountOutOfRange(MoneyFormatError):
    """Raised when an amount does not fit NUMERIC(10, 2)."""


def to_decimal(value: Any) -> Decimal:
    """Normalize an int/float/str/Decimal amount to a 2-place Decimal."""
    if isinstance(value, bool) or value is None:
        raise MoneyFormatError("amount must be a number")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # repr() keeps 0.1 as "0.1" instead of the binary expansion
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            raise MoneyFormatError("amount must be a number")
        try:
            amount = Decimal(text)
        except InvalidOperation as exc:
            raise MoneyFormatError("amount must be a number") from exc
    else:
        raise MoneyFormatError("amount must be a number")

    if not amount.is_finite():
        raise MoneyFormatError("amount must be a finite number")
    # quantize fails past the context precision, so bound first
    if abs(amount) > MAX_AMOUNT:
        raise AmountOutOfRange(f"amount cannot exceed {MAX_AMOUNT}")
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str | None:
    """Wire representation: "1234.50". None passes through."""
    if value is None:
        return None
    return f"{to_decimal(value):.2f}"


def to_float(value: Any) -> float:
    """Parse a stored amount for arithmetic. Missing amounts count as 0."""
    if value is None or value == "":
        return 0.0
    return float(value)
