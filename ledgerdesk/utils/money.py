"""Helpers for invoice numbers and monetary amounts."""

from __future__ import annotations

import re
import string
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

CENT = Decimal("0.01")
MAX_FEE = Decimal("1000000.00")
MAX_INVOICE_NUMBER_LENGTH: int = 64

_WHITESPACE_RE = re.compile(r"\s+")
_SLASH_RUN_RE = re.compile(r"/{2,}")
_EDGE_CHARS = string.whitespace + "/"


def normalize_invoice_number(value: Optional[str]) -> str:
    """Canonical form used for storage and comparison of invoice numbers.

    Strips surrounding whitespace and slashes, collapses inner whitespace to a
    single space and slash runs to a single slash, then upper-cases, so
    " inv-001 " and "/INV-001" refer to the same invoice. The result is
    always usable as a URL path.
    """
    if value is None:
        return ""
    value = _SLASH_RUN_RE.sub("/", str(value)).strip(_EDGE_CHARS)
    return _WHITESPACE_RE.sub(" ", value).upper()


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
    """Convert raw input into a Decimal, or None when it cannot be parsed."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def has_at_most_two_places(amount: Decimal) -> bool:
    exponent = amount.normalize().as_tuple().exponent
    return isinstance(exponent, int) and exponent >= -2


def decimal_to_cents(amount: Decimal) -> int:
    """Convert a Decimal amount to integer minor units."""
    return int((amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def cents_to_decimal(cents: Optional[int]) -> Decimal:
    if cents is None:
        return Decimal("0.00")
    return (Decimal(int(cents)) / 100).quantize(CENT)


def format_money(amount: Union[Decimal, int, float, str, None], symbol: str = "$") -> str:
    """Format an amount as e.g. "$1,234.50"; negative values get a leading minus."""
    value = to_decimal(amount)
    if value is None:
        return ""
    value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
