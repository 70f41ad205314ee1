from .money import (
    normalize_invoice_number,
    to_decimal,
    decimal_to_cents,
    cents_to_decimal,
    format_money,
)

__all__ = [
    'normalize_invoice_number',
    'to_decimal',
    'decimal_to_cents',
    'cents_to_decimal',
    'format_money',
]
