from decimal import Decimal

from ledgerdesk.utils.money import (
    normalize_invoice_number,
    to_decimal,
    has_at_most_two_places,
    decimal_to_cents,
    cents_to_decimal,
    format_money,
)


def test_normalize_invoice_number_strips_collapses_and_uppercases():
    assert normalize_invoice_number("  inv-001 ") == "INV-001"
    assert normalize_invoice_number("acme   2024\t07") == "ACME 2024 07"
    assert normalize_invoice_number(None) == ""
    assert normalize_invoice_number("   ") == ""


def test_normalize_invoice_number_trims_and_collapses_slashes():
    assert normalize_invoice_number("/x") == "X"
    assert normalize_invoice_number("x/") == "X"
    assert normalize_invoice_number(" //acme//2024/ ") == "ACME/2024"
    assert normalize_invoice_number("/ /") == ""


def test_to_decimal_parses_common_inputs():
    assert to_decimal("1,234.50") == Decimal("1234.50")
    assert to_decimal(3) == Decimal("3")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("") is None
    assert to_decimal("abc") is None
    assert to_decimal("NaN") is None


def test_has_at_most_two_places():
    assert has_at_most_two_places(Decimal("12.50"))
    assert has_at_most_two_places(Decimal("100"))
    assert has_at_most_two_places(Decimal("12.500"))
    assert not has_at_most_two_places(Decimal("12.505"))


def test_cents_conversion():
    assert decimal_to_cents(Decimal("12.50")) == 1250
    assert decimal_to_cents(Decimal("0.005")) == 1
    assert cents_to_decimal(1999) == Decimal("19.99")
    assert cents_to_decimal(None) == Decimal("0.00")


def test_format_money():
    assert format_money(Decimal("1234.5")) == "$1,234.50"
    assert format_money(Decimal("-3"), "€") == "-€3.00"
    assert format_money(None) == ""
