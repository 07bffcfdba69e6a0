import logging
from decimal import Decimal

import pytest

from receipt_parser import ReceiptParser


@pytest.fixture
def parser():
    return ReceiptParser()


def test_parse_dinner_receipt(parser, receipt_text):
    bill = parser.parse(receipt_text)

    assert [item.name for item in bill.items] == [
        "Grilled Salmon", "Pasta Carbonara", "Shared Appetizer", "Wine Bottle",
    ]
    assert bill.subtotal == Decimal("114.96")
    assert bill.tax == Decimal("12.50")
    assert bill.tip == Decimal("18.00")
    assert bill.total == Decimal("145.46")
    assert bill.currency == "USD"
    assert bill.people == ()
    assert all(not item.assigned_to for item in bill.items)


def test_item_ids_are_unique(parser, receipt_text):
    bill = parser.parse(receipt_text)
    assert len({item.id for item in bill.items}) == len(bill.items)


@pytest.mark.parametrize("line, name, quantity, price", [
    ("Soda 2 x 1.50 3.00", "Soda", 2, Decimal("3.00")),
    ("Nachos x3 21.00", "Nachos", 3, Decimal("21.00")),
    ("2 Burger 20.00", "Burger", 2, Decimal("20.00")),
    ("Caesar Salad - 11.50", "Caesar Salad", 1, Decimal("11.50")),
    ("Espresso $3.25", "Espresso", 1, Decimal("3.25")),
])
def test_item_line_formats(parser, line, name, quantity, price):
    item = parser._extract_item_from_line(line)
    assert (item.name, item.quantity, item.price) == (name, quantity, price)


@pytest.mark.parametrize("line", [
    "SUBTOTAL 114.96",
    "Tax 3.10",
    "Table 12",
    "Date 10/19/2026",
    "THANK YOU",
    "",
])
def test_non_item_lines_are_skipped(parser, line):
    assert parser._extract_item_from_line(line) is None


@pytest.mark.parametrize("raw, expected", [
    ("12.50", Decimal("12.50")),
    ("12,50", Decimal("12.50")),
    ("1.234,56", Decimal("1234.56")),
    ("1,234.56", Decimal("1234.56")),
    ("$7.00", Decimal("7.00")),
])
def test_clean_price(parser, raw, expected):
    assert parser._clean_price(raw) == expected


@pytest.mark.parametrize("raw", ["0.00", "99999", "", "abc"])
def test_clean_price_rejects_implausible_values(parser, raw):
    assert parser._clean_price(raw) is None


def test_overlapping_bands_do_not_duplicate_items(parser):
    bill = parser.parse("Burger 10.00\nBurger 10.00\nFries 4.50\nFries 4.50")
    assert [item.name for item in bill.items] == ["Burger", "Fries"]


def test_detects_currency(parser):
    assert parser.parse("Croissant 2,50 €\nCafé 1,80 €").currency == "EUR"
    assert parser.parse("Tea 2.00").currency == "USD"


@pytest.mark.parametrize("tax_line, tip_line, tax, tip", [
    ("Tax 8% 0.80", "Tip (18%) 1.80", Decimal("0.80"), Decimal("1.80")),
    ("SALES TAX 8.875% $0.89", "GRATUITY 20% $2.00", Decimal("0.89"), Decimal("2.00")),
    ("VAT: 1.90", "Service Charge (10%) 1.00", Decimal("1.90"), Decimal("1.00")),
    ("TAX 12.50", "TIP 18.00", Decimal("12.50"), Decimal("18.00")),
])
def test_tax_and_tip_lines_with_printed_rates(parser, tax_line, tip_line, tax, tip):
    bill = parser.parse(f"Burger 10.00\n{tax_line}\n{tip_line}")
    assert (bill.tax, bill.tip) == (tax, tip)
    assert [item.name for item in bill.items] == ["Burger"]


def test_rate_bearing_receipt_matches_its_total(parser, caplog):
    with caplog.at_level(logging.WARNING, logger="receipt_parser"):
        bill = parser.parse("Burger 10.00\nTax 8% 0.80\nTip (18%) 1.80\nTOTAL 12.60")
    assert bill.computed_total == bill.total == Decimal("12.60")
    assert "Total mismatch" not in caplog.text


def test_total_mismatch_is_logged(parser, caplog):
    with caplog.at_level(logging.WARNING, logger="receipt_parser"):
        bill = parser.parse("Burger 10.00\nTOTAL 500.00")
    assert bill.total == Decimal("500.00")
    assert "Total mismatch" in caplog.text


def test_missing_total_leaves_it_unset(parser):
    bill = parser.parse("Burger 10.00\nFries 4.50")
    assert bill.total is None
    assert bill.display_total == Decimal("14.50")
