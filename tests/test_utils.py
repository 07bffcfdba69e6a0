from decimal import Decimal

import pytest
from PIL import Image

from utils import (
    PerformanceTimer,
    clean_text_for_display,
    format_currency,
    round_money,
    try_parse_decimal,
    try_parse_int,
    validate_image_path,
    validate_menu_choice,
)


@pytest.mark.parametrize("amount, currency, expected", [
    (Decimal("63.244394"), "USD", "$63.24"),
    (Decimal("0.005"), "USD", "$0.01"),
    (12.5, "EUR", "€12.50"),
    (Decimal("5"), "BGN", "5.00 BGN"),
    ("oops", "USD", "0.00"),
])
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_round_money_rounds_half_up():
    assert round_money(Decimal("2.675")) == Decimal("2.68")


@pytest.mark.parametrize("raw, expected", [
    ("12.50", Decimal("12.50")),
    (" 12,50 ", Decimal("12.50")),
    ("$4", Decimal("4")),
    ("-3", Decimal("-3")),
    ("nan", None),
    ("twelve", None),
    (None, None),
])
def test_try_parse_decimal(raw, expected):
    assert try_parse_decimal(raw) == expected


def test_try_parse_int():
    assert try_parse_int(" 3 ") == 3
    assert try_parse_int("3.5") is None


def test_validate_menu_choice():
    assert validate_menu_choice(" 2 ", ["1", "2"]) == "2"
    assert validate_menu_choice("7", ["1", "2"]) is None


def test_clean_text_for_display():
    assert clean_text_for_display("Wine\x00   Bottle") == "Wine Bottle"
    assert clean_text_for_display("x" * 20, max_length=10) == "xxxxxxx..."


def test_validate_image_path(tmp_path):
    image_path = tmp_path / "receipt.png"
    Image.new("L", (5, 5)).save(image_path)
    text_path = tmp_path / "notes.txt"
    text_path.write_text("not an image")

    assert validate_image_path(str(image_path)) is True
    assert validate_image_path(str(text_path)) is False
    assert validate_image_path(str(tmp_path / "missing.png")) is False
    assert validate_image_path("../receipt.png") is False


def test_performance_timer():
    with PerformanceTimer("noop", log_result=False) as timer:
        pass
    assert timer.elapsed_time >= 0
