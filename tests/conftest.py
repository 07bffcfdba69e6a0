"""
Test configuration and fixtures for pytest.

Provides bills for exercising the splitting engine, the receipt
parser and the command-line interface.
"""

from decimal import Decimal

import pytest

from data_models import Bill, BillItem, Person
from fixtures import demo_bill


@pytest.fixture
def dinner():
    """The demo dinner: three people, four items, tax 12.50 and tip 18.00."""
    return demo_bill()


@pytest.fixture
def make_bill():
    """Factory building a bill from (price, assignees) pairs."""
    def _make_bill(entries, people=("p1", "p2", "p3"), tax="0", tip="0"):
        items = [
            BillItem(id=f"i{n}", name=f"Item {n}", price=Decimal(str(price)), assigned_to=set(assigned))
            for n, (price, assigned) in enumerate(entries, 1)
        ]
        return Bill(
            items=items,
            people=[Person(id=pid, name=pid.upper()) for pid in people],
            tax=Decimal(tax),
            tip=Decimal(tip),
        )
    return _make_bill


@pytest.fixture
def receipt_text():
    """OCR text of the demo dinner receipt."""
    return "\n".join([
        "THE CORNER BISTRO",
        "Grilled Salmon 28.99",
        "Pasta Carbonara 22.99",
        "Shared Appetizer - 16.99",
        "Wine Bottle x1 45.99",
        "SUBTOTAL 114.96",
        "TAX 12.50",
        "TIP 18.00",
        "TOTAL $145.46",
        "THANK YOU",
    ])
