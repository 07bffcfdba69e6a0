"""
Demo bill for Tabsplit, seeded with the defaults of the split screen
"""

from decimal import Decimal

from bill_splitter import recompute_totals
from data_models import Bill, BillItem, Person


def demo_bill(currency: str = "USD") -> Bill:
    """Three friends sharing dinner; totals already computed"""
    people = (
        Person(id="person1", name="Alex"),
        Person(id="person2", name="Jordan"),
        Person(id="person3", name="Taylor"),
    )
    everyone = {"person1", "person2", "person3"}
    items = (
        BillItem(id="1", name="Grilled Salmon", price=Decimal("28.99"), assigned_to={"person1"}),
        BillItem(id="2", name="Pasta Carbonara", price=Decimal("22.99"), assigned_to={"person2"}),
        BillItem(id="3", name="Shared Appetizer", price=Decimal("16.99"), assigned_to=everyone),
        BillItem(id="4", name="Wine Bottle", price=Decimal("45.99"), assigned_to=everyone),
    )
    bill = Bill(
        items=items,
        people=people,
        tax=Decimal("12.50"),
        tip=Decimal("18.00"),
        total=Decimal("145.46"),
        currency=currency,
    )
    return recompute_totals(bill)
