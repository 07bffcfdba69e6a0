"""
Bill Splitter module for Tabsplit
Allocates item costs to the people sharing them and distributes tax and tip
in proportion to what each person ate.

Every operation is a pure function: it validates its input, never mutates the
bill it was given, and returns a new bill whose people totals have already
been recomputed. BillSplitter wraps these functions for one splitting session.
"""

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from config import CONSERVATION_TOLERANCE, CURRENCY_DEFAULT
from data_models import Bill, BillItem, Person, PersonShare, ZERO, to_decimal
from errors import DuplicateIdentifier, InvalidAmount, UnknownReference
from utils import format_currency

logger = logging.getLogger(__name__)


def _check_amount(field_name: str, value) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise InvalidAmount(field_name, value)
    return amount


def validate_bill(bill: Bill) -> None:
    """Reject negative amounts, repeated ids and assignments to missing people"""
    _check_amount("tax", bill.tax)
    _check_amount("tip", bill.tip)

    person_ids = set()
    for person in bill.people:
        if person.id in person_ids:
            raise DuplicateIdentifier("person", person.id)
        person_ids.add(person.id)

    item_ids = set()
    for item in bill.items:
        if item.id in item_ids:
            raise DuplicateIdentifier("item", item.id)
        item_ids.add(item.id)
        _check_amount(f"price of {item.id!r}", item.price)
        unknown = item.assigned_to - person_ids
        if unknown:
            raise UnknownReference("person", sorted(unknown)[0])


def person_breakdown(bill: Bill) -> List[PersonShare]:
    """Per-person split results: item share, tax & tip share and item lines"""
    validate_bill(bill)

    subtotal = bill.subtotal
    extras = bill.tax + bill.tip
    shares = {person.id: PersonShare(person_id=person.id, name=person.name) for person in bill.people}
    lines: Dict[str, list] = {person.id: [] for person in bill.people}

    # unassigned items count toward the subtotal but nobody's share
    for item in bill.items:
        if not item.assigned_to:
            continue
        share = item.price / Decimal(len(item.assigned_to))
        for person_id in item.assigned_to:
            shares[person_id].item_share += share
            lines[person_id].append((item.name, share))

    for person in bill.people:
        row = shares[person.id]
        if subtotal > 0:
            proportion = row.item_share / subtotal
            row.tax_tip_share = extras * proportion
        else:
            # proportional allocation is undefined, split tax and tip evenly
            row.tax_tip_share = extras / Decimal(len(bill.people))
        row.items = tuple(lines[person.id])

    return [shares[person.id] for person in bill.people]


def recompute_totals(bill: Bill) -> Bill:
    """Return the bill with every person's total recomputed from items, tax and tip"""
    breakdown = person_breakdown(bill)
    people = tuple(replace(person, total=row.total) for person, row in zip(bill.people, breakdown))
    logger.debug("Recomputed %d totals (subtotal %s, tax %s, tip %s)",
                 len(people), bill.subtotal, bill.tax, bill.tip)
    return replace(bill, people=people)


def toggle_assignment(bill: Bill, item_id: str, person_id: str) -> Bill:
    """Add the person to the item's sharers, or remove them if already there"""
    validate_bill(bill)
    item = bill.item(item_id)
    bill.person(person_id)

    assigned_to = item.assigned_to ^ {person_id}
    items = tuple(replace(i, assigned_to=assigned_to) if i.id == item_id else i for i in bill.items)
    return recompute_totals(replace(bill, items=items))


def assign_to_everyone(bill: Bill, item_id: str) -> Bill:
    validate_bill(bill)
    bill.item(item_id)
    everyone = frozenset(bill.person_ids)
    items = tuple(replace(i, assigned_to=everyone) if i.id == item_id else i for i in bill.items)
    return recompute_totals(replace(bill, items=items))


def set_tax(bill: Bill, amount) -> Bill:
    return recompute_totals(replace(bill, tax=_check_amount("tax", amount)))


def set_tip(bill: Bill, amount) -> Bill:
    return recompute_totals(replace(bill, tip=_check_amount("tip", amount)))


def add_item(bill: Bill, item: BillItem) -> Bill:
    return recompute_totals(replace(bill, items=bill.items + (item,)))


def remove_item(bill: Bill, item_id: str) -> Bill:
    validate_bill(bill)
    bill.item(item_id)
    return recompute_totals(replace(bill, items=tuple(i for i in bill.items if i.id != item_id)))


def add_person(bill: Bill, person: Person) -> Bill:
    return recompute_totals(replace(bill, people=bill.people + (person,)))


def remove_person(bill: Bill, person_id: str) -> Bill:
    """Drop a person and strip them from every item they were sharing"""
    validate_bill(bill)
    bill.person(person_id)
    people = tuple(p for p in bill.people if p.id != person_id)
    items = tuple(
        replace(i, assigned_to=i.assigned_to - {person_id}) if person_id in i.assigned_to else i
        for i in bill.items
    )
    return recompute_totals(replace(bill, people=people, items=items))


def unallocated_amount(bill: Bill) -> Decimal:
    """Money nobody pays: unassigned items plus their part of tax and tip"""
    allocated = sum((row.total for row in person_breakdown(bill)), ZERO)
    return bill.computed_total - allocated


def describe_total(bill: Bill) -> str:
    """The bill total, with the printed total beside it once edits have moved away from it"""
    text = format_currency(bill.computed_total, bill.currency)
    if bill.total is not None and abs(bill.total - bill.computed_total) > CONSERVATION_TOLERANCE:
        text += f" (printed total {format_currency(bill.total, bill.currency)})"
    return text


def format_split_details(bill: Bill) -> str:
    """Plain-text share message for the split results"""
    breakdown = person_breakdown(bill)
    lines = ["Bill split details:"]
    for row in breakdown:
        lines.append(f"  {row.name}: {format_currency(row.total, bill.currency)}"
                     f" (items {format_currency(row.item_share, bill.currency)},"
                     f" tax & tip {format_currency(row.tax_tip_share, bill.currency)})")
    lines.append(f"Total bill: {describe_total(bill)}")

    missing = bill.computed_total - sum((row.total for row in breakdown), ZERO)
    if missing > CONSERVATION_TOLERANCE:
        lines.append(f"Unassigned: {format_currency(missing, bill.currency)} is not covered by anyone")
    return "\n".join(lines)


class BillSplitter:
    """Holds the bill for one splitting session and keeps its totals current"""

    def __init__(self, bill: Optional[Bill] = None):
        self.bill = recompute_totals(bill if bill is not None else Bill())

    def _generate_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex}"

    def _apply(self, operation, *args) -> Bill:
        # self.bill is only replaced once the operation has succeeded
        self.bill = operation(self.bill, *args)
        return self.bill

    def toggle(self, item_id: str, person_id: str) -> Bill:
        return self._apply(toggle_assignment, item_id, person_id)

    def assign_to_everyone(self, item_id: str) -> Bill:
        return self._apply(assign_to_everyone, item_id)

    def set_tax(self, amount) -> Bill:
        return self._apply(set_tax, amount)

    def set_tip(self, amount) -> Bill:
        return self._apply(set_tip, amount)

    def add_item(self, name: str, price, assigned_to: Iterable[str] = (), quantity: int = 1) -> BillItem:
        item = BillItem(id=self._generate_id("item"), name=name, price=price,
                        assigned_to=frozenset(assigned_to), quantity=quantity)
        self._apply(add_item, item)
        return item

    def add_person(self, name: str) -> Person:
        person = Person(id=self._generate_id("person"), name=name)
        self._apply(add_person, person)
        return self.bill.person(person.id)

    def remove_item(self, item_id: str) -> Bill:
        return self._apply(remove_item, item_id)

    def remove_person(self, person_id: str) -> Bill:
        return self._apply(remove_person, person_id)

    def load_receipt(self, receipt: Bill) -> Bill:
        """Take items, tax, tip, total and currency from a parsed receipt, keeping the people"""
        candidate = replace(receipt, people=self.bill.people)
        self.bill = recompute_totals(candidate)
        return self.bill

    def new_bill(self, currency: Optional[str] = None) -> Bill:
        """Start a fresh split with no items, people, tax or tip"""
        self.bill = Bill(currency=currency or self.bill.currency or CURRENCY_DEFAULT)
        return self.bill

    @property
    def balances(self) -> Dict[str, Decimal]:
        return {person.id: person.total for person in self.bill.people}

    def breakdown(self) -> List[PersonShare]:
        return person_breakdown(self.bill)

    def unallocated(self) -> Decimal:
        return unallocated_amount(self.bill)

    def summary(self) -> str:
        return format_split_details(self.bill)
