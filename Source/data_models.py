"""
Data models for Tabsplit - bills, people and per-person shares
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import FrozenSet, Optional, Tuple

from config import CURRENCY_DEFAULT
from errors import InvalidAmount, UnknownReference

ZERO = Decimal("0")


def to_decimal(value, field_name: str = "amount") -> Decimal:
    """Convert an int/float/str/Decimal amount to Decimal via its string form"""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        raise InvalidAmount(field_name, value)
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmount(field_name, value) from None
    if not amount.is_finite():
        raise InvalidAmount(field_name, value)
    return amount


@dataclass(frozen=True)
class BillItem:
    """A single line on the bill, shared by the people in assigned_to"""
    id: str
    name: str
    price: Decimal = ZERO
    assigned_to: FrozenSet[str] = frozenset()
    quantity: int = 1

    def __post_init__(self):
        object.__setattr__(self, "price", to_decimal(self.price, f"price of {self.id!r}"))
        object.__setattr__(self, "assigned_to", frozenset(self.assigned_to))
        if not self.name or not self.name.strip():
            raise ValueError(f"Item {self.id!r} needs a name")

    @property
    def unit_price(self) -> Decimal:
        return self.price / self.quantity if self.quantity > 0 else self.price


@dataclass(frozen=True)
class Person:
    """Someone at the table; total is derived and only set by recompute_totals"""
    id: str
    name: str
    total: Decimal = ZERO

    def __post_init__(self):
        object.__setattr__(self, "total", to_decimal(self.total, f"total of {self.id!r}"))


@dataclass(frozen=True)
class Bill:
    """The whole bill being split"""
    items: Tuple[BillItem, ...] = ()
    people: Tuple[Person, ...] = ()
    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Optional[Decimal] = None
    currency: str = CURRENCY_DEFAULT

    def __post_init__(self):
        # frozen, so normalised fields are set through object.__setattr__
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "people", tuple(self.people))
        object.__setattr__(self, "tax", to_decimal(self.tax, "tax"))
        object.__setattr__(self, "tip", to_decimal(self.tip, "tip"))
        if self.total is not None:
            object.__setattr__(self, "total", to_decimal(self.total, "total"))

    @property
    def subtotal(self) -> Decimal:
        return sum((item.price for item in self.items), ZERO)

    @property
    def computed_total(self) -> Decimal:
        """subtotal + tax + tip; the stored total is informational only"""
        return self.subtotal + self.tax + self.tip

    @property
    def display_total(self) -> Decimal:
        return self.total if self.total is not None else self.computed_total

    def item(self, item_id: str) -> BillItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise UnknownReference("item", item_id)

    def person(self, person_id: str) -> Person:
        for person in self.people:
            if person.id == person_id:
                return person
        raise UnknownReference("person", person_id)

    @property
    def person_ids(self) -> Tuple[str, ...]:
        return tuple(person.id for person in self.people)


@dataclass
class PersonShare:
    """One row of the split results"""
    person_id: str
    name: str
    item_share: Decimal = ZERO
    tax_tip_share: Decimal = ZERO
    items: Tuple[Tuple[str, Decimal], ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return self.item_share + self.tax_tip_share


@dataclass
class ProcessingMetrics:
    """Metrics for parallel OCR processing"""
    workers_used: int = 0
    processing_time: float = 0.0
    items_detected: int = 0
    regions_processed: int = 0
