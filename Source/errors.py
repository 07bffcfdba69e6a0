"""
Error types for Tabsplit bill splitting
"""


class BillSplitError(Exception):
    """Base class for bill splitting errors"""


class InvalidAmount(BillSplitError, ValueError):
    """A price, tax or tip is negative or not a finite number"""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r} (must be a non-negative number)")


class UnknownReference(BillSplitError, LookupError):
    """An item or person id is not present in the bill"""

    def __init__(self, kind: str, ref_id: str):
        self.kind = kind
        self.ref_id = ref_id
        super().__init__(f"Unknown {kind}: {ref_id!r}")


class DuplicateIdentifier(BillSplitError, ValueError):
    """Two people or two items share an id"""

    def __init__(self, kind: str, ref_id: str):
        self.kind = kind
        self.ref_id = ref_id
        super().__init__(f"Duplicate {kind} id: {ref_id!r}")
