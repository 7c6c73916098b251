from enum import Enum
from typing import Iterable, List, Optional, Set
from pydantic import BaseModel


INVALID_RECEIPT_MESSAGE = "The receipt is invalid."
NOT_FOUND_MESSAGE = "No receipt found for that ID."


class ViolationKind(str, Enum):
    RETAILER_EMPTY = "retailer_empty"
    RETAILER_INVALID = "retailer_invalid"
    PURCHASE_DATE_EMPTY = "purchase_date_empty"
    PURCHASE_DATE_INVALID = "purchase_date_invalid"
    PURCHASE_TIME_EMPTY = "purchase_time_empty"
    PURCHASE_TIME_INVALID = "purchase_time_invalid"
    ITEMS_EMPTY = "items_empty"
    TOTAL_EMPTY = "total_empty"
    TOTAL_INVALID = "total_invalid"
    ITEM_SHORT_DESCRIPTION_EMPTY = "item_short_description_empty"
    ITEM_SHORT_DESCRIPTION_INVALID = "item_short_description_invalid"
    ITEM_PRICE_EMPTY = "item_price_empty"
    ITEM_PRICE_INVALID = "item_price_invalid"
    ID_EMPTY = "id_empty"
    ID_INVALID = "id_invalid"


VIOLATION_MESSAGES = {
    ViolationKind.RETAILER_EMPTY: "retailer cannot be empty",
    ViolationKind.RETAILER_INVALID: "retailer may only contain letters, digits, spaces, '-' and '&'",
    ViolationKind.PURCHASE_DATE_EMPTY: "purchase date cannot be empty",
    ViolationKind.PURCHASE_DATE_INVALID: "purchase date must be in the format YYYY-MM-DD",
    ViolationKind.PURCHASE_TIME_EMPTY: "purchase time cannot be empty",
    ViolationKind.PURCHASE_TIME_INVALID: "purchase time must be in the 24-hour format HH:MM",
    ViolationKind.ITEMS_EMPTY: "items cannot be empty",
    ViolationKind.TOTAL_EMPTY: "total cannot be empty",
    ViolationKind.TOTAL_INVALID: "total must be in the format 0.00",
    ViolationKind.ITEM_SHORT_DESCRIPTION_EMPTY: "item short description cannot be empty",
    ViolationKind.ITEM_SHORT_DESCRIPTION_INVALID: "item short description may only contain letters, digits, spaces and '-'",
    ViolationKind.ITEM_PRICE_EMPTY: "item price cannot be empty",
    ViolationKind.ITEM_PRICE_INVALID: "item price must be in the format 0.00",
    ViolationKind.ID_EMPTY: "receipt id cannot be empty",
    ViolationKind.ID_INVALID: "receipt id cannot contain whitespace",
}


class Violation(BaseModel):
    kind: ViolationKind
    field: str
    message: str

    @classmethod
    def of(cls, kind: ViolationKind, field: str) -> "Violation":
        return cls(kind=kind, field=field, message=VIOLATION_MESSAGES[kind])


class ReceiptProcessorError(Exception):
    """Base class for errors the receipt core reports to its callers."""


class InvalidInput(ReceiptProcessorError):
    """Raised with every violation found in a request, never just the first."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations: List[Violation] = list(violations)
        details = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"{INVALID_RECEIPT_MESSAGE} {details}".strip())

    @property
    def kinds(self) -> Set[ViolationKind]:
        return {v.kind for v in self.violations}


class NotFound(ReceiptProcessorError):
    def __init__(self, receipt_id: Optional[str]) -> None:
        self.receipt_id = receipt_id
        super().__init__(f"{NOT_FOUND_MESSAGE} ({receipt_id})")
