import re
from typing import List, Optional
import pandas as pd
from .errors import Violation, ViolationKind
from .models import RawItem, RawReceiptRequest


RETAILER_REGEX = re.compile(r"^[A-Za-z0-9\s\-&]+$")
SHORT_DESCRIPTION_REGEX = re.compile(r"^[A-Za-z0-9\s\-]+$")
AMOUNT_REGEX = re.compile(r"^\d+\.\d{2}$", re.ASCII)
DATE_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
TIME_REGEX = re.compile(r"^\d{2}:\d{2}$", re.ASCII)
WHITESPACE_REGEX = re.compile(r"\s")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def _parses(value: str, shape: "re.Pattern[str]", fmt: str) -> bool:
    if not shape.fullmatch(value):
        return False
    try:
        pd.to_datetime(value, format=fmt, errors="raise")
    except (ValueError, OverflowError):
        return False
    return True


def is_valid_date(value: Optional[str]) -> bool:
    if not value:
        return False
    return _parses(value, DATE_REGEX, DATE_FORMAT)


def is_valid_time(value: Optional[str]) -> bool:
    if not value:
        return False
    return _parses(value, TIME_REGEX, TIME_FORMAT)


def is_valid_amount(value: Optional[str]) -> bool:
    if not value:
        return False
    return bool(AMOUNT_REGEX.fullmatch(value))


def _check(violations: List[Violation], value: Optional[str], field: str, empty: ViolationKind, invalid: ViolationKind, ok: bool) -> None:
    if not value:
        violations.append(Violation.of(empty, field))
    elif not ok:
        violations.append(Violation.of(invalid, field))


def validate_item(item: RawItem, index: int) -> List[Violation]:
    violations: List[Violation] = []
    desc = item.short_description
    _check(
        violations,
        desc,
        f"items[{index}].shortDescription",
        ViolationKind.ITEM_SHORT_DESCRIPTION_EMPTY,
        ViolationKind.ITEM_SHORT_DESCRIPTION_INVALID,
        bool(desc and SHORT_DESCRIPTION_REGEX.fullmatch(desc)),
    )
    _check(
        violations,
        item.price,
        f"items[{index}].price",
        ViolationKind.ITEM_PRICE_EMPTY,
        ViolationKind.ITEM_PRICE_INVALID,
        is_valid_amount(item.price),
    )
    return violations


def validate_receipt(req: RawReceiptRequest) -> List[Violation]:
    """Collect every violation in ``req``; an empty list means the request is valid.

    Fields are checked as submitted, without trimming. An empty field reports
    only its ``*_EMPTY`` kind.
    """
    violations: List[Violation] = []
    retailer = req.retailer
    _check(
        violations,
        retailer,
        "retailer",
        ViolationKind.RETAILER_EMPTY,
        ViolationKind.RETAILER_INVALID,
        bool(retailer and RETAILER_REGEX.fullmatch(retailer)),
    )
    _check(
        violations,
        req.purchase_date,
        "purchaseDate",
        ViolationKind.PURCHASE_DATE_EMPTY,
        ViolationKind.PURCHASE_DATE_INVALID,
        is_valid_date(req.purchase_date),
    )
    _check(
        violations,
        req.purchase_time,
        "purchaseTime",
        ViolationKind.PURCHASE_TIME_EMPTY,
        ViolationKind.PURCHASE_TIME_INVALID,
        is_valid_time(req.purchase_time),
    )
    if not req.items:
        violations.append(Violation.of(ViolationKind.ITEMS_EMPTY, "items"))
    _check(
        violations,
        req.total,
        "total",
        ViolationKind.TOTAL_EMPTY,
        ViolationKind.TOTAL_INVALID,
        is_valid_amount(req.total),
    )
    for i, item in enumerate(req.items or []):
        violations.extend(validate_item(item, i))
    return violations


def validate_receipt_id(receipt_id: Optional[str]) -> List[Violation]:
    if not receipt_id:
        return [Violation.of(ViolationKind.ID_EMPTY, "id")]
    if WHITESPACE_REGEX.search(receipt_id):
        return [Violation.of(ViolationKind.ID_INVALID, "id")]
    return []
