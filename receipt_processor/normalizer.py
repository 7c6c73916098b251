import uuid
from datetime import date, datetime, time
from decimal import Decimal
import pandas as pd
from .models import Item, RawReceiptRequest, Receipt
from .validator import AMOUNT_REGEX, DATE_FORMAT, TIME_FORMAT


def new_receipt_id() -> str:
    return str(uuid.uuid4())


def parse_cents(amount: str) -> int:
    """Convert a two-decimal amount such as ``"35.35"`` to integer cents (3535).

    Goes through ``Decimal`` so no binary float rounding can creep in.
    """
    if not AMOUNT_REGEX.fullmatch(amount or ""):
        raise ValueError(f"amount must have exactly two decimal digits: {amount!r}")
    return int(Decimal(amount) * 100)


def parse_purchase_date(value: str) -> date:
    return pd.to_datetime(value, format=DATE_FORMAT, errors="raise").date()


def parse_purchase_time(value: str) -> time:
    return pd.to_datetime(value, format=TIME_FORMAT, errors="raise").time()


def combine_timestamp(purchase_date: str, purchase_time: str) -> datetime:
    # naive wall-clock time, no timezone applied
    return datetime.combine(parse_purchase_date(purchase_date), parse_purchase_time(purchase_time))


def normalize_item(short_description: str, price: str) -> Item:
    return Item(short_description=short_description, price_cents=parse_cents(price))


def normalize_receipt(req: RawReceiptRequest) -> Receipt:
    """Build the canonical Receipt for a request that already passed validation."""
    items = [normalize_item(i.short_description or "", i.price or "") for i in req.items or []]
    return Receipt(
        id=new_receipt_id(),
        retailer=req.retailer or "",
        items=items,
        purchased_at=combine_timestamp(req.purchase_date or "", req.purchase_time or ""),
        total_cents=parse_cents(req.total or ""),
        points=0,
    )
