from typing import Callable, Dict, Sequence, Tuple
from .models import Receipt


RuleFn = Callable[[Receipt], int]


def rule_alphanumeric(receipt: Receipt) -> int:
    """One point for every letter or digit in the retailer name."""
    return sum(1 for ch in receipt.retailer if ch.isalnum())


def rule_round_dollar(receipt: Receipt) -> int:
    """50 points if the total has no cents."""
    return 50 if receipt.total_cents % 100 == 0 else 0


def rule_quarter_multiple(receipt: Receipt) -> int:
    """25 points if the total is a multiple of 0.25."""
    return 25 if receipt.total_cents % 25 == 0 else 0


def rule_item_pairs(receipt: Receipt) -> int:
    """5 points for every two items."""
    return 5 * (len(receipt.items) // 2)


def rule_item_description(receipt: Receipt) -> int:
    """ceil(price * 0.2) per item whose trimmed description length is a non-zero multiple of 3."""
    points = 0
    for item in receipt.items:
        length = len(item.short_description.strip())
        if length and length % 3 == 0:
            # price * 0.2 == cents / 500, rounded up
            points += -(-item.price_cents // 500)
    return points


def rule_odd_day(receipt: Receipt) -> int:
    """6 points if the day of the purchase date is odd."""
    return 6 if receipt.purchased_at.day % 2 == 1 else 0


def rule_afternoon_window(receipt: Receipt) -> int:
    """10 points if bought after 14:00 and before 16:00, both exclusive."""
    t = receipt.purchased_at
    two_pm = t.replace(hour=14, minute=0, second=0, microsecond=0)
    four_pm = t.replace(hour=16, minute=0, second=0, microsecond=0)
    return 10 if two_pm < t < four_pm else 0


RULES: Tuple[RuleFn, ...] = (
    rule_alphanumeric,
    rule_round_dollar,
    rule_quarter_multiple,
    rule_item_pairs,
    rule_item_description,
    rule_odd_day,
    rule_afternoon_window,
)


def calculate_points(receipt: Receipt, rules: Sequence[RuleFn] = RULES) -> int:
    return sum(int(rule(receipt)) for rule in rules)


def explain_points(receipt: Receipt, rules: Sequence[RuleFn] = RULES) -> Dict[str, int]:
    return {getattr(rule, "__name__", repr(rule)): int(rule(receipt)) for rule in rules}
