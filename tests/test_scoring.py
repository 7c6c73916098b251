from datetime import datetime
from receipt_processor.models import Item, Receipt
from receipt_processor.scoring import (
    RULES,
    calculate_points,
    explain_points,
    rule_afternoon_window,
    rule_alphanumeric,
    rule_item_description,
    rule_item_pairs,
    rule_odd_day,
    rule_quarter_multiple,
    rule_round_dollar,
)


def make_receipt(retailer="", items=None, purchased_at=None, total_cents=0):
    return Receipt(
        id="test",
        retailer=retailer,
        items=items or [],
        purchased_at=purchased_at or datetime(2022, 1, 2, 12, 0),
        total_cents=total_cents,
    )


def items(*pairs):
    return [Item(short_description=d, price_cents=c) for d, c in pairs]


def test_alphanumeric_rule():
    assert rule_alphanumeric(make_receipt(retailer="")) == 0
    assert rule_alphanumeric(make_receipt(retailer="Target")) == 6
    assert rule_alphanumeric(make_receipt(retailer=" Target1 ")) == 7
    assert rule_alphanumeric(make_receipt(retailer="Target&$^#/[] ")) == 6
    assert rule_alphanumeric(make_receipt(retailer="M&M Corner Market")) == 14


def test_round_dollar_and_quarter_rules():
    whole = make_receipt(total_cents=3400)
    assert rule_round_dollar(whole) == 50
    assert rule_quarter_multiple(whole) == 25
    quarter = make_receipt(total_cents=3425)
    assert rule_round_dollar(quarter) == 0
    assert rule_quarter_multiple(quarter) == 25
    neither = make_receipt(total_cents=3422)
    assert rule_round_dollar(neither) == 0
    assert rule_quarter_multiple(neither) == 0
    assert rule_quarter_multiple(make_receipt(total_cents=3475)) == 25


def test_item_pairs_rule():
    assert rule_item_pairs(make_receipt(items=items(("test", 1000)))) == 0
    assert rule_item_pairs(make_receipt(items=items(("test", 1000), ("test", 1000)))) == 5
    assert rule_item_pairs(make_receipt(items=items(("test", 1000), ("test", 1000), ("test", 1000)))) == 5
    assert rule_item_pairs(make_receipt(items=items(*[("test", 1000)] * 5))) == 10


def test_item_description_rule():
    assert rule_item_description(make_receipt(items=items(("tes", 1000)))) == 2
    assert rule_item_description(make_receipt(items=items(("test", 1000)))) == 0
    assert rule_item_description(make_receipt(items=items(("tes", 1000), ("tes", 1000), ("test", 1000)))) == 4
    # 1.26 * 0.2 = 0.252, rounded up
    assert rule_item_description(make_receipt(items=items(("abc", 126)))) == 1
    assert rule_item_description(make_receipt(items=items(("   Klarbrunn 12-PK 12 FL OZ  ", 1200)))) == 3
    assert rule_item_description(make_receipt(items=items(("Emils Cheese Pizza", 1225)))) == 3


def test_item_description_rule_skips_blank_descriptions():
    assert rule_item_description(make_receipt(items=items(("   ", 5000), ("", 5000)))) == 0


def test_item_description_rule_free_item():
    assert rule_item_description(make_receipt(items=items(("abc", 0)))) == 0


def test_odd_day_rule():
    assert rule_odd_day(make_receipt(purchased_at=datetime(2025, 1, 2))) == 0
    assert rule_odd_day(make_receipt(purchased_at=datetime(2025, 1, 3))) == 6
    assert rule_odd_day(make_receipt(purchased_at=datetime(2025, 1, 31))) == 6


def test_afternoon_window_rule():
    def at(hour, minute):
        return rule_afternoon_window(make_receipt(purchased_at=datetime(2022, 3, 20, hour, minute)))

    assert at(13, 59) == 0
    assert at(14, 0) == 0
    assert at(14, 1) == 10
    assert at(15, 59) == 10
    assert at(16, 0) == 0
    assert at(16, 1) == 0


def test_calculate_points_sums_every_rule():
    receipt = make_receipt(
        retailer="M&M Corner Market",
        items=items(*[("Gatorade", 225)] * 4),
        purchased_at=datetime(2022, 3, 20, 14, 33),
        total_cents=900,
    )
    assert calculate_points(receipt) == 109
    breakdown = explain_points(receipt)
    assert sum(breakdown.values()) == 109
    assert breakdown["rule_round_dollar"] == 50
    assert breakdown["rule_afternoon_window"] == 10
    assert len(breakdown) == len(RULES)


def test_calculate_points_with_custom_rules():
    receipt = make_receipt(retailer="abc")
    assert calculate_points(receipt, rules=[rule_alphanumeric, lambda r: 7]) == 10
    assert calculate_points(receipt, rules=[]) == 0
