"""Points scoring engine for stored receipts.

The engine applies a fixed table of independent rules to a
``Receipt`` and sums their contributions. Every rule always runs and
none of them depends on another's outcome.

Rules:

* ``retailer`` – one point for every ASCII letter or digit in the
  retailer name, counted over the raw string.
* ``round_total`` – 50 points if the total is a whole dollar amount.
* ``quarter_total`` – 25 points if the total is a multiple of 0.25.
  Every round total is also a multiple of 0.25, so such receipts get
  both bonuses.
* ``items`` – 5 points for every two items, plus ``ceil(price * 0.2)``
  for each item whose trimmed description length is a multiple of 3.
* ``odd_day`` – 6 points if the day of the purchase date is odd.
* ``afternoon`` – 10 points if the purchase time is from 14:00 up to
  but not including 16:00.

Amounts are handled as integer cents. A value that cannot be parsed
contributes nothing to its rule instead of failing the whole score;
receipts that passed validation never hit that path.
"""

from __future__ import annotations

import datetime as dt
from typing import Callable, Tuple

from receipt_points.models.schemas import Item, Receipt
from receipt_points.utils.helpers import parse_cents, parse_purchase_date, parse_purchase_time

ROUND_TOTAL_POINTS = 50
QUARTER_TOTAL_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START = dt.time(14, 0)
AFTERNOON_END = dt.time(16, 0)

# price * 0.2 == cents / 500
_DESCRIPTION_DIVISOR_CENTS = 500


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _points_retailer(receipt: Receipt) -> int:
    return sum(1 for ch in receipt.retailer if ch.isascii() and ch.isalnum())


def _points_round_total(receipt: Receipt) -> int:
    cents = parse_cents(receipt.total)
    if cents is None:
        return 0
    return ROUND_TOTAL_POINTS if cents % 100 == 0 else 0


def _points_quarter_total(receipt: Receipt) -> int:
    cents = parse_cents(receipt.total)
    if cents is None:
        return 0
    return QUARTER_TOTAL_POINTS if cents % 25 == 0 else 0


def _points_item_description(item: Item) -> int:
    if len(item.short_description.strip()) % 3 != 0:
        return 0
    cents = parse_cents(item.price)
    if cents is None:
        return 0
    return _ceil_div(cents, _DESCRIPTION_DIVISOR_CENTS)


def _points_items(receipt: Receipt) -> int:
    points = (len(receipt.items) // 2) * ITEM_PAIR_POINTS
    points += sum(_points_item_description(item) for item in receipt.items)
    return points


def _points_odd_day(receipt: Receipt) -> int:
    purchase_date = parse_purchase_date(receipt.purchase_date)
    if purchase_date is None:
        return 0
    return ODD_DAY_POINTS if purchase_date.day % 2 == 1 else 0


def _points_afternoon(receipt: Receipt) -> int:
    purchase_time = parse_purchase_time(receipt.purchase_time)
    if purchase_time is None:
        return 0
    return AFTERNOON_POINTS if AFTERNOON_START <= purchase_time < AFTERNOON_END else 0


SCORING_RULES: Tuple[Tuple[str, Callable[[Receipt], int]], ...] = (
    ("retailer", _points_retailer),
    ("round_total", _points_round_total),
    ("quarter_total", _points_quarter_total),
    ("items", _points_items),
    ("odd_day", _points_odd_day),
    ("afternoon", _points_afternoon),
)


def score(receipt: Receipt) -> int:
    """Return the total number of points awarded for ``receipt``."""
    return sum(rule(receipt) for _, rule in SCORING_RULES)
