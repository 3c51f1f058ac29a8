"""Field format validation for submitted receipts.

Decoding a request body into a :class:`~receipt_points.models.schemas.Receipt`
only guarantees that the expected keys hold strings. This module
checks each of those strings against its format rule. Rules are kept
in two tables, one for receipt level fields and one applied to every
item, each entry pairing a predicate with a human readable reason.
Every rule is evaluated, so callers get the complete list of
violations rather than the first failure.

A receipt is valid only when no rule is violated. There is no
partial acceptance, no minimum item count, no length limit and no
cross-field check (the total is never compared with the item prices).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Tuple

from receipt_points.models.schemas import Item, Receipt
from receipt_points.utils.helpers import parse_cents, parse_purchase_date, parse_purchase_time

# Whitespace is ASCII only: tab, newline, form feed, carriage return and space.
RETAILER_PATTERN = re.compile(r"[A-Za-z0-9\t\n\f\r &-]+")
DESCRIPTION_PATTERN = re.compile(r"[A-Za-z0-9\t\n\f\r -]+")


@dataclass(frozen=True)
class FieldRule:
    """A named format rule for one string field."""

    field: str
    check: Callable[[str], bool]
    reason: str


@dataclass(frozen=True)
class Violation:
    field: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason}


def _matches(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    return lambda value: pattern.fullmatch(value) is not None


def _is_money(value: str) -> bool:
    return parse_cents(value) is not None


RECEIPT_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        "retailer",
        _matches(RETAILER_PATTERN),
        "must be non-empty and contain only letters, digits, spaces, '-' or '&'",
    ),
    FieldRule(
        "purchaseDate",
        lambda value: parse_purchase_date(value) is not None,
        "must be a real calendar date formatted YYYY-MM-DD",
    ),
    FieldRule(
        "purchaseTime",
        lambda value: parse_purchase_time(value) is not None,
        "must be a 24-hour time formatted HH:MM",
    ),
    FieldRule("total", _is_money, "must be an amount with exactly two decimals, e.g. 35.35"),
)

ITEM_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        "shortDescription",
        _matches(DESCRIPTION_PATTERN),
        "must be non-empty and contain only letters, digits, spaces or '-'",
    ),
    FieldRule("price", _is_money, "must be an amount with exactly two decimals, e.g. 6.49"),
)


def _receipt_value(receipt: Receipt, field: str) -> str:
    return {
        "retailer": receipt.retailer,
        "purchaseDate": receipt.purchase_date,
        "purchaseTime": receipt.purchase_time,
        "total": receipt.total,
    }[field]


def _item_value(item: Item, field: str) -> str:
    return item.short_description if field == "shortDescription" else item.price


def find_violations(receipt: Receipt) -> List[Violation]:
    """Return every rule the receipt breaks, in rule order.

    Item violations are reported as ``items[<index>].<field>``.
    """
    violations: List[Violation] = []
    for rule in RECEIPT_RULES:
        if not rule.check(_receipt_value(receipt, rule.field)):
            violations.append(Violation(rule.field, rule.reason))
    for index, item in enumerate(receipt.items):
        for rule in ITEM_RULES:
            if not rule.check(_item_value(item, rule.field)):
                violations.append(Violation(f"items[{index}].{rule.field}", rule.reason))
    return violations


def validate(receipt: Receipt) -> bool:
    """Return True when the receipt passes every field rule."""
    return not find_violations(receipt)
