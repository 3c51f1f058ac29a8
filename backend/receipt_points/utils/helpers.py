"""Parsing helpers for the textual fields of a receipt.

Receipts carry money, dates and times as strings. These helpers turn
them into values the validator and scoring engine can work with and
return ``None`` instead of raising when a value is malformed.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

# ASCII digits only; ``\d`` would also accept other Unicode digits.
MONEY_PATTERN = re.compile(r"([0-9]+)\.([0-9]{2})")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")


def parse_cents(value: str | None) -> Optional[int]:
    """Parse a ``<digits>.<two digits>`` amount into integer cents.

    The string is split on the decimal point and both halves are read
    as integers, so no floating point intermediate is involved.
    Signs, thousands separators and any other shape return ``None``.

    >>> parse_cents("35.35")
    3535
    """
    if not value:
        return None
    match = MONEY_PATTERN.fullmatch(value)
    if match is None:
        return None
    dollars, cents = match.groups()
    return int(dollars) * 100 + int(cents)


def parse_purchase_date(value: str | None) -> Optional[dt.date]:
    """Parse a ``YYYY-MM-DD`` string that names a real calendar day."""
    if not value or DATE_PATTERN.fullmatch(value) is None:
        return None
    try:
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        # Right shape but not a real date, e.g. 2023-02-30
        return None


def parse_purchase_time(value: str | None) -> Optional[dt.time]:
    """Parse an ``HH:MM`` 24-hour clock string."""
    if not value:
        return None
    match = TIME_PATTERN.fullmatch(value)
    if match is None:
        return None
    hour, minute = match.groups()
    return dt.time(int(hour), int(minute))
