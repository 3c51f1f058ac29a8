import datetime as dt

import pytest

from receipt_points.utils.helpers import parse_cents, parse_purchase_date, parse_purchase_time


@pytest.mark.parametrize(
    "value, expected",
    [("35.35", 3535), ("0.00", 0), ("100.00", 10000), ("007.05", 705)],
)
def test_parse_cents(value, expected):
    assert parse_cents(value) == expected


@pytest.mark.parametrize("value", ["", None, "35", "35.3", "35.355", "-1.00", "1,000.00", " 1.00", "1.00\n", "abc"])
def test_parse_cents_rejects_malformed(value):
    assert parse_cents(value) is None


def test_parse_purchase_date():
    assert parse_purchase_date("2022-01-01") == dt.date(2022, 1, 1)
    assert parse_purchase_date("2024-02-29") == dt.date(2024, 2, 29)


@pytest.mark.parametrize("value", ["2023-02-30", "2023-13-01", "2022-1-1", "20220101", "01-01-2022", ""])
def test_parse_purchase_date_invalid_returns_none(value):
    assert parse_purchase_date(value) is None


def test_parse_purchase_time():
    assert parse_purchase_time("00:00") == dt.time(0, 0)
    assert parse_purchase_time("23:59") == dt.time(23, 59)


@pytest.mark.parametrize("value", ["24:00", "12:60", "9:30", "1:01 PM", "13:01:00", ""])
def test_parse_purchase_time_invalid_returns_none(value):
    assert parse_purchase_time(value) is None
