"""Unit tests for JSON payload parsing helpers."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from packages.expense_common import Expense

from expenses_api.payloads import parse_expense_payload, serialize_expense


def test_parse_expense_payload_success():
    """A complete payload yields typed values."""

    result, errors = parse_expense_payload(
        {"id": 7, "description": "Flight", "amount": "123.45", "date": "2024-01-04"}
    )
    assert not errors
    assert result is not None
    assert result.amount == Decimal("123.45")
    assert result.date == datetime(2024, 1, 4)
    assert result.to_expense().id is None


def test_parse_expense_payload_accepts_utc_suffix():
    """A trailing ``Z`` is read as UTC."""

    result, errors = parse_expense_payload(
        {"description": "", "amount": 0, "date": "2024-01-04T10:00:00Z"}
    )
    assert not errors
    assert result.date == datetime(2024, 1, 4, 10, 0)


def test_parse_expense_payload_type_errors():
    """Wrongly typed values surface one error each."""

    result, errors = parse_expense_payload(
        {"description": 5, "amount": "abc", "date": "yesterday"}
    )
    assert result is None
    assert errors == [
        "Description must be a string.",
        "Amount must be a valid number.",
        "Date must be an ISO 8601 timestamp.",
    ]


def test_parse_expense_payload_rejects_booleans_and_infinity():
    """Booleans and non-finite numbers are not amounts."""

    for amount in (True, "Infinity", "NaN", [1]):
        result, errors = parse_expense_payload(
            {"description": "x", "amount": amount, "date": "2024-01-04"}
        )
        assert result is None
        assert errors == ["Amount must be a valid number."]


def test_serialize_expense():
    """Serialisation produces JSON-ready primitives."""

    expense = Expense(
        id=3,
        description="Parking",
        amount=Decimal("4.50"),
        date=datetime(2024, 5, 6, 7, 8, 9),
    )
    assert serialize_expense(expense) == {
        "id": 3,
        "description": "Parking",
        "amount": 4.5,
        "date": "2024-05-06T07:08:09",
    }


def test_parse_expense_payload_rejects_out_of_range_offset_dates():
    """Offsets that push a date past year 1 are payload errors, not crashes."""

    result, errors = parse_expense_payload(
        {"description": "x", "amount": 1, "date": "0001-01-01T00:00:00+01:00"}
    )
    assert result is None
    assert errors == ["Date must be an ISO 8601 timestamp."]


def test_parse_expense_payload_amount_must_fit_column():
    """Amounts need at most 16 digits before the decimal point."""

    largest, errors = parse_expense_payload(
        {"description": "x", "amount": "9999999999999999.99", "date": "2024-01-04"}
    )
    assert not errors
    assert largest.amount == Decimal("9999999999999999.99")

    for amount in (1e20, "10000000000000000", "-1e16", "1e40"):
        result, errors = parse_expense_payload(
            {"description": "x", "amount": amount, "date": "2024-01-04"}
        )
        assert result is None
        assert errors == ["Amount must be a valid number."]
