"""JSON payload parsing and serialisation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from packages.expense_common import Expense

AMOUNT_QUANTUM = Decimal("0.01")
# NUMERIC(18, 2) leaves 16 digits before the decimal point.
AMOUNT_LIMIT = Decimal(10) ** 16


@dataclass(slots=True)
class ExpensePayload:
    """Typed values extracted by :func:`parse_expense_payload`."""

    description: str
    amount: Decimal
    date: datetime

    def to_expense(self) -> Expense:
        return Expense(description=self.description, amount=self.amount, date=self.date)


def _parse_amount(raw: Any) -> Decimal:
    # bool is an int subclass and would otherwise parse as 0 or 1.
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(raw)
    try:
        amount = Decimal(str(raw).strip())
        if not amount.is_finite():
            raise ValueError(raw)
        amount = amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(raw) from exc
    if abs(amount) >= AMOUNT_LIMIT:
        raise ValueError(raw)
    return amount


def _parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(raw)
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError as exc:
            raise ValueError(raw) from exc
    return parsed


def parse_expense_payload(
    data: Any,
) -> Tuple[Optional[ExpensePayload], List[str]]:
    """Coerce a decoded JSON body into an :class:`ExpensePayload`.

    Returns a tuple of ``(result, errors)``. ``result`` is ``None`` when any
    field is missing or has the wrong type. Amounts must fit the
    ``NUMERIC(18, 2)`` column; beyond that values are not range checked, so
    negative amounts and any representable timestamp are accepted. An ``id``
    key in ``data`` is ignored.
    """

    if not isinstance(data, dict):
        return None, ["Request body must be a JSON object."]

    errors: List[str] = []

    description = data.get("description")
    if description is None:
        errors.append("Description is required.")
    elif not isinstance(description, str):
        errors.append("Description must be a string.")

    amount: Optional[Decimal] = None
    if data.get("amount") is None:
        errors.append("Amount is required.")
    else:
        try:
            amount = _parse_amount(data["amount"])
        except ValueError:
            errors.append("Amount must be a valid number.")

    date: Optional[datetime] = None
    if data.get("date") is None:
        errors.append("Date is required.")
    else:
        try:
            date = _parse_timestamp(data["date"])
        except ValueError:
            errors.append("Date must be an ISO 8601 timestamp.")

    if errors:
        return None, errors

    return ExpensePayload(description=description, amount=amount, date=date), []


def serialize_expense(expense: Expense) -> Dict[str, Any]:
    """Return the JSON representation of ``expense``."""

    return {
        "id": expense.id,
        "description": expense.description,
        "amount": float(expense.amount),
        "date": expense.date.isoformat(),
    }
