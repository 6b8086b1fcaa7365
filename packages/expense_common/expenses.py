"""Expense domain model and helper functions.

The :class:`Expense` dataclass is the shape handed between the HTTP layer
and the repository. It carries no SQLAlchemy state so callers can build
and compare instances without a database session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional


@dataclass(slots=True)
class Expense:
    """Single recorded expense."""

    description: str
    amount: Decimal
    date: datetime
    id: Optional[int] = None


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    """Return the summed amount of ``expenses`` as a :class:`Decimal`."""

    return sum((expense.amount for expense in expenses), Decimal())
