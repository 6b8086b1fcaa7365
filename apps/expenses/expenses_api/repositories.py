"""Database access layer for the Expenses API."""

from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoResultFound

from packages.expense_common import Expense

from .database import ExpenseRecord, session_scope


class ExpensesRepository:
    """Provides the list and create operations for expenses."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def list_expenses(self) -> List[Expense]:
        """Return every stored expense ordered by ID."""

        with session_scope(self._engine) as session:
            records = session.scalars(
                select(ExpenseRecord).order_by(ExpenseRecord.id)
            ).all()
            return [self._record_to_expense(record) for record in records]

    def create_expense(self, expense: Expense) -> Expense:
        """Persist a new expense and return it with its assigned ID.

        Any ``id`` already present on ``expense`` is ignored.
        """

        record = ExpenseRecord(
            description=expense.description,
            amount=expense.amount,
            date=expense.date,
        )
        with session_scope(self._engine) as session:
            session.add(record)
            session.flush()
            return self._record_to_expense(record)

    def get_expense(self, expense_id: int) -> Expense:
        """Fetch a single expense by ID."""

        with session_scope(self._engine) as session:
            record = session.get(ExpenseRecord, expense_id)
            if record is None:
                raise NoResultFound(f"Expense {expense_id} not found")
            return self._record_to_expense(record)

    @staticmethod
    def _record_to_expense(record: ExpenseRecord) -> Expense:
        """Convert an :class:`ExpenseRecord` to an :class:`Expense`."""

        return Expense(
            id=record.id,
            description=record.description,
            amount=record.amount,
            date=record.date,
        )
