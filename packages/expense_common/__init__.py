"""Persistence-free expense domain models."""

from .expenses import Expense, total_amount

__all__ = [
    "Expense",
    "total_amount",
]
