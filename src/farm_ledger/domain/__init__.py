"""Domain layer - pure business models with no external dependencies."""

from farm_ledger.domain.models import (
    Account,
    Category,
    Transaction,
    TransactionType,
    IntervalType,
)

__all__ = [
    "Account",
    "Category",
    "Transaction",
    "TransactionType",
    "IntervalType",
]
