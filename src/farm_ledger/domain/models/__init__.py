"""Domain models package."""

from farm_ledger.domain.models.enums import TransactionType, IntervalType
from farm_ledger.domain.models.account import Account
from farm_ledger.domain.models.category import Category
from farm_ledger.domain.models.transaction import Transaction

__all__ = [
    "TransactionType",
    "IntervalType",
    "Account",
    "Category",
    "Transaction",
]
