"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a ledger transaction; the stored amount is always positive."""

    INCOME = "income"
    EXPENSE = "expense"


class IntervalType(str, Enum):
    """Named time windows for transaction queries."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ALL = "all"
    INTERVAL = "interval"  # explicit custom range, both bounds required
