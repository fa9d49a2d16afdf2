"""Repository layer - data access abstractions and implementations."""

from farm_ledger.repositories.protocols import (
    AccountRepository,
    CategoryRepository,
    TransactionRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "TransactionRepository",
    "UnitOfWork",
]
