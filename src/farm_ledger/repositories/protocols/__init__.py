"""Repository protocol definitions (interfaces)."""

from farm_ledger.repositories.protocols.account_repo import AccountRepository
from farm_ledger.repositories.protocols.category_repo import CategoryRepository
from farm_ledger.repositories.protocols.transaction_repo import TransactionRepository
from farm_ledger.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "TransactionRepository",
    "UnitOfWork",
]
