"""Service layer - business logic orchestration."""

from farm_ledger.services.account_service import AccountService
from farm_ledger.services.category_service import CategoryService, DEFAULT_CATEGORIES
from farm_ledger.services.transaction_command_service import (
    TransactionCommandService,
    TransactionCreate,
    TransactionUpdate,
    UNSET,
)
from farm_ledger.services.transaction_query_service import TransactionQueryService

__all__ = [
    "AccountService",
    "CategoryService",
    "DEFAULT_CATEGORIES",
    "TransactionCommandService",
    "TransactionCreate",
    "TransactionUpdate",
    "UNSET",
    "TransactionQueryService",
]
