"""Pydantic schemas for API request/response."""

from farm_ledger.api.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
    BalanceAuditResponse,
)
from farm_ledger.api.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
)
from farm_ledger.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
    PeriodSummaryResponse,
)

__all__ = [
    "AccountCreate",
    "AccountUpdate",
    "AccountResponse",
    "AccountListResponse",
    "BalanceAuditResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "PeriodSummaryResponse",
]
