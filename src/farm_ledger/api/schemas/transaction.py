"""Pydantic schemas for transaction endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from farm_ledger.domain.views import PeriodSummary, TransactionDetail


class TransactionCreateRequest(BaseModel):
    """Request schema for creating a transaction."""

    model_config = ConfigDict(populate_by_name=True)

    account_id: int = Field(..., alias="accountId")
    category_id: int = Field(..., alias="categoryId")
    amount: Union[Decimal, str] = Field(..., description="Positive amount; the sign comes from type")
    type: str = Field(..., description="income or expense")
    note: Optional[str] = Field(default=None, max_length=500)
    date: Optional[datetime] = Field(default=None, description="Defaults to now")


class TransactionUpdateRequest(BaseModel):
    """
    Request schema for updating a transaction (partial update).

    Only the keys present in the request body are changed; sending
    ``"note": null`` clears the note.
    """

    model_config = ConfigDict(populate_by_name=True)

    account_id: Optional[int] = Field(default=None, alias="accountId")
    category_id: Optional[int] = Field(default=None, alias="categoryId")
    amount: Optional[Union[Decimal, str]] = None
    type: Optional[str] = None
    note: Optional[str] = Field(default=None, max_length=500)
    date: Optional[datetime] = None


class CategorySummaryResponse(BaseModel):
    id: int
    name: str
    type: str
    icon: Optional[str] = None
    color: Optional[str] = None


class AccountSummaryResponse(BaseModel):
    id: int
    method: str
    balance: Decimal
    currency: str


class TransactionResponse(BaseModel):
    """Response schema for a single transaction with its category and account."""

    id: int
    account_id: int
    category_id: int
    user_id: str
    amount: Decimal
    type: str
    note: Optional[str] = None
    date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: CategorySummaryResponse
    account: AccountSummaryResponse

    @classmethod
    def from_detail(cls, detail: TransactionDetail) -> "TransactionResponse":
        txn = detail.transaction
        return cls(
            id=txn.txn_id,
            account_id=txn.account_id,
            category_id=txn.category_id,
            user_id=txn.user_id,
            amount=txn.amount,
            type=txn.txn_type.value,
            note=txn.note,
            date=txn.date,
            created_at=txn.created_at,
            updated_at=txn.updated_at,
            category=CategorySummaryResponse(
                id=detail.category.category_id,
                name=detail.category.name,
                type=detail.category.type,
                icon=detail.category.icon,
                color=detail.category.color,
            ),
            account=AccountSummaryResponse(
                id=detail.account.account_id,
                method=detail.account.method,
                balance=detail.account.balance,
                currency=detail.account.currency,
            ),
        )


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int


class PeriodSummaryResponse(BaseModel):
    """Response schema for income/expense totals over a window."""

    start: datetime
    end: Optional[datetime] = None
    income_total: Decimal
    expense_total: Decimal
    net: Decimal
    transaction_count: int

    @classmethod
    def from_summary(cls, summary: PeriodSummary) -> "PeriodSummaryResponse":
        return cls(
            start=summary.window.start,
            end=summary.window.end,
            income_total=summary.income_total,
            expense_total=summary.expense_total,
            net=summary.net,
            transaction_count=summary.transaction_count,
        )
