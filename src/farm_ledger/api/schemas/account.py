"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request schema for creating an account."""

    method: str = Field(..., min_length=1, max_length=100, description="Display name, e.g. Cash or Bank")
    currency: Optional[str] = Field(default=None, description="3-letter code; defaults to the configured currency")
    balance: Decimal = Field(default=Decimal("0"), description="Opening balance")


class AccountUpdate(BaseModel):
    """Request schema for renaming an account or changing its currency."""

    method: Optional[str] = Field(default=None, max_length=100)
    currency: Optional[str] = Field(default=None, description="3-letter code")


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: int
    user_id: str
    method: str
    currency: str
    opening_balance: Decimal
    balance: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int


class BalanceAuditResponse(BaseModel):
    """Response schema for a balance audit."""

    account_id: int
    stored_balance: Decimal
    expected_balance: Decimal
    drift: Decimal
    transaction_count: int
    is_consistent: bool
