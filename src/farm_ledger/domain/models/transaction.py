"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from farm_ledger.domain.models.enums import TransactionType


@dataclass
class Transaction:
    """
    Ledger transaction entry (source of truth).

    - ``amount`` is always positive; direction comes from ``txn_type``
    - ``user_id`` mirrors the owning account's user
    - ``txn_id`` is assigned by the store on insert
    """

    txn_id: Optional[int]
    account_id: int
    user_id: str
    category_id: int
    amount: Decimal
    txn_type: TransactionType
    date: datetime
    note: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type)

    @property
    def signed_amount(self) -> Decimal:
        """Balance impact of this transaction: positive for income, negative for expense."""
        if self.txn_type == TransactionType.INCOME:
            return self.amount
        return -self.amount
