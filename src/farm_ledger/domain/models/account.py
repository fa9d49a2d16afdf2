"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Account:
    """
    A user's money container (cash box, bank account, mobile wallet...).

    ``balance`` is derived state: it always equals ``opening_balance`` plus the
    signed sum of the account's transactions. Only the transaction command
    service writes it, and every write bumps ``version``.
    """

    account_id: Optional[int]
    user_id: str
    method: str
    currency: str
    opening_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    version: int = 1
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)
