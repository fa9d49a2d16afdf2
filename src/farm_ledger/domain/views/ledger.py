"""View models for ledger query outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from farm_ledger.domain.models import Transaction


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive ``[start, end]`` window; ``end=None`` means no upper bound."""

    start: datetime
    end: Optional[datetime] = None

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        return self.end is None or moment <= self.end


@dataclass
class CategorySummary:
    """Category fields attached to a listed transaction."""

    category_id: int
    name: str
    type: str
    icon: Optional[str] = None
    color: Optional[str] = None


@dataclass
class AccountSummary:
    """Account fields attached to a listed transaction."""

    account_id: int
    method: str
    balance: Decimal
    currency: str


@dataclass
class TransactionDetail:
    """A transaction enriched with its category and account summaries."""

    transaction: Transaction
    category: CategorySummary
    account: AccountSummary


@dataclass
class PeriodSummary:
    """Income/expense totals over a resolved window."""

    window: TimeWindow
    income_total: Decimal = field(default_factory=lambda: Decimal("0"))
    expense_total: Decimal = field(default_factory=lambda: Decimal("0"))
    transaction_count: int = 0

    @property
    def net(self) -> Decimal:
        return self.income_total - self.expense_total


@dataclass
class BalanceAudit:
    """Stored balance versus the balance replayed from the account history."""

    account_id: int
    stored_balance: Decimal
    expected_balance: Decimal
    transaction_count: int

    @property
    def drift(self) -> Decimal:
        return self.stored_balance - self.expected_balance

    @property
    def is_consistent(self) -> bool:
        return self.drift == 0
