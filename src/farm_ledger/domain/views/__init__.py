"""View models for service outputs."""

from farm_ledger.domain.views.ledger import (
    TimeWindow,
    CategorySummary,
    AccountSummary,
    TransactionDetail,
    PeriodSummary,
    BalanceAudit,
)

__all__ = [
    "TimeWindow",
    "CategorySummary",
    "AccountSummary",
    "TransactionDetail",
    "PeriodSummary",
    "BalanceAudit",
]
