"""Read side of the ledger: windowed, enriched transaction listings."""

from datetime import datetime
from typing import Callable, Union

from farm_ledger.core.exceptions import NotFoundError
from farm_ledger.core.timezone import now_local
from farm_ledger.domain.models import IntervalType, TransactionType
from farm_ledger.domain.views import PeriodSummary, TimeWindow, TransactionDetail
from farm_ledger.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    UnitOfWork,
)
from farm_ledger.services.interval_resolver import DateInput, resolve_window


class TransactionQueryService:
    """
    Lists transactions of an account inside a named or explicit time window.

    Results are enriched with category and account summaries and ordered
    newest first. The ``list_all_*`` variants skip the ownership filter and
    must only be reachable by privileged callers.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        unit_of_work: UnitOfWork,
        clock: Callable[[], datetime] = now_local,
    ):
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._uow = unit_of_work
        self._clock = clock

    def resolve(
        self,
        interval: Union[str, IntervalType],
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> TimeWindow:
        """Resolve a window against this service's clock."""
        return resolve_window(interval, start_date, end_date, now=self._clock())

    def list_transactions(
        self,
        user_id: str,
        account_id: int,
        interval: Union[str, IntervalType],
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> list[TransactionDetail]:
        """
        List the caller's transactions on ``account_id`` within the window.

        Raises ValidationError for a bad interval and NotFoundError when the
        account is missing or belongs to someone else.
        """
        window = self.resolve(interval, start_date, end_date)
        return self._list_owned(user_id, account_id, window)

    def summarize(
        self,
        user_id: str,
        account_id: int,
        interval: Union[str, IntervalType],
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> PeriodSummary:
        """Income and expense totals for the caller's account within the window."""
        window = self.resolve(interval, start_date, end_date)
        details = self._list_owned(user_id, account_id, window)

        summary = PeriodSummary(window=window, transaction_count=len(details))
        for detail in details:
            txn = detail.transaction
            if txn.txn_type == TransactionType.INCOME:
                summary.income_total += txn.amount
            else:
                summary.expense_total += txn.amount
        return summary

    def list_all_transactions_for_account(
        self,
        account_id: int,
        interval: Union[str, IntervalType] = IntervalType.ALL,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> list[TransactionDetail]:
        """Admin read: an account's transactions regardless of owner."""
        window = self.resolve(interval, start_date, end_date)
        with self._uow.atomic():
            if self._account_repo.get_by_id(account_id) is None:
                raise NotFoundError("Account", account_id)
            return self._transaction_repo.list_details(
                account_id=account_id,
                start=window.start,
                end=window.end,
            )

    def list_all_transactions(
        self,
        interval: Union[str, IntervalType] = IntervalType.ALL,
        start_date: DateInput = None,
        end_date: DateInput = None,
    ) -> list[TransactionDetail]:
        """Admin read: every account's transactions."""
        window = self.resolve(interval, start_date, end_date)
        with self._uow.atomic():
            return self._transaction_repo.list_details(start=window.start, end=window.end)

    def _list_owned(
        self,
        user_id: str,
        account_id: int,
        window: TimeWindow,
    ) -> list[TransactionDetail]:
        with self._uow.atomic():
            if self._account_repo.get_owned(account_id, user_id) is None:
                raise NotFoundError("Account", account_id)
            return self._transaction_repo.list_details(
                account_id=account_id,
                start=window.start,
                end=window.end,
            )
