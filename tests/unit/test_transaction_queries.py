"""
Unit tests for TransactionQueryService.

Tests cover:
- Window filtering for named and explicit intervals
- Ordering (newest first, ties by insertion)
- Enrichment with category and account summaries
- Ownership checks and admin reads
- Period summaries
"""

from datetime import datetime
from decimal import Decimal

import pytest

from farm_ledger.core.exceptions import NotFoundError, ValidationError
from farm_ledger.domain.models import TransactionType

from tests.conftest import OTHER_USER, OWNER


class TestListTransactions:
    """Tests for listing an account's transactions."""

    def test_monthly_window_filters_by_date(
        self,
        query_service,
        transaction_factory,
        sample_account,
        food,
    ):
        """
        GIVEN transactions dated Feb 29, Mar 1 00:00, Mar 31 23:59:59.999 and Apr 1
        WHEN I list with interval="monthly" on 2024-03-15
        THEN only the two March transactions are returned
        """
        transaction_factory(sample_account, food, amount="1.00", date=datetime(2024, 2, 29, 23, 59, 59))
        first = transaction_factory(sample_account, food, amount="2.00", date=datetime(2024, 3, 1, 0, 0, 0))
        last = transaction_factory(
            sample_account,
            food,
            amount="3.00",
            date=datetime(2024, 3, 31, 23, 59, 59, 999000),
        )
        transaction_factory(sample_account, food, amount="4.00", date=datetime(2024, 4, 1, 0, 0, 0))

        details = query_service.list_transactions(OWNER, sample_account.account_id, "monthly")

        assert [d.transaction.txn_id for d in details] == [
            last.transaction.txn_id,
            first.transaction.txn_id,
        ]

    def test_ordered_newest_first(self, query_service, transaction_factory, sample_account, food):
        older = transaction_factory(sample_account, food, date=datetime(2024, 3, 2, 9, 0))
        newer = transaction_factory(sample_account, food, date=datetime(2024, 3, 14, 9, 0))

        details = query_service.list_transactions(OWNER, sample_account.account_id, "all")

        assert [d.transaction.txn_id for d in details] == [
            newer.transaction.txn_id,
            older.transaction.txn_id,
        ]

    def test_same_date_keeps_insertion_order(
        self,
        query_service,
        transaction_factory,
        sample_account,
        food,
    ):
        when = datetime(2024, 3, 10, 8, 0)
        first = transaction_factory(sample_account, food, date=when)
        second = transaction_factory(sample_account, food, date=when)
        third = transaction_factory(sample_account, food, date=when)

        details = query_service.list_transactions(OWNER, sample_account.account_id, "all")

        assert [d.transaction.txn_id for d in details] == [
            first.transaction.txn_id,
            second.transaction.txn_id,
            third.transaction.txn_id,
        ]

    def test_results_are_enriched(self, query_service, transaction_factory, sample_account, food):
        transaction_factory(sample_account, food, amount="20.00")

        detail = query_service.list_transactions(OWNER, sample_account.account_id, "daily")[0]

        assert detail.category.category_id == food.category_id
        assert detail.category.name == "Food"
        assert detail.category.type == "Expense"
        assert detail.account.account_id == sample_account.account_id
        assert detail.account.method == "Cash"
        assert detail.account.currency == "TND"
        assert detail.account.balance == Decimal("80.00")

    def test_custom_interval(self, query_service, transaction_factory, sample_account, food):
        transaction_factory(sample_account, food, date=datetime(2023, 6, 1))
        inside = transaction_factory(sample_account, food, date=datetime(2023, 7, 15))

        details = query_service.list_transactions(
            OWNER,
            sample_account.account_id,
            "interval",
            "2023-07-01",
            "2023-07-31",
        )

        assert [d.transaction.txn_id for d in details] == [inside.transaction.txn_id]

    def test_empty_window_returns_empty_list(self, query_service, sample_account):
        assert query_service.list_transactions(OWNER, sample_account.account_id, "weekly") == []

    def test_only_the_requested_account(
        self,
        query_service,
        account_factory,
        transaction_factory,
        food,
    ):
        account_a = account_factory()
        account_b = account_factory(method="Bank")
        transaction_factory(account_a, food)
        transaction_factory(account_b, food)

        details = query_service.list_transactions(OWNER, account_a.account_id, "all")

        assert [d.transaction.account_id for d in details] == [account_a.account_id]

    def test_bogus_interval_fails(self, query_service, sample_account):
        with pytest.raises(ValidationError):
            query_service.list_transactions(OWNER, sample_account.account_id, "bogus")

    def test_bad_interval_wins_over_missing_account(self, query_service):
        with pytest.raises(ValidationError):
            query_service.list_transactions(OWNER, 999, "bogus")

    def test_other_users_account_is_not_found(self, query_service, sample_account):
        """
        GIVEN an account owned by OWNER
        WHEN another user lists its transactions
        THEN NotFoundError is raised
        """
        with pytest.raises(NotFoundError):
            query_service.list_transactions(OTHER_USER, sample_account.account_id, "all")


class TestSummarize:
    """Tests for period totals."""

    def test_totals_within_window(
        self,
        query_service,
        transaction_factory,
        sample_account,
        food,
        salary,
    ):
        transaction_factory(sample_account, salary, amount="500.00", txn_type=TransactionType.INCOME)
        transaction_factory(sample_account, food, amount="20.00")
        transaction_factory(sample_account, food, amount="30.50")
        transaction_factory(sample_account, food, amount="99.00", date=datetime(2023, 1, 1))

        summary = query_service.summarize(OWNER, sample_account.account_id, "monthly")

        assert summary.income_total == Decimal("500.00")
        assert summary.expense_total == Decimal("50.50")
        assert summary.net == Decimal("449.50")
        assert summary.transaction_count == 3
        assert summary.window.start == datetime(2024, 3, 1)

    def test_empty_period(self, query_service, sample_account):
        summary = query_service.summarize(OWNER, sample_account.account_id, "daily")

        assert summary.transaction_count == 0
        assert summary.net == Decimal("0")


class TestAdminReads:
    """Tests for the unfiltered read variants."""

    def test_account_regardless_of_owner(
        self,
        query_service,
        account_factory,
        transaction_factory,
        food,
    ):
        theirs = account_factory(user_id=OTHER_USER)
        transaction_factory(theirs, food)

        details = query_service.list_all_transactions_for_account(theirs.account_id)

        assert len(details) == 1
        assert details[0].transaction.user_id == OTHER_USER

    def test_missing_account_is_not_found(self, query_service):
        with pytest.raises(NotFoundError):
            query_service.list_all_transactions_for_account(999)

    def test_all_accounts(self, query_service, account_factory, transaction_factory, food):
        mine = account_factory()
        theirs = account_factory(user_id=OTHER_USER)
        transaction_factory(mine, food, date=datetime(2024, 3, 1))
        transaction_factory(theirs, food, date=datetime(2024, 3, 2))

        details = query_service.list_all_transactions()

        assert [d.transaction.account_id for d in details] == [theirs.account_id, mine.account_id]

    def test_all_accounts_with_window(self, query_service, account_factory, transaction_factory, food):
        mine = account_factory()
        transaction_factory(mine, food, date=datetime(2022, 5, 1))
        transaction_factory(mine, food, date=datetime(2024, 3, 15, 8, 0))

        details = query_service.list_all_transactions("yearly")

        assert len(details) == 1
