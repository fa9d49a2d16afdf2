"""Account management and balance auditing."""

import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from farm_ledger.core.exceptions import NotFoundError, ValidationError
from farm_ledger.core.timezone import now_local
from farm_ledger.domain.models import Account
from farm_ledger.domain.views import BalanceAudit
from farm_ledger.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    UnitOfWork,
)
from farm_ledger.services.transaction_command_service import AMOUNT_EXPONENT, AMOUNT_LIMIT

logger = logging.getLogger(__name__)


class AccountService:
    """
    Service for a user's accounts.

    Accounts start at their opening balance; afterwards only the transaction
    command service moves the balance. ``audit_balance`` replays the history
    to check that the stored balance still matches it.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        unit_of_work: UnitOfWork,
        default_currency: str = "TND",
    ):
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._uow = unit_of_work
        self._default_currency = default_currency

    def create_account(
        self,
        user_id: str,
        method: str,
        currency: Optional[str] = None,
        opening_balance: Any = Decimal("0"),
    ) -> Account:
        """
        Create a new account for ``user_id``.

        Args:
            user_id: Owner of the account
            method: Display name ("Cash", "Bank", "Mobile wallet"...)
            currency: ISO-style 3-letter code; defaults to the configured currency
            opening_balance: Starting balance, may be negative

        Returns:
            Created Account instance
        """
        method = _validate_method(method)
        code = _validate_currency(currency or self._default_currency)

        try:
            opening = Decimal(str(opening_balance))
        except (InvalidOperation, ValueError):
            raise ValidationError(
                f"opening balance is not a number: {opening_balance!r}",
                field="balance",
            ) from None
        if not opening.is_finite():
            raise ValidationError("opening balance must be a finite number", field="balance")
        if abs(opening) >= AMOUNT_LIMIT:
            raise ValidationError("opening balance is too large", field="balance")
        if opening != opening.quantize(AMOUNT_EXPONENT):
            raise ValidationError("opening balance supports at most two decimal places", field="balance")

        account = Account(
            account_id=None,
            user_id=user_id,
            method=method,
            currency=code,
            opening_balance=opening,
            balance=opening,
            created_at=now_local(),
        )
        with self._uow.atomic():
            created = self._account_repo.create(account)
        logger.info("Created account %s for user %s", created.account_id, user_id)
        return created

    def get_account(self, user_id: str, account_id: int) -> Account:
        """Get one of the caller's accounts."""
        with self._uow.atomic():
            account = self._account_repo.get_owned(account_id, user_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def list_accounts(self, user_id: str) -> list[Account]:
        """List the caller's accounts."""
        with self._uow.atomic():
            return self._account_repo.list_by_user(user_id)

    def list_all_accounts(self) -> list[Account]:
        """Admin read: every account of every user."""
        with self._uow.atomic():
            return self._account_repo.list_all()

    def update_account(
        self,
        user_id: str,
        account_id: int,
        method: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> Account:
        """
        Rename an account or change its currency.

        Only descriptive fields change here; balances are never edited
        directly and no amount is converted on a currency change.
        """
        new_method = _validate_method(method) if method is not None else None
        new_currency = _validate_currency(currency) if currency is not None else None

        with self._uow.atomic():
            account = self._account_repo.lock_for_update([account_id]).get(account_id)
            if account is None or account.user_id != user_id:
                raise NotFoundError("Account", account_id)
            updated = self._account_repo.update_details(
                replace(
                    account,
                    method=new_method or account.method,
                    currency=new_currency or account.currency,
                    updated_at=now_local(),
                )
            )
        logger.info("Updated account %s", account_id)
        return updated

    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete one of the caller's accounts together with all of its transactions."""
        with self._uow.atomic():
            account = self._account_repo.lock_for_update([account_id]).get(account_id)
            if account is None or account.user_id != user_id:
                raise NotFoundError("Account", account_id)
            removed = self._transaction_repo.delete_by_account(account_id)
            self._account_repo.delete(account_id)
        logger.info("Deleted account %s and %d transaction(s)", account_id, removed)

    def audit_balance(self, user_id: str, account_id: int) -> BalanceAudit:
        """Compare the stored balance with opening balance plus the replayed history."""
        with self._uow.atomic():
            account = self._account_repo.get_owned(account_id, user_id)
            if not account:
                raise NotFoundError("Account", account_id)
            transactions = self._transaction_repo.list_by_account(account_id)

        expected = account.opening_balance
        for txn in transactions:
            expected += txn.signed_amount

        audit = BalanceAudit(
            account_id=account_id,
            stored_balance=account.balance,
            expected_balance=expected,
            transaction_count=len(transactions),
        )
        if not audit.is_consistent:
            logger.warning(
                "Balance drift on account %s: stored %s, expected %s",
                account_id,
                audit.stored_balance,
                audit.expected_balance,
            )
        return audit


def _validate_method(method: Optional[str]) -> str:
    if not method or not method.strip():
        raise ValidationError("method is required", field="method")
    return method.strip()


def _validate_currency(currency: str) -> str:
    code = currency.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError(f"currency must be a 3-letter code, got {currency!r}", field="currency")
    return code
