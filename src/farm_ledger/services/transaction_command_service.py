"""Transaction commands: the only writer of transactions and account balances."""

import logging
from dataclasses import dataclass, fields, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, TypeVar, Union

from farm_ledger.core.exceptions import (
    ConflictError,
    NotFoundError,
    StaleWriteError,
    ValidationError,
)
from farm_ledger.core.timezone import now_local, to_local
from farm_ledger.domain.models import Account, Transaction, TransactionType
from farm_ledger.domain.views import TransactionDetail
from farm_ledger.repositories.protocols import (
    AccountRepository,
    CategoryRepository,
    TransactionRepository,
    UnitOfWork,
)
from farm_ledger.services.balance_engine import apply_create, apply_delete, apply_update

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Matches the storage scale and precision of money columns
AMOUNT_EXPONENT = Decimal("0.01")
AMOUNT_LIMIT = Decimal("1e16")


class _Unset:
    """Marker for a field the caller did not include in a partial update."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

    account_id: int
    category_id: int
    amount: Union[Decimal, str, int]
    txn_type: Union[TransactionType, str]
    note: Optional[str] = None
    date: Optional[datetime] = None


@dataclass
class TransactionUpdate:
    """
    Partial update data for editing a transaction.

    Fields left as UNSET keep their stored value. ``note=None`` or
    ``note=""`` is an explicit change, not an omission.
    """

    account_id: Any = UNSET
    category_id: Any = UNSET
    amount: Any = UNSET
    txn_type: Any = UNSET
    note: Any = UNSET
    date: Any = UNSET

    def changed_fields(self) -> list[str]:
        """Names of the fields the caller supplied."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not UNSET]


def validate_amount(value: Any) -> Decimal:
    """Coerce to Decimal and require a positive amount with at most two decimals."""
    if isinstance(value, bool) or value is None:
        raise ValidationError("amount is required", field="amount")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"amount is not a number: {value!r}", field="amount") from None
    if not amount.is_finite():
        raise ValidationError("amount must be a finite number", field="amount")
    if amount <= 0:
        raise ValidationError("amount must be greater than zero", field="amount")
    if amount >= AMOUNT_LIMIT:
        raise ValidationError("amount is too large", field="amount")
    if amount != amount.quantize(AMOUNT_EXPONENT):
        raise ValidationError("amount supports at most two decimal places", field="amount")
    return amount


def validate_type(value: Any) -> TransactionType:
    """Coerce to TransactionType ('income' or 'expense')."""
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError(
            f"type must be 'income' or 'expense', got {value!r}",
            field="type",
        ) from None


class TransactionCommandService:
    """
    Create, update and delete transactions with their balance effects.

    Each command runs as one unit of work: the transaction row change and the
    account balance change(s) commit together or not at all. Affected account
    rows are locked in ascending id order and written with a version
    compare-and-swap; a lost race rolls back and replays the whole command,
    up to ``max_attempts`` times.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        category_repo: CategoryRepository,
        transaction_repo: TransactionRepository,
        unit_of_work: UnitOfWork,
        max_attempts: int = 3,
        clock: Callable[[], datetime] = now_local,
    ):
        self._account_repo = account_repo
        self._category_repo = category_repo
        self._transaction_repo = transaction_repo
        self._uow = unit_of_work
        self._max_attempts = max(1, max_attempts)
        self._clock = clock

    def create(self, user_id: str, data: TransactionCreate) -> TransactionDetail:
        """Record a transaction and apply its effect to the account balance."""

        def _create() -> int:
            account = self._lock_owned_account(data.account_id, user_id)
            self._require_category(data.category_id)
            amount = validate_amount(data.amount)
            txn_type = validate_type(data.txn_type)

            now = self._clock()
            created = self._transaction_repo.create(
                Transaction(
                    txn_id=None,
                    account_id=account.account_id,
                    user_id=account.user_id,
                    category_id=data.category_id,
                    amount=amount,
                    txn_type=txn_type,
                    date=to_local(data.date) if data.date else now,
                    note=data.note,
                    created_at=now,
                    updated_at=now,
                )
            )
            self._account_repo.save_balance(account, apply_create(account, txn_type, amount))
            return created.txn_id

        txn_id = self._run("create", _create)
        logger.info("Created transaction %s on account %s", txn_id, data.account_id)
        return self._load_detail(txn_id)

    def update(self, user_id: str, txn_id: int, patch: TransactionUpdate) -> TransactionDetail:
        """
        Edit a transaction, reversing its old balance effect and applying the new one.

        Omitted fields keep their stored values, so a note-only edit leaves
        every balance unchanged.
        """

        def _update() -> None:
            current = self._require_owned_transaction(txn_id, user_id)
            target_account_id = (
                current.account_id if patch.account_id is UNSET else patch.account_id
            )
            if target_account_id is None:
                raise ValidationError("accountId cannot be null", field="accountId")

            locked = self._account_repo.lock_for_update([current.account_id, target_account_id])

            # Re-read under the account locks; a concurrent move invalidates this attempt
            current = self._require_owned_transaction(txn_id, user_id, for_update=True)
            old_account = locked.get(current.account_id)
            if old_account is None:
                raise StaleWriteError(f"Transaction {txn_id} moved while being updated")

            new_account = locked.get(target_account_id)
            if new_account is None or new_account.user_id != user_id:
                raise NotFoundError("Account", target_account_id)

            category_id = current.category_id
            if patch.category_id is not UNSET and patch.category_id != current.category_id:
                if patch.category_id is None:
                    raise ValidationError("categoryId cannot be null", field="categoryId")
                self._require_category(patch.category_id)
                category_id = patch.category_id

            amount = current.amount if patch.amount is UNSET else validate_amount(patch.amount)
            txn_type = current.txn_type if patch.txn_type is UNSET else validate_type(patch.txn_type)

            date = current.date
            if patch.date is not UNSET:
                if patch.date is None:
                    raise ValidationError("date cannot be null", field="date")
                date = to_local(patch.date)

            note = current.note if patch.note is UNSET else patch.note

            old_balance, new_balance = apply_update(
                old_account,
                current.txn_type,
                current.amount,
                new_account,
                txn_type,
                amount,
            )

            self._transaction_repo.update(
                replace(
                    current,
                    account_id=new_account.account_id,
                    user_id=new_account.user_id,
                    category_id=category_id,
                    amount=amount,
                    txn_type=txn_type,
                    note=note,
                    date=date,
                    updated_at=self._clock(),
                )
            )

            if old_account.account_id == new_account.account_id:
                self._account_repo.save_balance(old_account, new_balance)
            else:
                writes = sorted(
                    [(old_account, old_balance), (new_account, new_balance)],
                    key=lambda pair: pair[0].account_id,
                )
                for account, balance in writes:
                    self._account_repo.save_balance(account, balance)

        self._run("update", _update)
        logger.info(
            "Updated transaction %s (fields: %s)",
            txn_id,
            ", ".join(patch.changed_fields()) or "none",
        )
        return self._load_detail(txn_id)

    def delete(self, user_id: str, txn_id: int) -> None:
        """Remove a transaction and reverse its effect on the account balance."""

        def _delete() -> None:
            current = self._require_owned_transaction(txn_id, user_id)
            locked = self._account_repo.lock_for_update([current.account_id])

            current = self._require_owned_transaction(txn_id, user_id, for_update=True)
            account = locked.get(current.account_id)
            if account is None:
                raise StaleWriteError(f"Transaction {txn_id} moved while being deleted")

            self._transaction_repo.delete(txn_id)
            self._account_repo.save_balance(
                account,
                apply_delete(account, current.txn_type, current.amount),
            )

        self._run("delete", _delete)
        logger.info("Deleted transaction %s", txn_id)

    def _run(self, operation: str, command: Callable[[], T]) -> T:
        """Run ``command`` atomically, replaying it after lost compare-and-swap races."""
        for attempt in range(1, self._max_attempts + 1):
            try:
                with self._uow.atomic():
                    return command()
            except StaleWriteError as exc:
                logger.warning(
                    "Concurrent %s collided (attempt %d/%d): %s",
                    operation,
                    attempt,
                    self._max_attempts,
                    exc,
                )
        logger.warning("Giving up on %s after %d attempts", operation, self._max_attempts)
        raise ConflictError(
            f"Could not {operation} transaction because of concurrent changes; please retry"
        )

    def _lock_owned_account(self, account_id: int, user_id: str) -> Account:
        account = self._account_repo.lock_for_update([account_id]).get(account_id)
        if account is None or account.user_id != user_id:
            raise NotFoundError("Account", account_id)
        return account

    def _require_category(self, category_id: int) -> None:
        if self._category_repo.get_by_id(category_id) is None:
            raise NotFoundError("Category", category_id)

    def _require_owned_transaction(
        self,
        txn_id: int,
        user_id: str,
        for_update: bool = False,
    ) -> Transaction:
        transaction = self._transaction_repo.get_owned(txn_id, user_id, for_update=for_update)
        if transaction is None:
            raise NotFoundError("Transaction", txn_id)
        return transaction

    def _load_detail(self, txn_id: int) -> TransactionDetail:
        with self._uow.atomic():
            detail = self._transaction_repo.get_detail(txn_id)
        if detail is None:
            # Removed by a concurrent delete right after this command committed
            raise NotFoundError("Transaction", txn_id)
        return detail
