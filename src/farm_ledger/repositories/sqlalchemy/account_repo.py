"""SQLAlchemy implementation of AccountRepository."""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from farm_ledger.core.exceptions import NotFoundError, StaleWriteError
from farm_ledger.core.timezone import now_local
from farm_ledger.domain.models import Account
from farm_ledger.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """
    SQLAlchemy-backed account repository.

    Writes are flushed, never committed: the unit of work owns the
    surrounding database transaction.
    """

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            user_id=account.user_id,
            method=account.method,
            currency=account.currency,
            opening_balance=account.opening_balance,
            balance=account.balance,
            version=account.version,
            created_at=account.created_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def get_owned(self, account_id: int, user_id: str) -> Optional[Account]:
        """Retrieve account by ID only if it belongs to ``user_id``."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id,
            AccountORM.user_id == user_id,
        ).first()
        return self._to_domain(orm_account) if orm_account else None

    def list_by_user(self, user_id: str) -> list[Account]:
        """List a user's accounts."""
        orm_accounts = (
            self._db.query(AccountORM)
            .filter(AccountORM.user_id == user_id)
            .order_by(AccountORM.account_id)
            .all()
        )
        return [self._to_domain(a) for a in orm_accounts]

    def list_all(self) -> list[Account]:
        """List every account."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.account_id).all()
        return [self._to_domain(a) for a in orm_accounts]

    def lock_for_update(self, account_ids: list[int]) -> dict[int, Account]:
        """
        Lock and re-read accounts, one row at a time in ascending id order.

        The fixed order keeps two commands touching the same pair of
        accounts from deadlocking. Dialects without row locks (SQLite)
        render no FOR UPDATE clause; the version check in save_balance
        still catches interleaved writers there.
        """
        locked: dict[int, Account] = {}
        for account_id in sorted(set(account_ids)):
            orm_account = (
                self._db.query(AccountORM)
                .filter(AccountORM.account_id == account_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if orm_account:
                locked[account_id] = self._to_domain(orm_account)
        return locked

    def save_balance(self, account: Account, new_balance: Decimal) -> Account:
        """Compare-and-swap the balance against ``account.version``."""
        updated_at = now_local()
        rows = (
            self._db.query(AccountORM)
            .filter(
                AccountORM.account_id == account.account_id,
                AccountORM.version == account.version,
            )
            .update(
                {
                    AccountORM.balance: new_balance,
                    AccountORM.version: AccountORM.version + 1,
                    AccountORM.updated_at: updated_at,
                },
                synchronize_session="fetch",
            )
        )
        if rows != 1:
            raise StaleWriteError(
                f"Account {account.account_id} changed since version {account.version}"
            )
        return replace(
            account,
            balance=new_balance,
            version=account.version + 1,
            updated_at=updated_at,
        )

    def update_details(self, account: Account) -> Account:
        """Write ``method``, ``currency`` and ``updated_at``; the balance columns are left alone."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account.account_id
        ).first()
        if not orm_account:
            raise NotFoundError("Account", account.account_id)

        orm_account.method = account.method
        orm_account.currency = account.currency
        orm_account.updated_at = account.updated_at

        self._db.flush()
        self._db.refresh(orm_account)
        return self._to_domain(orm_account)

    def delete(self, account_id: int) -> None:
        """Delete an account."""
        self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            user_id=orm.user_id,
            method=orm.method,
            currency=orm.currency,
            opening_balance=_to_decimal(orm.opening_balance),
            balance=_to_decimal(orm.balance),
            version=orm.version,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )


def _to_decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")
