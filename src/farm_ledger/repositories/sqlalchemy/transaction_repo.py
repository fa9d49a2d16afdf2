"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from farm_ledger.core.exceptions import StaleWriteError
from farm_ledger.domain.models import Transaction
from farm_ledger.domain.views import AccountSummary, CategorySummary, TransactionDetail
from farm_ledger.repositories.sqlalchemy.orm_models import (
    AccountORM,
    CategoryORM,
    TransactionORM,
)


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.flush()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def get_owned(
        self,
        txn_id: int,
        user_id: str,
        for_update: bool = False,
    ) -> Optional[Transaction]:
        """Retrieve a transaction through its account, filtered on the account owner."""
        query = (
            self._db.query(TransactionORM)
            .join(AccountORM, TransactionORM.account_id == AccountORM.account_id)
            .filter(
                TransactionORM.txn_id == txn_id,
                AccountORM.user_id == user_id,
            )
        )
        if for_update:
            query = query.with_for_update(of=TransactionORM).populate_existing()
        orm_txn = query.first()
        return self._to_domain(orm_txn) if orm_txn else None

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == transaction.txn_id
        ).first()
        if not orm_txn:
            raise StaleWriteError(f"Transaction {transaction.txn_id} disappeared during update")

        orm_txn.account_id = transaction.account_id
        orm_txn.user_id = transaction.user_id
        orm_txn.category_id = transaction.category_id
        orm_txn.amount = transaction.amount
        orm_txn.txn_type = transaction.txn_type
        orm_txn.note = transaction.note
        orm_txn.date = transaction.date
        orm_txn.updated_at = transaction.updated_at

        self._db.flush()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def delete(self, txn_id: int) -> None:
        """Delete a transaction; raises StaleWriteError if it is already gone."""
        rows = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).delete(synchronize_session="fetch")
        if rows != 1:
            raise StaleWriteError(f"Transaction {txn_id} disappeared during delete")

    def delete_by_account(self, account_id: int) -> int:
        """Delete all transactions of an account."""
        return self._db.query(TransactionORM).filter(
            TransactionORM.account_id == account_id
        ).delete(synchronize_session="fetch")

    def list_by_account(self, account_id: int) -> list[Transaction]:
        """List all transactions for an account, oldest first."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.account_id == account_id)
            .order_by(TransactionORM.date, TransactionORM.txn_id)
        )
        return [self._to_domain(t) for t in query.all()]

    def get_detail(self, txn_id: int) -> Optional[TransactionDetail]:
        """Retrieve a transaction enriched with category and account summaries."""
        row = self._detail_query().filter(TransactionORM.txn_id == txn_id).first()
        return self._to_detail(*row) if row else None

    def list_details(
        self,
        account_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[TransactionDetail]:
        """List enriched transactions in ``[start, end]``, newest first."""
        conditions = []
        if account_id is not None:
            conditions.append(TransactionORM.account_id == account_id)
        if start is not None:
            conditions.append(TransactionORM.date >= start)
        if end is not None:
            conditions.append(TransactionORM.date <= end)

        query = self._detail_query()
        if conditions:
            query = query.filter(and_(*conditions))

        # Same-date rows keep insertion order
        query = query.order_by(TransactionORM.date.desc(), TransactionORM.txn_id.asc())
        return [self._to_detail(*row) for row in query.all()]

    def _detail_query(self):
        return (
            self._db.query(TransactionORM, CategoryORM, AccountORM)
            .join(CategoryORM, TransactionORM.category_id == CategoryORM.category_id)
            .join(AccountORM, TransactionORM.account_id == AccountORM.account_id)
        )

    def _to_orm(self, txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            account_id=txn.account_id,
            user_id=txn.user_id,
            category_id=txn.category_id,
            amount=txn.amount,
            txn_type=txn.txn_type,
            note=txn.note,
            date=txn.date,
            created_at=txn.created_at,
            updated_at=txn.updated_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            account_id=orm.account_id,
            user_id=orm.user_id,
            category_id=orm.category_id,
            amount=Decimal(str(orm.amount)),
            txn_type=orm.txn_type,
            date=orm.date,
            note=orm.note,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    @classmethod
    def _to_detail(
        cls,
        txn: TransactionORM,
        category: CategoryORM,
        account: AccountORM,
    ) -> TransactionDetail:
        """Convert a joined row to an enriched view."""
        return TransactionDetail(
            transaction=cls._to_domain(txn),
            category=CategorySummary(
                category_id=category.category_id,
                name=category.name,
                type=category.type,
                icon=category.icon,
                color=category.color,
            ),
            account=AccountSummary(
                account_id=account.account_id,
                method=account.method,
                balance=Decimal(str(account.balance)),
                currency=account.currency,
            ),
        )
