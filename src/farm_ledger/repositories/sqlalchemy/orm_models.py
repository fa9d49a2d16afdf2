"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    ForeignKey,
    Index,
    Numeric,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from farm_ledger.repositories.sqlalchemy.database import Base
from farm_ledger.core.timezone import now_local
from farm_ledger.domain.models.enums import TransactionType

CENT = Decimal("0.01")


class Money(TypeDecorator):
    """
    Exact two-decimal money column.

    SQLite has no decimal storage (NUMERIC columns end up as REAL), so there
    the value is kept as text; other dialects get NUMERIC(18, 2).
    """

    impl = Numeric(precision=18, scale=2)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(32))
        return dialect.type_descriptor(Numeric(precision=18, scale=2))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        amount = Decimal(str(value)).quantize(CENT)
        if dialect.name == "sqlite":
            return str(amount)
        return amount

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value)).quantize(CENT)


MONEY = Money()


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    method = Column(String(100), nullable=False)
    currency = Column(String(3), nullable=False)
    opening_balance = Column(MONEY, nullable=False, default=Decimal("0"))
    balance = Column(MONEY, nullable=False, default=Decimal("0"))
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, nullable=False, default=now_local)
    updated_at = Column(DateTime, nullable=True)

    transactions = relationship("TransactionORM", back_populates="account")


class CategoryORM(Base):
    """SQLAlchemy model for Category."""

    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False, index=True)
    icon = Column(String(100), nullable=True)
    color = Column(String(20), nullable=True)

    transactions = relationship("TransactionORM", back_populates="category")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_account_date", "account_id", "date"),)

    txn_id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.account_id"), nullable=False)
    user_id = Column(String(64), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    note = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_local)
    updated_at = Column(DateTime, nullable=True)

    account = relationship("AccountORM", back_populates="transactions")
    category = relationship("CategoryORM", back_populates="transactions")
