"""SQLAlchemy repository implementations."""

from farm_ledger.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from farm_ledger.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from farm_ledger.repositories.sqlalchemy.category_repo import SqlAlchemyCategoryRepository
from farm_ledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from farm_ledger.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyUnitOfWork",
]
