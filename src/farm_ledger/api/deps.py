"""Dependency injection for FastAPI."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from farm_ledger.config.settings import get_settings
from farm_ledger.repositories.sqlalchemy.database import get_db
from farm_ledger.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCategoryRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyUnitOfWork,
)
from farm_ledger.services import (
    AccountService,
    CategoryService,
    TransactionCommandService,
    TransactionQueryService,
)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    """Caller identity as resolved by the authentication layer in front of the API."""

    user_id: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Principal:
    """Read the identity the auth middleware attached to the request."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing user identity")
    return Principal(user_id=x_user_id, role=x_user_role)


def require_admin(principal: Principal = Depends(get_current_user)) -> Principal:
    """Gate for the privileged read endpoints."""
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return principal


def get_account_repo(db: Session = Depends(get_db)) -> SqlAlchemyAccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(db)


def get_category_repo(db: Session = Depends(get_db)) -> SqlAlchemyCategoryRepository:
    """Provide CategoryRepository instance."""
    return SqlAlchemyCategoryRepository(db)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_unit_of_work(db: Session = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    """Provide UnitOfWork bound to the request session."""
    return SqlAlchemyUnitOfWork(db)


def get_account_service(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    unit_of_work: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
        default_currency=get_settings().default_currency,
    )


def get_category_service(
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
    unit_of_work: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> CategoryService:
    """Provide CategoryService instance."""
    return CategoryService(category_repo=category_repo, unit_of_work=unit_of_work)


def get_command_service(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    unit_of_work: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> TransactionCommandService:
    """Provide TransactionCommandService instance."""
    return TransactionCommandService(
        account_repo=account_repo,
        category_repo=category_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
        max_attempts=get_settings().balance_retry_attempts,
    )


def get_query_service(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    unit_of_work: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> TransactionQueryService:
    """Provide TransactionQueryService instance."""
    return TransactionQueryService(
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
    )
