"""
Pytest configuration and fixtures for ledger tests.

This module provides:
- In-memory SQLite database fixtures
- Repository, unit of work and service fixtures with a fixed clock
- Factory helpers for accounts, categories and transactions
- An API test client with caller identity headers
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from farm_ledger.config.settings import Settings, set_settings, reset_settings
from farm_ledger.main import app
from farm_ledger.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from farm_ledger.repositories.sqlalchemy import orm_models  # noqa: F401
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
    TransactionCreate,
    TransactionQueryService,
)
from farm_ledger.domain.models import Account, Category, TransactionType
from farm_ledger.domain.views import TransactionDetail


OWNER = "farmer-1"
OTHER_USER = "farmer-2"

# A Friday
FIXED_NOW = datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return FIXED_NOW


@pytest.fixture
def clock(fixed_now) -> Callable[[], datetime]:
    return lambda: fixed_now


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """Settings pointing at an in-memory store, without category seeding."""
    reset_settings()
    settings = Settings(database_url="sqlite://", seed_default_categories=False)
    set_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture(scope="function")
def test_engine(test_settings):
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def category_repo(test_session) -> SqlAlchemyCategoryRepository:
    """Provide test CategoryRepository."""
    return SqlAlchemyCategoryRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def unit_of_work(test_session) -> SqlAlchemyUnitOfWork:
    """Provide test UnitOfWork."""
    return SqlAlchemyUnitOfWork(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def account_service(account_repo, transaction_repo, unit_of_work) -> AccountService:
    """Provide test AccountService."""
    return AccountService(
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
    )


@pytest.fixture
def category_service(category_repo, unit_of_work) -> CategoryService:
    """Provide test CategoryService."""
    return CategoryService(category_repo=category_repo, unit_of_work=unit_of_work)


@pytest.fixture
def command_service(
    account_repo,
    category_repo,
    transaction_repo,
    unit_of_work,
    clock,
) -> TransactionCommandService:
    """Provide test TransactionCommandService."""
    return TransactionCommandService(
        account_repo=account_repo,
        category_repo=category_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
        clock=clock,
    )


@pytest.fixture
def query_service(account_repo, transaction_repo, unit_of_work, clock) -> TransactionQueryService:
    """Provide test TransactionQueryService."""
    return TransactionQueryService(
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
        clock=clock,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(
        balance: str = "100.00",
        user_id: str = OWNER,
        method: str = "Cash",
        currency: str = "TND",
    ) -> Account:
        return account_service.create_account(
            user_id=user_id,
            method=method,
            currency=currency,
            opening_balance=Decimal(balance),
        )

    return _create_account


@pytest.fixture
def category_factory(category_service) -> Callable[..., Category]:
    """Factory for creating test categories."""

    def _create_category(name: str = "Food", category_type: str = "Expense") -> Category:
        return category_service.create_category(name=name, category_type=category_type)

    return _create_category


@pytest.fixture
def transaction_factory(command_service) -> Callable[..., TransactionDetail]:
    """Factory for recording test transactions through the command service."""

    def _create_transaction(
        account: Account,
        category: Category,
        amount: str = "20.00",
        txn_type: TransactionType = TransactionType.EXPENSE,
        date: Optional[datetime] = None,
        note: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> TransactionDetail:
        return command_service.create(
            user_id or account.user_id,
            TransactionCreate(
                account_id=account.account_id,
                category_id=category.category_id,
                amount=Decimal(amount),
                txn_type=txn_type,
                note=note,
                date=date,
            ),
        )

    return _create_transaction


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def food(category_factory) -> Category:
    return category_factory(name="Food", category_type="Expense")


@pytest.fixture
def salary(category_factory) -> Category:
    return category_factory(name="Salary", category_type="Income")


@pytest.fixture
def sample_account(account_factory) -> Account:
    """An account owned by OWNER with 100.00 on it."""
    return account_factory(balance="100.00")


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database, acting as OWNER."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    reset_database()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, headers={"X-User-Id": OWNER}) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()


@pytest.fixture
def admin_headers() -> dict:
    return {"X-User-Id": "admin-1", "X-User-Role": "admin"}


@pytest.fixture
def other_user_headers() -> dict:
    return {"X-User-Id": OTHER_USER}
