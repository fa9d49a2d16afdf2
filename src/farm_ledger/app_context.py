"""Application context for in-process service management.

Provides the ledger services without HTTP, for scripts, background jobs
and tests that drive the ledger directly.
"""

from pathlib import Path
from typing import Optional

from farm_ledger.config.settings import Settings, set_settings, get_settings
from farm_ledger.repositories.sqlalchemy.database import (
    init_db_with_path,
    reset_database,
    get_session,
)
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


class AppContext:
    """
    Application context providing in-process access to all services.

    All services share one session, so a context must not be used from
    several threads at once.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = data_dir
        self._session = None
        self._initialized = False

        # Service instances (lazy initialized)
        self._account_service: Optional[AccountService] = None
        self._category_service: Optional[CategoryService] = None
        self._command_service: Optional[TransactionCommandService] = None
        self._query_service: Optional[TransactionQueryService] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Args:
            data_dir: Data directory path. Uses default if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        reset_database()
        init_db_with_path(settings.get_data_dir() / "ledger.db")

        self.close()
        self._reset_services()
        self._initialized = True

        if settings.seed_default_categories:
            self.categories.seed_defaults()

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Get the current data directory."""
        return get_settings().get_data_dir()

    def _get_session(self):
        """Get or create database session."""
        if self._session is None:
            self._session = get_session()
        return self._session

    def _reset_services(self) -> None:
        self._account_service = None
        self._category_service = None
        self._command_service = None
        self._query_service = None

    def refresh_session(self) -> None:
        """Refresh the database session (call after external changes)."""
        self.close()
        self._session = get_session()
        self._reset_services()

    def _unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._get_session())

    # Service accessors
    @property
    def accounts(self) -> AccountService:
        """Get the AccountService instance."""
        if self._account_service is None:
            session = self._get_session()
            self._account_service = AccountService(
                account_repo=SqlAlchemyAccountRepository(session),
                transaction_repo=SqlAlchemyTransactionRepository(session),
                unit_of_work=self._unit_of_work(),
                default_currency=get_settings().default_currency,
            )
        return self._account_service

    @property
    def categories(self) -> CategoryService:
        """Get the CategoryService instance."""
        if self._category_service is None:
            self._category_service = CategoryService(
                category_repo=SqlAlchemyCategoryRepository(self._get_session()),
                unit_of_work=self._unit_of_work(),
            )
        return self._category_service

    @property
    def commands(self) -> TransactionCommandService:
        """Get the TransactionCommandService instance."""
        if self._command_service is None:
            session = self._get_session()
            self._command_service = TransactionCommandService(
                account_repo=SqlAlchemyAccountRepository(session),
                category_repo=SqlAlchemyCategoryRepository(session),
                transaction_repo=SqlAlchemyTransactionRepository(session),
                unit_of_work=self._unit_of_work(),
                max_attempts=get_settings().balance_retry_attempts,
            )
        return self._command_service

    @property
    def queries(self) -> TransactionQueryService:
        """Get the TransactionQueryService instance."""
        if self._query_service is None:
            session = self._get_session()
            self._query_service = TransactionQueryService(
                account_repo=SqlAlchemyAccountRepository(session),
                transaction_repo=SqlAlchemyTransactionRepository(session),
                unit_of_work=self._unit_of_work(),
            )
        return self._query_service

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: AppContext) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
