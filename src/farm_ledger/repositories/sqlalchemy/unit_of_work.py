"""SQLAlchemy implementation of UnitOfWork."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from farm_ledger.core.exceptions import StaleWriteError, StorageError

logger = logging.getLogger(__name__)


def _is_lock_contention(exc: OperationalError) -> bool:
    """SQLite reports writer contention as 'database is locked'."""
    return "locked" in str(exc.orig).lower()


class SqlAlchemyUnitOfWork:
    """
    One database transaction per ``atomic()`` block on the given session.

    Commits when the block finishes, rolls back on any exception. SQLAlchemy
    failures surface as StorageError, except lock contention which surfaces
    as StaleWriteError so command services can retry it.
    """

    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self._db.commit()
        except OperationalError as exc:
            self._db.rollback()
            if _is_lock_contention(exc):
                raise StaleWriteError(str(exc.orig)) from exc
            logger.error("Database operation failed: %s", exc)
            raise StorageError("Ledger store is unavailable") from exc
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Unit of work could not commit: %s", exc)
            raise StorageError("Ledger update could not be committed") from exc
        except BaseException:
            self._db.rollback()
            raise
