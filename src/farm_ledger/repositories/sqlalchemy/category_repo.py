"""SQLAlchemy implementation of CategoryRepository."""

from typing import Optional

from sqlalchemy import exists
from sqlalchemy.orm import Session

from farm_ledger.core.exceptions import NotFoundError
from farm_ledger.domain.models import Category
from farm_ledger.repositories.sqlalchemy.orm_models import CategoryORM, TransactionORM


class SqlAlchemyCategoryRepository:
    """SQLAlchemy-backed category repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, category: Category) -> Category:
        """Persist a new category."""
        orm_category = CategoryORM(
            name=category.name,
            type=category.type,
            icon=category.icon,
            color=category.color,
        )
        self._db.add(orm_category)
        self._db.flush()
        self._db.refresh(orm_category)
        return self._to_domain(orm_category)

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve category by ID."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category_id
        ).first()
        return self._to_domain(orm_category) if orm_category else None

    def list_all(self, category_type: Optional[str] = None) -> list[Category]:
        """List categories, optionally filtered by type."""
        query = self._db.query(CategoryORM)
        if category_type:
            query = query.filter(CategoryORM.type == category_type)
        query = query.order_by(CategoryORM.category_id)
        return [self._to_domain(c) for c in query.all()]

    def count(self) -> int:
        """Number of stored categories."""
        return self._db.query(CategoryORM).count()

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        orm_category = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category.category_id
        ).first()
        if not orm_category:
            raise NotFoundError("Category", category.category_id)

        orm_category.name = category.name
        orm_category.type = category.type
        orm_category.icon = category.icon
        orm_category.color = category.color

        self._db.flush()
        self._db.refresh(orm_category)
        return self._to_domain(orm_category)

    def delete(self, category_id: int) -> bool:
        """Delete a category unless a transaction references it; returns whether it was removed."""
        # Reference check and delete in one statement
        referenced = exists().where(TransactionORM.category_id == CategoryORM.category_id)
        rows = self._db.query(CategoryORM).filter(
            CategoryORM.category_id == category_id,
            ~referenced,
        ).delete(synchronize_session="fetch")
        return rows == 1

    def count_transactions(self, category_id: int) -> int:
        """Number of transactions filed under the category."""
        return self._db.query(TransactionORM).filter(
            TransactionORM.category_id == category_id
        ).count()

    @staticmethod
    def _to_domain(orm: CategoryORM) -> Category:
        """Convert ORM model to domain model."""
        return Category(
            category_id=orm.category_id,
            name=orm.name,
            type=orm.type,
            icon=orm.icon,
            color=orm.color,
        )
