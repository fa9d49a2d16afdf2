"""Category repository protocol."""

from typing import Protocol, Optional

from farm_ledger.domain.models import Category


class CategoryRepository(Protocol):
    """Interface for category data access."""

    def create(self, category: Category) -> Category:
        """Persist a new category."""
        ...

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve category by ID."""
        ...

    def list_all(self, category_type: Optional[str] = None) -> list[Category]:
        """List categories, optionally filtered by type."""
        ...

    def count(self) -> int:
        """Number of stored categories."""
        ...

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        ...

    def delete(self, category_id: int) -> bool:
        """Delete a category unless a transaction references it; returns whether it was removed."""
        ...

    def count_transactions(self, category_id: int) -> int:
        """Number of transactions filed under the category."""
        ...
