"""Category reference data."""

import logging
from typing import Optional

from farm_ledger.core.exceptions import ConflictError, NotFoundError, ValidationError
from farm_ledger.domain.models import Category
from farm_ledger.repositories.protocols import CategoryRepository, UnitOfWork

logger = logging.getLogger(__name__)

# Default set seeded into an empty store: farm activity plus household finance
DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "Livestock", "type": "animals", "icon": "cow", "color": "#8D6E63"},
    {"name": "Crops", "type": "crops", "icon": "seed", "color": "#558B2F"},
    {"name": "Equipment", "type": "Expense", "icon": "tractor", "color": "#F57C00"},
    {"name": "Supplies", "type": "Expense", "icon": "package", "color": "#6D4C41"},
    {"name": "Feed", "type": "Expense", "icon": "wheat", "color": "#827717"},
    {"name": "Pesticides", "type": "Expense", "icon": "spray", "color": "#C62828"},
    {"name": "Fertilizers", "type": "Expense", "icon": "fertilizer", "color": "#33691E"},
    {"name": "Seeds", "type": "Expense", "icon": "seed", "color": "#1B5E20"},
    {"name": "Irrigation", "type": "Expense", "icon": "water", "color": "#0288D1"},
    {"name": "Tools", "type": "Expense", "icon": "tools", "color": "#455A64"},
    {"name": "Sales", "type": "Income", "icon": "cash-register", "color": "#2E7D32"},
    {"name": "Services", "type": "Income", "icon": "handshake", "color": "#1976D2"},
    {"name": "Salary", "type": "Income", "icon": "money-bill-wave", "color": "#7BC29A"},
    {"name": "Food", "type": "Expense", "icon": "shopping-basket", "color": "#FF9999"},
    {"name": "Car", "type": "Expense", "icon": "car", "color": "#5B9BD5"},
]


class CategoryService:
    """Create and look up the categories transactions are filed under."""

    def __init__(self, category_repo: CategoryRepository, unit_of_work: UnitOfWork):
        self._category_repo = category_repo
        self._uow = unit_of_work

    def create_category(
        self,
        name: str,
        category_type: str,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a new category."""
        if not name or not name.strip():
            raise ValidationError("name is required", field="name")
        if not category_type or not category_type.strip():
            raise ValidationError("type is required", field="type")

        category = Category(
            category_id=None,
            name=name.strip(),
            type=category_type.strip(),
            icon=icon,
            color=color,
        )
        with self._uow.atomic():
            return self._category_repo.create(category)

    def get_category(self, category_id: int) -> Category:
        """Get category by ID."""
        with self._uow.atomic():
            category = self._category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category", category_id)
        return category

    def list_categories(self, category_type: Optional[str] = None) -> list[Category]:
        """List all categories, or only those of ``category_type``."""
        with self._uow.atomic():
            return self._category_repo.list_all(category_type)

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        category_type: Optional[str] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Update a category; arguments left as None keep their stored value."""
        if name is not None and not name.strip():
            raise ValidationError("name cannot be blank", field="name")
        if category_type is not None and not category_type.strip():
            raise ValidationError("type cannot be blank", field="type")

        with self._uow.atomic():
            category = self._category_repo.get_by_id(category_id)
            if not category:
                raise NotFoundError("Category", category_id)
            return self._category_repo.update(
                Category(
                    category_id=category_id,
                    name=name.strip() if name is not None else category.name,
                    type=category_type.strip() if category_type is not None else category.type,
                    icon=icon if icon is not None else category.icon,
                    color=color if color is not None else category.color,
                )
            )

    def delete_category(self, category_id: int) -> None:
        """
        Delete a category.

        Raises ConflictError while transactions are still filed under it.
        """
        with self._uow.atomic():
            if not self._category_repo.get_by_id(category_id):
                raise NotFoundError("Category", category_id)
            if not self._category_repo.delete(category_id):
                in_use = self._category_repo.count_transactions(category_id)
                if in_use == 0:
                    # Removed by someone else in the meantime
                    raise NotFoundError("Category", category_id)
                raise ConflictError(
                    f"Category {category_id} is used by {in_use} transaction(s); "
                    "move or delete them first"
                )
        logger.info("Deleted category %s", category_id)

    def seed_defaults(self) -> int:
        """Insert DEFAULT_CATEGORIES when no category exists yet; returns how many were added."""
        with self._uow.atomic():
            if self._category_repo.count() > 0:
                return 0
            for entry in DEFAULT_CATEGORIES:
                self._category_repo.create(
                    Category(
                        category_id=None,
                        name=entry["name"],
                        type=entry["type"],
                        icon=entry["icon"],
                        color=entry["color"],
                    )
                )
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
