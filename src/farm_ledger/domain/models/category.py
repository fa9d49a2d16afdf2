"""Category domain model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    """Shared reference data used to label transactions (Feed, Sales, Salary...)."""

    category_id: Optional[int]
    name: str
    type: str
    icon: Optional[str] = None
    color: Optional[str] = None
