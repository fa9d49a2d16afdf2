"""API routers package."""

from farm_ledger.api.routers.accounts import router as accounts_router
from farm_ledger.api.routers.categories import router as categories_router
from farm_ledger.api.routers.transactions import router as transactions_router

__all__ = [
    "accounts_router",
    "categories_router",
    "transactions_router",
]
