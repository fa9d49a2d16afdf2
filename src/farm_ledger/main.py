"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from farm_ledger.config.settings import get_settings
from farm_ledger.config.logging_config import setup_logging
from farm_ledger.repositories.sqlalchemy.database import init_db, get_session
from farm_ledger.repositories.sqlalchemy import SqlAlchemyCategoryRepository, SqlAlchemyUnitOfWork
from farm_ledger.api.routers import accounts_router, categories_router, transactions_router
from farm_ledger.core.exceptions import AppError, ValidationError
from farm_ledger.services import CategoryService

# Error code -> HTTP status
ERROR_STATUS = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "STORAGE_ERROR": 503,
}


def seed_categories() -> None:
    """Insert the default categories into an empty store."""
    session = get_session()
    try:
        CategoryService(
            category_repo=SqlAlchemyCategoryRepository(session),
            unit_of_work=SqlAlchemyUnitOfWork(session),
        ).seed_defaults()
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    if get_settings().seed_default_categories:
        seed_categories()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Account balances and transaction history for farm and household finance",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(transactions_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    content = {"error": exc.code, "message": exc.message}
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 400),
        content=content,
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
