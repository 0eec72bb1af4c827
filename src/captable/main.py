"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from captable import __version__
from captable.config.settings import get_settings
from captable.config.logging_config import setup_logging
from captable.repositories.sqlalchemy.database import init_db
from captable.api.routers import (
    directory_router,
    split_config_router,
    postings_router,
    positions_router,
)
from captable.core.exceptions import AppError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Ledger-replay position engine for issuer cap tables",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(directory_router)
app.include_router(split_config_router)
app.include_router(postings_router)
app.include_router(positions_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
