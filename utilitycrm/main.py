"""
Utility CRM - commission service for a multi-utility sales brokerage

Main FastAPI application with:
- Commission calculation and scheduling
- Offer catalog (providers, offers, commission formulas)
- Commission ledger for agents and back-office
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from utilitycrm.api import api_router
from utilitycrm.config import settings
from utilitycrm.db import create_tables, engine, get_db_context
from utilitycrm.services.catalog import seed_catalog

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Creates missing tables
    - Seeds the default offer catalog

    Shutdown:
    - Disposes the database engine
    """
    logger.info("Starting Utility CRM...")

    await create_tables()

    if settings.seed_catalog:
        async with get_db_context() as db:
            await seed_catalog(db)

    logger.info("Utility CRM started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down Utility CRM...")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="Utility CRM",
    description="Commission service for a multi-utility sales brokerage",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# Include routers
app.include_router(api_router)  # /api/* endpoints


# Root redirect
@app.get("/", include_in_schema=False)
async def root():
    """Redirect root to the API docs."""
    return RedirectResponse(url="/docs", status_code=302)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "utilitycrm.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
