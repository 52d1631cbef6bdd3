"""
Catalog Console API — FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from console.session import CatalogConsole
from core.config import get_settings

settings = get_settings()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(
        "Catalog console starting up",
        version=settings.app_version,
        catalog_api_url=settings.catalog_api_url,
    )
    app.state.console = CatalogConsole.from_settings(settings)
    yield
    await app.state.console.aclose()
    logger.info("Catalog console shutting down")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Administrative console for the partner/product/event subscription catalog",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Import and register routers
from api.v1.routers import (
    dashboard,
    events,
    notifications,
    partners,
    product_events,
    products,
    subscriptions,
)

app.include_router(dashboard.router)
app.include_router(products.router)
app.include_router(events.router)
app.include_router(partners.router)
app.include_router(product_events.router)
app.include_router(subscriptions.router)
app.include_router(notifications.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "healthy", "version": settings.app_version}
