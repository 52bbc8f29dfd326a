import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise.contrib.fastapi import RegisterTortoise, tortoise_exception_handlers

from .core.config import DATABASE_URL
from .core.logging_config import configure_logging
from .features.products.router import router as products_router
from .features.reports.router import router as reports_router

configure_logging()
logger = logging.getLogger("quickcart.main")  # Inherits handlers from 'quickcart'

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {
            "models": [
                "quickcart.features.products.models",
                "aerich.models",  # For Aerich migrations
            ],
            "default_connection": "default",
        }
    },
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects Tortoise-ORM on startup and closes its connections on shutdown.
    """
    logger.info("Starting application...")
    async with RegisterTortoise(app, config=TORTOISE_ORM_CONFIG):
        logger.info("Tortoise-ORM has been initialized.")
        yield

    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="Quick Cart Inventory API",
    description="API for managing products and producing inventory reports.",
    version="0.1.0",
    exception_handlers=tortoise_exception_handlers(),
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    """
    Root endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the Quick Cart Inventory API!"}


app.include_router(products_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
