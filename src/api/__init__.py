"""FastAPI application setup."""

from typing import Optional

from fastapi import FastAPI

from src.api.controller import product_router
from src.config import AppConfig, configure_logging, get_config
from src.services import ProductStore


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[ProductStore] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration, loaded from the config files if omitted.
        store: Product store to serve, built from ``config.storage`` if omitted.
    """
    config = config or get_config()
    configure_logging(config.logging)

    app = FastAPI(
        title=config.api.title,
        description="REST API for the JSON-file product store",
        version=config.api.version,
    )
    app.state.product_store = store or ProductStore.from_config(config.storage)

    # Include routers
    app.include_router(product_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
