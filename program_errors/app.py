"""
FastAPI application for the program error registry.

This module creates the application, loads the domain catalog during
startup, and wires routes and error handlers.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from program_errors import __version__
from program_errors.logging_config import get_logger
from program_errors.registry.catalog import DomainCatalog, initialize_catalog
from program_errors.routes import errors
from program_errors.routes.error_handlers import register_error_handlers
from program_errors.utils.config import get_settings

logger = get_logger(__name__)

# API Documentation tags
tags_metadata = [
    {
        "name": "errors",
        "description": "Decode on-chain program error codes into readable messages",
    },
    {
        "name": "system",
        "description": "System-level operations for monitoring",
    },
]


def create_app(catalog: Optional[DomainCatalog] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        catalog: Catalog to serve; the process-wide catalog is built at
            startup when omitted

    Returns:
        The configured application
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "catalog", None) is None:
            # A domain that fails to load aborts startup.
            app.state.catalog = initialize_catalog(tables_dir=settings.registry.TABLES_DIR)
        logger.info("Error registry ready", domains=app.state.catalog.names)
        yield
        logger.info("Error registry shutting down")

    app = FastAPI(
        title="Program Error Registry",
        description="Decodes Solana program error codes for Anchor and Metaplex programs",
        version=__version__,
        openapi_tags=tags_metadata,
        debug=settings.server.DEBUG,
        lifespan=lifespan,
    )
    app.state.catalog = catalog

    register_error_handlers(app)
    app.include_router(errors.router)

    @app.get("/health", tags=["system"])
    async def health_check():
        loaded = app.state.catalog
        return {
            "status": "ok" if loaded is not None else "starting",
            "version": __version__,
            "domains": len(loaded) if loaded is not None else 0,
        }

    return app
