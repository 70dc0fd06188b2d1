from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
import logging
import sys
import uuid

import uvicorn

from api.catalog import (
    router as catalog_router,
    authors_router,
    genres_router,
    books_router,
    book_instances_router,
)
from config.catalog_config import CatalogConfig
from constants import CATALOG_PREFIX, ServerConfig
from database import Database
from exceptions import ConfigurationError, DatabaseConnectionError
from init_db import init_database
from services.interfaces import IViewRenderer
from services.view_renderer import JSONViewRenderer
from utils.logging_utils import clear_logging_context, set_logging_context

logger = logging.getLogger(__name__)

SERVICE_NAME = "Local Library Catalog"
SERVICE_VERSION = "1.0.0"


def configure_logging() -> Path:
    """Install the rotating file handler and the console handler on the root logger"""
    log_dir = CatalogConfig.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "catalog.log"
    level = CatalogConfig.log_level()

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_file.absolute():
            return log_file

    log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging initialized: {log_file}")
    return log_file


# Configure logging with rotating file handler
configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    # Startup
    if app.state.database is None:
        app.state.database = Database()
    database: Database = app.state.database

    # A failed connection aborts startup
    database.connect()
    init_database(database)
    logger.info("Catalog service ready")

    yield

    # Shutdown
    database.dispose()
    logger.info("Application shutdown complete")


def create_app(database: Database | None = None, renderer: IViewRenderer | None = None) -> FastAPI:
    """
    Build the catalog application.

    Args:
        database: Datastore handle; one is built from the environment at
            startup when omitted
        renderer: View renderer; JSON by default

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Local Library Catalog API",
        description="Catalog of authors, genres, books and book copies",
        version=SERVICE_VERSION,
        lifespan=lifespan
    )
    app.state.database = database
    app.state.renderer = renderer or JSONViewRenderer()

    @app.middleware("http")
    async def logging_context_middleware(request: Request, call_next):
        set_logging_context(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_logging_context()

    app.include_router(catalog_router, prefix=CATALOG_PREFIX, tags=["catalog"])
    app.include_router(authors_router, prefix=CATALOG_PREFIX, tags=["authors"])
    app.include_router(genres_router, prefix=CATALOG_PREFIX, tags=["genres"])
    app.include_router(books_router, prefix=CATALOG_PREFIX, tags=["books"])
    app.include_router(book_instances_router, prefix=CATALOG_PREFIX, tags=["book instances"])

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: connect to the datastore, then serve"""
    try:
        database = Database()
        database.connect()
    except (ConfigurationError, DatabaseConnectionError) as e:
        logger.critical(f"Cannot start catalog service: {e.message}", exc_info=True)
        sys.exit(1)

    logger.info(f"Starting server at {ServerConfig.url()}")
    uvicorn.run(create_app(database), host=ServerConfig.HOST, port=ServerConfig.PORT)


if __name__ == "__main__":
    run()
