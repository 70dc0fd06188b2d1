"""
Dependency injection providers for FastAPI.

This module provides factory functions for the datastore handle, the view
renderer and the catalog services. The handle and the renderer are created
once by the application factory and kept on app.state; services are cheap
and built per request on top of them.
"""

from fastapi import Depends, Request

from database import Database
from services.author_service import AuthorService
from services.book_instance_service import BookInstanceService
from services.book_service import BookService
from services.catalog_index_service import CatalogIndexService
from services.genre_service import GenreService
from services.interfaces import IViewRenderer


def get_database(request: Request) -> Database:
    """
    Shared datastore handle of the running application.

    Returns:
        Database created at startup
    """
    return request.app.state.database


def get_renderer(request: Request) -> IViewRenderer:
    """
    View renderer of the running application.

    Note: Swap the renderer on app.state (or pass one to create_app) to
    serve HTML instead of JSON.
    """
    return request.app.state.renderer


def get_author_service(database: Database = Depends(get_database)) -> AuthorService:
    return AuthorService(database)


def get_genre_service(database: Database = Depends(get_database)) -> GenreService:
    return GenreService(database)


def get_book_service(database: Database = Depends(get_database)) -> BookService:
    return BookService(database)


def get_book_instance_service(database: Database = Depends(get_database)) -> BookInstanceService:
    return BookInstanceService(database)


def get_catalog_index_service(database: Database = Depends(get_database)) -> CatalogIndexService:
    return CatalogIndexService(database)
