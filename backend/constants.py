"""
Application-wide constants.

This module centralizes the magic strings and numbers used throughout the catalog
(field limits, route prefixes, HTTP status codes) to keep them in one place.
"""
from config.catalog_config import CatalogConfig


CATALOG_PREFIX = "/catalog"


class FieldLimits:
    """
    Length bounds shared by the catalog forms and the table definitions.

    Maximums apply to the stored (HTML-escaped) text.
    """

    NAME_MAX = 100
    GENRE_NAME_MIN_CREATE = 3
    GENRE_NAME_MIN_UPDATE = 1
    GENRE_NAME_MAX = 100


class ViewTitles:
    """Page titles handed to the renderer"""

    INDEX = "Local Library Home"

    AUTHOR_LIST = "List of Authors"
    AUTHOR_DETAIL = "Author Detail"
    AUTHOR_CREATE = "Create Author"
    AUTHOR_UPDATE = "Update Author"
    AUTHOR_DELETE = "Delete Author"

    GENRE_LIST = "List of Genres"
    GENRE_DETAIL = "Genre Detail"
    GENRE_CREATE = "Create Genre"
    GENRE_UPDATE = "Update Genre"
    GENRE_DELETE = "Delete Genre"

    BOOK_LIST = "Book List"
    BOOK_DETAIL = "Book Detail"
    BOOK_CREATE = "Create Book"
    BOOK_UPDATE = "Update Book"
    BOOK_DELETE = "Delete Book"

    INSTANCE_LIST = "Book Instance List"
    INSTANCE_DETAIL = "Book:"
    INSTANCE_CREATE = "Create BookInstance"
    INSTANCE_UPDATE = "Update BookInstance"
    INSTANCE_DELETE = "Delete BookInstance"


class ServerConfig:
    """Server configuration constants"""

    HOST = CatalogConfig.HOST
    PORT = CatalogConfig.PORT

    @classmethod
    def url(cls) -> str:
        """Get the full server URL"""
        return f"http://{cls.HOST}:{cls.PORT}"


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200

    # Redirection
    FOUND = 302

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
