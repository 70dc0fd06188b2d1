"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .author_repository import AuthorRepository
from .genre_repository import GenreRepository
from .book_repository import BookRepository
from .book_instance_repository import BookInstanceRepository

__all__ = [
    "BaseRepository",
    "AuthorRepository",
    "GenreRepository",
    "BookRepository",
    "BookInstanceRepository",
]
