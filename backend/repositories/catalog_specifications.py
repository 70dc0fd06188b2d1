"""
Catalog Specifications

Concrete specifications for relationship lookups between catalog entities.
"""

from models import Book, BookInstance, Genre
from .specifications import Specification


def genre_name_key(name: str) -> str:
    """Case-insensitive comparison key for a genre name."""
    return name.strip().casefold()


class BooksByAuthorSpec(Specification[Book]):
    """Books written by a specific author."""

    def __init__(self, author_id: str):
        self.author_id = author_id

    def to_sql_filter(self):
        return Book.author_id == self.author_id


class BooksByGenreSpec(Specification[Book]):
    """Books tagged with a specific genre."""

    def __init__(self, genre_id: str):
        self.genre_id = genre_id

    def to_sql_filter(self):
        return Book.genres.any(Genre.id == self.genre_id)


class InstancesByBookSpec(Specification[BookInstance]):
    """Copies of a specific book."""

    def __init__(self, book_id: str):
        self.book_id = book_id

    def to_sql_filter(self):
        return BookInstance.book_id == self.book_id


class InstancesByStatusSpec(Specification[BookInstance]):
    """Copies in a specific circulation status."""

    def __init__(self, status: str):
        self.status = status

    def to_sql_filter(self):
        return BookInstance.status == self.status


class GenreByNameSpec(Specification[Genre]):
    """
    Genres whose name matches ignoring case.

    Compares the stored case-folded key, so 'fAnTasy' matches 'Fantasy'.
    """

    def __init__(self, name: str):
        self.key = genre_name_key(name)

    def to_sql_filter(self):
        return Genre.name_key == self.key
