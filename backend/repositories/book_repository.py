"""
Book repository for book-specific data access operations.

Books carry a many-to-many genre association; create and update accept
genre ids under the 'genre_ids' key and resolve them to Genre rows.
"""

from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.orm import Session, joinedload, selectinload

from models import Book as BookModel, Genre as GenreModel
from .base_repository import BaseRepository
from .genre_repository import GenreRepository


class BookRepository(BaseRepository[BookModel]):
    """Repository for Book model operations."""

    def __init__(self, db: Session):
        super().__init__(db, BookModel)

    def _resolve_genres(self, genre_ids: Sequence[str]) -> List[GenreModel]:
        return GenreRepository(self.db).get_many(genre_ids)

    def create_with_genres(self, obj: BookModel, genre_ids: Sequence[str]) -> BookModel:
        """
        Create a book and attach its genres.

        Args:
            obj: Book instance to create
            genre_ids: Ids of the genres to associate

        Returns:
            Created book
        """
        obj.genres = self._resolve_genres(genre_ids)
        return self.create(obj)

    def update_by_id(self, id: str, values: Dict[str, Any]) -> Optional[BookModel]:
        values = dict(values)
        genre_ids = values.pop('genre_ids', None)
        book = super().update_by_id(id, values)
        if book is not None and genre_ids is not None:
            book.genres = self._resolve_genres(genre_ids)
            self.db.flush()
        return book

    def get_with_relations(self, book_id: str) -> Optional[BookModel]:
        """
        Get a book with its author and genres eagerly loaded.

        Args:
            book_id: Book UUID

        Returns:
            Book instance, or None if not found
        """
        return self.db.query(self.model).options(
            joinedload(self.model.author),
            selectinload(self.model.genres),
        ).filter(self.model.id == book_id).first()

    def get_all_with_author(self) -> List[BookModel]:
        """All books with their author eagerly loaded, in storage order."""
        return self.db.query(self.model).options(joinedload(self.model.author)).all()
