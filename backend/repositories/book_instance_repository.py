"""
Book instance repository for copy-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session, joinedload

from models import BookInstance as BookInstanceModel
from .base_repository import BaseRepository


class BookInstanceRepository(BaseRepository[BookInstanceModel]):
    """Repository for BookInstance model operations."""

    def __init__(self, db: Session):
        super().__init__(db, BookInstanceModel)

    def get_with_book(self, instance_id: str) -> Optional[BookInstanceModel]:
        """
        Get a copy with its book eagerly loaded.

        Args:
            instance_id: BookInstance UUID

        Returns:
            BookInstance, or None if not found
        """
        return self.db.query(self.model).options(
            joinedload(self.model.book)
        ).filter(self.model.id == instance_id).first()

    def get_all_with_book(self) -> List[BookInstanceModel]:
        """All copies with their book eagerly loaded, in storage order."""
        return self.db.query(self.model).options(joinedload(self.model.book)).all()
