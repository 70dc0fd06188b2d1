"""
Genre repository for genre-specific data access operations.

Keeps the case-folded name_key column in step with name on every write.
"""

from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.orm import Session

from models import Genre as GenreModel
from .base_repository import BaseRepository
from .catalog_specifications import GenreByNameSpec, genre_name_key


class GenreRepository(BaseRepository[GenreModel]):
    """Repository for Genre model operations."""

    def __init__(self, db: Session):
        super().__init__(db, GenreModel)

    def create(self, obj: GenreModel) -> GenreModel:
        obj.name_key = genre_name_key(obj.name)
        return super().create(obj)

    def update_by_id(self, id: str, values: Dict[str, Any]) -> Optional[GenreModel]:
        if 'name' in values:
            values = {**values, 'name_key': genre_name_key(values['name'])}
        return super().update_by_id(id, values)

    def get_by_name(self, name: str) -> Optional[GenreModel]:
        """
        Find a genre by name, ignoring case.

        Args:
            name: Genre name as submitted

        Returns:
            The matching genre, or None
        """
        return self.db.query(self.model).filter(GenreByNameSpec(name).to_sql_filter()).first()

    def get_sorted(self) -> List[GenreModel]:
        """All genres in ascending name order."""
        return self.find_all(order_by=self.model.name.asc())

    def get_many(self, ids: Sequence[str]) -> List[GenreModel]:
        """
        Load the genres with the given ids; unknown ids are skipped.

        Args:
            ids: Genre ids

        Returns:
            Matching genres
        """
        if not ids:
            return []
        return self.db.query(self.model).filter(self.model.id.in_(list(ids))).all()
