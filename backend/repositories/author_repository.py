"""
Author repository for author-specific data access operations.
"""

from sqlalchemy.orm import Session

from models import Author as AuthorModel
from .base_repository import BaseRepository


class AuthorRepository(BaseRepository[AuthorModel]):
    """Repository for Author model operations."""

    def __init__(self, db: Session):
        super().__init__(db, AuthorModel)
