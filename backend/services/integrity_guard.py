"""
Referential Integrity Guard

Decides whether a catalog record may be deleted by looking for dependent
records that still reference it. Blocking is not an error: the caller gets a
DeletionCheck listing the blockers and decides how to present them.

Rules:
- Author: blocked while any book references it
- Genre: blocked while any book is tagged with it
- Book: blocked while any copy (book instance) references it
- BookInstance: never blocked
"""

from typing import List, Union
from sqlalchemy.orm import Session
import logging

from domain.value_objects import EntityKind
from dtos.internal.outcomes import DeletionCheck
from repositories.book_repository import BookRepository
from repositories.book_instance_repository import BookInstanceRepository
from repositories.catalog_specifications import (
    BooksByAuthorSpec,
    BooksByGenreSpec,
    InstancesByBookSpec,
)
from schemas import BookSummary, InstanceSummary

logger = logging.getLogger(__name__)

BOOK_SUMMARY_COLUMNS = ("id", "title", "summary")
INSTANCE_SUMMARY_COLUMNS = ("id", "imprint", "status", "due_back")


class ReferentialIntegrityGuard:
    """Dependent lookups and the delete decision built on them."""

    def __init__(self, db: Session):
        """
        Initialize the guard.

        Args:
            db: Database session used for dependent lookups
        """
        self.db = db
        self.book_repo = BookRepository(db)
        self.instance_repo = BookInstanceRepository(db)

    def books_by_author(self, author_id: str) -> List[BookSummary]:
        books = self.book_repo.find_all(BooksByAuthorSpec(author_id), columns=BOOK_SUMMARY_COLUMNS)
        return [BookSummary.model_validate(book) for book in books]

    def books_by_genre(self, genre_id: str) -> List[BookSummary]:
        books = self.book_repo.find_all(BooksByGenreSpec(genre_id), columns=BOOK_SUMMARY_COLUMNS)
        return [BookSummary.model_validate(book) for book in books]

    def instances_of_book(self, book_id: str) -> List[InstanceSummary]:
        instances = self.instance_repo.find_all(InstancesByBookSpec(book_id), columns=INSTANCE_SUMMARY_COLUMNS)
        return [InstanceSummary.model_validate(instance) for instance in instances]

    def dependents(self, kind: Union[EntityKind, str], entity_id: str) -> list:
        """
        Summaries of the records that reference an entity.

        Args:
            kind: Entity type, or its path segment
            entity_id: Entity identifier

        Returns:
            Book summaries for authors and genres, copy summaries for books,
            and an empty list for book instances

        Raises:
            ValidationError: If kind is not a catalog entity type
        """
        kind = EntityKind.from_string(kind)
        if kind is EntityKind.AUTHOR:
            return self.books_by_author(entity_id)
        if kind is EntityKind.GENRE:
            return self.books_by_genre(entity_id)
        if kind is EntityKind.BOOK:
            return self.instances_of_book(entity_id)
        return []

    def can_delete(self, kind: Union[EntityKind, str], entity_id: str) -> DeletionCheck:
        """
        Check whether an entity may be deleted.

        Args:
            kind: Entity type, or its path segment
            entity_id: Entity identifier

        Returns:
            DeletionCheck; allowed only when no dependents exist

        Raises:
            ValidationError: If kind is not a catalog entity type
        """
        kind = EntityKind.from_string(kind)
        blockers = self.dependents(kind, entity_id)
        if blockers:
            logger.info(
                f"Delete of {kind.label} {entity_id} blocked by {len(blockers)} dependent record(s)"
            )
            return DeletionCheck(allowed=False, blockers=tuple(blockers))
        return DeletionCheck(allowed=True)
