"""
Catalog home: record counts for every entity, fetched concurrently.
"""

import asyncio
from sqlalchemy.exc import SQLAlchemyError
from typing import Callable
import logging

from constants import ViewTitles
from database import Database
from domain.value_objects import InstanceStatus
from dtos.internal.outcomes import RenderView
from exceptions import DatabaseError
from repositories import (
    AuthorRepository,
    BookInstanceRepository,
    BookRepository,
    GenreRepository,
)
from repositories.catalog_specifications import InstancesByStatusSpec
from schemas import CatalogCounts

logger = logging.getLogger(__name__)


class CatalogIndexService:
    """Builds the catalog home view."""

    def __init__(self, database: Database):
        self.database = database

    def _count(self, counter: Callable) -> int:
        try:
            with self.database.session_scope() as db:
                return counter(db)
        except SQLAlchemyError as e:
            logger.error(f"Count failed: {e}", exc_info=True)
            raise DatabaseError("count", f"Failed to count catalog records: {e}") from e

    async def index(self) -> RenderView:
        """
        Home view with the number of books, copies, available copies,
        authors and genres.
        """
        counters = (
            lambda db: BookRepository(db).count(),
            lambda db: BookInstanceRepository(db).count(),
            lambda db: BookInstanceRepository(db).count(InstancesByStatusSpec(InstanceStatus.AVAILABLE.value)),
            lambda db: AuthorRepository(db).count(),
            lambda db: GenreRepository(db).count(),
        )
        loop = asyncio.get_running_loop()
        books, instances, available, authors, genres = await asyncio.gather(
            *(loop.run_in_executor(None, self._count, counter) for counter in counters)
        )
        counts = CatalogCounts(
            book_count=books,
            book_instance_count=instances,
            book_instance_available_count=available,
            author_count=authors,
            genre_count=genres,
        )
        return RenderView(view="index", context={"title": ViewTitles.INDEX, "counts": counts})
