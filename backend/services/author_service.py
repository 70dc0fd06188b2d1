"""
Author orchestrator: list, detail, create, update and delete flows.
"""

from typing import Any, Dict, Mapping, Optional
from sqlalchemy.orm import Session

from constants import ViewTitles
from domain.value_objects import EntityKind
from dtos.internal.outcomes import RenderView
from models import Author as AuthorModel
from repositories.author_repository import AuthorRepository
from schemas import Author
from validation import AuthorForm
from .crud_service import CrudService, WriteResult

AUTHOR_COLUMNS = ("first_name", "family_name", "date_of_birth", "date_of_death")


class AuthorService(CrudService):
    """Author flows."""

    kind = EntityKind.AUTHOR
    context_name = "author"
    create_form_class = AuthorForm
    update_form_class = AuthorForm
    create_title = ViewTitles.AUTHOR_CREATE
    update_title = ViewTitles.AUTHOR_UPDATE
    delete_title = ViewTitles.AUTHOR_DELETE
    dependents_name = "author_books"

    def _load_entity(self, db: Session, entity_id: str) -> Optional[Author]:
        author = AuthorRepository(db).get_by_id(entity_id)
        return Author.model_validate(author) if author else None

    def _draft(self, values: Mapping[str, Any], lookups: Dict[str, Any]) -> Author:
        return Author(
            first_name=values.get("first_name", ""),
            family_name=values.get("family_name", ""),
            date_of_birth=values.get("date_of_birth"),
            date_of_death=values.get("date_of_death"),
        )

    def _insert(self, db: Session, values: Mapping[str, Any]) -> WriteResult:
        author = AuthorRepository(db).create(
            AuthorModel(**{column: values[column] for column in AUTHOR_COLUMNS})
        )
        return Author.model_validate(author), []

    def _apply_update(self, db: Session, entity_id: str, values: Mapping[str, Any]) -> WriteResult:
        author = AuthorRepository(db).update_by_id(
            entity_id, {column: values[column] for column in AUTHOR_COLUMNS}
        )
        return (Author.model_validate(author) if author else None), []

    def _delete_record(self, db: Session, entity_id: str) -> bool:
        return AuthorRepository(db).delete_by_id(entity_id)

    async def list_all(self) -> RenderView:
        """All authors."""
        def work(db: Session):
            return [Author.model_validate(author) for author in AuthorRepository(db).find_all()]

        authors = await self._read("List authors", work)
        return self._view("list", ViewTitles.AUTHOR_LIST, author_list=authors)

    async def detail(self, author_id: str) -> RenderView:
        """
        An author with the books they wrote.

        Raises:
            EntityNotFoundError: If the author does not exist
        """
        author, books = await self._load_with_dependents(author_id)
        if author is None:
            raise self._not_found(author_id)
        return self._view("detail", ViewTitles.AUTHOR_DETAIL, author=author, author_books=books)
