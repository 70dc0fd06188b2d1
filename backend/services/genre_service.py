"""
Genre orchestrator.

Genre names are unique ignoring case. Creating a genre whose name is
already taken redirects to the existing genre instead of failing; renaming
a genre onto a taken name is a field error.
"""

from typing import Any, Dict, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from constants import ViewTitles
from domain.value_objects import EntityKind
from dtos.internal.outcomes import Outcome, Redirect, RenderView
from exceptions import DatabaseError
from models import Genre as GenreModel
from repositories.genre_repository import GenreRepository
from schemas import Genre
from validation import FieldError, GenreCreateForm, GenreUpdateForm, evaluate
from .crud_service import CrudService, WriteResult

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Genre with this name already exists"


class GenreService(CrudService):
    """Genre flows."""

    kind = EntityKind.GENRE
    context_name = "genre"
    create_form_class = GenreCreateForm
    update_form_class = GenreUpdateForm
    create_title = ViewTitles.GENRE_CREATE
    update_title = ViewTitles.GENRE_UPDATE
    delete_title = ViewTitles.GENRE_DELETE
    dependents_name = "genre_books"

    def _load_entity(self, db: Session, entity_id: str) -> Optional[Genre]:
        genre = GenreRepository(db).get_by_id(entity_id)
        return Genre.model_validate(genre) if genre else None

    def _find_by_name(self, name: str):
        def work(db: Session) -> Optional[Genre]:
            genre = GenreRepository(db).get_by_name(name)
            return Genre.model_validate(genre) if genre else None
        return work

    def _draft(self, values: Mapping[str, Any], lookups: Dict[str, Any]) -> Genre:
        return Genre(name=values.get("name", ""))

    def _insert(self, db: Session, values: Mapping[str, Any]) -> WriteResult:
        repo = GenreRepository(db)
        existing = repo.get_by_name(values["name"])
        if existing is not None:
            logger.info(f"Genre '{values['name']}' already exists as {existing.id}")
            return Genre.model_validate(existing), []
        return Genre.model_validate(repo.create(GenreModel(name=values["name"]))), []

    def _apply_update(self, db: Session, entity_id: str, values: Mapping[str, Any]) -> WriteResult:
        repo = GenreRepository(db)
        if repo.get_by_id(entity_id) is None:
            return None, []
        clash = repo.get_by_name(values["name"])
        if clash is not None and clash.id != entity_id:
            return None, [FieldError("name", DUPLICATE_NAME_MESSAGE, values["name"])]
        return Genre.model_validate(repo.update_by_id(entity_id, {"name": values["name"]})), []

    def _delete_record(self, db: Session, entity_id: str) -> bool:
        return GenreRepository(db).delete_by_id(entity_id)

    async def create(self, form: Mapping[str, Any]) -> Outcome:
        """
        Create a genre, or redirect to the genre that already has the name.

        A concurrent insert of the same name trips the unique index; the
        winner is looked up and used as the redirect target.
        """
        try:
            return await super().create(form)
        except DatabaseError as e:
            if not isinstance(e.__cause__, IntegrityError):
                raise
            name = evaluate(self.create_form_class, form).values["name"]
            existing = await self._read("Find genre by name", self._find_by_name(name))
            if existing is None:
                raise
            logger.info(f"Genre '{name}' created concurrently as {existing.id}")
            return Redirect(existing.url)

    async def list_all(self) -> RenderView:
        """All genres in ascending name order."""
        def work(db: Session):
            return [Genre.model_validate(genre) for genre in GenreRepository(db).get_sorted()]

        genres = await self._read("List genres", work)
        return self._view("list", ViewTitles.GENRE_LIST, genre_list=genres)

    async def detail(self, genre_id: str) -> RenderView:
        """
        A genre with the books tagged with it.

        Raises:
            EntityNotFoundError: If the genre does not exist
        """
        genre, books = await self._load_with_dependents(genre_id)
        if genre is None:
            raise self._not_found(genre_id)
        return self._view("detail", ViewTitles.GENRE_DETAIL, genre=genre, genre_books=books)
