"""
Book orchestrator.

Book forms reference an author and any number of genres by id; both are
resolved against storage before a write, and an unknown id becomes a field
error on the form.
"""

from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from constants import ViewTitles
from domain.value_objects import EntityKind
from dtos.internal.outcomes import RenderView
from models import Book as BookModel
from repositories.author_repository import AuthorRepository
from repositories.book_repository import BookRepository
from repositories.genre_repository import GenreRepository
from schemas import Author, Book, Genre, GenreChoice
from validation import BookForm, FieldError
from .crud_service import CrudService, WriteResult

AUTHOR_NOT_FOUND_MESSAGE = "Author not found"
GENRE_NOT_FOUND_MESSAGE = "Genre not found"


def _reference_errors(db: Session, values: Mapping[str, Any]) -> List[FieldError]:
    errors = []
    if AuthorRepository(db).get_by_id(values["author"]) is None:
        errors.append(FieldError("author", AUTHOR_NOT_FOUND_MESSAGE, values["author"]))
    genre_ids = set(values["genre"])
    found = {genre.id for genre in GenreRepository(db).get_many(list(genre_ids))}
    for missing in sorted(genre_ids - found):
        errors.append(FieldError("genre", GENRE_NOT_FOUND_MESSAGE, missing))
    return errors


def _columns(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": values["title"],
        "author_id": values["author"],
        "summary": values["summary"],
        "isbn": values["isbn"],
    }


class BookService(CrudService):
    """Book flows."""

    kind = EntityKind.BOOK
    context_name = "book"
    create_form_class = BookForm
    update_form_class = BookForm
    create_title = ViewTitles.BOOK_CREATE
    update_title = ViewTitles.BOOK_UPDATE
    delete_title = ViewTitles.BOOK_DELETE
    dependents_name = "book_instances"

    def _load_entity(self, db: Session, entity_id: str) -> Optional[Book]:
        book = BookRepository(db).get_with_relations(entity_id)
        return Book.model_validate(book) if book else None

    def _form_lookups(self, db: Session) -> Dict[str, Any]:
        return {
            "authors": [Author.model_validate(author) for author in AuthorRepository(db).find_all()],
            "genres": [Genre.model_validate(genre) for genre in GenreRepository(db).get_sorted()],
        }

    def _form_context(self, entity: Optional[Book], lookups: Dict[str, Any]) -> Dict[str, Any]:
        selected = set(entity.genre_ids) if entity else set()
        return {
            "authors": lookups["authors"],
            "genres": [
                GenreChoice(id=genre.id, name=genre.name, checked=genre.id in selected)
                for genre in lookups["genres"]
            ],
        }

    def _draft(self, values: Mapping[str, Any], lookups: Dict[str, Any]) -> Book:
        selected = set(values.get("genre", []))
        return Book(
            title=values.get("title", ""),
            summary=values.get("summary", ""),
            isbn=values.get("isbn", ""),
            author_id=values.get("author") or None,
            genres=[genre for genre in lookups["genres"] if genre.id in selected],
        )

    def _insert(self, db: Session, values: Mapping[str, Any]) -> WriteResult:
        errors = _reference_errors(db, values)
        if errors:
            return None, errors
        repo = BookRepository(db)
        book = repo.create_with_genres(BookModel(**_columns(values)), values["genre"])
        return Book.model_validate(book), []

    def _apply_update(self, db: Session, entity_id: str, values: Mapping[str, Any]) -> WriteResult:
        repo = BookRepository(db)
        if repo.get_by_id(entity_id) is None:
            return None, []
        errors = _reference_errors(db, values)
        if errors:
            return None, errors
        book = repo.update_by_id(entity_id, {**_columns(values), "genre_ids": values["genre"]})
        return Book.model_validate(book), []

    def _delete_record(self, db: Session, entity_id: str) -> bool:
        return BookRepository(db).delete_by_id(entity_id)

    async def list_all(self) -> RenderView:
        """All books with their authors."""
        def work(db: Session):
            return [Book.model_validate(book) for book in BookRepository(db).get_all_with_author()]

        books = await self._read("List books", work)
        return self._view("list", ViewTitles.BOOK_LIST, book_list=books)

    async def detail(self, book_id: str) -> RenderView:
        """
        A book with its author, genres and copies.

        Raises:
            EntityNotFoundError: If the book does not exist
        """
        book, instances = await self._load_with_dependents(book_id)
        if book is None:
            raise self._not_found(book_id)
        return self._view("detail", ViewTitles.BOOK_DETAIL, book=book, book_instances=instances)
