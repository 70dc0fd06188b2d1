"""
Book instance orchestrator.

A copy references its book by id and carries a circulation status; a blank
status takes the storage default, an unknown one is a field error.
"""

from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from constants import ViewTitles
from domain.value_objects import EntityKind, InstanceStatus
from dtos.internal.outcomes import RenderView
from models import BookInstance as BookInstanceModel
from repositories.book_instance_repository import BookInstanceRepository
from repositories.book_repository import BookRepository
from schemas import BookInstance, BookOption
from validation import BookInstanceCreateForm, BookInstanceUpdateForm, FieldError
from .crud_service import CrudService, WriteResult

BOOK_NOT_FOUND_MESSAGE = "Book not found"
INVALID_STATUS_MESSAGE = "Invalid status"


def _resolve(db: Session, values: Mapping[str, Any]) -> tuple:
    """Resolved column values and the reference errors found on the way."""
    errors: List[FieldError] = []
    if BookRepository(db).get_by_id(values["book"]) is None:
        errors.append(FieldError("book", BOOK_NOT_FOUND_MESSAGE, values["book"]))
    status = InstanceStatus.from_form(values.get("status"))
    if status is None:
        errors.append(FieldError("status", INVALID_STATUS_MESSAGE, values["status"]))
    columns = {
        "book_id": values["book"],
        "imprint": values["imprint"],
        "status": status.value if status else None,
        "due_back": values.get("due_back"),
    }
    return columns, errors


class BookInstanceService(CrudService):
    """Book instance flows."""

    kind = EntityKind.BOOK_INSTANCE
    context_name = "book_instance"
    create_form_class = BookInstanceCreateForm
    update_form_class = BookInstanceUpdateForm
    create_title = ViewTitles.INSTANCE_CREATE
    update_title = ViewTitles.INSTANCE_UPDATE
    delete_title = ViewTitles.INSTANCE_DELETE

    def _load_entity(self, db: Session, entity_id: str) -> Optional[BookInstance]:
        instance = BookInstanceRepository(db).get_with_book(entity_id)
        return BookInstance.model_validate(instance) if instance else None

    def _form_lookups(self, db: Session) -> Dict[str, Any]:
        return {
            "book_list": [BookOption.model_validate(book) for book in BookRepository(db).find_all()],
            "statuses": InstanceStatus.choices(),
        }

    def _draft(self, values: Mapping[str, Any], lookups: Dict[str, Any]) -> BookInstance:
        return BookInstance(
            book_id=values.get("book") or None,
            imprint=values.get("imprint", ""),
            status=values.get("status") or InstanceStatus.default().value,
            due_back=values.get("due_back"),
        )

    def _insert(self, db: Session, values: Mapping[str, Any]) -> WriteResult:
        columns, errors = _resolve(db, values)
        if errors:
            return None, errors
        instance = BookInstanceRepository(db).create(BookInstanceModel(**columns))
        return BookInstance.model_validate(instance), []

    def _apply_update(self, db: Session, entity_id: str, values: Mapping[str, Any]) -> WriteResult:
        repo = BookInstanceRepository(db)
        if repo.get_by_id(entity_id) is None:
            return None, []
        columns, errors = _resolve(db, values)
        if errors:
            return None, errors
        return BookInstance.model_validate(repo.update_by_id(entity_id, columns)), []

    def _delete_record(self, db: Session, entity_id: str) -> bool:
        return BookInstanceRepository(db).delete_by_id(entity_id)

    async def list_all(self) -> RenderView:
        """All copies with their books."""
        def work(db: Session):
            instances = BookInstanceRepository(db).get_all_with_book()
            return [BookInstance.model_validate(instance) for instance in instances]

        instances = await self._read("List book instances", work)
        return self._view("list", ViewTitles.INSTANCE_LIST, bookinstance_list=instances)

    async def detail(self, instance_id: str) -> RenderView:
        """
        A copy with its book.

        Raises:
            EntityNotFoundError: If the copy does not exist
        """
        instance = await self._read("Load book instance", self._loader(instance_id))
        if instance is None:
            raise self._not_found(instance_id)
        return self._view("detail", ViewTitles.INSTANCE_DETAIL, book_instance=instance)
