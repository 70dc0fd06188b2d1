"""
CRUD Orchestration Base

Shared request flows for every catalog entity: list, detail, create, update
and delete. A flow binds the submitted body to the entity's WTForms form,
validates it, persists through the repositories (consulting the integrity
guard before deletes) and returns an outcome for the HTTP layer: a view to
render or a redirect.

Blocking database work runs in the default executor. Independent reads
are gathered concurrently, each on its own session; a write flow uses a
single session and commits once.
"""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from wtforms import Form
import logging

from database import Database
from domain.value_objects import EntityKind
from dtos.internal.outcomes import Outcome, Redirect, RenderView
from exceptions import DatabaseError, EntityNotFoundError
from services.integrity_guard import ReferentialIntegrityGuard
from utils.logging_utils import log_operation
from validation import FieldError, ValidationResult, evaluate

logger = logging.getLogger(__name__)

T = TypeVar('T')

# (persisted entity or None, errors that prevented persisting)
WriteResult = Tuple[Optional[Any], List[FieldError]]


class CrudService:
    """
    Base orchestrator for one entity type.

    Subclasses declare the entity's create and update forms and titles, and
    implement the hooks that load, draft, insert and update records.
    """

    kind: EntityKind
    context_name: str
    create_form_class: Type[Form]
    update_form_class: Type[Form]
    create_title: str
    update_title: str
    delete_title: str
    # Context key for dependents on the delete view; None for leaf entities
    dependents_name: Optional[str] = None

    def __init__(self, database: Database):
        """
        Initialize the service.

        Args:
            database: Shared datastore handle
        """
        self.database = database

    # ------------------------------------------------------------------
    # Units of work
    # ------------------------------------------------------------------

    def _unit_of_work(self, operation: str, work: Callable[[Session], T], commit: bool) -> T:
        try:
            with self.database.session_scope(commit=commit) as db:
                return work(db)
        except SQLAlchemyError as e:
            logger.error(f"{operation} - Database error: {e}", exc_info=True)
            raise DatabaseError(operation, f"{operation} failed: {e}") from e

    async def _read(self, operation: str, work: Callable[[Session], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._unit_of_work, operation, work, False)

    async def _write(self, operation: str, work: Callable[[Session], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._unit_of_work, operation, work, True)

    async def _read_concurrently(self, operation: str, *works: Callable[[Session], Any]) -> List[Any]:
        """Run independent reads in parallel; returns results in argument order."""
        return list(await asyncio.gather(*(self._read(operation, work) for work in works)))

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _load_entity(self, db: Session, entity_id: str) -> Optional[Any]:
        """Load one record as a value object, or None."""
        raise NotImplementedError

    def _form_lookups(self, db: Session) -> Dict[str, Any]:
        """Reference lists the form needs (e.g. all authors for a book)."""
        return {}

    def _form_context(self, entity: Optional[Any], lookups: Dict[str, Any]) -> Dict[str, Any]:
        """Adapt lookups to the entity shown on the form."""
        return lookups

    def _draft(self, values: Mapping[str, Any], lookups: Dict[str, Any]) -> Any:
        """Unpersisted value object built from sanitized form values."""
        raise NotImplementedError

    def _insert(self, db: Session, values: Mapping[str, Any]) -> WriteResult:
        raise NotImplementedError

    def _apply_update(self, db: Session, entity_id: str, values: Mapping[str, Any]) -> WriteResult:
        raise NotImplementedError

    def _delete_record(self, db: Session, entity_id: str) -> bool:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Outcome helpers
    # ------------------------------------------------------------------

    def _view(self, suffix: str, title: str, **context: Any) -> RenderView:
        return RenderView(view=f"{self.kind.value}_{suffix}", context={"title": title, **context})

    def _form_view(
        self,
        title: str,
        entity: Optional[Any],
        lookups: Dict[str, Any],
        errors: Sequence[FieldError] = (),
    ) -> RenderView:
        return self._view(
            "form",
            title,
            **{self.context_name: entity},
            **self._form_context(entity, lookups),
            errors=list(errors),
        )

    def _delete_view(self, entity: Any, dependents: Sequence[Any]) -> RenderView:
        context: Dict[str, Any] = {self.context_name: entity}
        if self.dependents_name:
            context[self.dependents_name] = list(dependents)
        return self._view("delete", self.delete_title, **context)

    def _not_found(self, entity_id: str) -> EntityNotFoundError:
        return EntityNotFoundError(self.kind.label, entity_id)

    def _dependents(self, entity_id: str) -> Callable[[Session], list]:
        return lambda db: ReferentialIntegrityGuard(db).dependents(self.kind, entity_id)

    def _loader(self, entity_id: str) -> Callable[[Session], Optional[Any]]:
        return lambda db: self._load_entity(db, entity_id)

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def _load_with_dependents(self, entity_id: str) -> Tuple[Optional[Any], list]:
        """Fetch a record and its dependents in parallel."""
        entity, dependents = await self._read_concurrently(
            f"Load {self.kind.label}", self._loader(entity_id), self._dependents(entity_id)
        )
        return entity, dependents

    async def list_all(self) -> RenderView:
        raise NotImplementedError

    async def detail(self, entity_id: str) -> RenderView:
        raise NotImplementedError

    async def create_form(self) -> RenderView:
        """Empty form with its lookup lists."""
        lookups = await self._read(f"Load {self.kind.label} form", self._form_lookups)
        return self._form_view(self.create_title, None, lookups)

    @log_operation("catalog_create")
    async def create(self, form: Mapping[str, Any]) -> Outcome:
        """
        Validate and persist a submitted create form.

        Returns:
            Redirect to the new record, or the form re-rendered with the
            sanitized values and every error
        """
        result = evaluate(self.create_form_class, form)
        if result.is_valid:
            entity, errors = await self._write(
                f"Create {self.kind.label}", lambda db: self._insert(db, result.values)
            )
            if entity is not None:
                logger.info(f"Created {self.kind.label} {entity.id}")
                return Redirect(entity.url)
            result = result.with_errors(errors)

        logger.info(f"Rejected {self.kind.label} create with {len(result.errors)} error(s)")
        return await self._rerender_create(result)

    async def _rerender_create(self, result: ValidationResult) -> RenderView:
        lookups = await self._read(f"Load {self.kind.label} form", self._form_lookups)
        return self._form_view(
            self.create_title, self._draft(result.values, lookups), lookups, result.errors
        )

    async def update_form(self, entity_id: str) -> RenderView:
        """
        Form pre-filled with the persisted record.

        Raises:
            EntityNotFoundError: If the record does not exist
        """
        entity, lookups = await self._read_concurrently(
            f"Load {self.kind.label} form", self._loader(entity_id), self._form_lookups
        )
        if entity is None:
            raise self._not_found(entity_id)
        return self._form_view(self.update_title, entity, lookups)

    @log_operation("catalog_update")
    async def update(self, entity_id: str, form: Mapping[str, Any]) -> Outcome:
        """
        Validate and apply a submitted update form to the record at entity_id.

        The identifier always comes from the path; an id in the body is ignored.

        Returns:
            Redirect to the updated record, or the form re-rendered with the
            persisted record and every error

        Raises:
            EntityNotFoundError: If the record does not exist
        """
        result = evaluate(self.update_form_class, form)
        if result.is_valid:
            entity, errors = await self._write(
                f"Update {self.kind.label}",
                lambda db: self._apply_update(db, entity_id, result.values),
            )
            if entity is not None:
                logger.info(f"Updated {self.kind.label} {entity_id}")
                return Redirect(entity.url)
            if not errors:
                raise self._not_found(entity_id)
            result = result.with_errors(errors)

        existing, lookups = await self._read_concurrently(
            f"Load {self.kind.label} form", self._loader(entity_id), self._form_lookups
        )
        if existing is None:
            raise self._not_found(entity_id)
        logger.info(f"Rejected {self.kind.label} update with {len(result.errors)} error(s)")
        return self._form_view(self.update_title, existing, lookups, result.errors)

    async def delete_form(self, entity_id: str) -> Outcome:
        """
        Confirmation view listing dependents; redirects to the list if the
        record no longer exists.
        """
        entity, dependents = await self._load_with_dependents(entity_id)
        if entity is None:
            return Redirect(self.kind.list_path)
        return self._delete_view(entity, dependents)

    @log_operation("catalog_delete")
    async def delete(self, entity_id: str) -> Outcome:
        """
        Delete a record unless dependents still reference it.

        Returns:
            Redirect to the list when deleted or already gone; the
            confirmation view with the blocking dependents otherwise
        """
        def work(db: Session):
            entity = self._load_entity(db, entity_id)
            if entity is None:
                return None, None
            check = ReferentialIntegrityGuard(db).can_delete(self.kind, entity_id)
            if check.allowed:
                self._delete_record(db, entity_id)
            return entity, check

        entity, check = await self._write(f"Delete {self.kind.label}", work)
        if entity is None:
            logger.info(f"{self.kind.label.capitalize()} {entity_id} already deleted")
            return Redirect(self.kind.list_path)
        if not check.allowed:
            return self._delete_view(entity, check.blockers)
        logger.info(f"Deleted {self.kind.label} {entity_id}")
        return Redirect(self.kind.list_path)
