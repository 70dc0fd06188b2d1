"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, List, Optional, Type, Dict, Any, Sequence
from sqlalchemy.orm import Session, load_only

from .specifications import Specification

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Repositories never validate input; values are assumed to be sanitized
    by the caller.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def create(self, obj: T) -> T:
        """
        Create a new record in the database.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance, with its generated id
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: str) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def find_all(
        self,
        specification: Optional[Specification[T]] = None,
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[Any] = None,
    ) -> List[T]:
        """
        Retrieve records, optionally filtered and projected.

        Args:
            specification: Filter to apply; all records when None
            columns: Attribute names to load (projection); all when None
            order_by: Column expression to sort by; storage order when None

        Returns:
            List of model instances
        """
        query = self.db.query(self.model)
        if specification is not None:
            query = query.filter(specification.to_sql_filter())
        if columns:
            query = query.options(load_only(*[getattr(self.model, name) for name in columns]))
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def update_by_id(self, id: str, values: Dict[str, Any]) -> Optional[T]:
        """
        Overwrite the given attributes of an existing record.

        Args:
            id: Primary key value; never taken from values
            values: Attribute name to new value

        Returns:
            Updated model instance, or None if not found
        """
        obj = self.get_by_id(id)
        if obj is None:
            return None
        for key, value in values.items():
            if key != 'id' and hasattr(self.model, key):
                setattr(obj, key, value)
        self.db.flush()
        return obj

    def delete(self, obj: T) -> None:
        """
        Delete a record from the database.

        Args:
            obj: Model instance to delete
        """
        self.db.delete(obj)
        self.db.flush()

    def delete_by_id(self, id: str) -> bool:
        """
        Delete a record by its ID.

        Args:
            id: Primary key value

        Returns:
            True if deleted, False if not found
        """
        obj = self.get_by_id(id)
        if obj:
            self.delete(obj)
            return True
        return False

    def count(self, specification: Optional[Specification[T]] = None) -> int:
        """
        Count records.

        Args:
            specification: Filter to apply; all records when None

        Returns:
            Number of matching records
        """
        query = self.db.query(self.model)
        if specification is not None:
            query = query.filter(specification.to_sql_filter())
        return query.count()
