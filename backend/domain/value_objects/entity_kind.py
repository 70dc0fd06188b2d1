"""
EntityKind Value Object

Identifies a catalog entity type and derives its canonical paths.
"""

from enum import Enum

from constants import CATALOG_PREFIX
from exceptions import ValidationError


class EntityKind(str, Enum):
    """
    Catalog entity types.

    The value doubles as the path segment of the entity's detail routes.
    """

    AUTHOR = "author"
    GENRE = "genre"
    BOOK = "book"
    BOOK_INSTANCE = "bookinstance"

    @property
    def list_path(self) -> str:
        """Path of the entity's list view, e.g. /catalog/authors."""
        return f"{CATALOG_PREFIX}/{self.value}s"

    def detail_path(self, entity_id: str) -> str:
        """
        Canonical path of a single record.

        Args:
            entity_id: Record identifier

        Returns:
            Path like /catalog/author/<id>
        """
        return f"{CATALOG_PREFIX}/{self.value}/{entity_id}"

    @property
    def label(self) -> str:
        """Human-readable name used in messages."""
        if self is EntityKind.BOOK_INSTANCE:
            return "book instance"
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "EntityKind":
        """
        Resolve an entity kind from its path segment.

        Raises:
            ValidationError: If value is not a known entity kind
        """
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationError(f"Invalid entity kind: {value}", {"kind": value}) from e
