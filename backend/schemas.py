from pydantic import BaseModel, computed_field
from typing import List, Optional
from datetime import date

from domain.value_objects import EntityKind


def _format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


# Author Schemas
class AuthorBase(BaseModel):
    first_name: str
    family_name: str
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None


class Author(AuthorBase):
    """Author value object with derived display fields"""
    id: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True

    @computed_field
    @property
    def name(self) -> str:
        """Full name as 'family_name, first_name'; empty unless both parts are set."""
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @computed_field
    @property
    def url(self) -> str:
        return EntityKind.AUTHOR.detail_path(self.id) if self.id else ""

    @computed_field
    @property
    def date_of_birth_formatted(self) -> str:
        return _format_date(self.date_of_birth)

    @computed_field
    @property
    def date_of_death_formatted(self) -> str:
        return _format_date(self.date_of_death)

    @computed_field
    @property
    def lifespan(self) -> str:
        if not self.date_of_birth and not self.date_of_death:
            return ""
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}".strip()


# Genre Schemas
class Genre(BaseModel):
    id: Optional[str] = None
    name: str

    class Config:
        from_attributes = True
        frozen = True

    @computed_field
    @property
    def url(self) -> str:
        return EntityKind.GENRE.detail_path(self.id) if self.id else ""


class GenreChoice(Genre):
    """Genre option on the book form; checked marks the book's current genres"""
    checked: bool = False


# Book Schemas
class BookSummary(BaseModel):
    """Projection used when listing a record's dependent books"""
    id: str
    title: str
    summary: str

    class Config:
        from_attributes = True
        frozen = True

    @computed_field
    @property
    def url(self) -> str:
        return EntityKind.BOOK.detail_path(self.id)


class BookOption(BaseModel):
    """Lookup entry for the book select on the instance form"""
    id: str
    title: str

    class Config:
        from_attributes = True
        frozen = True


class Book(BaseModel):
    id: Optional[str] = None
    title: str
    summary: str
    isbn: str
    author_id: Optional[str] = None
    author: Optional[Author] = None
    genres: List[Genre] = []

    class Config:
        from_attributes = True
        frozen = True

    @computed_field
    @property
    def genre_ids(self) -> List[str]:
        return [genre.id for genre in self.genres if genre.id]

    @computed_field
    @property
    def url(self) -> str:
        return EntityKind.BOOK.detail_path(self.id) if self.id else ""


# Book Instance Schemas
class BookInstance(BaseModel):
    id: Optional[str] = None
    book_id: Optional[str] = None
    book: Optional[BookOption] = None
    imprint: str
    status: str
    due_back: Optional[date] = None

    class Config:
        from_attributes = True
        frozen = True

    @computed_field
    @property
    def url(self) -> str:
        return EntityKind.BOOK_INSTANCE.detail_path(self.id) if self.id else ""

    @computed_field
    @property
    def due_back_formatted(self) -> str:
        return _format_date(self.due_back)


class InstanceSummary(BaseModel):
    """Projection used when listing a book's copies"""
    id: str
    imprint: str
    status: str
    due_back: Optional[date] = None

    class Config:
        from_attributes = True
        frozen = True

    @computed_field
    @property
    def url(self) -> str:
        return EntityKind.BOOK_INSTANCE.detail_path(self.id)


# Catalog Schemas
class CatalogCounts(BaseModel):
    """Record counts shown on the catalog home page"""
    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int
