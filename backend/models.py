from sqlalchemy import Column, String, Text, Date, ForeignKey, Table, CheckConstraint, Index
from sqlalchemy.orm import relationship

from constants import FieldLimits
from database import Base
from domain.value_objects import InstanceStatus
from utils.uuid_helper import generate_uuid


book_genres = Table(
    'book_genres',
    Base.metadata,
    Column('book_id', String, ForeignKey('books.id', ondelete='CASCADE'), primary_key=True),
    Column('genre_id', String, ForeignKey('genres.id'), primary_key=True),
)


class Author(Base):
    __tablename__ = 'authors'

    id = Column(String, primary_key=True, default=generate_uuid)
    first_name = Column(String(FieldLimits.NAME_MAX), nullable=False)
    family_name = Column(String(FieldLimits.NAME_MAX), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    books = relationship("Book", back_populates="author")

    __table_args__ = (
        CheckConstraint("first_name != ''"),
        CheckConstraint("family_name != ''"),
    )


class Genre(Base):
    """
    A book category.

    name_key holds the case-folded name; its unique index makes the
    case-insensitive uniqueness of genre names a storage guarantee.
    """
    __tablename__ = 'genres'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(FieldLimits.GENRE_NAME_MAX), nullable=False)
    name_key = Column(String, nullable=False, unique=True)

    books = relationship("Book", secondary=book_genres, back_populates="genres")

    __table_args__ = (
        CheckConstraint("name != ''"),
    )


class Book(Base):
    __tablename__ = 'books'

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False)
    author_id = Column(String, ForeignKey('authors.id'), nullable=False)
    summary = Column(Text, nullable=False)
    isbn = Column(String, nullable=False)

    author = relationship("Author", back_populates="books")
    genres = relationship("Genre", secondary=book_genres, back_populates="books")
    instances = relationship("BookInstance", back_populates="book")

    __table_args__ = (
        Index('idx_books_author', 'author_id'),
    )


class BookInstance(Base):
    """
    A physical copy of a book.

    Status values:
    - Available: On the shelf
    - Maintenance: Being repaired (storage default)
    - Loaned: Checked out until due_back
    - Reserved: Held for a patron
    """
    __tablename__ = 'book_instances'

    id = Column(String, primary_key=True, default=generate_uuid)
    book_id = Column(String, ForeignKey('books.id'), nullable=False)
    imprint = Column(String, nullable=False)
    status = Column(String, nullable=False, default=InstanceStatus.default().value)
    due_back = Column(Date, nullable=True)

    book = relationship("Book", back_populates="instances")

    __table_args__ = (
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in InstanceStatus.choices())),
            name='ck_book_instances_status'
        ),
        Index('idx_book_instances_book', 'book_id'),
    )
