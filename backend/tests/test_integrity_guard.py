import pytest

from domain.value_objects import EntityKind
from exceptions import ValidationError
from models import Author, Book, BookInstance, Genre
from repositories import AuthorRepository, BookInstanceRepository, BookRepository, GenreRepository
from schemas import BookSummary, InstanceSummary
from services.integrity_guard import ReferentialIntegrityGuard


def _seed(db):
    author = AuthorRepository(db).create(Author(first_name="Jane", family_name="Austen"))
    genre = GenreRepository(db).create(Genre(name="Romance"))
    book = BookRepository(db).create_with_genres(
        Book(title="Emma", summary="Matchmaking", isbn="978", author_id=author.id), [genre.id]
    )
    copy = BookInstanceRepository(db).create(BookInstance(book_id=book.id, imprint="Penguin"))
    return author, genre, book, copy


def test_author_with_books_is_blocked(db_session):
    author, _, book, _ = _seed(db_session)

    check = ReferentialIntegrityGuard(db_session).can_delete(EntityKind.AUTHOR, author.id)

    assert check.allowed is False
    assert check.blockers == (BookSummary(id=book.id, title="Emma", summary="Matchmaking"),)


def test_genre_with_books_is_blocked(db_session):
    _, genre, book, _ = _seed(db_session)

    check = ReferentialIntegrityGuard(db_session).can_delete(EntityKind.GENRE, genre.id)

    assert check.allowed is False
    assert [summary.id for summary in check.blockers] == [book.id]


def test_book_with_copies_is_blocked(db_session):
    _, _, book, copy = _seed(db_session)

    check = ReferentialIntegrityGuard(db_session).can_delete(EntityKind.BOOK, book.id)

    assert check.allowed is False
    assert check.blockers == (
        InstanceSummary(id=copy.id, imprint="Penguin", status="Maintenance", due_back=None),
    )


def test_book_instance_is_never_blocked(db_session):
    _, _, _, copy = _seed(db_session)

    check = ReferentialIntegrityGuard(db_session).can_delete(EntityKind.BOOK_INSTANCE, copy.id)

    assert check.allowed is True
    assert check.blockers == ()


def test_records_without_dependents_are_allowed(db_session):
    author = AuthorRepository(db_session).create(Author(first_name="Emily", family_name="Bronte"))
    genre = GenreRepository(db_session).create(Genre(name="Gothic"))
    guard = ReferentialIntegrityGuard(db_session)

    assert guard.can_delete(EntityKind.AUTHOR, author.id).allowed
    assert guard.can_delete(EntityKind.GENRE, genre.id).allowed
    assert guard.dependents(EntityKind.AUTHOR, author.id) == []


def test_kind_may_be_given_by_path_segment(db_session):
    author, _, book, _ = _seed(db_session)
    guard = ReferentialIntegrityGuard(db_session)

    assert [summary.id for summary in guard.dependents("author", author.id)] == [book.id]
    assert guard.can_delete("author", author.id).allowed is False


def test_unknown_kind_is_rejected(db_session):
    with pytest.raises(ValidationError):
        ReferentialIntegrityGuard(db_session).can_delete("publisher", "p1")
