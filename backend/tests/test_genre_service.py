import asyncio

import pytest

from dtos.internal.outcomes import Redirect, RenderView
from exceptions import EntityNotFoundError
from repositories.genre_repository import GenreRepository


def _create_genre(service, name):
    outcome = asyncio.run(service.create({"name": name}))
    assert isinstance(outcome, Redirect), outcome
    return outcome.location.rsplit("/", 1)[-1]


def _create_author(service):
    outcome = asyncio.run(service.create({"first_name": "Jane", "family_name": "Austen"}))
    return outcome.location.rsplit("/", 1)[-1]


def test_create_with_same_name_in_other_case_returns_existing(genre_service):
    genre_id = _create_genre(genre_service, "Fantasy")

    assert _create_genre(genre_service, "fAnTaSy") == genre_id
    assert _create_genre(genre_service, "  FANTASY ") == genre_id
    assert len(asyncio.run(genre_service.list_all()).context["genre_list"]) == 1


def test_create_losing_insert_race_redirects_to_existing(genre_service, monkeypatch):
    genre_id = _create_genre(genre_service, "Fantasy")
    lookup = GenreRepository.get_by_name
    lookups = []

    def miss_first_lookup(self, name):
        lookups.append(name)
        if len(lookups) == 1:
            return None
        return lookup(self, name)

    monkeypatch.setattr(GenreRepository, "get_by_name", miss_first_lookup)

    outcome = asyncio.run(genre_service.create({"name": "FANTASY"}))

    assert outcome == Redirect(f"/catalog/genre/{genre_id}")
    assert lookups == ["FANTASY", "FANTASY"]
    assert len(asyncio.run(genre_service.list_all()).context["genre_list"]) == 1


def test_short_name_rerenders_form(genre_service):
    outcome = asyncio.run(genre_service.create({"name": "Sf"}))

    assert isinstance(outcome, RenderView)
    assert outcome.view == "genre_form"
    assert outcome.context["genre"].name == "Sf"
    assert outcome.context["errors"][0].message == "Genre name must contain at least 3 characters"


def test_list_is_sorted_by_name(genre_service):
    for name in ("Satire", "Fantasy", "Horror"):
        _create_genre(genre_service, name)

    view = asyncio.run(genre_service.list_all())

    assert view.view == "genre_list"
    assert [genre.name for genre in view.context["genre_list"]] == ["Fantasy", "Horror", "Satire"]


def test_detail_lists_tagged_books(genre_service, author_service, book_service):
    genre_id = _create_genre(genre_service, "Romance")
    author_id = _create_author(author_service)
    asyncio.run(book_service.create({
        "title": "Emma", "author": author_id, "summary": "s", "isbn": "1", "genre": [genre_id],
    }))

    view = asyncio.run(genre_service.detail(genre_id))

    assert view.context["genre"].name == "Romance"
    assert [book.title for book in view.context["genre_books"]] == ["Emma"]


def test_rename(genre_service):
    genre_id = _create_genre(genre_service, "Romance")

    outcome = asyncio.run(genre_service.update(genre_id, {"name": "Gothic Romance"}))

    assert outcome == Redirect(f"/catalog/genre/{genre_id}")
    assert asyncio.run(genre_service.detail(genre_id)).context["genre"].name == "Gothic Romance"


def test_rename_onto_taken_name_is_a_field_error(genre_service):
    _create_genre(genre_service, "Fantasy")
    horror_id = _create_genre(genre_service, "Horror")

    outcome = asyncio.run(genre_service.update(horror_id, {"name": "FANTASY"}))

    assert outcome.view == "genre_form"
    assert outcome.context["genre"].name == "Horror"
    assert outcome.context["errors"][0].field == "name"
    assert outcome.context["errors"][0].message == "Genre with this name already exists"


def test_rename_changing_only_case_is_allowed(genre_service):
    genre_id = _create_genre(genre_service, "fantasy")

    assert asyncio.run(genre_service.update(genre_id, {"name": "Fantasy"})) == Redirect(f"/catalog/genre/{genre_id}")


def test_update_of_unknown_genre_raises(genre_service):
    with pytest.raises(EntityNotFoundError):
        asyncio.run(genre_service.update("missing", {"name": "Horror"}))


def test_genre_with_books_is_not_deleted(genre_service, author_service, book_service):
    genre_id = _create_genre(genre_service, "Romance")
    author_id = _create_author(author_service)
    asyncio.run(book_service.create({
        "title": "Emma", "author": author_id, "summary": "s", "isbn": "1", "genre": [genre_id],
    }))

    outcome = asyncio.run(genre_service.delete(genre_id))

    assert outcome.view == "genre_delete"
    assert [book.title for book in outcome.context["genre_books"]] == ["Emma"]
    assert asyncio.run(genre_service.detail(genre_id)).context["genre"].id == genre_id


def test_unused_genre_is_deleted(genre_service):
    genre_id = _create_genre(genre_service, "Romance")

    assert asyncio.run(genre_service.delete(genre_id)) == Redirect("/catalog/genres")
    with pytest.raises(EntityNotFoundError):
        asyncio.run(genre_service.detail(genre_id))
