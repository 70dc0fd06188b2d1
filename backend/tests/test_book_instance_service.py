import asyncio

import pytest

from dtos.internal.outcomes import Redirect, RenderView
from exceptions import EntityNotFoundError


def _id_of(outcome):
    assert isinstance(outcome, Redirect), outcome
    return outcome.location.rsplit("/", 1)[-1]


@pytest.fixture
def book_id(author_service, book_service):
    author_id = _id_of(asyncio.run(author_service.create({"first_name": "Jane", "family_name": "Austen"})))
    return _id_of(asyncio.run(book_service.create({
        "title": "Emma", "author": author_id, "summary": "Matchmaking", "isbn": "978",
    })))


def test_blank_status_takes_default(book_instance_service, book_id):
    instance_id = _id_of(asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin", "status": ""})))

    view = asyncio.run(book_instance_service.detail(instance_id))

    instance = view.context["book_instance"]
    assert view.view == "bookinstance_detail"
    assert view.context["title"] == "Book:"
    assert instance.status == "Maintenance"
    assert instance.book.title == "Emma"


def test_create_with_due_date(book_instance_service, book_id):
    instance_id = _id_of(asyncio.run(book_instance_service.create({
        "book": book_id, "imprint": "Penguin", "status": "Loaned", "due_back": "2030-01-02",
    })))

    instance = asyncio.run(book_instance_service.detail(instance_id)).context["book_instance"]

    assert instance.due_back_formatted == "2030-01-02"
    assert instance.url == f"/catalog/bookinstance/{instance_id}"


def test_unknown_status_is_a_field_error(book_instance_service, book_id):
    outcome = asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin", "status": "Lost"}))

    assert isinstance(outcome, RenderView)
    assert [(error.field, error.message) for error in outcome.context["errors"]] == [
        ("status", "Invalid status"),
    ]


def test_unknown_book_is_a_field_error(book_instance_service):
    outcome = asyncio.run(book_instance_service.create({"book": "missing", "imprint": "Penguin"}))

    assert outcome.view == "bookinstance_form"
    assert outcome.context["errors"][0].message == "Book not found"


def test_form_offers_books_and_statuses(book_instance_service, book_id):
    view = asyncio.run(book_instance_service.create_form())

    assert [book.title for book in view.context["book_list"]] == ["Emma"]
    assert view.context["statuses"] == ["Available", "Maintenance", "Loaned", "Reserved"]


def test_update_requires_status(book_instance_service, book_id):
    instance_id = _id_of(asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin"})))

    outcome = asyncio.run(book_instance_service.update(instance_id, {"book": book_id, "imprint": "Vintage"}))

    assert outcome.view == "bookinstance_form"
    assert outcome.context["book_instance"].imprint == "Penguin"
    assert outcome.context["errors"][0].message == "Please select a status for the BookInstance"


def test_update(book_instance_service, book_id):
    instance_id = _id_of(asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin"})))

    outcome = asyncio.run(book_instance_service.update(
        instance_id, {"book": book_id, "imprint": "Vintage", "status": "Available"}
    ))

    assert outcome == Redirect(f"/catalog/bookinstance/{instance_id}")
    instance = asyncio.run(book_instance_service.detail(instance_id)).context["book_instance"]
    assert (instance.imprint, instance.status) == ("Vintage", "Available")


def test_list(book_instance_service, book_id):
    asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin"}))

    view = asyncio.run(book_instance_service.list_all())

    assert view.view == "bookinstance_list"
    assert view.context["bookinstance_list"][0].book.title == "Emma"


def test_delete_is_never_blocked_and_idempotent(book_instance_service, book_id):
    instance_id = _id_of(asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin"})))

    assert asyncio.run(book_instance_service.delete(instance_id)) == Redirect("/catalog/bookinstances")
    assert asyncio.run(book_instance_service.delete(instance_id)) == Redirect("/catalog/bookinstances")
    with pytest.raises(EntityNotFoundError):
        asyncio.run(book_instance_service.detail(instance_id))


def test_catalog_counts(index_service, book_instance_service, book_id):
    asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Penguin", "status": "Available"}))
    asyncio.run(book_instance_service.create({"book": book_id, "imprint": "Vintage"}))

    view = asyncio.run(index_service.index())

    counts = view.context["counts"]
    assert view.view == "index"
    assert view.context["title"] == "Local Library Home"
    assert (counts.book_count, counts.book_instance_count, counts.book_instance_available_count) == (1, 2, 1)
    assert (counts.author_count, counts.genre_count) == (1, 0)
