from starlette.datastructures import FormData

from validation import AuthorForm, BookForm, BookInstanceCreateForm, GenreUpdateForm, evaluate
from validation.rules import as_formdata


def test_absent_text_field_reads_as_empty_string():
    result = evaluate(GenreUpdateForm, FormData())

    assert result.values == {"name": ""}
    assert [error.message for error in result.errors] == ["Genre not specified"]


def test_absent_optional_fields():
    result = evaluate(BookInstanceCreateForm, FormData([("book", "b1"), ("imprint", "Penguin")]))

    assert result.values == {"book": "b1", "imprint": "Penguin", "status": "", "due_back": None}


def test_repeated_single_field_keeps_first_value():
    result = evaluate(GenreUpdateForm, FormData([("name", "Fantasy"), ("name", "Horror")]))

    assert result.values["name"] == "Fantasy"


def test_repeatable_field_is_always_a_list():
    assert evaluate(BookForm, FormData()).values["genre"] == []
    assert evaluate(BookForm, FormData([("genre", "g1")])).values["genre"] == ["g1"]
    assert evaluate(BookForm, FormData([("genre", "g1"), ("genre", "g2")])).values["genre"] == ["g1", "g2"]


def test_plain_mapping_is_accepted():
    result = evaluate(BookForm, {"title": "Emma", "genre": "g1"})

    assert result.values["title"] == "Emma"
    assert result.values["author"] == ""
    assert result.values["genre"] == ["g1"]


def test_plain_mapping_lists_become_repeated_keys():
    formdata = as_formdata({"genre": ["g1", "g2"], "title": "Emma", "isbn": None})

    assert formdata.getlist("genre") == ["g1", "g2"]
    assert "isbn" not in formdata


def test_id_in_body_is_ignored():
    result = evaluate(AuthorForm, {"id": "someone-else", "first_name": "Jane", "family_name": "Austen"})

    assert set(result.values) == {"first_name", "family_name", "date_of_birth", "date_of_death"}
