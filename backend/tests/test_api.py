def _create(client, path, data):
    response = client.post(path, data=data, follow_redirects=False)
    assert response.status_code == 302, response.text
    return response.headers["location"]


def _author(client, first_name="Jane", family_name="Austen"):
    return _create(client, "/catalog/author/create", {"first_name": first_name, "family_name": family_name})


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_home_counts_with_and_without_trailing_slash(client):
    _author(client)

    for path in ("/catalog", "/catalog/"):
        body = client.get(path).json()
        assert body["view"] == "index"
        assert body["counts"]["author_count"] == 1
        assert body["counts"]["book_count"] == 0


def test_create_redirects_to_detail(client):
    location = _author(client)

    body = client.get(location).json()
    assert location.startswith("/catalog/author/")
    assert body["view"] == "author_detail"
    assert body["author"]["name"] == "Austen, Jane"
    assert body["author"]["url"] == location


def test_validation_failure_renders_form_with_errors(client):
    response = client.post("/catalog/author/create", data={"first_name": "", "family_name": "Austen"})

    body = response.json()
    assert response.status_code == 200
    assert body["view"] == "author_form"
    assert body["errors"][0]["field"] == "first_name"
    assert body["errors"][0]["message"] == "First name must be specified"


def test_create_route_is_not_read_as_an_id(client):
    body = client.get("/catalog/genre/create").json()

    assert body["view"] == "genre_form"
    assert body["title"] == "Create Genre"


def test_unknown_ids_are_not_found(client):
    assert client.get("/catalog/author/missing").status_code == 404
    assert client.get("/catalog/book/missing/update").status_code == 404
    assert client.post("/catalog/genre/missing/update", data={"name": "Horror"}).status_code == 404


def test_update_ignores_id_in_body(client):
    austen = _author(client)
    bronte = _author(client, "Emily", "Bronte")
    bronte_id = bronte.rsplit("/", 1)[-1]

    location = _create(client, f"{austen}/update", {
        "id": bronte_id, "first_name": "Cassandra", "family_name": "Austen",
    })

    assert location == austen
    assert client.get(austen).json()["author"]["first_name"] == "Cassandra"
    assert client.get(bronte).json()["author"]["first_name"] == "Emily"


def test_delete_is_idempotent(client):
    author = _author(client)

    first = client.post(f"{author}/delete", follow_redirects=False)
    second = client.post(f"{author}/delete", follow_redirects=False)

    assert first.status_code == second.status_code == 302
    assert first.headers["location"] == second.headers["location"] == "/catalog/authors"
    assert client.get(author).status_code == 404


def test_blocked_delete_lists_dependents(client):
    author = _author(client)
    genre = _create(client, "/catalog/genre/create", {"name": "Romance"})
    book = _create(client, "/catalog/book/create", {
        "title": "Emma",
        "author": author.rsplit("/", 1)[-1],
        "summary": "Matchmaking",
        "isbn": "978",
        "genre": genre.rsplit("/", 1)[-1],
    })

    response = client.post(f"{author}/delete", follow_redirects=False)

    body = response.json()
    assert response.status_code == 200
    assert body["view"] == "author_delete"
    assert body["author_books"][0]["url"] == book


def test_book_genres_accept_repeated_fields(client):
    author_id = _author(client).rsplit("/", 1)[-1]
    romance = _create(client, "/catalog/genre/create", {"name": "Romance"}).rsplit("/", 1)[-1]
    satire = _create(client, "/catalog/genre/create", {"name": "Satire"}).rsplit("/", 1)[-1]

    book = _create(client, "/catalog/book/create", {
        "title": "Emma", "author": author_id, "summary": "s", "isbn": "1", "genre": [romance, satire],
    })

    assert sorted(client.get(book).json()["book"]["genre_ids"]) == sorted([romance, satire])


def test_duplicate_genre_redirects_to_existing(client):
    first = _create(client, "/catalog/genre/create", {"name": "Fantasy"})
    second = _create(client, "/catalog/genre/create", {"name": "FANTASY"})

    assert first == second
    assert len(client.get("/catalog/genres").json()["genre_list"]) == 1


def test_book_instance_routes(client):
    author_id = _author(client).rsplit("/", 1)[-1]
    book = _create(client, "/catalog/book/create", {
        "title": "Emma", "author": author_id, "summary": "s", "isbn": "1",
    })

    copy = _create(client, "/catalog/bookinstance/create", {
        "book": book.rsplit("/", 1)[-1], "imprint": "Penguin", "status": "Loaned", "due_back": "2030-01-02",
    })

    body = client.get(copy).json()
    assert body["book_instance"]["due_back_formatted"] == "2030-01-02"
    assert client.get("/catalog/bookinstances").json()["bookinstance_list"][0]["url"] == copy
