import pytest


@pytest.mark.asyncio
async def test_create_and_list_books(client, author):
    resp = await client.post("/api/books", json={
        "title": "Dom Casmurro",
        "author_id": author["id"],
        "year_published": 1899,
    })
    assert resp.status_code == 201
    book = resp.json()
    assert book["title"] == "Dom Casmurro"
    assert book["author_id"] == author["id"]

    resp = await client.get("/api/books")
    assert resp.status_code == 200
    books = resp.json()
    assert len(books) == 1
    assert books[0]["id"] == book["id"]


@pytest.mark.asyncio
async def test_get_book(client, author):
    resp = await client.post("/api/books", json={
        "title": "Quincas Borba",
        "author_id": author["id"],
        "isbn": "9788535910667",
        "page_count": 320,
    })
    book_id = resp.json()["id"]

    resp = await client.get(f"/api/books/{book_id}")
    assert resp.status_code == 200
    detail = resp.json()
    assert detail["title"] == "Quincas Borba"
    assert detail["isbn"] == "9788535910667"
    assert detail["page_count"] == 320
    assert detail["publisher"] is None


@pytest.mark.asyncio
async def test_create_book_missing_fields(client, author):
    resp = await client.post("/api/books", json={"author_id": author["id"]})
    assert resp.status_code == 422

    resp = await client.post("/api/books", json={"title": "No author"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_book_invalid_page_count(client, author):
    resp = await client.post("/api/books", json={"title": "Empty", "author_id": author["id"], "page_count": 0})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_book_unknown_author(client):
    resp = await client.post("/api/books", json={"title": "Orphan", "author_id": 9999})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Author 9999 does not exist"

    resp = await client.get("/api/books")
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_book_duplicate_isbn(client, author):
    payload = {"title": "Dom Casmurro", "author_id": author["id"], "isbn": "9788535910667"}
    assert (await client.post("/api/books", json=payload)).status_code == 201

    payload["title"] = "Dom Casmurro (reprint)"
    resp = await client.post("/api/books", json=payload)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_update_book(client, author):
    resp = await client.post("/api/books", json={"title": "Dom Casmuro", "author_id": author["id"]})
    book_id = resp.json()["id"]

    resp = await client.put(f"/api/books/{book_id}", json={"title": "Dom Casmurro"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Dom Casmurro"
    assert resp.json()["author_id"] == author["id"]


@pytest.mark.asyncio
async def test_update_book_moves_to_other_author(client, author):
    other = (await client.post("/api/authors", json={"name": "Jorge Amado"})).json()
    resp = await client.post("/api/books", json={"title": "Capitaes da Areia", "author_id": author["id"]})
    book_id = resp.json()["id"]

    resp = await client.put(f"/api/books/{book_id}", json={"author_id": other["id"]})
    assert resp.status_code == 200

    assert (await client.get(f"/api/authors/{author['id']}/books")).json() == []
    moved = (await client.get(f"/api/authors/{other['id']}/books")).json()
    assert [b["id"] for b in moved] == [book_id]


@pytest.mark.asyncio
async def test_update_book_validation(client, author):
    resp = await client.post("/api/books", json={"title": "Helena", "author_id": author["id"]})
    book_id = resp.json()["id"]

    resp = await client.put(f"/api/books/{book_id}", json={"author_id": 9999})
    assert resp.status_code == 422

    resp = await client.put(f"/api/books/{book_id}", json={"title": None})
    assert resp.status_code == 422

    resp = await client.put(f"/api/books/{book_id}", json={"title": ""})
    assert resp.status_code == 422

    resp = await client.get(f"/api/books/{book_id}")
    assert resp.json()["title"] == "Helena"


@pytest.mark.asyncio
async def test_update_book_isbn_conflict(client, author):
    await client.post("/api/books", json={"title": "A", "author_id": author["id"], "isbn": "111"})
    resp = await client.post("/api/books", json={"title": "B", "author_id": author["id"], "isbn": "222"})
    book_id = resp.json()["id"]

    resp = await client.put(f"/api/books/{book_id}", json={"isbn": "111"})
    assert resp.status_code == 409

    # Re-sending its own ISBN is not a conflict
    resp = await client.put(f"/api/books/{book_id}", json={"isbn": "222"})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_delete_book(client, author):
    resp = await client.post("/api/books", json={"title": "Temp", "author_id": author["id"]})
    book_id = resp.json()["id"]

    resp = await client.delete(f"/api/books/{book_id}")
    assert resp.status_code == 204

    resp = await client.get(f"/api/books/{book_id}")
    assert resp.status_code == 404

    # Author survives
    assert (await client.get(f"/api/authors/{author['id']}")).status_code == 200


@pytest.mark.asyncio
async def test_book_not_found(client):
    assert (await client.get("/api/books/9999")).status_code == 404
    assert (await client.put("/api/books/9999", json={"title": "X"})).status_code == 404
    assert (await client.delete("/api/books/9999")).status_code == 404


@pytest.mark.asyncio
async def test_list_books_filters(client, author):
    other = (await client.post("/api/authors", json={"name": "Jorge Amado"})).json()
    await client.post("/api/books", json={"title": "Dom Casmurro", "author_id": author["id"]})
    await client.post("/api/books", json={"title": "Capitaes da Areia", "author_id": other["id"]})
    await client.post("/api/books", json={"title": "Gabriela, Cravo e Canela", "author_id": other["id"]})

    resp = await client.get("/api/books", params={"author_id": other["id"]})
    assert len(resp.json()) == 2

    resp = await client.get("/api/books", params={"q": "casmurro"})
    assert [b["title"] for b in resp.json()] == ["Dom Casmurro"]

    resp = await client.get("/api/books", params={"sort": "title"})
    assert [b["title"] for b in resp.json()] == [
        "Capitaes da Areia", "Dom Casmurro", "Gabriela, Cravo e Canela",
    ]


@pytest.mark.asyncio
async def test_book_stats(client, author):
    await client.post("/api/books", json={"title": "Dom Casmurro", "author_id": author["id"]})
    resp = await client.get("/api/books/stats")
    assert resp.status_code == 200
    assert resp.json() == {"total_books": 1, "total_authors": 1}


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_blank_isbn_is_stored_as_null(client, author):
    first = await client.post("/api/books", json={"title": "A", "author_id": author["id"], "isbn": "  "})
    assert first.status_code == 201
    assert first.json()["isbn"] is None

    second = await client.post("/api/books", json={"title": "B", "author_id": author["id"], "isbn": ""})
    assert second.status_code == 201
    assert second.json()["isbn"] is None


@pytest.mark.asyncio
async def test_update_blank_isbn_clears_it(client, author):
    await client.post("/api/books", json={"title": "A", "author_id": author["id"]})
    resp = await client.post("/api/books", json={"title": "B", "author_id": author["id"], "isbn": "333"})
    book_id = resp.json()["id"]

    resp = await client.put(f"/api/books/{book_id}", json={"isbn": ""})
    assert resp.status_code == 200
    assert resp.json()["isbn"] is None


@pytest.mark.asyncio
async def test_out_of_range_ids(client, author):
    huge = 99999999999999999999
    resp = await client.post("/api/books", json={"title": "Too Big", "author_id": huge})
    assert resp.status_code == 422

    resp = await client.post("/api/books", json={"title": "Zero", "author_id": 0})
    assert resp.status_code == 422

    resp = await client.post("/api/books", json={"title": "Valid", "author_id": author["id"]})
    book_id = resp.json()["id"]
    resp = await client.put(f"/api/books/{book_id}", json={"author_id": huge})
    assert resp.status_code == 422

    assert (await client.get(f"/api/books/{huge}")).status_code == 422
    assert (await client.delete(f"/api/books/{huge}")).status_code == 422
    assert (await client.get("/api/books", params={"author_id": huge})).status_code == 422


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client, author):
    await client.post("/api/books", json={"title": "100% Machado", "author_id": author["id"]})
    await client.post("/api/books", json={"title": "1000 Contos", "author_id": author["id"]})

    resp = await client.get("/api/books", params={"q": "100%"})
    assert [b["title"] for b in resp.json()] == ["100% Machado"]

    resp = await client.get("/api/books", params={"q": "_"})
    assert resp.json() == []
