from biblioteca.config import PAGE_LIMIT
from biblioteca.mcp.client import BibliotecaClient, is_error


async def list_books(
    client: BibliotecaClient,
    query: str | None = None,
    author_id: int | None = None,
    limit: int = PAGE_LIMIT,
    offset: int = 0,
) -> list[dict]:
    params = {"limit": limit, "offset": offset}
    if query:
        params["q"] = query
    if author_id is not None:
        params["author_id"] = author_id
    result = await client.get("/api/books", params=params)
    if is_error(result):
        return []
    return result


async def add_book(
    client: BibliotecaClient,
    title: str,
    author_id: int | None = None,
    author_name: str | None = None,
    **fields,
) -> dict:
    """Create a book. When only author_name is given, the author is looked up
    by exact name and created if missing."""
    if author_id is None:
        if not author_name:
            return {"error": True, "status": 422, "detail": "author_id or author_name is required"}
        author_id = await _find_or_create_author(client, author_name)
        if isinstance(author_id, dict):
            return author_id

    payload = {"title": title, "author_id": author_id}
    payload.update({k: v for k, v in fields.items() if v is not None})
    return await client.post("/api/books", json=payload)


async def _find_or_create_author(client: BibliotecaClient, name: str) -> int | dict:
    matches = await client.get("/api/authors", params={"q": name, "limit": 200})
    if is_error(matches):
        return matches
    for author in matches:
        if author["name"].lower() == name.strip().lower():
            return author["id"]
    created = await client.post("/api/authors", json={"name": name})
    if is_error(created):
        return created
    return created["id"]


async def get_book(client: BibliotecaClient, book_id: int) -> dict:
    return await client.get(f"/api/books/{book_id}")


async def update_book(client: BibliotecaClient, book_id: int, changes: dict) -> dict:
    return await client.put(f"/api/books/{book_id}", json=changes)


async def remove_book(client: BibliotecaClient, book_id: int) -> dict:
    return await client.delete(f"/api/books/{book_id}")
