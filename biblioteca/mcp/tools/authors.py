from biblioteca.config import PAGE_LIMIT
from biblioteca.mcp.client import BibliotecaClient, is_error


async def list_authors(
    client: BibliotecaClient,
    query: str | None = None,
    limit: int = PAGE_LIMIT,
    offset: int = 0,
) -> list[dict]:
    params = {"limit": limit, "offset": offset}
    if query:
        params["q"] = query
    result = await client.get("/api/authors", params=params)
    if is_error(result):
        return []
    return result


async def add_author(
    client: BibliotecaClient,
    name: str,
    bio: str | None = None,
    nationality: str | None = None,
    birth_year: int | None = None,
) -> dict:
    payload = {"name": name, "bio": bio, "nationality": nationality, "birth_year": birth_year}
    return await client.post("/api/authors", json={k: v for k, v in payload.items() if v is not None})


async def get_author(client: BibliotecaClient, author_id: int) -> dict:
    return await client.get(f"/api/authors/{author_id}")


async def update_author(client: BibliotecaClient, author_id: int, changes: dict) -> dict:
    return await client.put(f"/api/authors/{author_id}", json=changes)


async def remove_author(client: BibliotecaClient, author_id: int, cascade: bool = False) -> dict:
    params = {"cascade": "true"} if cascade else None
    return await client.delete(f"/api/authors/{author_id}", params=params)


async def books_by_author(client: BibliotecaClient, author_id: int) -> dict | list:
    return await client.get(f"/api/authors/{author_id}/books")
