from fastmcp import FastMCP

from biblioteca.config import PAGE_LIMIT
from biblioteca.mcp.client import BibliotecaClient
from biblioteca.mcp.tools import authors, books
from biblioteca.mcp.tools.checks import check_api as _check_api


def create_mcp_server(client: BibliotecaClient) -> FastMCP:
    mcp = FastMCP(
        name="biblioteca",
        instructions=(
            "Biblioteca is a library catalogue of authors and their books. Use these "
            "tools to list, add, update and remove authors and books, list the books "
            "of an author, and run an end-to-end check of the REST API. Authors and "
            "books are identified by their numeric ids."
        ),
    )

    @mcp.tool()
    async def list_authors(query: str | None = None, limit: int = PAGE_LIMIT, offset: int = 0) -> list[dict]:
        """List authors, optionally filtered by a partial name match."""
        return await authors.list_authors(client, query=query, limit=limit, offset=offset)

    @mcp.tool()
    async def add_author(
        name: str,
        bio: str | None = None,
        nationality: str | None = None,
        birth_year: int | None = None,
    ) -> dict:
        """Add an author to the catalogue."""
        return await authors.add_author(
            client, name=name, bio=bio, nationality=nationality, birth_year=birth_year
        )

    @mcp.tool()
    async def get_author(author_id: int) -> dict:
        """Get an author with the number of books they have."""
        return await authors.get_author(client, author_id)

    @mcp.tool()
    async def update_author(author_id: int, changes: dict) -> dict:
        """Update an author. Only the fields present in changes are modified."""
        return await authors.update_author(client, author_id, changes)

    @mcp.tool()
    async def remove_author(author_id: int, cascade: bool = False) -> dict:
        """Delete an author. Authors with books are refused unless cascade is
        true, in which case their books are deleted too."""
        return await authors.remove_author(client, author_id, cascade=cascade)

    @mcp.tool()
    async def books_by_author(author_id: int) -> dict | list:
        """List every book written by an author."""
        return await authors.books_by_author(client, author_id)

    @mcp.tool()
    async def list_books(
        query: str | None = None,
        author_id: int | None = None,
        limit: int = PAGE_LIMIT,
        offset: int = 0,
    ) -> list[dict]:
        """List books, optionally filtered by partial title or by author id."""
        return await books.list_books(client, query=query, author_id=author_id, limit=limit, offset=offset)

    @mcp.tool()
    async def add_book(
        title: str,
        author_id: int | None = None,
        author_name: str | None = None,
        isbn: str | None = None,
        publisher: str | None = None,
        year_published: int | None = None,
        page_count: int | None = None,
        description: str | None = None,
    ) -> dict:
        """Add a book. Give either author_id or author_name; an unknown
        author_name creates the author first."""
        return await books.add_book(
            client, title=title, author_id=author_id, author_name=author_name,
            isbn=isbn, publisher=publisher, year_published=year_published,
            page_count=page_count, description=description,
        )

    @mcp.tool()
    async def get_book(book_id: int) -> dict:
        """Get a single book."""
        return await books.get_book(client, book_id)

    @mcp.tool()
    async def update_book(book_id: int, changes: dict) -> dict:
        """Update a book. Only the fields present in changes are modified."""
        return await books.update_book(client, book_id, changes)

    @mcp.tool()
    async def remove_book(book_id: int) -> dict:
        """Delete a book."""
        return await books.remove_book(client, book_id)

    @mcp.tool()
    async def check_api() -> dict:
        """Exercise every REST endpoint once with throwaway data and report the
        expected and actual status code of each step."""
        return await _check_api(client)

    return mcp
