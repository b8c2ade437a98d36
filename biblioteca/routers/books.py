import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.config import PAGE_LIMIT
from biblioteca.database import MAX_ID, get_session, like_escape
from biblioteca.models import Author, Book
from biblioteca.schemas.book import BookCreate, BookResponse, BookUpdate, LibraryStats

logger = logging.getLogger(__name__)

BookId = Annotated[int, Path(ge=1, le=MAX_ID)]

router = APIRouter(prefix="/api/books", tags=["books"])


async def _get_book_or_404(session: AsyncSession, book_id: int) -> Book:
    book = (await session.execute(select(Book).where(Book.id == book_id))).scalar_one_or_none()
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


async def _require_author(session: AsyncSession, author_id: int) -> None:
    if await session.get(Author, author_id) is None:
        raise HTTPException(status_code=422, detail=f"Author {author_id} does not exist")


async def _require_unique_isbn(session: AsyncSession, isbn: str, book_id: int | None = None) -> None:
    stmt = select(Book.id).where(Book.isbn == isbn)
    if book_id is not None:
        stmt = stmt.where(Book.id != book_id)
    if (await session.execute(stmt)).first() is not None:
        raise HTTPException(status_code=409, detail="A book with this ISBN already exists")


@router.get("/stats", response_model=LibraryStats)
async def book_stats(session: AsyncSession = Depends(get_session)):
    total_books = (await session.execute(select(func.count(Book.id)))).scalar()
    total_authors = (await session.execute(select(func.count(Author.id)))).scalar()
    return LibraryStats(total_books=total_books, total_authors=total_authors)


@router.get("", response_model=list[BookResponse])
async def list_books(
    author_id: int | None = Query(None, ge=1, le=MAX_ID),
    q: str | None = Query(None, description="Case-insensitive partial match on title"),
    sort: Literal["id", "title", "created_at"] = "id",
    order: Literal["asc", "desc"] = "asc",
    limit: int = Query(PAGE_LIMIT, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    stmt = select(Book)
    if author_id is not None:
        stmt = stmt.where(Book.author_id == author_id)
    if q:
        stmt = stmt.where(Book.title.ilike(f"%{like_escape(q)}%", escape="\\"))
    col = getattr(Book, sort)
    stmt = stmt.order_by(col.desc() if order == "desc" else col.asc(), Book.id)
    stmt = stmt.offset(offset).limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: BookId, session: AsyncSession = Depends(get_session)):
    return await _get_book_or_404(session, book_id)


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(data: BookCreate, session: AsyncSession = Depends(get_session)):
    await _require_author(session, data.author_id)
    if data.isbn is not None:
        await _require_unique_isbn(session, data.isbn)

    book = Book(**data.model_dump())
    session.add(book)
    await session.commit()
    await session.refresh(book)
    logger.info("Created book %d (%s) for author %d", book.id, book.title, book.author_id)
    return book


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: BookId, data: BookUpdate, session: AsyncSession = Depends(get_session)
):
    book = await _get_book_or_404(session, book_id)
    changes = data.model_dump(exclude_unset=True)
    if "author_id" in changes:
        await _require_author(session, changes["author_id"])
    if changes.get("isbn") is not None:
        await _require_unique_isbn(session, changes["isbn"], book_id=book_id)
    for key, value in changes.items():
        setattr(book, key, value)
    await session.commit()
    await session.refresh(book)
    return book


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: BookId, session: AsyncSession = Depends(get_session)):
    book = await _get_book_or_404(session, book_id)
    await session.delete(book)
    await session.commit()
    logger.info("Deleted book %d", book_id)
