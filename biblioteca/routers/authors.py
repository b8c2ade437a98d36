import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.config import PAGE_LIMIT
from biblioteca.database import MAX_ID, get_session, like_escape
from biblioteca.models import Author, Book
from biblioteca.schemas.author import AuthorCreate, AuthorDetail, AuthorResponse, AuthorUpdate
from biblioteca.schemas.book import BookResponse

logger = logging.getLogger(__name__)

AuthorId = Annotated[int, Path(ge=1, le=MAX_ID)]

router = APIRouter(prefix="/api/authors", tags=["authors"])


async def _get_author_or_404(session: AsyncSession, author_id: int) -> Author:
    author = (await session.execute(select(Author).where(Author.id == author_id))).scalar_one_or_none()
    if author is None:
        raise HTTPException(status_code=404, detail="Author not found")
    return author


async def _count_books(session: AsyncSession, author_id: int) -> int:
    stmt = select(func.count(Book.id)).where(Book.author_id == author_id)
    return (await session.execute(stmt)).scalar_one()


@router.get("", response_model=list[AuthorResponse])
async def list_authors(
    q: str | None = Query(None, description="Case-insensitive partial match on name"),
    sort: Literal["id", "name", "created_at"] = "id",
    order: Literal["asc", "desc"] = "asc",
    limit: int = Query(PAGE_LIMIT, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    stmt = select(Author)
    if q:
        stmt = stmt.where(Author.name.ilike(f"%{like_escape(q)}%", escape="\\"))
    col = getattr(Author, sort)
    stmt = stmt.order_by(col.desc() if order == "desc" else col.asc(), Author.id)
    stmt = stmt.offset(offset).limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


@router.post("", response_model=AuthorResponse, status_code=201)
async def create_author(data: AuthorCreate, session: AsyncSession = Depends(get_session)):
    author = Author(**data.model_dump())
    session.add(author)
    await session.commit()
    await session.refresh(author)
    logger.info("Created author %d (%s)", author.id, author.name)
    return author


@router.get("/{author_id}", response_model=AuthorDetail)
async def get_author(author_id: AuthorId, session: AsyncSession = Depends(get_session)):
    author = await _get_author_or_404(session, author_id)
    author_dict = AuthorResponse.model_validate(author).model_dump()
    author_dict["book_count"] = await _count_books(session, author_id)
    return AuthorDetail(**author_dict)


@router.put("/{author_id}", response_model=AuthorResponse)
async def update_author(
    author_id: AuthorId, data: AuthorUpdate, session: AsyncSession = Depends(get_session)
):
    author = await _get_author_or_404(session, author_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(author, key, value)
    await session.commit()
    await session.refresh(author)
    return author


@router.delete("/{author_id}", status_code=204)
async def delete_author(
    author_id: AuthorId,
    cascade: bool = Query(False, description="Also delete every book by this author"),
    session: AsyncSession = Depends(get_session),
):
    author = await _get_author_or_404(session, author_id)
    book_count = await _count_books(session, author_id)
    if book_count and not cascade:
        raise HTTPException(
            status_code=409,
            detail=f"Author has {book_count} book(s); delete them first or pass cascade=true",
        )
    await session.delete(author)
    await session.commit()
    logger.info("Deleted author %d with %d book(s)", author_id, book_count)


@router.get("/{author_id}/books", response_model=list[BookResponse])
async def list_author_books(author_id: AuthorId, session: AsyncSession = Depends(get_session)):
    await _get_author_or_404(session, author_id)
    result = await session.execute(
        select(Book).where(Book.author_id == author_id).order_by(Book.id)
    )
    return result.scalars().all()
