from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from biblioteca.database import MAX_ID


class BookCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=500)
    author_id: int = Field(..., ge=1, le=MAX_ID)
    isbn: str | None = Field(None, max_length=17)
    publisher: str | None = Field(None, max_length=300)
    year_published: int | None = None
    page_count: int | None = Field(None, ge=1)
    description: str | None = None

    @field_validator("isbn")
    @classmethod
    def blank_isbn_is_none(cls, value: str | None) -> str | None:
        return value or None


class BookUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=500)
    author_id: int | None = Field(None, ge=1, le=MAX_ID)
    isbn: str | None = Field(None, max_length=17)
    publisher: str | None = Field(None, max_length=300)
    year_published: int | None = None
    page_count: int | None = Field(None, ge=1)
    description: str | None = None

    @field_validator("isbn")
    @classmethod
    def blank_isbn_is_none(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("title", "author_id")
    @classmethod
    def required_not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author_id: int
    isbn: str | None
    publisher: str | None
    year_published: int | None
    page_count: int | None
    description: str | None
    created_at: datetime
    updated_at: datetime


class LibraryStats(BaseModel):
    total_books: int
    total_authors: int
