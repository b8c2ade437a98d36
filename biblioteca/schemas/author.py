from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuthorCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=300)
    bio: str | None = None
    nationality: str | None = Field(None, max_length=100)
    birth_year: int | None = None


class AuthorUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=300)
    bio: str | None = None
    nationality: str | None = Field(None, max_length=100)
    birth_year: int | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        # Only runs when the field is sent, so an omitted name stays unset
        if value is None:
            raise ValueError("name cannot be null")
        return value


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    bio: str | None
    nationality: str | None
    birth_year: int | None
    created_at: datetime
    updated_at: datetime


class AuthorDetail(AuthorResponse):
    book_count: int = 0
