from __future__ import annotations
import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator

from newsroom.config import (
    MAX_EMAIL,
    MAX_EXCERPT,
    MAX_NAME,
    MAX_TITLE,
    PAGE_LIMIT_DEFAULT,
    PAGE_LIMIT_MAX,
)

# local@domain.tld; no whitespace, quotes or markup characters
_EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Za-z0-9_'+\-.]*[A-Za-z0-9_+\-]@"
    r"([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)


def _check_email(v: str) -> str:
    if not _EMAIL_RE.match(v):
        raise ValueError("Invalid email address")
    return v


def _reject_null(v: Any) -> Any:
    if v is None:
        raise ValueError("Field may not be null")
    return v


class _Payload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


# --- authors ---
class AuthorCreate(_Payload):
    name: str = Field(min_length=1, max_length=MAX_NAME)
    email: str = Field(min_length=1, max_length=MAX_EMAIL)

    check_email = field_validator("email")(_check_email)


class AuthorUpdate(_Payload):
    """Every field optional; presence is tracked by model_fields_set."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_NAME)
    email: Optional[str] = Field(default=None, min_length=1, max_length=MAX_EMAIL)

    check_not_null = field_validator("name", "email", mode="before")(_reject_null)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_email(v)


# --- news ---
class NewsCreate(_Payload):
    title: str = Field(min_length=1, max_length=MAX_TITLE)
    excerpt: str = Field(min_length=1, max_length=MAX_EXCERPT)
    content: str = Field(min_length=1)
    authorId: StrictInt = Field(gt=0)
    published: StrictBool


class NewsUpdate(_Payload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE)
    excerpt: Optional[str] = Field(default=None, min_length=1, max_length=MAX_EXCERPT)
    content: Optional[str] = Field(default=None, min_length=1)
    authorId: Optional[StrictInt] = Field(default=None, gt=0)
    published: Optional[StrictBool] = None

    check_not_null = field_validator(
        "title", "excerpt", "content", "authorId", "published", mode="before"
    )(_reject_null)


# --- paging ---
class PagingQuery(BaseModel):
    limit: int = Field(default=PAGE_LIMIT_DEFAULT, ge=1, le=PAGE_LIMIT_MAX)
    offset: int = Field(default=0, ge=0)


class Paging(BaseModel):
    limit: int
    offset: int
    total: int


class PagedResponse(BaseModel):
    data: List[Any]
    paging: Paging
