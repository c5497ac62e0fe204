"""Request/response schemas for blog articles, article images and tags."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from kaisla.schemas.base import CamelModel


class BlogTagCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class BlogTagUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)


class BlogTagResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    created_at: datetime | None = None


class BlogArticleCreate(CamelModel):
    """
    Fields for a new article, sent as multipart form fields alongside images.

    slug is derived from the title when omitted; tagIds is a JSON list of tag UUIDs.
    """

    title: str = Field(..., min_length=1, max_length=255)
    subtitle: str | None = Field(default=None, max_length=255)
    content: str = Field(..., min_length=1)
    slug: str | None = Field(default=None, max_length=255)
    published_at: datetime | None = None
    is_published: bool = False
    sort_order: int = Field(default=0, ge=0)
    tag_ids: list[UUID] | None = None


class BlogArticleUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    subtitle: str | None = Field(default=None, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    published_at: datetime | None = None
    is_published: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)
    tag_ids: list[UUID] | None = None


class BlogArticleImageUpdate(CamelModel):
    alt_text: str | None = Field(default=None, max_length=255)
    is_cover: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)


class BlogArticleImageResponse(CamelModel):
    id: UUID
    url: str
    alt_text: str | None = None
    is_cover: bool
    sort_order: int
    article_id: UUID
    created_at: datetime | None = None


class BlogArticleResponse(CamelModel):
    id: UUID
    title: str
    subtitle: str | None = None
    content: str
    slug: str
    published_at: datetime | None = None
    is_published: bool
    sort_order: int
    images: list[BlogArticleImageResponse] = Field(default_factory=list)
    tags: list[BlogTagResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
