"""Request/response schemas for about sections, contact links and page content."""

from datetime import datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import AliasChoices, Field

from kaisla.schemas.base import CamelModel

ContactPlatform = Literal[
    "email",
    "facebook",
    "instagram",
    "tiktok",
    "linkedin",
    "pinterest",
    "youtube",
    "twitter",
    "website",
    "other",
]

CONTACT_URL_PATTERN = r"^(https?://|mailto:).+"
CONTACT_LABEL_PATTERN = r"^[a-zA-Z0-9@_.\-\s]*$"

Paragraph = Annotated[str, Field(min_length=1)]


# About sections


class AboutSectionCreate(CamelModel):
    """Form fields for a new about section; the image arrives as a file part."""

    title: str = Field(..., min_length=1, max_length=255)
    paragraphs: list[Paragraph] = Field(..., min_length=1)
    image_alt: str = Field(..., min_length=1, max_length=255)
    sort_order: int = Field(default=0, ge=0)
    is_published: bool = False


class AboutSectionUpdate(CamelModel):
    """Partial update. The image is replaced through PATCH /{id}/image only."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    paragraphs: list[Paragraph] | None = Field(default=None, min_length=1)
    image_alt: str | None = Field(default=None, min_length=1, max_length=255)
    sort_order: int | None = Field(default=None, ge=0)
    is_published: bool | None = None


class AboutSectionResponse(CamelModel):
    id: UUID
    title: str
    paragraphs: list[str]
    image: str
    image_alt: str
    sort_order: int
    is_published: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Contact links


class ContactLinkCreate(CamelModel):
    platform: ContactPlatform
    url: str = Field(..., min_length=1, max_length=500, pattern=CONTACT_URL_PATTERN)
    label: str | None = Field(default=None, max_length=255, pattern=CONTACT_LABEL_PATTERN)
    sort_order: int = Field(default=0, ge=0)
    is_active: bool = True


class ContactLinkUpdate(CamelModel):
    platform: ContactPlatform | None = None
    url: str | None = Field(default=None, min_length=1, max_length=500, pattern=CONTACT_URL_PATTERN)
    label: str | None = Field(default=None, max_length=255, pattern=CONTACT_LABEL_PATTERN)
    sort_order: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class ContactLinkResponse(CamelModel):
    id: UUID
    platform: str
    url: str
    label: str | None = None
    sort_order: int
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Page content


class PageContentCreate(CamelModel):
    """A CMS block for one (page, section) pair; content is sanitized HTML."""

    page: str = Field(..., min_length=1, max_length=100)
    section: str = Field(..., min_length=1, max_length=100)
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    image_alt: str | None = Field(default=None, max_length=255)
    page_metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("metadata", "page_metadata"),
    )
    is_published: bool = True
    sort_order: int = Field(default=0, ge=0)


class PageContentUpdate(CamelModel):
    page: str | None = Field(default=None, min_length=1, max_length=100)
    section: str | None = Field(default=None, min_length=1, max_length=100)
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    image_alt: str | None = Field(default=None, max_length=255)
    page_metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("metadata", "page_metadata"),
    )
    is_published: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)


class PageContentResponse(CamelModel):
    id: UUID
    page: str
    section: str
    title: str | None = None
    content: str | None = None
    image: str | None = None
    image_alt: str | None = None
    # Read from the ORM attribute, exposed as "metadata" on the wire.
    page_metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias="page_metadata",
        serialization_alias="metadata",
    )
    is_published: bool
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
