"""ORM models for storefront content: about sections, contact links, page content."""

from sqlalchemy import Boolean, Column, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB

from kaisla.models.base import Base, created_at_column, updated_at_column, uuid_pk

CONTACT_PLATFORMS = (
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
)


class AboutSection(Base):
    """Section of the About page: title, paragraphs and one image."""

    __tablename__ = "about_sections"

    id = uuid_pk()
    title = Column(String(255), nullable=False)
    paragraphs = Column(JSONB, nullable=False)
    image = Column(String(500), nullable=False)
    image_alt = Column(String(255), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    is_published = Column(Boolean, nullable=False, default=False, index=True)
    created_at = created_at_column()
    updated_at = updated_at_column()


class ContactLink(Base):
    """Contact method or social media profile of the creator."""

    __tablename__ = "contact_links"
    __table_args__ = (
        UniqueConstraint("platform", "url", name="uq_contact_links_platform_url"),
        Index("ix_contact_links_is_active_sort_order", "is_active", "sort_order"),
    )

    id = uuid_pk()
    platform = Column(String(32), nullable=False)
    url = Column(String(500), nullable=False)
    label = Column(String(255), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = created_at_column()
    updated_at = updated_at_column()


class PageContent(Base):
    """
    Generic CMS block for a (page, section) pair.

    The JSON column is named "metadata" in the database; the attribute is
    page_metadata because declarative models reserve `metadata`.
    """

    __tablename__ = "page_content"
    __table_args__ = (
        UniqueConstraint("page", "section", name="uq_page_content_page_section"),
    )

    id = uuid_pk()
    page = Column(String(100), nullable=False, index=True)
    section = Column(String(100), nullable=False)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    image_alt = Column(String(255), nullable=True)
    page_metadata = Column("metadata", JSONB, nullable=True)
    is_published = Column(Boolean, nullable=False, default=True, index=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
