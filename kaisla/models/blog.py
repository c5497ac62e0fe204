"""ORM models for blog articles, their images and tags."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from kaisla.models.base import Base, created_at_column, updated_at_column, uuid_pk

blog_articles_tags = Table(
    "blog_articles_tags",
    Base.metadata,
    Column(
        "article_id",
        UUID(as_uuid=True),
        ForeignKey("blog_articles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        UUID(as_uuid=True),
        ForeignKey("blog_tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class BlogArticle(Base):
    """Blog article with sanitized HTML content, images and tags."""

    __tablename__ = "blog_articles"

    id = uuid_pk()
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    published_at = Column(DateTime(timezone=True), nullable=True, index=True)
    is_published = Column(Boolean, nullable=False, default=False, index=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = created_at_column()
    updated_at = updated_at_column()

    images = relationship(
        "BlogArticleImage",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="BlogArticleImage.sort_order",
        lazy="selectin",
    )
    tags = relationship(
        "BlogTag",
        secondary=blog_articles_tags,
        back_populates="articles",
        lazy="selectin",
    )


class BlogArticleImage(Base):
    """Uploaded image of a blog article; is_cover marks the article's cover."""

    __tablename__ = "blog_article_images"

    id = uuid_pk()
    url = Column(String(500), nullable=False)
    alt_text = Column(String(255), nullable=True)
    is_cover = Column(Boolean, nullable=False, default=False, index=True)
    sort_order = Column(Integer, nullable=False, default=0)
    article_id = Column(
        UUID(as_uuid=True),
        ForeignKey("blog_articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = created_at_column()

    article = relationship("BlogArticle", back_populates="images")


class BlogTag(Base):
    __tablename__ = "blog_tags"

    id = uuid_pk()
    name = Column(String(100), nullable=False, unique=True, index=True)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    created_at = created_at_column()

    articles = relationship(
        "BlogArticle",
        secondary=blog_articles_tags,
        back_populates="tags",
    )
