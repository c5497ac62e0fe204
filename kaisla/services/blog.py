"""Blog articles (sanitized HTML, slugs, tags, images) and blog tags."""

import logging
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from kaisla.core.errors import ConflictError, NotFoundError
from kaisla.models import BlogArticle, BlogArticleImage, BlogTag
from kaisla.schemas.blog import (
    BlogArticleCreate,
    BlogArticleImageUpdate,
    BlogArticleUpdate,
    BlogTagCreate,
    BlogTagUpdate,
)
from kaisla.services import uploads
from kaisla.services.persistence import commit_or_raise
from kaisla.services.sanitize import generate_slug, sanitize_article_html
from kaisla.services.uploads import SUBDIR_BLOG, StoredFile

logger = logging.getLogger(__name__)

MAX_IMAGES_PER_REQUEST = 10

# Columns an update may explicitly clear with null.
NULLABLE_FIELDS = frozenset({"subtitle", "published_at"})


def _resolve_tags(db: Session, tag_ids: list[UUID] | None) -> list[BlogTag]:
    if not tag_ids:
        return []
    return db.query(BlogTag).filter(BlogTag.id.in_(tag_ids)).all()


# Articles


def create_with_images(
    db: Session,
    body: BlogArticleCreate,
    stored: list[StoredFile],
    base_url: str,
) -> BlogArticle:
    """
    Create an article with optional images; the first image becomes the cover.

    Raises ConflictError when the slug (given or derived from the title) is
    taken. Stored files are deleted on any failure.
    """
    logger.info("Creating blog article with %s image(s)", len(stored))
    slug = body.slug or generate_slug(body.title)
    existing = db.query(BlogArticle).filter(BlogArticle.slug == slug).first()
    if existing is not None:
        uploads.cleanup_stored(stored)
        raise ConflictError(f'Article with slug "{slug}" already exists')

    values = body.model_dump(exclude={"tag_ids", "slug", "content"})
    article = BlogArticle(
        **values,
        slug=slug,
        content=sanitize_article_html(body.content),
    )
    article.tags = _resolve_tags(db, body.tag_ids)
    for index, s in enumerate(stored):
        article.images.append(
            BlogArticleImage(
                url=uploads.build_file_url(s.filename, base_url, SUBDIR_BLOG),
                is_cover=index == 0,
                sort_order=index,
            )
        )
    db.add(article)
    commit_or_raise(
        db,
        "Failed to create blog article",
        conflict_message=f'Article with slug "{slug}" already exists',
        on_failure=lambda: uploads.cleanup_stored(stored),
    )
    db.refresh(article)
    logger.info("Blog article created successfully: %s", article.id)
    return article


def find_published(db: Session) -> list[BlogArticle]:
    return (
        db.query(BlogArticle)
        .filter(BlogArticle.is_published.is_(True))
        .order_by(BlogArticle.published_at.desc())
        .all()
    )


def find_all(db: Session) -> list[BlogArticle]:
    return (
        db.query(BlogArticle)
        .order_by(BlogArticle.sort_order.asc(), BlogArticle.created_at.desc())
        .all()
    )


def find_by_id(db: Session, article_id: UUID) -> BlogArticle:
    article = db.query(BlogArticle).filter(BlogArticle.id == article_id).first()
    if article is None:
        raise NotFoundError(f'Blog article with ID "{article_id}" not found')
    return article


def update(db: Session, article_id: UUID, body: BlogArticleUpdate) -> BlogArticle:
    """Partial update; content is re-sanitized and tagIds replaces the tag set."""
    article = find_by_id(db, article_id)
    values = body.model_dump(exclude_unset=True, exclude={"tag_ids"})
    if values.get("content"):
        values["content"] = sanitize_article_html(values["content"])
    if "slug" in values and values["slug"] != article.slug:
        taken = (
            db.query(BlogArticle)
            .filter(BlogArticle.slug == values["slug"], BlogArticle.id != article.id)
            .first()
        )
        if taken is not None:
            raise ConflictError(f'Article with slug "{values["slug"]}" already exists')
    for key, value in values.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(article, key, value)
    if body.tag_ids is not None:
        article.tags = _resolve_tags(db, body.tag_ids)
    commit_or_raise(db, "Failed to update blog article")
    db.refresh(article)
    logger.info("Blog article updated successfully: %s", article_id)
    return article


def remove(db: Session, article_id: UUID) -> None:
    article = find_by_id(db, article_id)
    urls = [image.url for image in article.images]
    db.delete(article)
    commit_or_raise(db, "Failed to delete blog article")
    for url in urls:
        uploads.discard_file_for_url(url, SUBDIR_BLOG)
    logger.info("Blog article deleted successfully: %s", article_id)


# Article images


def add_images(
    db: Session,
    article_id: UUID,
    stored: list[StoredFile],
    base_url: str,
) -> list[BlogArticleImage]:
    """Append images (never cover) after the article's highest sort_order."""
    try:
        article = find_by_id(db, article_id)
    except NotFoundError:
        uploads.cleanup_stored(stored)
        raise
    start = max((img.sort_order for img in article.images), default=-1) + 1
    images = [
        BlogArticleImage(
            url=uploads.build_file_url(s.filename, base_url, SUBDIR_BLOG),
            is_cover=False,
            sort_order=start + index,
            article_id=article.id,
        )
        for index, s in enumerate(stored)
    ]
    db.add_all(images)
    commit_or_raise(
        db,
        "Failed to add blog article images",
        on_failure=lambda: uploads.cleanup_stored(stored),
    )
    for image in images:
        db.refresh(image)
    return images


def _find_image(db: Session, article_id: UUID, image_id: UUID) -> BlogArticleImage:
    image = (
        db.query(BlogArticleImage)
        .filter(BlogArticleImage.id == image_id, BlogArticleImage.article_id == article_id)
        .first()
    )
    if image is None:
        raise NotFoundError(f'Blog article image with ID "{image_id}" not found')
    return image


def update_image(
    db: Session,
    article_id: UUID,
    image_id: UUID,
    body: BlogArticleImageUpdate,
) -> BlogArticleImage:
    image = _find_image(db, article_id, image_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is None and key != "alt_text":
            continue
        setattr(image, key, value)
    commit_or_raise(db, "Failed to update blog article image")
    db.refresh(image)
    return image


def remove_image(db: Session, article_id: UUID, image_id: UUID) -> None:
    image = _find_image(db, article_id, image_id)
    db.delete(image)
    commit_or_raise(db, "Failed to delete blog article image")
    uploads.discard_file_for_url(image.url, SUBDIR_BLOG)
    logger.info("Blog article image deleted: %s", image_id)


# Tags


def find_all_tags(db: Session) -> list[BlogTag]:
    return db.query(BlogTag).order_by(BlogTag.name.asc()).all()


def _find_tag(db: Session, tag_id: UUID) -> BlogTag:
    tag = db.query(BlogTag).filter(BlogTag.id == tag_id).first()
    if tag is None:
        raise NotFoundError(f'Blog tag with ID "{tag_id}" not found')
    return tag


def create_tag(db: Session, body: BlogTagCreate) -> BlogTag:
    slug = generate_slug(body.name)
    existing = (
        db.query(BlogTag)
        .filter(or_(BlogTag.name == body.name, BlogTag.slug == slug))
        .first()
    )
    if existing is not None:
        raise ConflictError(f'Tag with name "{body.name}" already exists')
    tag = BlogTag(name=body.name, slug=slug)
    db.add(tag)
    commit_or_raise(
        db,
        "Failed to create blog tag",
        conflict_message=f'Tag with name "{body.name}" already exists',
    )
    db.refresh(tag)
    logger.info("Blog tag created successfully: %s", tag.id)
    return tag


def update_tag(db: Session, tag_id: UUID, body: BlogTagUpdate) -> BlogTag:
    tag = _find_tag(db, tag_id)
    if body.name:
        tag.name = body.name
        tag.slug = generate_slug(body.name)
    commit_or_raise(
        db,
        "Failed to update blog tag",
        conflict_message=f'Tag with name "{body.name}" already exists',
    )
    db.refresh(tag)
    logger.info("Blog tag updated successfully: %s", tag_id)
    return tag


def remove_tag(db: Session, tag_id: UUID) -> None:
    tag = _find_tag(db, tag_id)
    db.delete(tag)
    commit_or_raise(db, "Failed to delete blog tag")
    logger.info("Blog tag deleted successfully: %s", tag_id)
