"""Generic CMS blocks addressed by (page, section)."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from kaisla.core.errors import ConflictError, NotFoundError
from kaisla.models import PageContent
from kaisla.schemas.content import PageContentCreate, PageContentUpdate
from kaisla.services import uploads
from kaisla.services.persistence import commit_or_raise
from kaisla.services.sanitize import sanitize_page_html
from kaisla.services.uploads import SUBDIR_PAGE_CONTENT, StoredFile

logger = logging.getLogger(__name__)

# Columns an update may explicitly clear with null.
NULLABLE_FIELDS = frozenset({"title", "content", "image_alt", "page_metadata"})


def _duplicate_message(page: str, section: str) -> str:
    return f'Page content "{page}/{section}" already exists'


def _ensure_unique(db: Session, page: str, section: str, exclude_id: UUID | None = None) -> None:
    query = db.query(PageContent).filter(PageContent.page == page, PageContent.section == section)
    if exclude_id is not None:
        query = query.filter(PageContent.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(_duplicate_message(page, section))


def _build(body: PageContentCreate, image: str | None = None) -> PageContent:
    values = body.model_dump()
    values["content"] = sanitize_page_html(values.get("content"))
    return PageContent(**values, image=image)


def create(db: Session, body: PageContentCreate) -> PageContent:
    _ensure_unique(db, body.page, body.section)
    block = _build(body)
    db.add(block)
    commit_or_raise(
        db,
        "Failed to create page content",
        conflict_message=_duplicate_message(body.page, body.section),
    )
    db.refresh(block)
    logger.info("Page content created successfully: %s", block.id)
    return block


def create_with_image(
    db: Session,
    body: PageContentCreate,
    stored: StoredFile,
    base_url: str,
) -> PageContent:
    try:
        _ensure_unique(db, body.page, body.section)
    except ConflictError:
        uploads.cleanup_stored([stored])
        raise
    block = _build(
        body,
        image=uploads.build_file_url(stored.filename, base_url, SUBDIR_PAGE_CONTENT),
    )
    db.add(block)
    commit_or_raise(
        db,
        "Failed to create page content",
        conflict_message=_duplicate_message(body.page, body.section),
        on_failure=lambda: uploads.cleanup_stored([stored]),
    )
    db.refresh(block)
    logger.info("Page content created successfully: %s", block.id)
    return block


def find_published_by_page(db: Session, page: str) -> list[PageContent]:
    return (
        db.query(PageContent)
        .filter(PageContent.page == page, PageContent.is_published.is_(True))
        .order_by(PageContent.sort_order.asc())
        .all()
    )


def find_by_page_and_section(db: Session, page: str, section: str) -> PageContent:
    block = (
        db.query(PageContent)
        .filter(
            PageContent.page == page,
            PageContent.section == section,
            PageContent.is_published.is_(True),
        )
        .first()
    )
    if block is None:
        raise NotFoundError(f'Page content "{page}/{section}" not found')
    return block


def find_all(db: Session) -> list[PageContent]:
    return (
        db.query(PageContent)
        .order_by(PageContent.page.asc(), PageContent.sort_order.asc())
        .all()
    )


def find_by_id(db: Session, content_id: UUID) -> PageContent:
    block = db.query(PageContent).filter(PageContent.id == content_id).first()
    if block is None:
        raise NotFoundError(f'Page content with ID "{content_id}" not found')
    return block


def update(db: Session, content_id: UUID, body: PageContentUpdate) -> PageContent:
    block = find_by_id(db, content_id)
    values = body.model_dump(exclude_unset=True)
    page = values.get("page") or block.page
    section = values.get("section") or block.section
    if page != block.page or section != block.section:
        _ensure_unique(db, page, section, exclude_id=block.id)
    if "content" in values:
        values["content"] = sanitize_page_html(values["content"])
    for key, value in values.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(block, key, value)
    commit_or_raise(
        db,
        "Failed to update page content",
        conflict_message=_duplicate_message(page, section),
    )
    db.refresh(block)
    logger.info("Page content updated successfully: %s", content_id)
    return block


def update_image(
    db: Session,
    content_id: UUID,
    stored: StoredFile,
    base_url: str,
) -> PageContent:
    try:
        block = find_by_id(db, content_id)
    except NotFoundError:
        uploads.cleanup_stored([stored])
        raise
    old_url = block.image
    block.image = uploads.build_file_url(stored.filename, base_url, SUBDIR_PAGE_CONTENT)
    commit_or_raise(
        db,
        "Failed to update page content image",
        on_failure=lambda: uploads.cleanup_stored([stored]),
    )
    db.refresh(block)
    if old_url:
        uploads.discard_file_for_url(old_url, SUBDIR_PAGE_CONTENT)
    logger.info("Page content image replaced: %s", content_id)
    return block


def remove(db: Session, content_id: UUID) -> None:
    block = find_by_id(db, content_id)
    db.delete(block)
    commit_or_raise(db, "Failed to delete page content")
    uploads.discard_file_for_url(block.image, SUBDIR_PAGE_CONTENT)
    logger.info("Page content deleted successfully: %s", content_id)
