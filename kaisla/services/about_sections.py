"""About-page sections, each carrying exactly one uploaded image."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from kaisla.core.errors import NotFoundError
from kaisla.models import AboutSection
from kaisla.schemas.content import AboutSectionCreate, AboutSectionUpdate
from kaisla.services import uploads
from kaisla.services.persistence import commit_or_raise
from kaisla.services.uploads import SUBDIR_ABOUT_SECTIONS, StoredFile

logger = logging.getLogger(__name__)


def _not_found(section_id: UUID) -> NotFoundError:
    return NotFoundError(f'About section with ID "{section_id}" not found')


def create_with_image(
    db: Session,
    body: AboutSectionCreate,
    stored: StoredFile,
    base_url: str,
) -> AboutSection:
    section = AboutSection(
        **body.model_dump(),
        image=uploads.build_file_url(stored.filename, base_url, SUBDIR_ABOUT_SECTIONS),
    )
    db.add(section)
    commit_or_raise(
        db,
        "Failed to create about section",
        on_failure=lambda: uploads.cleanup_stored([stored]),
    )
    db.refresh(section)
    logger.info("About section created successfully: %s", section.id)
    return section


def find_published(db: Session) -> list[AboutSection]:
    return (
        db.query(AboutSection)
        .filter(AboutSection.is_published.is_(True))
        .order_by(AboutSection.sort_order.asc())
        .all()
    )


def find_all(db: Session) -> list[AboutSection]:
    return (
        db.query(AboutSection)
        .order_by(AboutSection.sort_order.asc(), AboutSection.created_at.desc())
        .all()
    )


def find_by_id(db: Session, section_id: UUID) -> AboutSection:
    section = db.query(AboutSection).filter(AboutSection.id == section_id).first()
    if section is None:
        raise _not_found(section_id)
    return section


def find_published_by_id(db: Session, section_id: UUID) -> AboutSection:
    """Unpublished sections are reported as missing to the storefront."""
    section = (
        db.query(AboutSection)
        .filter(AboutSection.id == section_id, AboutSection.is_published.is_(True))
        .first()
    )
    if section is None:
        raise _not_found(section_id)
    return section


def update(db: Session, section_id: UUID, body: AboutSectionUpdate) -> AboutSection:
    section = find_by_id(db, section_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(section, key, value)
    commit_or_raise(db, "Failed to update about section")
    db.refresh(section)
    logger.info("About section updated successfully: %s", section_id)
    return section


def update_image(
    db: Session,
    section_id: UUID,
    stored: StoredFile,
    base_url: str,
) -> AboutSection:
    """Point the section at a newly stored image, then drop the previous file."""
    try:
        section = find_by_id(db, section_id)
    except NotFoundError:
        uploads.cleanup_stored([stored])
        raise
    old_url = section.image
    section.image = uploads.build_file_url(stored.filename, base_url, SUBDIR_ABOUT_SECTIONS)
    commit_or_raise(
        db,
        "Failed to update about section image",
        on_failure=lambda: uploads.cleanup_stored([stored]),
    )
    db.refresh(section)
    if old_url:
        uploads.discard_file_for_url(old_url, SUBDIR_ABOUT_SECTIONS)
    logger.info("About section image replaced: %s", section_id)
    return section


def remove(db: Session, section_id: UUID) -> None:
    section = find_by_id(db, section_id)
    db.delete(section)
    commit_or_raise(db, "Failed to delete about section")
    uploads.discard_file_for_url(section.image, SUBDIR_ABOUT_SECTIONS)
    logger.info("About section deleted successfully: %s", section_id)
