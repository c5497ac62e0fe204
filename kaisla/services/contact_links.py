import logging
from uuid import UUID

from sqlalchemy.orm import Session

from kaisla.core.errors import ConflictError, NotFoundError
from kaisla.models import ContactLink
from kaisla.schemas.content import ContactLinkCreate, ContactLinkUpdate
from kaisla.services.persistence import commit_or_raise

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Contact link with this platform and URL already exists"


def _ensure_unique(db: Session, platform: str, url: str, exclude_id: UUID | None = None) -> None:
    query = db.query(ContactLink).filter(ContactLink.platform == platform, ContactLink.url == url)
    if exclude_id is not None:
        query = query.filter(ContactLink.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(DUPLICATE_MESSAGE)


def create(db: Session, body: ContactLinkCreate) -> ContactLink:
    _ensure_unique(db, body.platform, body.url)
    link = ContactLink(**body.model_dump())
    db.add(link)
    commit_or_raise(db, "Failed to create contact link", conflict_message=DUPLICATE_MESSAGE)
    db.refresh(link)
    logger.info("Contact link created successfully: %s", link.id)
    return link


def find_active(db: Session) -> list[ContactLink]:
    return (
        db.query(ContactLink)
        .filter(ContactLink.is_active.is_(True))
        .order_by(ContactLink.sort_order.asc())
        .all()
    )


def find_all(db: Session) -> list[ContactLink]:
    return (
        db.query(ContactLink)
        .order_by(ContactLink.sort_order.asc(), ContactLink.created_at.desc())
        .all()
    )


def find_by_id(db: Session, link_id: UUID) -> ContactLink:
    link = db.query(ContactLink).filter(ContactLink.id == link_id).first()
    if link is None:
        raise NotFoundError(f'Contact link with ID "{link_id}" not found')
    return link


def update(db: Session, link_id: UUID, body: ContactLinkUpdate) -> ContactLink:
    link = find_by_id(db, link_id)
    values = body.model_dump(exclude_unset=True)
    platform = values.get("platform") or link.platform
    url = values.get("url") or link.url
    if platform != link.platform or url != link.url:
        _ensure_unique(db, platform, url, exclude_id=link.id)
    for key, value in values.items():
        if value is None and key != "label":
            continue
        setattr(link, key, value)
    commit_or_raise(db, "Failed to update contact link", conflict_message=DUPLICATE_MESSAGE)
    db.refresh(link)
    logger.info("Contact link updated successfully: %s", link_id)
    return link


def remove(db: Session, link_id: UUID) -> None:
    link = find_by_id(db, link_id)
    db.delete(link)
    commit_or_raise(db, "Failed to delete contact link")
    logger.info("Contact link deleted successfully: %s", link_id)
