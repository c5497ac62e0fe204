"""Commit helpers shared by the resource services."""

import logging
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from kaisla.core.errors import BadRequestError, ConflictError

logger = logging.getLogger(__name__)


def commit_or_raise(
    db: Session,
    failure_message: str,
    *,
    conflict_message: str | None = None,
    on_failure: Callable[[], None] | None = None,
) -> None:
    """
    Commit the session, translating database errors into service errors.

    On failure the session is rolled back and on_failure (e.g. uploaded file
    cleanup) runs before raising. Unique violations become ConflictError when
    conflict_message is given; everything else becomes BadRequestError.
    """
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s: %s", failure_message, e)
        if on_failure is not None:
            on_failure()
        if conflict_message is not None and isinstance(e, IntegrityError):
            raise ConflictError(conflict_message, cause=e) from e
        raise BadRequestError(failure_message, cause=e) from e
