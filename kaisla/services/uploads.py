"""
Disk storage for uploaded images.

Files are written to UPLOAD_DIR/<subdir>/<uuid4><ext> and served statically at
/uploads/<subdir>/<filename>. Database rows only keep the public URL; nothing
ties a row and its file together transactionally, so callers delete files
best-effort when a database write fails or a resource is removed.
"""

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from kaisla.core.config import get_settings
from kaisla.core.errors import BadRequestError, NotFoundError, PayloadTooLargeError

logger = logging.getLogger(__name__)

SUBDIR_PRODUCTS = "products"
SUBDIR_BLOG = "blog"
SUBDIR_ABOUT_SECTIONS = "about-sections"
SUBDIR_PAGE_CONTENT = "page-content"

# URL path under which UPLOAD_DIR is mounted.
UPLOADS_URL_PATH = "/uploads"

# MIME type -> extensions accepted for it.
ALLOWED_IMAGE_TYPES: dict[str, tuple[str, ...]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/jpg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/webp": ("webp",),
}

READ_CHUNK_BYTES = 1024 * 1024


class UploadedFileNotFoundError(NotFoundError):
    """Raised by delete_file when the file is already gone from disk."""


@dataclass(frozen=True)
class StoredFile:
    """A file written to disk under a generated unique name."""

    filename: str
    original_name: str
    content_type: str
    size: int
    subdir: str


def get_upload_dir(subdir: str = SUBDIR_PRODUCTS) -> Path:
    return Path(get_settings().UPLOAD_DIR) / subdir


def ensure_upload_dir(subdir: str = SUBDIR_PRODUCTS) -> Path:
    """Create the upload directory for subdir if missing; return its path."""
    upload_dir = get_upload_dir(subdir)
    if not upload_dir.is_dir():
        logger.info("Creating upload directory: %s", upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def build_file_url(filename: str, base_url: str, subdir: str = SUBDIR_PRODUCTS) -> str:
    """Public URL of an uploaded file: <base_url>/uploads/<subdir>/<filename>."""
    url = f"{base_url.rstrip('/')}{UPLOADS_URL_PATH}/{subdir}/{filename}"
    logger.debug("Generated file URL: %s", url)
    return url


def extract_filename(url: str | None) -> str | None:
    """Last path segment of a stored file URL, or None when there is none."""
    if not url:
        return None
    name = PurePosixPath(url.split("?", 1)[0]).name
    return name or None


def _safe_path(filename: str, subdir: str) -> Path:
    # Only the last segment is honored so stored URLs can never escape the upload dir.
    name = PurePosixPath(filename).name
    if not name or name in (".", ".."):
        raise BadRequestError(f"Invalid filename: {filename!r}")
    return get_upload_dir(subdir) / name


def delete_file(filename: str, subdir: str = SUBDIR_PRODUCTS) -> None:
    """
    Delete one uploaded file.

    Raises UploadedFileNotFoundError when the file does not exist; any other
    OSError propagates.
    """
    path = _safe_path(filename, subdir)
    try:
        path.unlink()
    except FileNotFoundError as e:
        raise UploadedFileNotFoundError(f"File not found: {filename}", cause=e) from e
    except OSError as e:
        logger.error("Failed to delete file %s: %s", filename, e)
        raise
    logger.info("File deleted successfully: %s", filename)


def delete_files(filenames: Iterable[str], subdir: str = SUBDIR_PRODUCTS) -> None:
    """Delete several files; per-file failures are logged, never raised."""
    for filename in filenames:
        try:
            delete_file(filename, subdir)
        except (UploadedFileNotFoundError, BadRequestError, OSError) as e:
            logger.warning("Failed to delete file %s: %s", filename, e)


def discard_file_for_url(url: str | None, subdir: str) -> None:
    """Best-effort removal of the file behind a stored URL (resource cleanup)."""
    filename = extract_filename(url)
    if filename:
        delete_files([filename], subdir)


def validate_image(upload: UploadFile) -> str:
    """Check MIME type and extension of an uploaded image; return the lowercased extension."""
    original_name = upload.filename or ""
    content_type = (upload.content_type or "").lower()
    allowed_extensions = ALLOWED_IMAGE_TYPES.get(content_type)
    if allowed_extensions is None:
        logger.warning("File rejected: %s (%s) - invalid mime type", original_name, content_type)
        raise BadRequestError(
            f"File {original_name} has invalid type. Only JPEG, PNG, and WebP are allowed"
        )
    extension = PurePosixPath(original_name).suffix.lower().lstrip(".")
    if extension not in allowed_extensions:
        raise BadRequestError(
            f"File {original_name} has mismatched extension and mime type"
        )
    return extension


async def _write_upload(upload: UploadFile, subdir: str, max_bytes: int) -> StoredFile:
    extension = validate_image(upload)
    upload_dir = ensure_upload_dir(subdir)
    filename = f"{uuid.uuid4()}.{extension}"
    path = upload_dir / filename
    size = 0
    try:
        with path.open("wb") as out:
            while True:
                chunk = await upload.read(READ_CHUNK_BYTES)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise PayloadTooLargeError(
                        f"File size exceeds {max_bytes // (1024 * 1024)}MB limit"
                    )
                out.write(chunk)
    except Exception:
        path.unlink(missing_ok=True)
        raise
    logger.debug(
        "Saved file: %s as %s (%s, %s bytes)",
        upload.filename,
        filename,
        upload.content_type,
        size,
    )
    return StoredFile(
        filename=filename,
        original_name=upload.filename or "",
        content_type=(upload.content_type or "").lower(),
        size=size,
        subdir=subdir,
    )


async def save_images(
    uploads: list[UploadFile],
    subdir: str,
    *,
    max_files: int,
    required: bool = True,
) -> list[StoredFile]:
    """
    Validate and write uploaded images under generated unique names.

    Raises BadRequestError when images are required but missing, too many are
    sent, or a type/extension is not allowed, and PayloadTooLargeError when a
    file exceeds UPLOAD_MAX_FILE_BYTES. Files already written for this call
    are removed before the error propagates.
    """
    if not uploads:
        if required:
            raise BadRequestError("At least one image is required")
        return []
    if len(uploads) > max_files:
        raise BadRequestError(f"Maximum {max_files} files allowed, received {len(uploads)}")

    max_bytes = get_settings().UPLOAD_MAX_FILE_BYTES
    stored: list[StoredFile] = []
    try:
        for upload in uploads:
            stored.append(await _write_upload(upload, subdir, max_bytes))
    except Exception:
        delete_files([s.filename for s in stored], subdir)
        raise
    return stored


def cleanup_stored(stored: Iterable[StoredFile]) -> None:
    """Remove files written by save_images after a failed database write."""
    for s in stored:
        delete_files([s.filename], s.subdir)
