"""Multipart form parsing shared by the *-with-upload and image endpoints."""

import json
from collections.abc import Iterable
from typing import Any, TypeVar

from fastapi import HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import FormData

from kaisla.core.config import get_settings
from kaisla.services import uploads
from kaisla.services.uploads import StoredFile

M = TypeVar("M", bound=BaseModel)


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def read_multipart(request: Request) -> FormData:
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise HTTPException(
            status_code=415,
            detail="Content-Type must be multipart/form-data.",
        )
    return await request.form()


def form_files(form: FormData, field: str) -> list[UploadFile]:
    """File parts sent under field; parts without a filename are ignored."""
    return [v for v in form.getlist(field) if _is_upload_file(v) and v.filename]


def form_fields(form: FormData, json_fields: Iterable[str] = ()) -> dict[str, Any]:
    """
    Plain (non-file) form fields as a dict.

    Empty strings are dropped so optional fields fall back to their defaults.
    Fields named in json_fields carry JSON (lists, objects, booleans) and are
    decoded; invalid JSON is a 400.
    """
    json_fields = set(json_fields)
    data: dict[str, Any] = {}
    for key, value in form.multi_items():
        if _is_upload_file(value) or value == "":
            continue
        if key in json_fields:
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise HTTPException(
                    status_code=400,
                    detail=f"Field {key} must be valid JSON: {e!s}",
                ) from e
        data[key] = value
    return data


def validate_form(model: type[M], data: dict[str, Any]) -> M:
    """Validate form data like a JSON body: failures become the usual 400 validation response."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


def public_base_url(request: Request) -> str:
    """Base for uploaded file URLs: PUBLIC_BASE_URL, else the request's scheme and host."""
    configured = get_settings().PUBLIC_BASE_URL
    if configured:
        return configured
    return str(request.base_url).rstrip("/")


async def save_single_image(form: FormData, subdir: str, field: str = "image") -> StoredFile:
    """Store the one required image of a single-image endpoint."""
    stored = await uploads.save_images(form_files(form, field), subdir, max_files=1)
    return stored[0]
