from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from kaisla.api.deps import public
from kaisla.api.forms import (
    form_fields,
    public_base_url,
    read_multipart,
    save_single_image,
    validate_form,
)
from kaisla.core.database import get_db
from kaisla.schemas.content import AboutSectionCreate, AboutSectionResponse, AboutSectionUpdate
from kaisla.services import about_sections as about_service
from kaisla.services.uploads import SUBDIR_ABOUT_SECTIONS

router = APIRouter()


@router.post("/with-upload", response_model=AboutSectionResponse, status_code=status.HTTP_201_CREATED)
async def create_section_with_upload(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    """Create a section from form fields (`paragraphs` as a JSON list) and a required `image` file."""
    form = await read_multipart(request)
    body = validate_form(AboutSectionCreate, form_fields(form, ("paragraphs",)))
    stored = await save_single_image(form, SUBDIR_ABOUT_SECTIONS)
    return about_service.create_with_image(db, body, stored, public_base_url(request))


@router.get("", response_model=list[AboutSectionResponse])
@public
def list_published_sections(db: Annotated[Session, Depends(get_db)]) -> Any:
    return about_service.find_published(db)


@router.get("/all", response_model=list[AboutSectionResponse])
def list_all_sections(db: Annotated[Session, Depends(get_db)]) -> Any:
    return about_service.find_all(db)


@router.get("/{section_id}", response_model=AboutSectionResponse)
@public
def get_section(section_id: UUID, db: Annotated[Session, Depends(get_db)]) -> Any:
    return about_service.find_published_by_id(db, section_id)


@router.patch("/{section_id}", response_model=AboutSectionResponse)
def update_section(
    section_id: UUID,
    body: AboutSectionUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return about_service.update(db, section_id, body)


@router.patch("/{section_id}/image", response_model=AboutSectionResponse)
async def replace_section_image(
    section_id: UUID,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    """Replace the section image; the previous file is deleted."""
    form = await read_multipart(request)
    stored = await save_single_image(form, SUBDIR_ABOUT_SECTIONS)
    return about_service.update_image(db, section_id, stored, public_base_url(request))


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(section_id: UUID, db: Annotated[Session, Depends(get_db)]) -> None:
    about_service.remove(db, section_id)
