"""Page content blocks: public reads by page and (page, section), protected writes by id."""

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
from kaisla.schemas.content import PageContentCreate, PageContentResponse, PageContentUpdate
from kaisla.services import page_content as page_service
from kaisla.services.uploads import SUBDIR_PAGE_CONTENT

router = APIRouter()


@router.get("/all", response_model=list[PageContentResponse])
def list_all_blocks(db: Annotated[Session, Depends(get_db)]) -> Any:
    return page_service.find_all(db)


@router.post("/with-upload", response_model=PageContentResponse, status_code=status.HTTP_201_CREATED)
async def create_block_with_upload(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    """Create a block from form fields (`metadata` as JSON) and a required `image` file."""
    form = await read_multipart(request)
    body = validate_form(PageContentCreate, form_fields(form, ("metadata",)))
    stored = await save_single_image(form, SUBDIR_PAGE_CONTENT)
    return page_service.create_with_image(db, body, stored, public_base_url(request))


@router.post("", response_model=PageContentResponse, status_code=status.HTTP_201_CREATED)
def create_block(body: PageContentCreate, db: Annotated[Session, Depends(get_db)]) -> Any:
    return page_service.create(db, body)


@router.get("/{page}", response_model=list[PageContentResponse])
@public
def list_page_blocks(page: str, db: Annotated[Session, Depends(get_db)]) -> Any:
    return page_service.find_published_by_page(db, page)


@router.get("/{page}/{section}", response_model=PageContentResponse)
@public
def get_block(page: str, section: str, db: Annotated[Session, Depends(get_db)]) -> Any:
    return page_service.find_by_page_and_section(db, page, section)


@router.patch("/{content_id}", response_model=PageContentResponse)
def update_block(
    content_id: UUID,
    body: PageContentUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return page_service.update(db, content_id, body)


@router.patch("/{content_id}/image", response_model=PageContentResponse)
async def replace_block_image(
    content_id: UUID,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    form = await read_multipart(request)
    stored = await save_single_image(form, SUBDIR_PAGE_CONTENT)
    return page_service.update_image(db, content_id, stored, public_base_url(request))


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_block(content_id: UUID, db: Annotated[Session, Depends(get_db)]) -> None:
    page_service.remove(db, content_id)
