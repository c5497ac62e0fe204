from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kaisla.api.deps import public
from kaisla.core.database import get_db
from kaisla.schemas.content import ContactLinkCreate, ContactLinkResponse, ContactLinkUpdate
from kaisla.services import contact_links as contact_service

router = APIRouter()


@router.post("", response_model=ContactLinkResponse, status_code=status.HTTP_201_CREATED)
def create_link(body: ContactLinkCreate, db: Annotated[Session, Depends(get_db)]) -> Any:
    return contact_service.create(db, body)


@router.get("", response_model=list[ContactLinkResponse])
@public
def list_active_links(db: Annotated[Session, Depends(get_db)]) -> Any:
    return contact_service.find_active(db)


@router.get("/all", response_model=list[ContactLinkResponse])
def list_all_links(db: Annotated[Session, Depends(get_db)]) -> Any:
    return contact_service.find_all(db)


@router.get("/{link_id}", response_model=ContactLinkResponse)
@public
def get_link(link_id: UUID, db: Annotated[Session, Depends(get_db)]) -> Any:
    return contact_service.find_by_id(db, link_id)


@router.patch("/{link_id}", response_model=ContactLinkResponse)
def update_link(
    link_id: UUID,
    body: ContactLinkUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return contact_service.update(db, link_id, body)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_link(link_id: UUID, db: Annotated[Session, Depends(get_db)]) -> None:
    contact_service.remove(db, link_id)
