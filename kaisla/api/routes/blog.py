"""Blog articles, article images and tags."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from kaisla.api.deps import public
from kaisla.api.forms import (
    form_fields,
    form_files,
    public_base_url,
    read_multipart,
    validate_form,
)
from kaisla.core.database import get_db
from kaisla.schemas.blog import (
    BlogArticleCreate,
    BlogArticleImageResponse,
    BlogArticleImageUpdate,
    BlogArticleResponse,
    BlogArticleUpdate,
    BlogTagCreate,
    BlogTagResponse,
    BlogTagUpdate,
)
from kaisla.services import blog as blog_service
from kaisla.services import uploads
from kaisla.services.uploads import SUBDIR_BLOG

router = APIRouter()


# Tags (declared before /{article_id} so "tags" is not read as an id)


@router.get("/tags", response_model=list[BlogTagResponse])
@public
def list_tags(db: Annotated[Session, Depends(get_db)]) -> Any:
    return blog_service.find_all_tags(db)


@router.post("/tags", response_model=BlogTagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(body: BlogTagCreate, db: Annotated[Session, Depends(get_db)]) -> Any:
    return blog_service.create_tag(db, body)


@router.patch("/tags/{tag_id}", response_model=BlogTagResponse)
def update_tag(
    tag_id: UUID,
    body: BlogTagUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return blog_service.update_tag(db, tag_id, body)


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(tag_id: UUID, db: Annotated[Session, Depends(get_db)]) -> None:
    blog_service.remove_tag(db, tag_id)


# Articles


@router.post("/with-upload", response_model=BlogArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article_with_upload(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    """
    Create an article with up to 10 optional images (multipart/form-data).

    `tagIds` is a JSON list of tag ids. The first image becomes the cover.
    The slug is derived from the title unless `slug` is sent.
    """
    form = await read_multipart(request)
    body = validate_form(BlogArticleCreate, form_fields(form, ("tagIds",)))
    stored = await uploads.save_images(
        form_files(form, "images"),
        SUBDIR_BLOG,
        max_files=blog_service.MAX_IMAGES_PER_REQUEST,
        required=False,
    )
    return blog_service.create_with_images(db, body, stored, public_base_url(request))


@router.get("", response_model=list[BlogArticleResponse])
@public
def list_published_articles(db: Annotated[Session, Depends(get_db)]) -> Any:
    return blog_service.find_published(db)


@router.get("/all", response_model=list[BlogArticleResponse])
def list_all_articles(db: Annotated[Session, Depends(get_db)]) -> Any:
    return blog_service.find_all(db)


@router.get("/{article_id}", response_model=BlogArticleResponse)
@public
def get_article(article_id: UUID, db: Annotated[Session, Depends(get_db)]) -> Any:
    return blog_service.find_by_id(db, article_id)


@router.patch("/{article_id}", response_model=BlogArticleResponse)
def update_article(
    article_id: UUID,
    body: BlogArticleUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return blog_service.update(db, article_id, body)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article(article_id: UUID, db: Annotated[Session, Depends(get_db)]) -> None:
    blog_service.remove(db, article_id)


# Article images


@router.post(
    "/{article_id}/images",
    response_model=list[BlogArticleImageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_article_images(
    article_id: UUID,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    form = await read_multipart(request)
    stored = await uploads.save_images(
        form_files(form, "images"),
        SUBDIR_BLOG,
        max_files=blog_service.MAX_IMAGES_PER_REQUEST,
    )
    return blog_service.add_images(db, article_id, stored, public_base_url(request))


@router.patch("/{article_id}/images/{image_id}", response_model=BlogArticleImageResponse)
def update_article_image(
    article_id: UUID,
    image_id: UUID,
    body: BlogArticleImageUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return blog_service.update_image(db, article_id, image_id, body)


@router.delete("/{article_id}/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article_image(
    article_id: UUID,
    image_id: UUID,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    blog_service.remove_image(db, article_id, image_id)
