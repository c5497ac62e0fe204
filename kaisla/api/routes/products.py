"""Product catalog endpoints. Reads are public; writes need a token."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
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
from kaisla.schemas.products import (
    HomeGridImageResponse,
    ProductCategory,
    ProductCreate,
    ProductImageResponse,
    ProductImageUpdate,
    ProductListResponse,
    ProductResponse,
    ProductStatistics,
    ProductStatus,
    ProductUpdate,
)
from kaisla.services import products as product_service
from kaisla.services import uploads
from kaisla.services.uploads import SUBDIR_PRODUCTS

router = APIRouter()

JSON_FORM_FIELDS = ("dimensions", "showOnHome")


def _show_on_home_flags(value: Any) -> list[bool] | None:
    """showOnHome form field: a JSON boolean list (one flag per image) or a single boolean."""
    if value is None:
        return None
    if isinstance(value, bool):
        return [value]
    if isinstance(value, list) and all(isinstance(v, bool) for v in value):
        return value
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="showOnHome must be a boolean or a JSON list of booleans",
    )


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return product_service.create(db, body)


@router.post("/with-upload", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product_with_upload(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    """
    Create a product with 1 to 5 images (multipart/form-data).

    Product fields are sent as form fields (`dimensions` as JSON), images as
    repeated `images` file parts. `showOnHome` optionally holds a JSON list of
    booleans, one per image.
    """
    form = await read_multipart(request)
    data = form_fields(form, JSON_FORM_FIELDS)
    flags = _show_on_home_flags(data.pop("showOnHome", None))
    body = validate_form(ProductCreate, data)
    stored = await uploads.save_images(
        form_files(form, "images"),
        SUBDIR_PRODUCTS,
        max_files=product_service.MAX_IMAGES_PER_REQUEST,
    )
    return product_service.create_with_images(
        db, body, stored, public_base_url(request), show_on_home=flags
    )


@router.get("", response_model=ProductListResponse)
@public
def list_products(
    db: Annotated[Session, Depends(get_db)],
    category: ProductCategory | None = None,
    status_filter: Annotated[ProductStatus | None, Query(alias="status")] = None,
    search: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = product_service.DEFAULT_PAGE_SIZE,
) -> ProductListResponse:
    return product_service.find_all(
        db, category=category, status=status_filter, search=search, page=page, limit=limit
    )


@router.get("/category/{category}", response_model=list[ProductResponse])
@public
def list_products_by_category(
    category: ProductCategory,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return product_service.find_by_category(db, category)


@router.get("/statistics", response_model=ProductStatistics)
@public
def get_statistics(db: Annotated[Session, Depends(get_db)]) -> ProductStatistics:
    return product_service.get_statistics(db)


@router.get("/home-grid", response_model=list[HomeGridImageResponse])
@public
def get_home_grid(db: Annotated[Session, Depends(get_db)]) -> Any:
    """Images flagged showOnHome, each with its product, for the storefront home page."""
    return product_service.find_home_grid_images(db)


@router.get("/{product_id}", response_model=ProductResponse)
@public
def get_product(product_id: UUID, db: Annotated[Session, Depends(get_db)]) -> Any:
    return product_service.find_by_id(db, product_id)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    body: ProductUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return product_service.update(db, product_id, body)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: UUID, db: Annotated[Session, Depends(get_db)]) -> None:
    product_service.remove(db, product_id)


@router.post(
    "/{product_id}/images",
    response_model=list[ProductImageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_product_images(
    product_id: UUID,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    form = await read_multipart(request)
    flags = _show_on_home_flags(form_fields(form, JSON_FORM_FIELDS).get("showOnHome"))
    stored = await uploads.save_images(
        form_files(form, "images"),
        SUBDIR_PRODUCTS,
        max_files=product_service.MAX_IMAGES_PER_REQUEST,
    )
    return product_service.add_images(
        db, product_id, stored, public_base_url(request), show_on_home=flags
    )


@router.patch("/{product_id}/images/{image_id}", response_model=ProductImageResponse)
def update_product_image(
    product_id: UUID,
    image_id: UUID,
    body: ProductImageUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Any:
    return product_service.update_image(db, product_id, image_id, body)


@router.delete("/{product_id}/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product_image(
    product_id: UUID,
    image_id: UUID,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    product_service.remove_image(db, product_id, image_id)
