"""Product catalog: CRUD, filtering, statistics and product images."""

import logging
import math
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from kaisla.core.errors import NotFoundError
from kaisla.models import Product, ProductImage
from kaisla.models.product import PRODUCT_CATEGORIES, PRODUCT_STATUSES
from kaisla.schemas.products import (
    ProductCreate,
    ProductImageUpdate,
    ProductListResponse,
    ProductResponse,
    ProductStatistics,
    ProductUpdate,
)
from kaisla.services import uploads
from kaisla.services.persistence import commit_or_raise
from kaisla.services.uploads import SUBDIR_PRODUCTS, StoredFile

logger = logging.getLogger(__name__)

MAX_IMAGES_PER_REQUEST = 5
DEFAULT_PAGE_SIZE = 10

# Columns an update may explicitly clear with null.
NULLABLE_FIELDS = frozenset({"description", "dimensions", "materials"})


def _product_values(body: ProductCreate | ProductUpdate, *, exclude_unset: bool) -> dict:
    values = body.model_dump(exclude_unset=exclude_unset)
    if "dimensions" in values and body.dimensions is not None:
        values["dimensions"] = body.dimensions.model_dump()
    return values


def create(db: Session, body: ProductCreate) -> Product:
    product = Product(**_product_values(body, exclude_unset=False))
    db.add(product)
    commit_or_raise(db, "Failed to create product")
    db.refresh(product)
    logger.info("Product created successfully: %s", product.id)
    return product


def create_with_images(
    db: Session,
    body: ProductCreate,
    stored: list[StoredFile],
    base_url: str,
    show_on_home: list[bool] | None = None,
) -> Product:
    """
    Create a product and one ProductImage per stored file (sort_order = upload order).

    show_on_home[i] flags image i for the home grid. Stored files are deleted
    if the database write fails.
    """
    flags = show_on_home or []
    logger.info("Creating product with %s image(s)", len(stored))
    product = Product(**_product_values(body, exclude_unset=False))
    for index, s in enumerate(stored):
        product.product_images.append(
            ProductImage(
                url=uploads.build_file_url(s.filename, base_url, SUBDIR_PRODUCTS),
                show_on_home=bool(flags[index]) if index < len(flags) else False,
                sort_order=index,
            )
        )
    db.add(product)
    commit_or_raise(
        db,
        "Failed to create product",
        on_failure=lambda: uploads.cleanup_stored(stored),
    )
    db.refresh(product)
    logger.info("Product created successfully: %s", product.id)
    return product


def find_all(
    db: Session,
    *,
    category: str | None = None,
    status: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> ProductListResponse:
    """Filtered page of products, newest first."""
    query = db.query(Product)
    if category:
        query = query.filter(Product.category == category)
    if status:
        query = query.filter(Product.status == status)
    if search:
        query = query.filter(Product.name.ilike(f"%{search}%"))

    total = query.count()
    products = (
        query.order_by(Product.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    total_pages = math.ceil(total / limit) if limit else 0
    logger.info("Found %s products (page %s/%s)", len(products), page, total_pages)
    return ProductListResponse(
        data=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
    )


def find_by_category(db: Session, category: str) -> list[Product]:
    """Available products of one category, newest first (storefront listing)."""
    return (
        db.query(Product)
        .filter(Product.category == category, Product.status == "available")
        .order_by(Product.created_at.desc())
        .all()
    )


def find_by_id(db: Session, product_id: UUID) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if product is None:
        raise NotFoundError(f'Product with ID "{product_id}" not found')
    return product


def update(db: Session, product_id: UUID, body: ProductUpdate) -> Product:
    product = find_by_id(db, product_id)
    for key, value in _product_values(body, exclude_unset=True).items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(product, key, value)
    commit_or_raise(db, "Failed to update product")
    db.refresh(product)
    logger.info("Product updated successfully: %s", product_id)
    return product


def remove(db: Session, product_id: UUID) -> None:
    """Delete a product and its image rows (cascade), then its image files best-effort."""
    product = find_by_id(db, product_id)
    urls = [image.url for image in product.product_images]
    db.delete(product)
    commit_or_raise(db, "Failed to delete product")
    for url in urls:
        uploads.discard_file_for_url(url, SUBDIR_PRODUCTS)
    logger.info("Product deleted successfully: %s", product_id)


def get_statistics(db: Session) -> ProductStatistics:
    by_category = {c: 0 for c in PRODUCT_CATEGORIES}
    by_status = {s: 0 for s in PRODUCT_STATUSES}
    for category, count in (
        db.query(Product.category, func.count(Product.id)).group_by(Product.category).all()
    ):
        by_category[category] = count
    for status, count in (
        db.query(Product.status, func.count(Product.id)).group_by(Product.status).all()
    ):
        by_status[status] = count
    return ProductStatistics(
        total=sum(by_status.values()),
        by_category=by_category,
        by_status=by_status,
    )


def find_home_grid_images(db: Session) -> list[ProductImage]:
    """Images flagged for the storefront home grid, with their product loaded."""
    return (
        db.query(ProductImage)
        .options(joinedload(ProductImage.product))
        .filter(ProductImage.show_on_home.is_(True))
        .order_by(ProductImage.sort_order.asc(), ProductImage.created_at.desc())
        .all()
    )


def add_images(
    db: Session,
    product_id: UUID,
    stored: list[StoredFile],
    base_url: str,
    show_on_home: list[bool] | None = None,
) -> list[ProductImage]:
    """Append images after the product's current highest sort_order."""
    try:
        product = find_by_id(db, product_id)
    except NotFoundError:
        uploads.cleanup_stored(stored)
        raise
    flags = show_on_home or []
    start = max((img.sort_order for img in product.product_images), default=-1) + 1
    images = [
        ProductImage(
            url=uploads.build_file_url(s.filename, base_url, SUBDIR_PRODUCTS),
            show_on_home=bool(flags[index]) if index < len(flags) else False,
            sort_order=start + index,
            product_id=product.id,
        )
        for index, s in enumerate(stored)
    ]
    db.add_all(images)
    commit_or_raise(
        db,
        "Failed to add product images",
        on_failure=lambda: uploads.cleanup_stored(stored),
    )
    for image in images:
        db.refresh(image)
    logger.info("Added %s image(s) to product %s", len(images), product_id)
    return images


def _find_image(db: Session, product_id: UUID, image_id: UUID) -> ProductImage:
    image = (
        db.query(ProductImage)
        .filter(ProductImage.id == image_id, ProductImage.product_id == product_id)
        .first()
    )
    if image is None:
        raise NotFoundError(f'Product image with ID "{image_id}" not found')
    return image


def update_image(
    db: Session,
    product_id: UUID,
    image_id: UUID,
    body: ProductImageUpdate,
) -> ProductImage:
    image = _find_image(db, product_id, image_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(image, key, value)
    commit_or_raise(db, "Failed to update product image")
    db.refresh(image)
    return image


def remove_image(db: Session, product_id: UUID, image_id: UUID) -> None:
    image = _find_image(db, product_id, image_id)
    db.delete(image)
    commit_or_raise(db, "Failed to delete product image")
    uploads.discard_file_for_url(image.url, SUBDIR_PRODUCTS)
    logger.info("Product image deleted: %s", image_id)
