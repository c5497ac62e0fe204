"""Request/response schemas for products and product images."""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import Field

from kaisla.schemas.base import CamelModel

ProductCategory = Literal["wall-hanging", "rug"]
ProductStatus = Literal["available", "sold", "draft"]


class Dimensions(CamelModel):
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    unit: Literal["cm", "inch"]


class ProductCreate(CamelModel):
    """Fields for a new product (JSON body or multipart form fields)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    category: ProductCategory
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    status: ProductStatus = "draft"
    stock_quantity: int = Field(default=0, ge=0)
    dimensions: Dimensions | None = None
    materials: str | None = None


class ProductUpdate(CamelModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    category: ProductCategory | None = None
    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    status: ProductStatus | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    dimensions: Dimensions | None = None
    materials: str | None = None


class ProductImageUpdate(CamelModel):
    show_on_home: bool | None = None
    sort_order: int | None = Field(default=None, ge=0)


class ProductImageResponse(CamelModel):
    id: UUID
    url: str
    show_on_home: bool
    sort_order: int
    product_id: UUID
    created_at: datetime | None = None


class ProductSummary(CamelModel):
    """Product without its images (nested in home grid entries)."""

    id: UUID
    name: str
    description: str | None = None
    category: str
    price: float
    status: str
    stock_quantity: int
    dimensions: Dimensions | None = None
    materials: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductResponse(ProductSummary):
    product_images: list[ProductImageResponse] = Field(default_factory=list)


class ProductListResponse(CamelModel):
    """One page of products plus pagination counters."""

    data: list[ProductResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class ProductStatistics(CamelModel):
    total: int
    by_category: dict[str, int]
    by_status: dict[str, int]


class HomeGridImageResponse(ProductImageResponse):
    product: ProductSummary | None = None
