"""ORM models for catalog products and their images."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship

from kaisla.models.base import Base, created_at_column, updated_at_column, uuid_pk

PRODUCT_CATEGORIES = ("wall-hanging", "rug")
PRODUCT_STATUSES = ("available", "sold", "draft")


class Product(Base):
    """A wall hanging or rug in the catalog."""

    __tablename__ = "products"
    __table_args__ = (Index("ix_products_category_status", "category", "status"),)

    id = uuid_pk()
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    category = Column(String(32), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(32), nullable=False, default="draft", index=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    # {"width": float, "height": float, "unit": "cm" | "inch"}
    dimensions = Column(JSONB, nullable=True)
    materials = Column(Text, nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()

    product_images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.sort_order",
        lazy="selectin",
    )


class ProductImage(Base):
    """Uploaded image of a product; show_on_home puts it in the storefront home grid."""

    __tablename__ = "product_images"

    id = uuid_pk()
    url = Column(String(500), nullable=False)
    show_on_home = Column(Boolean, nullable=False, default=False, index=True)
    sort_order = Column(Integer, nullable=False, default=0)
    product_id = Column(
        UUID(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = created_at_column()

    product = relationship("Product", back_populates="product_images")
