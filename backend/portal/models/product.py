"""
Institute Portal Backend: Product Model
========================================

What:  ORM model for the `products` table (items a service center sells or
       offers: reference materials, kits, analysis packages).

Column encoding:
    name, description, short_description → JSONB localized text
    images, tags, specifications, features, sizes → TEXT holding JSON

    The list/object columns are TEXT, not JSONB: they were written by older
    clients as serialized strings and some rows still hold malformed JSON.
    Reads go through `transform_product`, which decodes them and degrades
    bad values to [] or None, so responses never contain the raw text.
"""

import uuid
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.database import Base
from portal.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Product(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A product, optionally owned by a service center."""

    __tablename__ = "products"

    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    short_description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)

    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    original_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    specifications: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    features: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sizes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    stock_quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    sku: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    order_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    service_center_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("service_centers.id", ondelete="SET NULL"),
        nullable=True,
    )
    service_center: Mapped[Optional["ServiceCenter"]] = relationship(  # noqa: F821
        back_populates="products_list",
    )

    # Public listing filters on these and sorts by order_index
    __table_args__ = (
        Index("idx_products_center_published", "service_center_id", "is_published"),
        Index("idx_products_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug='{self.slug}')>"
