"""
Institute Portal Backend: Product Schemas
==========================================

What:  Response models for product reads and request bodies for admin writes.

Response side:
    The transform layer already guarantees the shapes (list fields are lists,
    specifications is an object or null, prices are floats). These models
    pin the public contract and drop anything else the row carries.

Request side:
    Admin forms post whatever their widgets produce: "true"/"1" for
    checkboxes, "12.50" for prices, JSON text for list editors. Bodies are
    therefore typed loosely and coerced by ProductService through
    `parse_boolean`/`parse_number`/`serialize_json_value`, never rejected
    with a 422 for a stringly-typed scalar. camelCase keys are accepted next
    to snake_case ones.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from portal.schemas.common import LocalizedField


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProductCenterSummary(BaseModel):
    """The owning service center as embedded in a product."""
    id: uuid.UUID
    name: LocalizedField = None
    slug: Optional[str] = None
    type: Optional[str] = None
    image: Optional[str] = None
    location: LocalizedField = None


class ProductResponse(BaseModel):
    id: uuid.UUID = Field(description="Unique product identifier")
    name: LocalizedField = Field(description="Localized name ('' when untranslated)")
    slug: str
    description: LocalizedField = None
    short_description: LocalizedField = None
    image: Optional[str] = None
    images: List[Any] = Field(default_factory=list, description="Gallery image URLs")
    price: Optional[float] = None
    original_price: Optional[float] = None
    category: Optional[str] = None
    tags: List[Any] = Field(default_factory=list)
    specifications: Optional[Any] = Field(
        default=None, description="Free-form specification object, null when absent"
    )
    features: List[Any] = Field(default_factory=list)
    sizes: List[Any] = Field(default_factory=list)
    stock_quantity: Optional[int] = None
    sku: Optional[str] = None
    is_featured: bool = False
    is_published: bool = True
    is_available: bool = True
    order_index: int = 0
    service_center_id: Optional[uuid.UUID] = None
    service_center: Optional[ProductCenterSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductListResponse(BaseModel):
    """
    Offset-paginated product listing.

    `total` counts every row matching the filters, not just this page, so
    clients can render "21-40 of 57".
    """
    products: List[ProductResponse]
    total: int = Field(description="Number of products matching the filters")
    limit: int
    offset: int


class ProductEnvelope(BaseModel):
    message: Optional[str] = Field(default=None, description="Set on writes only")
    product: ProductResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies (admin)
# ══════════════════════════════════════════════════════════════════════════


class ProductUpdate(BaseModel):
    """
    Partial product update. Only keys present in the body are applied;
    ProductService reads them through `model_dump(exclude_unset=True)`.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    description: Any = None
    short_description: Any = Field(
        default=None, validation_alias=AliasChoices("short_description", "shortDescription")
    )
    image: Optional[str] = None
    images: Any = None
    price: Any = None
    original_price: Any = Field(
        default=None, validation_alias=AliasChoices("original_price", "originalPrice")
    )
    category: Optional[str] = None
    tags: Any = None
    specifications: Any = None
    features: Any = None
    sizes: Any = None
    stock_quantity: Any = Field(
        default=None, validation_alias=AliasChoices("stock_quantity", "stockQuantity")
    )
    sku: Optional[str] = None
    is_featured: Any = Field(
        default=None, validation_alias=AliasChoices("is_featured", "isFeatured")
    )
    is_published: Any = Field(
        default=None, validation_alias=AliasChoices("is_published", "isPublished")
    )
    is_available: Any = Field(
        default=None, validation_alias=AliasChoices("is_available", "isAvailable")
    )
    order_index: Any = Field(
        default=None, validation_alias=AliasChoices("order_index", "orderIndex")
    )
    service_center_id: Any = Field(
        default=None, validation_alias=AliasChoices("service_center_id", "serviceCenterId")
    )

    def provided(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class ProductCreate(ProductUpdate):
    """
    New product. `name` is required but checked by the service so a missing
    name answers with the localized 400 message rather than a schema error.
    """
