"""
Service center response models and admin request bodies.

A center's `products` come from two sources with different shapes: live
product rows (full product fields) or legacy JSON cards (name, description,
image, specifications). `CenterProductItem` keeps the common fields typed and
lets the rest through.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from portal.schemas.common import LocalizedField
from portal.schemas.staff import StaffMemberResponse


class EquipmentItem(BaseModel):
    id: Optional[uuid.UUID] = None
    name: LocalizedField
    description: LocalizedField = None
    image: Optional[str] = None
    specifications: Optional[Any] = None


class CenterProductItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[uuid.UUID] = None
    name: LocalizedField = None
    slug: Optional[str] = None
    description: LocalizedField = None
    image: Optional[str] = None
    specifications: Optional[Any] = None


class ServiceCenterResponse(BaseModel):
    id: uuid.UUID
    name: LocalizedField
    slug: str
    type: str = "center"
    headline: LocalizedField = None
    description: LocalizedField = None
    location: LocalizedField = None
    lab_methodology: LocalizedField = None
    future_prospective: LocalizedField = None
    image: Optional[str] = None
    banner_image: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    work_volume: Optional[Any] = None
    company_activity: Optional[Any] = None
    services: List[Any] = Field(default_factory=list)
    metrics: Optional[Any] = None
    is_featured: bool = False
    is_published: bool = True
    order_index: int = 0
    equipments: List[EquipmentItem] = Field(default_factory=list)
    products: List[CenterProductItem] = Field(default_factory=list)
    staff: List[StaffMemberResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CenterListResponse(BaseModel):
    centers: List[ServiceCenterResponse]
    total: int


class CenterEnvelope(BaseModel):
    message: Optional[str] = None
    center: ServiceCenterResponse


class ServiceCenterUpdate(BaseModel):
    """
    Partial center update; absent keys leave columns untouched.

    `equipments` replaces the whole equipment list when present (an empty
    list clears it). Several legacy key spellings are accepted for the
    list/blob fields.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    slug: Optional[str] = None
    type: Optional[str] = None
    headline: Any = None
    description: Any = None
    location: Any = None
    image: Optional[str] = None
    banner_image: Optional[str] = Field(default=None, validation_alias=AliasChoices("banner_image", "bannerImage"))
    contact_phone: Optional[str] = Field(default=None, validation_alias=AliasChoices("contact_phone", "contactPhone"))
    contact_email: Optional[str] = Field(default=None, validation_alias=AliasChoices("contact_email", "contactEmail"))
    lab_methodology: Any = Field(default=None, validation_alias=AliasChoices("lab_methodology", "labMethodology"))
    future_prospective: Any = Field(
        default=None, validation_alias=AliasChoices("future_prospective", "futureProspective")
    )
    equipments: Any = Field(
        default=None, validation_alias=AliasChoices("equipments", "equipmentList", "equipment_list")
    )
    products: Any = Field(default=None, validation_alias=AliasChoices("products", "productList", "product_list"))
    work_volume: Any = Field(default=None, validation_alias=AliasChoices("work_volume", "workVolume"))
    company_activity: Any = Field(
        default=None, validation_alias=AliasChoices("company_activity", "companyActivity")
    )
    services: Any = Field(default=None, validation_alias=AliasChoices("services", "serviceTabs", "service_tabs"))
    metrics: Any = Field(default=None, validation_alias=AliasChoices("metrics", "analytics", "kpis"))
    is_featured: Any = Field(default=None, validation_alias=AliasChoices("is_featured", "isFeatured"))
    is_published: Any = Field(default=None, validation_alias=AliasChoices("is_published", "isPublished"))
    order_index: Any = Field(default=None, validation_alias=AliasChoices("order_index", "orderIndex"))

    def provided(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ServiceCenterCreate(ServiceCenterUpdate):
    """New center. Slug comes from `slug` when given, otherwise from the name."""
