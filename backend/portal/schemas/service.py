"""Catalogue service response models."""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from portal.schemas.common import LocalizedField
from portal.schemas.service_center import EquipmentItem


class CenterHeadResponse(BaseModel):
    id: uuid.UUID
    name: str
    title: Optional[str] = None
    picture: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    expertise: List[Any] = Field(default_factory=list)


class ServiceResponse(BaseModel):
    id: uuid.UUID
    title: LocalizedField
    subtitle: LocalizedField = None
    description: LocalizedField = None
    image: Optional[str] = None
    category: Optional[str] = None
    price: Optional[str] = None
    duration: Optional[str] = None
    features: List[Any] = Field(default_factory=list)
    is_featured: bool = False
    equipment: List[EquipmentItem] = Field(default_factory=list)
    center_head: Optional[CenterHeadResponse] = None
    created_at: Optional[datetime] = None


class ServiceListResponse(BaseModel):
    services: List[ServiceResponse]
    total: int


class ServiceEnvelope(BaseModel):
    service: ServiceResponse
