"""
Catalogue service models: services, their equipment and their center heads.

`features`, `expertise` and equipment `specifications` are TEXT columns
holding JSON and are decoded by `transform_service`.
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy import Boolean, ForeignKey, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.database import Base
from portal.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class ServiceCenterHead(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Person heading one or more catalogue services."""

    __tablename__ = "service_center_heads"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    picture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expertise: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    services: Mapped[List["Service"]] = relationship(back_populates="center_head")


class Service(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A testing/analysis service offered in the catalogue."""

    __tablename__ = "services"

    title: Mapped[Any] = mapped_column(JSONB, nullable=False)
    subtitle: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    price: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    features: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    center_head_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("service_center_heads.id", ondelete="SET NULL"),
        nullable=True,
    )
    center_head: Mapped[Optional[ServiceCenterHead]] = relationship(back_populates="services")
    equipment: Mapped[List["ServiceEquipment"]] = relationship(
        back_populates="service",
        cascade="all, delete-orphan",
    )


class ServiceEquipment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "service_equipment"

    service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    specifications: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    service: Mapped[Service] = relationship(back_populates="equipment")
