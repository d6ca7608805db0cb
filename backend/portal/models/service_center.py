"""
Institute Portal Backend: Service Center Models
================================================

What:  ORM models for service centers, their equipment rows and their staff
       links.
Who:   Queried by ServiceCenterService; equipment rows are rewritten wholesale
       whenever an admin submits a new equipment list.

Column encoding:
    Localized text (name, headline, description, location, lab_methodology,
    future_prospective) is JSONB holding {"en": ..., "ar": ...} or a plain
    JSON string for legacy rows.

    `products` is the legacy JSON list of product cards that predates the
    `products` table. It is still read as a fallback when a center has no
    related product rows.

    work_volume, company_activity, services and metrics are free-form JSONB
    blobs edited through the admin UI.

    `slug` carries a UNIQUE constraint. The service layer pre-checks it for a
    friendly error, and a constraint violation on flush is reported the same
    way (two admins creating the same center at once).
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.database import Base
from portal.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class ServiceCenter(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A service center or laboratory offering equipment-backed services."""

    __tablename__ = "service_centers"

    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="center", server_default=text("'center'")
    )

    # ── Localized content ─────────────────────────────────────────────────
    headline: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    location: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    lab_methodology: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    future_prospective: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)

    # ── Media & contact ───────────────────────────────────────────────────
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    banner_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # ── Structured blobs ──────────────────────────────────────────────────
    products: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    work_volume: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    company_activity: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    services: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    metrics: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)

    # ── Publishing ────────────────────────────────────────────────────────
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    order_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    # ── Relations ─────────────────────────────────────────────────────────
    equipments: Mapped[List["ServiceCenterEquipment"]] = relationship(
        back_populates="service_center",
        cascade="all, delete-orphan",
        order_by="ServiceCenterEquipment.created_at",
    )
    products_list: Mapped[List["Product"]] = relationship(  # noqa: F821
        back_populates="service_center",
        order_by="Product.order_index",
    )
    staff_links: Mapped[List["ServiceCenterStaff"]] = relationship(
        back_populates="service_center",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ServiceCenter(id={self.id}, slug='{self.slug}')>"


class ServiceCenterEquipment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One piece of equipment listed on a service center page."""

    __tablename__ = "service_center_equipments"

    service_center_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("service_centers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    specifications: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)

    service_center: Mapped[ServiceCenter] = relationship(back_populates="equipments")


class ServiceCenterStaff(UUIDPrimaryKeyMixin, Base):
    """Link between a service center and a staff member."""

    __tablename__ = "service_center_staff"
    __table_args__ = (
        UniqueConstraint("service_center_id", "staff_id", name="uq_service_center_staff"),
    )

    service_center_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("service_centers.id", ondelete="CASCADE"),
        nullable=False,
    )
    staff_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
    )

    service_center: Mapped[ServiceCenter] = relationship(back_populates="staff_links")
    staff: Mapped["Staff"] = relationship()  # noqa: F821
