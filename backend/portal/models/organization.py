"""
Organization models: departments, laboratories, staff and their links.

Staff name/title/bio fields are localized JSONB. A staff member can be
attached to a department directly and to any number of laboratories, with a
per-laboratory position.
"""

import uuid
from typing import Any, List, Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.database import Base
from portal.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Department(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "departments"

    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    laboratories: Mapped[List["Laboratory"]] = relationship(back_populates="department")
    staff_links: Mapped[List["DepartmentStaff"]] = relationship(
        back_populates="department",
        cascade="all, delete-orphan",
    )


class Laboratory(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "laboratories"

    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    description: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    department_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    department: Mapped[Optional[Department]] = relationship(back_populates="laboratories")
    staff_links: Mapped[List["LaboratoryStaff"]] = relationship(
        back_populates="laboratory",
        cascade="all, delete-orphan",
    )


class Staff(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "staff"

    name: Mapped[Any] = mapped_column(JSONB, nullable=False)
    title: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    academic_position: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    current_admin_position: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    bio: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    research_interests: Mapped[Optional[Any]] = mapped_column(JSONB, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    picture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class DepartmentStaff(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "department_staff"
    __table_args__ = (UniqueConstraint("department_id", "staff_id", name="uq_department_staff"),)

    department_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
    )
    staff_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
    )

    department: Mapped[Department] = relationship(back_populates="staff_links")
    staff: Mapped[Staff] = relationship()


class LaboratoryStaff(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "laboratory_staff"
    __table_args__ = (UniqueConstraint("laboratory_id", "staff_id", name="uq_laboratory_staff"),)

    laboratory_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("laboratories.id", ondelete="CASCADE"),
        nullable=False,
    )
    staff_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("staff.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    laboratory: Mapped[Laboratory] = relationship(back_populates="staff_links")
    staff: Mapped[Staff] = relationship()
