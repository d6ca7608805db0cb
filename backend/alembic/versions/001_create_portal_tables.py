"""Create portal tables

Revision ID: 001
Revises: None
Create Date: 2025-03-02 00:00:00.000000+00:00

What:  Creates the organization, service center, product and catalogue
       service tables.
How:   UUID primary keys generated server-side, TIMESTAMP WITH TIME ZONE,
       JSONB for localized text and free-form blobs, TEXT for the JSON-text
       columns read through the transform layer.

Rollback: downgrade() drops every table (destructive, all data lost).
"""

from typing import List, Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
        nullable=False,
    )


def _timestamps() -> List[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _fk(name: str, target: str, ondelete: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
    )


def _flag(name: str, default: bool) -> sa.Column:
    return sa.Column(
        name, sa.Boolean(), nullable=False, server_default=sa.text("true" if default else "false")
    )


def upgrade() -> None:
    # ── Organization ──────────────────────────────────────────────────────
    op.create_table(
        "departments",
        _id(),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "laboratories",
        _id(),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        _fk("department_id", "departments.id", "SET NULL", nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_laboratories_department_id", "laboratories", ["department_id"])

    op.create_table(
        "staff",
        _id(),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("title", postgresql.JSONB(), nullable=True),
        sa.Column("academic_position", postgresql.JSONB(), nullable=True),
        sa.Column("current_admin_position", postgresql.JSONB(), nullable=True),
        sa.Column("bio", postgresql.JSONB(), nullable=True),
        sa.Column("research_interests", postgresql.JSONB(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("picture", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "department_staff",
        _id(),
        _fk("department_id", "departments.id", "CASCADE"),
        _fk("staff_id", "staff.id", "CASCADE"),
        sa.UniqueConstraint("department_id", "staff_id", name="uq_department_staff"),
    )
    op.create_table(
        "laboratory_staff",
        _id(),
        _fk("laboratory_id", "laboratories.id", "CASCADE"),
        _fk("staff_id", "staff.id", "CASCADE"),
        sa.Column("position", sa.String(255), nullable=True),
        sa.UniqueConstraint("laboratory_id", "staff_id", name="uq_laboratory_staff"),
    )

    # ── Service centers ───────────────────────────────────────────────────
    op.create_table(
        "service_centers",
        _id(),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("type", sa.String(50), nullable=False, server_default=sa.text("'center'")),
        sa.Column("headline", postgresql.JSONB(), nullable=True),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("location", postgresql.JSONB(), nullable=True),
        sa.Column("lab_methodology", postgresql.JSONB(), nullable=True),
        sa.Column("future_prospective", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("banner_image", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("products", postgresql.JSONB(), nullable=True),
        sa.Column("work_volume", postgresql.JSONB(), nullable=True),
        sa.Column("company_activity", postgresql.JSONB(), nullable=True),
        sa.Column("services", postgresql.JSONB(), nullable=True),
        sa.Column("metrics", postgresql.JSONB(), nullable=True),
        _flag("is_featured", False),
        _flag("is_published", True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
    )
    op.create_table(
        "service_center_equipments",
        _id(),
        _fk("service_center_id", "service_centers.id", "CASCADE"),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("specifications", postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_service_center_equipments_service_center_id",
        "service_center_equipments",
        ["service_center_id"],
    )
    op.create_table(
        "service_center_staff",
        _id(),
        _fk("service_center_id", "service_centers.id", "CASCADE"),
        _fk("staff_id", "staff.id", "CASCADE"),
        sa.UniqueConstraint("service_center_id", "staff_id", name="uq_service_center_staff"),
    )

    # ── Products ──────────────────────────────────────────────────────────
    op.create_table(
        "products",
        _id(),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("short_description", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("images", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("original_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("specifications", sa.Text(), nullable=True),
        sa.Column("features", sa.Text(), nullable=True),
        sa.Column("sizes", sa.Text(), nullable=True),
        sa.Column("stock_quantity", sa.Integer(), nullable=True),
        sa.Column("sku", sa.String(100), nullable=True),
        _flag("is_featured", False),
        _flag("is_published", True),
        _flag("is_available", True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default=sa.text("0")),
        _fk("service_center_id", "service_centers.id", "SET NULL", nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "idx_products_center_published", "products", ["service_center_id", "is_published"]
    )
    op.create_index("idx_products_category", "products", ["category"])

    # ── Catalogue services ────────────────────────────────────────────────
    op.create_table(
        "service_center_heads",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("picture", sa.Text(), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("expertise", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "services",
        _id(),
        sa.Column("title", postgresql.JSONB(), nullable=False),
        sa.Column("subtitle", postgresql.JSONB(), nullable=True),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("price", sa.String(100), nullable=True),
        sa.Column("duration", sa.String(100), nullable=True),
        sa.Column("features", sa.Text(), nullable=True),
        _flag("is_featured", False),
        _flag("is_published", True),
        _fk("center_head_id", "service_center_heads.id", "SET NULL", nullable=True),
        *_timestamps(),
    )
    op.create_table(
        "service_equipment",
        _id(),
        _fk("service_id", "services.id", "CASCADE"),
        sa.Column("name", postgresql.JSONB(), nullable=False),
        sa.Column("description", postgresql.JSONB(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("specifications", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_service_equipment_service_id", "service_equipment", ["service_id"])


def downgrade() -> None:
    op.drop_table("service_equipment")
    op.drop_table("services")
    op.drop_table("service_center_heads")
    op.drop_index("idx_products_category", table_name="products")
    op.drop_index("idx_products_center_published", table_name="products")
    op.drop_table("products")
    op.drop_table("service_center_staff")
    op.drop_table("service_center_equipments")
    op.drop_table("service_centers")
    op.drop_table("laboratory_staff")
    op.drop_table("department_staff")
    op.drop_table("staff")
    op.drop_table("laboratories")
    op.drop_table("departments")
