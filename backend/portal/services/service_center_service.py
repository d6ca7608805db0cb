"""
Institute Portal Backend: Service Center Service
=================================================

What:  Service center listing, lookup and admin writes, including the
       equipment list that belongs to each center.
How:   Loads centers with their equipment, related products and staff via
       selectinload, flattens them into the mapping `transform_service_center`
       expects and returns response-ready dicts.
Who:   Called by the public and admin service center routes.

Visibility:
    Public reads only see published centers; `GET /service-centers/{slug}`
    shows an unpublished one only with `?preview=true`. Related products on
    public reads are filtered to published ones in the eager load itself.

Equipment sync:
    Admin bodies carry the whole equipment list. It is normalized with
    `normalize_list_items` (nameless entries dropped) and replaces the
    center's rows wholesale; delete-orphan on the relationship removes the
    old ones on flush.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from portal.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    PortalError,
    ValidationError,
)
from portal.i18n import translate
from portal.models import Product, ServiceCenter, ServiceCenterEquipment, ServiceCenterStaff
from portal.schemas.service_center import ServiceCenterCreate, ServiceCenterUpdate
from portal.services.product_service import product_row
from portal.transforms import (
    extract_localized_value,
    normalize_list_items,
    parse_boolean,
    parse_json_value,
    parse_number,
    slugify,
    transform_service_center,
)

logger = logging.getLogger(__name__)

_LOCALIZED_FIELDS = ("headline", "description", "location", "lab_methodology", "future_prospective")
_NULLABLE_TEXT_FIELDS = ("image", "banner_image", "contact_phone", "contact_email")
# Stored blob → fallback when the submitted value is missing or malformed
_BLOB_FALLBACKS: Dict[str, Any] = {
    "products": [],
    "work_volume": None,
    "company_activity": None,
    "services": [],
    "metrics": None,
}


def _load_options(published_products_only: bool) -> list:
    products = ServiceCenter.products_list
    if published_products_only:
        products = products.and_(Product.is_published.is_(True))
    return [
        selectinload(ServiceCenter.equipments),
        selectinload(products),
        selectinload(ServiceCenter.staff_links).selectinload(ServiceCenterStaff.staff),
    ]


def center_row(center: ServiceCenter) -> Dict[str, Any]:
    """Columns plus the equipment, product and staff relations as mappings."""
    row = center.to_dict()
    row["equipments"] = [equipment.to_dict() for equipment in center.equipments]
    row["products_list"] = [product_row(product) for product in center.products_list]
    row["staff"] = [link.staff.to_dict() for link in center.staff_links if link.staff is not None]
    return row


def _equipment_rows(raw: Any) -> List[ServiceCenterEquipment]:
    return [
        ServiceCenterEquipment(
            name=item["name"],
            description=item["description"],
            image=item["image"],
            specifications=item["specifications"],
        )
        for item in normalize_list_items(raw)
    ]


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


class ServiceCenterService:
    """
    Business logic for service centers.

    Responsibilities:
        - list_centers(): public and admin listings
        - get_center_by_slug(): public detail with preview support
        - get_center_admin(): admin detail by id, falling back to slug
        - create_center() / update_center() / delete_center(): admin writes
    """

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_centers(
        self,
        db: AsyncSession,
        locale: Optional[str],
        featured: Optional[str] = None,
        include_hidden: bool = False,
    ) -> Dict[str, Any]:
        """
        Centers ordered by order_index then newest.

        Args:
            featured: tolerant flag; filters on is_featured when it parses
            include_hidden: admin only; also return unpublished centers
        """
        query = select(ServiceCenter).options(*_load_options(not include_hidden))
        if not include_hidden:
            query = query.where(ServiceCenter.is_published.is_(True))
        featured_flag = parse_boolean(featured, None)
        if featured_flag is not None:
            query = query.where(ServiceCenter.is_featured.is_(featured_flag))
        query = query.order_by(ServiceCenter.order_index.asc(), ServiceCenter.created_at.desc())

        try:
            result = await db.execute(query)
            centers = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing service centers: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )

        return {
            "centers": [transform_service_center(center_row(c), locale) for c in centers],
            "total": len(centers),
        }

    async def get_center_by_slug(
        self,
        db: AsyncSession,
        slug: str,
        locale: Optional[str],
        preview: bool = False,
    ) -> Dict[str, Any]:
        """Published center by slug; unpublished ones only when previewing."""
        center = await self._find(db, ServiceCenter.slug == slug, locale, public=True)
        if center is None or (not center.is_published and not preview):
            raise NotFoundError(
                resource="service center",
                resource_id=slug,
                message=translate("service_center.not_found", locale),
            )
        return transform_service_center(center_row(center), locale)

    async def get_center_admin(
        self, db: AsyncSession, id_or_slug: str, locale: Optional[str]
    ) -> Dict[str, Any]:
        """Any center, looked up by id first and then by slug."""
        center = None
        center_id = _parse_uuid(id_or_slug)
        if center_id is not None:
            center = await self._find(db, ServiceCenter.id == center_id, locale)
        if center is None:
            center = await self._find(db, ServiceCenter.slug == id_or_slug, locale)
        if center is None:
            raise NotFoundError(
                resource="service center",
                resource_id=id_or_slug,
                message=translate("service_center.not_found", locale),
            )
        return transform_service_center(center_row(center), locale)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_center(
        self, db: AsyncSession, body: ServiceCenterCreate, locale: Optional[str]
    ) -> Dict[str, Any]:
        """
        Create a center and its equipment rows.

        Raises:
            ValidationError: missing name, or neither slug nor name yields a slug
            ConflictError: the slug is taken
        """
        data = body.provided()
        name = data.get("name")
        if not name:
            raise ValidationError(message=translate("service_center.name_required", locale), field="name")

        slug = slugify(data.get("slug") or extract_localized_value(name, None) or "")
        if not slug:
            raise ValidationError(message=translate("service_center.invalid_slug", locale), field="slug")

        try:
            await self._ensure_slug_free(db, slug, locale)
            center = ServiceCenter(
                name=name,
                slug=slug,
                type=data.get("type") or "center",
                is_featured=parse_boolean(data.get("is_featured"), False),
                is_published=parse_boolean(data.get("is_published"), True),
                order_index=int(parse_number(data.get("order_index"), 0)),
                equipments=_equipment_rows(data.get("equipments")),
                **self._content_values(data),
            )
            for field, fallback in _BLOB_FALLBACKS.items():
                setattr(center, field, parse_json_value(data.get(field), fallback))

            db.add(center)
            await self._flush(db, slug, locale)
            logger.info(
                "Service center created: %s (slug=%s, %d equipment)",
                center.id, slug, len(center.equipments),
            )
            return transform_service_center(center_row(await self._reload(db, center.id)), locale)
        except PortalError:
            raise
        except Exception as e:
            logger.error("Unexpected error creating service center: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )

    async def update_center(
        self,
        db: AsyncSession,
        center_id: uuid.UUID,
        body: ServiceCenterUpdate,
        locale: Optional[str],
    ) -> Dict[str, Any]:
        """
        Apply the fields present in `body`.

        An explicit `slug` is re-slugified and checked against other centers.
        Flags and numbers that fail to parse keep their current values.
        A present `equipments` key replaces the equipment list.
        """
        data = body.provided()
        try:
            center = await self._find(db, ServiceCenter.id == center_id, locale)
            if center is None:
                raise NotFoundError(
                    resource="service center",
                    resource_id=str(center_id),
                    message=translate("service_center.not_found", locale),
                )

            if "slug" in data:
                slug = slugify(data["slug"] or "")
                if not slug:
                    raise ValidationError(
                        message=translate("service_center.invalid_slug", locale), field="slug"
                    )
                if slug != center.slug:
                    await self._ensure_slug_free(db, slug, locale, exclude_id=center.id)
                    center.slug = slug

            if data.get("name"):
                center.name = data["name"]
            if data.get("type"):
                center.type = data["type"]
            for key, value in self._content_values(data).items():
                setattr(center, key, value)
            for field, fallback in _BLOB_FALLBACKS.items():
                if field in data:
                    setattr(center, field, parse_json_value(data[field], fallback))

            if "is_featured" in data:
                center.is_featured = parse_boolean(data["is_featured"], center.is_featured)
            if "is_published" in data:
                center.is_published = parse_boolean(data["is_published"], center.is_published)
            if "order_index" in data:
                center.order_index = int(parse_number(data["order_index"], center.order_index))

            if "equipments" in data:
                center.equipments = _equipment_rows(data["equipments"])
                logger.info(
                    "Replaced equipment of service center %s (%d items)",
                    center.id, len(center.equipments),
                )

            await self._flush(db, center.slug, locale)
            logger.info("Service center updated: %s", center.id)
            return transform_service_center(center_row(await self._reload(db, center.id)), locale)
        except PortalError:
            raise
        except Exception as e:
            logger.error(
                "Unexpected error updating service center %s: %s", center_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"service_center_id": str(center_id)},
            )

    async def delete_center(
        self, db: AsyncSession, center_id: uuid.UUID, locale: Optional[str]
    ) -> None:
        """Delete a center; equipment and staff links cascade, products are detached."""
        try:
            result = await db.execute(select(ServiceCenter).where(ServiceCenter.id == center_id))
            center = result.scalar_one_or_none()
            if center is None:
                raise NotFoundError(
                    resource="service center",
                    resource_id=str(center_id),
                    message=translate("service_center.not_found", locale),
                )
            await db.delete(center)
            await db.flush()
            logger.info("Service center deleted: %s", center_id)
        except PortalError:
            raise
        except Exception as e:
            logger.error(
                "Unexpected error deleting service center %s: %s", center_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"service_center_id": str(center_id)},
            )

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _content_values(data: Dict[str, Any]) -> Dict[str, Any]:
        """Localized and plain text columns present in the body; blanks become NULL."""
        values = {}
        for key in _LOCALIZED_FIELDS + _NULLABLE_TEXT_FIELDS:
            if key in data:
                values[key] = data[key] or None
        return values

    async def _find(
        self, db: AsyncSession, condition, locale: Optional[str], public: bool = False
    ) -> Optional[ServiceCenter]:
        try:
            result = await db.execute(
                select(ServiceCenter).where(condition).options(*_load_options(public))
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching service center: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )

    async def _reload(self, db: AsyncSession, center_id: uuid.UUID) -> ServiceCenter:
        result = await db.execute(
            select(ServiceCenter)
            .where(ServiceCenter.id == center_id)
            .options(*_load_options(False))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def _ensure_slug_free(
        self,
        db: AsyncSession,
        slug: str,
        locale: Optional[str],
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        query = select(ServiceCenter.id).where(ServiceCenter.slug == slug)
        if exclude_id is not None:
            query = query.where(ServiceCenter.id != exclude_id)
        result = await db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise ConflictError(message=translate("service_center.slug_exists", locale), slug=slug)

    async def _flush(self, db: AsyncSession, slug: str, locale: Optional[str]) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.warning("Service center slug '%s' taken by a concurrent write: %s", slug, e.orig)
            raise ConflictError(message=translate("service_center.slug_exists", locale), slug=slug)


# ── Singleton Instance ────────────────────────────────────────────────────
service_center_service = ServiceCenterService()
