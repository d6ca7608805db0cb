"""
Institute Portal Backend: Product Service
==========================================

What:  Product listing, lookup and admin writes.
How:   Queries with async SQLAlchemy, hands each row to `transform_product`
       as a plain mapping and returns response-ready dicts.
Who:   Called by the public and admin product routes.

Write flow (create/update):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Coerce  │───▶│  Slug from  │───▶│  Slug free?  │───▶│  Flush   │
    │  scalars │    │  name       │    │  (pre-check) │    │  + reload│
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    The pre-check gives the friendly 409. Two admins saving the same name at
    once both pass it; the UNIQUE constraint then fires on flush and the
    IntegrityError is reported as the same ConflictError.

Error Handling Strategy:
    PortalError subclasses propagate untouched. Anything else is logged and
    wrapped in DatabaseError so clients never see driver messages.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy import Text, cast, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from portal.config import settings
from portal.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    PortalError,
    ValidationError,
)
from portal.i18n import translate
from portal.models import Product, ServiceCenter
from portal.schemas.product import ProductCreate, ProductUpdate
from portal.transforms import (
    extract_localized_value,
    parse_boolean,
    parse_number,
    serialize_json_value,
    slugify,
    transform_product,
)

logger = logging.getLogger(__name__)

# Columns stored as JSON text
_JSON_TEXT_FIELDS = ("images", "tags", "specifications", "features", "sizes")
_PRICE_FIELDS = ("price", "original_price")
_FLAG_DEFAULTS = {"is_featured": False, "is_published": True, "is_available": True}


def product_row(product: Product) -> Dict[str, Any]:
    """
    Mapping handed to `transform_product`: columns plus the owning center
    summary when the relation was eager-loaded.
    """
    row = product.to_dict()
    center = product.__dict__.get("service_center")
    if center is not None:
        row["service_center"] = {
            "id": center.id,
            "name": center.name,
            "slug": center.slug,
            "type": center.type,
            "image": center.image,
            "location": center.location,
        }
    return row


def _parse_uuid(value: Any) -> Optional[uuid.UUID]:
    if value is None or value == "":
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _like_pattern(search: str) -> str:
    """Substring ILIKE pattern with the user's % and _ matched literally."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _slug_source(name: Any) -> str:
    """Text a product slug is built from: the default-locale name."""
    return extract_localized_value(name, settings.default_locale) or ""


class ProductService:
    """
    Business logic for products.

    Responsibilities:
        - list_products(): filtered, offset-paginated listing
        - get_product() / get_product_by_slug(): single lookups
        - create_product() / update_product() / delete_product(): admin writes
    """

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_products(
        self,
        db: AsyncSession,
        locale: Optional[str],
        service_center_id: Optional[str] = None,
        category: Optional[str] = None,
        featured: Optional[str] = None,
        published: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
        admin: bool = False,
    ) -> Dict[str, Any]:
        """
        Products matching the filters, ordered by order_index then newest.

        Public listings show published products only unless `published` is
        given explicitly; admin listings apply `published` only when given.
        Search matches name and short description in any language, and the
        SKU on admin listings.

        Returns:
            {"products": [...], "total": int, "limit": int, "offset": int}
        """
        limit = max(1, min(limit, settings.max_page_size))
        offset = max(0, offset)

        conditions = []
        if service_center_id:
            center_uuid = _parse_uuid(service_center_id)
            if center_uuid is None:
                raise ValidationError(
                    message=translate("service_center.not_found", locale),
                    field="service_center_id",
                )
            conditions.append(Product.service_center_id == center_uuid)
        if category:
            conditions.append(Product.category == category)

        featured_flag = parse_boolean(featured, None)
        if featured_flag is not None:
            conditions.append(Product.is_featured.is_(featured_flag))

        published_flag = parse_boolean(published, None)
        if published_flag is not None:
            conditions.append(Product.is_published.is_(published_flag))
        elif not admin:
            conditions.append(Product.is_published.is_(True))

        if search and search.strip():
            pattern = _like_pattern(search.strip())
            # Localized JSONB columns are matched on their text form so every
            # translation is searched at once
            matchers = [
                cast(Product.name, Text).ilike(pattern, escape="\\"),
                cast(Product.short_description, Text).ilike(pattern, escape="\\"),
                cast(Product.description, Text).ilike(pattern, escape="\\"),
            ]
            if admin:
                matchers.append(Product.sku.ilike(pattern, escape="\\"))
            conditions.append(or_(*matchers))

        try:
            query = (
                select(Product)
                .where(*conditions)
                .options(selectinload(Product.service_center))
                .order_by(Product.order_index.asc(), Product.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await db.execute(query)
            products = list(result.scalars().all())

            count_result = await db.execute(
                select(func.count()).select_from(Product).where(*conditions)
            )
            total = count_result.scalar() or 0
        except Exception as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )

        return {
            "products": [transform_product(product_row(p), locale) for p in products],
            "total": total,
            "limit": limit,
            "offset": offset,
        }

    async def get_product(
        self, db: AsyncSession, product_id: uuid.UUID, locale: Optional[str], admin: bool = False
    ) -> Dict[str, Any]:
        """Single product by id. Unpublished products are only visible to admins."""
        product = await self._load(db, Product.id == product_id, locale)
        if product is None or (not admin and not product.is_published):
            raise NotFoundError(
                resource="product",
                resource_id=str(product_id),
                message=translate("products.not_found", locale),
            )
        return transform_product(product_row(product), locale)

    async def get_product_by_slug(
        self, db: AsyncSession, slug: str, locale: Optional[str]
    ) -> Dict[str, Any]:
        product = await self._load(db, Product.slug == slug, locale)
        if product is None or not product.is_published:
            raise NotFoundError(
                resource="product",
                resource_id=slug,
                message=translate("products.not_found", locale),
            )
        return transform_product(product_row(product), locale)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_product(
        self, db: AsyncSession, body: ProductCreate, locale: Optional[str]
    ) -> Dict[str, Any]:
        """
        Create a product; the slug is derived from the default-locale name.

        Raises:
            ValidationError: missing name, name without any slug characters,
                unknown service center
            ConflictError: another product already has the slug
        """
        data = body.provided()
        if not _slug_source(data.get("name")).strip():
            raise ValidationError(message=translate("products.name_required", locale), field="name")

        slug = slugify(_slug_source(data["name"]))
        if not slug:
            raise ValidationError(message=translate("products.name_required", locale), field="name")

        try:
            await self._ensure_slug_free(db, slug, locale)
            values = await self._column_values(db, data, locale, existing=None)
            product = Product(slug=slug, **values)
            db.add(product)
            await self._flush(db, slug, locale)
            logger.info("Product created: %s (slug=%s)", product.id, slug)
            return transform_product(product_row(await self._reload(db, product.id)), locale)
        except PortalError:
            raise
        except Exception as e:
            logger.error("Unexpected error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )

    async def update_product(
        self,
        db: AsyncSession,
        product_id: uuid.UUID,
        body: ProductUpdate,
        locale: Optional[str],
    ) -> Dict[str, Any]:
        """
        Apply the fields present in `body`.

        A changed name regenerates the slug (checked against every other
        product). Flags, numbers and JSON-text columns go through the same
        coercion as on create, with the current value as the fallback.
        """
        data = body.provided()
        try:
            product = await self._load(db, Product.id == product_id, locale)
            if product is None:
                raise NotFoundError(
                    resource="product",
                    resource_id=str(product_id),
                    message=translate("products.not_found", locale),
                )

            if data.get("name") and data["name"] != product.name:
                slug = slugify(_slug_source(data["name"]))
                if not slug:
                    raise ValidationError(
                        message=translate("products.name_required", locale), field="name"
                    )
                if slug != product.slug:
                    await self._ensure_slug_free(db, slug, locale, exclude_id=product.id)
                    product.slug = slug
            elif "name" in data and not data["name"]:
                # An explicit empty name would leave the product untitled
                data.pop("name")

            values = await self._column_values(db, data, locale, existing=product)
            for key, value in values.items():
                setattr(product, key, value)

            await self._flush(db, product.slug, locale)
            logger.info("Product updated: %s (%d fields)", product.id, len(values))
            return transform_product(product_row(await self._reload(db, product.id)), locale)
        except PortalError:
            raise
        except Exception as e:
            logger.error("Unexpected error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"product_id": str(product_id)},
            )

    async def delete_product(
        self, db: AsyncSession, product_id: uuid.UUID, locale: Optional[str]
    ) -> None:
        try:
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()
            if product is None:
                raise NotFoundError(
                    resource="product",
                    resource_id=str(product_id),
                    message=translate("products.not_found", locale),
                )
            await db.delete(product)
            await db.flush()
            logger.info("Product deleted: %s", product_id)
        except PortalError:
            raise
        except Exception as e:
            logger.error("Unexpected error deleting product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"product_id": str(product_id)},
            )

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, condition, locale: Optional[str]) -> Optional[Product]:
        try:
            result = await db.execute(
                select(Product).where(condition).options(selectinload(Product.service_center))
            )
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )

    async def _reload(self, db: AsyncSession, product_id: uuid.UUID) -> Product:
        """Re-select a just-written product with its service center loaded."""
        result = await db.execute(
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.service_center))
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
        query = select(Product.id).where(Product.slug == slug)
        if exclude_id is not None:
            query = query.where(Product.id != exclude_id)
        result = await db.execute(query)
        if result.scalar_one_or_none() is not None:
            raise ConflictError(message=translate("products.name_already_exists", locale), slug=slug)

    async def _flush(self, db: AsyncSession, slug: str, locale: Optional[str]) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            logger.warning("Product slug '%s' taken by a concurrent write: %s", slug, e.orig)
            raise ConflictError(message=translate("products.name_already_exists", locale), slug=slug)

    async def _column_values(
        self,
        db: AsyncSession,
        data: Dict[str, Any],
        locale: Optional[str],
        existing: Optional[Product],
    ) -> Dict[str, Any]:
        """
        Column values for the provided body fields.

        `existing` supplies fallbacks for unparseable flags and numbers on
        update; on create the column defaults are used.
        """
        values: Dict[str, Any] = {}
        for key in ("name", "description", "short_description"):
            if key in data:
                values[key] = data[key] or None
        for key in ("image", "category", "sku"):
            if key in data:
                values[key] = data[key] or None

        for key in _JSON_TEXT_FIELDS:
            if key in data:
                values[key] = serialize_json_value(data[key])

        for key in _PRICE_FIELDS:
            if key in data:
                values[key] = parse_number(data[key], None)

        if "stock_quantity" in data:
            quantity = parse_number(data["stock_quantity"], None)
            values["stock_quantity"] = int(quantity) if quantity is not None else None

        for key, default in _FLAG_DEFAULTS.items():
            if key in data:
                fallback = getattr(existing, key) if existing is not None else default
                values[key] = parse_boolean(data[key], fallback)

        if "order_index" in data:
            fallback = existing.order_index if existing is not None else 0
            values["order_index"] = int(parse_number(data["order_index"], fallback))

        if "service_center_id" in data:
            values["service_center_id"] = await self._resolve_center(
                db, data["service_center_id"], locale
            )
        return values

    async def _resolve_center(
        self, db: AsyncSession, value: Any, locale: Optional[str]
    ) -> Optional[uuid.UUID]:
        """Validated service center id, or None when the field was cleared."""
        if value is None or value == "":
            return None
        center_id = _parse_uuid(value)
        if center_id is not None:
            result = await db.execute(select(ServiceCenter.id).where(ServiceCenter.id == center_id))
            if result.scalar_one_or_none() is not None:
                return center_id
        raise ValidationError(
            message=translate("service_center.not_found", locale),
            field="service_center_id",
            context={"service_center_id": str(value)},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
