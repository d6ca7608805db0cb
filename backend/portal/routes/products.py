"""
Institute Portal Backend: Product Route Handlers
=================================================

What:  Public product catalogue and admin product management.
How:   Extracts query/body data, delegates to ProductService, returns JSON.

Route Inventory:
    GET    /api/products                  public listing (published only by default)
    GET    /api/products/{id}             public detail
    GET    /api/products/slug/{slug}      public detail by slug
    GET    /api/admin/products            admin listing (includes unpublished)
    GET    /api/admin/products/{id}       admin detail
    POST   /api/admin/products            create (201)
    PUT    /api/admin/products/{id}       partial update
    DELETE /api/admin/products/{id}       delete

Locale:
    Public routes always localize. Admin routes return the stored
    {"en": ..., "ar": ...} mappings unless `?lang=` is given.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import settings
from portal.database import get_db_session
from portal.i18n import get_admin_locale, get_request_locale, translate
from portal.schemas.common import ErrorResponse, MessageResponse
from portal.schemas.product import (
    ProductCreate,
    ProductEnvelope,
    ProductListResponse,
    ProductUpdate,
)
from portal.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])

_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


def _filters(
    service_center_id: Optional[str] = Query(default=None, description="Only products of this service center"),
    category: Optional[str] = Query(default=None),
    featured: Optional[str] = Query(default=None, description="'true'/'false'; omitted means no filter"),
    published: Optional[str] = Query(default=None, description="'true'/'false'"),
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name and descriptions"),
    limit: int = Query(default=20, ge=1, le=settings.max_page_size),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return {
        "service_center_id": service_center_id,
        "category": category,
        "featured": featured,
        "published": published,
        "search": search,
        "limit": limit,
        "offset": offset,
    }


# ── Public ────────────────────────────────────────────────────────────────


@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}, **_SERVER_ERROR},
    summary="List products",
    description=(
        "Offset-paginated product catalogue. Only published products are "
        "returned unless `published` is given explicitly."
    ),
)
async def list_products(
    response: Response,
    filters: dict = Depends(_filters),
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    result = await product_service.list_products(db=db, locale=locale, **filters)
    response.headers["X-Total-Count"] = str(result["total"])
    return result


@router.get(
    "/products/slug/{slug}",
    response_model=ProductEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a published product by slug",
)
async def get_product_by_slug(
    slug: str,
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"product": await product_service.get_product_by_slug(db=db, slug=slug, locale=locale)}


@router.get(
    "/products/{product_id}",
    response_model=ProductEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a published product by ID",
)
async def get_product(
    product_id: UUID,
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"product": await product_service.get_product(db=db, product_id=product_id, locale=locale)}


# ── Admin ─────────────────────────────────────────────────────────────────


@router.get(
    "/admin/products",
    response_model=ProductListResponse,
    responses={**_SERVER_ERROR},
    summary="List products (admin)",
    description="Includes unpublished products; search also matches the SKU.",
)
async def admin_list_products(
    filters: dict = Depends(_filters),
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return await product_service.list_products(db=db, locale=locale, admin=True, **filters)


@router.get(
    "/admin/products/{product_id}",
    response_model=ProductEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get any product by ID (admin)",
)
async def admin_get_product(
    product_id: UUID,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    product = await product_service.get_product(db=db, product_id=product_id, locale=locale, admin=True)
    return {"product": product}


@router.post(
    "/admin/products",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing name or unknown service center", "model": ErrorResponse},
        409: {"description": "Slug already taken", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Create a product",
)
async def create_product(
    body: ProductCreate,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    product = await product_service.create_product(db=db, body=body, locale=locale)
    return {"message": translate("products.created", locale), "product": product}


@router.put(
    "/admin/products/{product_id}",
    response_model=ProductEnvelope,
    responses={
        400: {"model": ErrorResponse},
        409: {"description": "Slug already taken", "model": ErrorResponse},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Update a product",
    description="Only fields present in the body are changed. A new name regenerates the slug.",
)
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    product = await product_service.update_product(db=db, product_id=product_id, body=body, locale=locale)
    return {"message": translate("products.updated", locale), "product": product}


@router.delete(
    "/admin/products/{product_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a product",
)
async def delete_product(
    product_id: UUID,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    await product_service.delete_product(db=db, product_id=product_id, locale=locale)
    return {"message": translate("products.deleted", locale)}
