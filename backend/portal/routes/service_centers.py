"""
Institute Portal Backend: Service Center Route Handlers
========================================================

Route Inventory:
    GET    /api/service-centers                     published centers
    GET    /api/service-centers/{slug}?preview=     one center (preview shows unpublished)
    GET    /api/admin/service-centers               admin listing (?include_hidden=true for all)
    GET    /api/admin/service-centers/{id_or_slug}  admin detail, id first then slug
    POST   /api/admin/service-centers               create with equipment (201)
    PUT    /api/admin/service-centers/{id}          partial update, equipment replaced if sent
    DELETE /api/admin/service-centers/{id}          delete
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.database import get_db_session
from portal.i18n import get_admin_locale, get_request_locale, translate
from portal.schemas.common import ErrorResponse, MessageResponse
from portal.schemas.service_center import (
    CenterEnvelope,
    CenterListResponse,
    ServiceCenterCreate,
    ServiceCenterUpdate,
)
from portal.services.service_center_service import service_center_service
from portal.transforms import parse_boolean

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Service Centers"])

_NOT_FOUND = {404: {"description": "Service center not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


@router.get(
    "/service-centers",
    response_model=CenterListResponse,
    responses={**_SERVER_ERROR},
    summary="List published service centers",
)
async def list_service_centers(
    featured: Optional[str] = Query(default=None, description="'true'/'false'; omitted means no filter"),
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return await service_center_service.list_centers(db=db, locale=locale, featured=featured)


@router.get(
    "/service-centers/{slug}",
    response_model=CenterEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a service center by slug",
    description="Unpublished centers answer 404 unless `preview=true`.",
)
async def get_service_center(
    slug: str,
    preview: Optional[str] = Query(default=None),
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    center = await service_center_service.get_center_by_slug(
        db=db, slug=slug, locale=locale, preview=parse_boolean(preview, False)
    )
    return {"center": center}


# ── Admin ─────────────────────────────────────────────────────────────────


@router.get(
    "/admin/service-centers",
    response_model=CenterListResponse,
    responses={**_SERVER_ERROR},
    summary="List service centers (admin)",
)
async def admin_list_service_centers(
    include_hidden: Optional[str] = Query(
        default=None, description="'true' to include unpublished centers"
    ),
    include_hidden_camel: Optional[str] = Query(
        default=None, alias="includeHidden", include_in_schema=False
    ),
    featured: Optional[str] = Query(default=None),
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    hidden = include_hidden if include_hidden is not None else include_hidden_camel
    return await service_center_service.list_centers(
        db=db,
        locale=locale,
        featured=featured,
        include_hidden=bool(parse_boolean(hidden, False)),
    )


@router.get(
    "/admin/service-centers/{id_or_slug}",
    response_model=CenterEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get any service center by ID or slug (admin)",
)
async def admin_get_service_center(
    id_or_slug: str,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"center": await service_center_service.get_center_admin(db=db, id_or_slug=id_or_slug, locale=locale)}


@router.post(
    "/admin/service-centers",
    response_model=CenterEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing name or invalid slug", "model": ErrorResponse},
        409: {"description": "Slug already taken", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Create a service center",
)
async def create_service_center(
    body: ServiceCenterCreate,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    center = await service_center_service.create_center(db=db, body=body, locale=locale)
    return {"message": translate("service_center.created", locale), "center": center}


@router.put(
    "/admin/service-centers/{center_id}",
    response_model=CenterEnvelope,
    responses={
        400: {"model": ErrorResponse},
        409: {"description": "Slug already taken", "model": ErrorResponse},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Update a service center",
)
async def update_service_center(
    center_id: UUID,
    body: ServiceCenterUpdate,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    center = await service_center_service.update_center(db=db, center_id=center_id, body=body, locale=locale)
    return {"message": translate("service_center.updated", locale), "center": center}


@router.delete(
    "/admin/service-centers/{center_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a service center",
)
async def delete_service_center(
    center_id: UUID,
    locale: Optional[str] = Depends(get_admin_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    await service_center_service.delete_center(db=db, center_id=center_id, locale=locale)
    return {"message": translate("service_center.deleted", locale)}
