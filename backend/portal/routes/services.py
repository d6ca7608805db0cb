"""Catalogue service routes: GET /api/services and GET /api/services/{id}."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.database import get_db_session
from portal.i18n import get_request_locale
from portal.schemas.common import ErrorResponse
from portal.schemas.service import ServiceEnvelope, ServiceListResponse
from portal.services.catalog_service import catalog_service

router = APIRouter(prefix="/api", tags=["Services"])


@router.get(
    "/services",
    response_model=ServiceListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List published catalogue services",
)
async def list_services(
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return await catalog_service.list_services(db=db, locale=locale)


@router.get(
    "/services/{service_id}",
    response_model=ServiceEnvelope,
    responses={
        404: {"description": "Service not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a catalogue service",
)
async def get_service(
    service_id: UUID,
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"service": await catalog_service.get_service(db=db, service_id=service_id, locale=locale)}
