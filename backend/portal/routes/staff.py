"""
Staff listing routes for department and laboratory pages.

A person working in two laboratories of a department appears once in the
department listing, with both laboratories under `laboratories`.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.database import get_db_session
from portal.i18n import get_request_locale
from portal.schemas.common import ErrorResponse
from portal.schemas.staff import DepartmentStaffResponse, LaboratoryStaffResponse
from portal.services.staff_service import staff_service

router = APIRouter(prefix="/api", tags=["Staff"])


@router.get(
    "/departments/{department_id}/staff",
    response_model=DepartmentStaffResponse,
    responses={
        404: {"description": "Department not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Staff of a department with laboratory affiliations",
)
async def department_staff(
    department_id: UUID,
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"staff": await staff_service.department_staff(db=db, department_id=department_id, locale=locale)}


@router.get(
    "/laboratories/{laboratory_id}/staff",
    response_model=LaboratoryStaffResponse,
    responses={
        404: {"description": "Laboratory not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Staff of a laboratory with their positions",
)
async def laboratory_staff(
    laboratory_id: UUID,
    locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"staff": await staff_service.laboratory_staff(db=db, laboratory_id=laboratory_id, locale=locale)}
