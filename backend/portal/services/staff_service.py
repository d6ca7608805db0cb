"""
Institute Portal Backend: Staff Service
========================================

What:  Staff listings for department and laboratory pages.
How:   A department page lists its direct staff plus everyone working in one
       of its laboratories. `build_affiliation_index` merges both sources by
       staff id, then each entry is localized with `transform_staff_member`.

Department staff response item:
    {
        ...staff fields (localized),
        "is_department_staff": true,
        "laboratories": [{"id": ..., "name": "Polymer Lab", "position": "Head"}]
    }
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from portal.exceptions import DatabaseError, NotFoundError, PortalError
from portal.i18n import translate
from portal.models import Department, DepartmentStaff, Laboratory, LaboratoryStaff
from portal.transforms import build_affiliation_index, extract_localized_value, transform_staff_member

logger = logging.getLogger(__name__)


class StaffService:
    """Department and laboratory staff listings."""

    async def department_staff(
        self, db: AsyncSession, department_id: uuid.UUID, locale: Optional[str]
    ) -> List[Dict[str, Any]]:
        """
        Unique staff of a department with their laboratory affiliations.

        Direct department staff come first, then laboratory-only staff in the
        order their laboratories are listed.

        Raises:
            NotFoundError: the department does not exist
        """
        try:
            department = await db.get(Department, department_id)
            if department is None:
                raise NotFoundError(
                    resource="department",
                    resource_id=str(department_id),
                    message=translate("departments.not_found", locale),
                )

            links_result = await db.execute(
                select(DepartmentStaff)
                .where(DepartmentStaff.department_id == department_id)
                .options(selectinload(DepartmentStaff.staff))
            )
            labs_result = await db.execute(
                select(Laboratory)
                .where(Laboratory.department_id == department_id)
                .options(selectinload(Laboratory.staff_links).selectinload(LaboratoryStaff.staff))
                .order_by(Laboratory.created_at.asc())
            )
            department_links = list(links_result.scalars().all())
            laboratories = list(labs_result.scalars().all())
        except PortalError:
            raise
        except Exception as e:
            logger.error(
                "Database error fetching staff of department %s: %s", department_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"department_id": str(department_id)},
            )

        index = build_affiliation_index(
            [link.staff.to_dict() for link in department_links if link.staff is not None],
            [
                {
                    "id": lab.id,
                    "name": extract_localized_value(lab.name, locale) if locale else lab.name,
                    "members": [
                        {"staff": link.staff.to_dict(), "position": link.position}
                        for link in lab.staff_links
                        if link.staff is not None
                    ],
                }
                for lab in laboratories
            ],
        )
        logger.debug(
            "Department %s: %d staff from %d laboratories", department_id, len(index), len(laboratories)
        )
        return [transform_staff_member(entry, locale) for entry in index.values()]

    async def laboratory_staff(
        self, db: AsyncSession, laboratory_id: uuid.UUID, locale: Optional[str]
    ) -> List[Dict[str, Any]]:
        """Staff of one laboratory, each with its `lab_position`."""
        try:
            laboratory = await db.get(Laboratory, laboratory_id)
            if laboratory is None:
                raise NotFoundError(
                    resource="laboratory",
                    resource_id=str(laboratory_id),
                    message=translate("laboratories.not_found", locale),
                )
            result = await db.execute(
                select(LaboratoryStaff)
                .where(LaboratoryStaff.laboratory_id == laboratory_id)
                .options(selectinload(LaboratoryStaff.staff))
            )
            links = list(result.scalars().all())
        except PortalError:
            raise
        except Exception as e:
            logger.error(
                "Database error fetching staff of laboratory %s: %s", laboratory_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"laboratory_id": str(laboratory_id)},
            )

        return [
            {**transform_staff_member(link.staff.to_dict(), locale), "lab_position": link.position}
            for link in links
            if link.staff is not None
        ]


staff_service = StaffService()
