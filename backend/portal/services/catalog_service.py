"""
Catalogue services: the testing/analysis services offered to external
clients, each with its equipment and the person heading it.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from portal.exceptions import DatabaseError, NotFoundError
from portal.i18n import translate
from portal.models import Service
from portal.transforms import transform_service

logger = logging.getLogger(__name__)


def service_row(service: Service) -> Dict[str, Any]:
    row = service.to_dict()
    row["equipment"] = [equipment.to_dict() for equipment in service.equipment]
    row["center_head"] = service.center_head.to_dict() if service.center_head else None
    return row


class CatalogService:
    """Read-only access to published catalogue services."""

    _options = (selectinload(Service.equipment), selectinload(Service.center_head))

    async def list_services(self, db: AsyncSession, locale: Optional[str]) -> Dict[str, Any]:
        """Published services, featured first, then newest."""
        try:
            result = await db.execute(
                select(Service)
                .where(Service.is_published.is_(True))
                .options(*self._options)
                .order_by(Service.is_featured.desc(), Service.created_at.desc())
            )
            services = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing services: %s", str(e), exc_info=True)
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"error_type": type(e).__name__},
            )
        return {
            "services": [transform_service(service_row(s), locale) for s in services],
            "total": len(services),
        }

    async def get_service(
        self, db: AsyncSession, service_id: uuid.UUID, locale: Optional[str]
    ) -> Dict[str, Any]:
        try:
            result = await db.execute(
                select(Service).where(Service.id == service_id).options(*self._options)
            )
            service = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching service %s: %s", service_id, str(e))
            raise DatabaseError(
                message=translate("common.server_error", locale),
                context={"service_id": str(service_id)},
            )
        if service is None or not service.is_published:
            raise NotFoundError(
                resource="service",
                resource_id=str(service_id),
                message=translate("services.not_found", locale),
            )
        return transform_service(service_row(service), locale)


catalog_service = CatalogService()
