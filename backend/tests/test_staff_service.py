"""
Staff & Catalogue Service Unit Tests
=====================================

What we test:
    ✅ Department staff merged with laboratory-only staff, affiliations attached
    ✅ Laboratory staff carry their lab position
    ✅ Missing department / laboratory → NotFoundError
    ✅ Published catalogue services listed and looked up
"""

import uuid

import pytest

from conftest import build_result
from factories import make_department, make_laboratory, make_service, make_staff
from portal.exceptions import NotFoundError
from portal.models import DepartmentStaff, LaboratoryStaff
from portal.services.catalog_service import CatalogService
from portal.services.staff_service import StaffService


class TestDepartmentStaff:

    def setup_method(self):
        self.service = StaffService()
        self.head = make_staff()
        self.technician = make_staff(name={"en": "Omar Nabil", "ar": "عمر نبيل"}, title=None)
        self.department = make_department()

    @pytest.mark.asyncio
    async def test_merges_department_and_laboratory_staff(self, mock_db_session):
        laboratory = make_laboratory(members=[(self.technician, "Technician"), (self.head, "Head")])
        mock_db_session.get.return_value = self.department
        mock_db_session.execute.side_effect = [
            build_result(scalars=[DepartmentStaff(id=uuid.uuid4(), staff=self.head)]),
            build_result(scalars=[laboratory]),
        ]

        staff = await self.service.department_staff(mock_db_session, self.department.id, "ar")

        assert [s["name"] for s in staff] == ["د. سارة علي", "عمر نبيل"]
        assert staff[0]["is_department_staff"] is True
        assert staff[0]["laboratories"] == [
            {"id": laboratory.id, "name": "معمل البوليمرات", "position": "Head"}
        ]
        assert staff[1]["is_department_staff"] is False
        assert staff[1]["title"] == ""

    @pytest.mark.asyncio
    async def test_admin_locale_keeps_lab_name_mapping(self, mock_db_session):
        laboratory = make_laboratory(members=[(self.technician, None)])
        mock_db_session.get.return_value = self.department
        mock_db_session.execute.side_effect = [build_result(), build_result(scalars=[laboratory])]

        staff = await self.service.department_staff(mock_db_session, self.department.id, None)

        assert staff[0]["laboratories"][0]["name"] == {"en": "Polymer Lab", "ar": "معمل البوليمرات"}

    @pytest.mark.asyncio
    async def test_missing_department(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.department_staff(mock_db_session, uuid.uuid4(), "en")

        assert exc_info.value.message == "Department not found"
        mock_db_session.execute.assert_not_awaited()


class TestLaboratoryStaff:

    def setup_method(self):
        self.service = StaffService()

    @pytest.mark.asyncio
    async def test_lab_position_is_attached(self, mock_db_session):
        staff = make_staff()
        laboratory = make_laboratory()
        mock_db_session.get.return_value = laboratory
        mock_db_session.execute.return_value = build_result(
            scalars=[LaboratoryStaff(id=uuid.uuid4(), staff=staff, position="Head")]
        )

        result = await self.service.laboratory_staff(mock_db_session, laboratory.id, "en")

        assert len(result) == 1
        assert result[0]["id"] == staff.id
        assert result[0]["name"] == "Dr. Sara Ali"
        assert result[0]["lab_position"] == "Head"

    @pytest.mark.asyncio
    async def test_missing_laboratory(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.laboratory_staff(mock_db_session, uuid.uuid4(), "ar")


class TestCatalogService:

    def setup_method(self):
        self.service = CatalogService()

    @pytest.mark.asyncio
    async def test_list_services(self, mock_db_session):
        mock_db_session.execute.return_value = build_result(scalars=[make_service()])

        result = await self.service.list_services(mock_db_session, "en")

        assert result["total"] == 1
        assert result["services"][0]["features"] == ["Phase ID", "Crystallinity"]

    @pytest.mark.asyncio
    async def test_unpublished_service_is_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = build_result(scalar=make_service(is_published=False))

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_service(mock_db_session, uuid.uuid4(), "ar")

        assert exc_info.value.message == "الخدمة غير موجودة"
