"""
API Route Tests
================

What:  Exercises the HTTP layer through httpx.ASGITransport with the service
       singletons patched, so only routing, locale resolution, response
       models and error mapping are under test.

What we test:
    ✅ Status codes: 200 / 201 / 400 / 404 / 409 / 503
    ✅ Error envelope {error, message, details, request_id}
    ✅ X-Request-ID propagation and Content-Language
    ✅ Public routes localize, admin routes only with ?lang=
    ✅ Loose admin query flags (includeHidden, preview)
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from factories import make_center, make_laboratory, make_product, make_service, make_staff
from portal.exceptions import ConflictError, NotFoundError, ValidationError
from portal.services.catalog_service import service_row
from portal.services.product_service import product_row
from portal.services.service_center_service import center_row
from portal.transforms import transform_product, transform_service, transform_service_center


class TestProductRoutes:

    def setup_method(self):
        self.product = transform_product(product_row(make_product()), "en")

    @pytest.mark.asyncio
    async def test_list_products(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.list_products = AsyncMock(return_value={
                "products": [self.product], "total": 41, "limit": 20, "offset": 0,
            })

            response = await test_client.get("/api/products?featured=true&search=kit")

        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "41"
        body = response.json()
        assert body["total"] == 41
        assert body["products"][0]["slug"] == "soil-test-kit"
        assert body["products"][0]["sizes"] == []
        kwargs = mock_service.list_products.call_args.kwargs
        assert kwargs["featured"] == "true"
        assert kwargs["search"] == "kit"
        assert kwargs["locale"] == "en"

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_rejected(self, test_client):
        response = await test_client.get("/api/products?limit=1000")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_slug_route_is_not_shadowed_by_id_route(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.get_product_by_slug = AsyncMock(return_value=self.product)

            response = await test_client.get("/api/products/slug/soil-test-kit")

        assert response.status_code == 200
        assert response.json()["product"]["name"] == "Soil Test Kit"
        mock_service.get_product_by_slug.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_accept_language_localizes(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.get_product = AsyncMock(return_value=self.product)

            response = await test_client.get(
                f"/api/products/{uuid.uuid4()}",
                headers={"Accept-Language": "ar-EG,ar;q=0.9,en;q=0.5"},
            )

        assert response.status_code == 200
        assert response.headers["Content-Language"] == "ar"
        assert mock_service.get_product.call_args.kwargs["locale"] == "ar"

    @pytest.mark.asyncio
    async def test_not_found_envelope_echoes_request_id(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.get_product = AsyncMock(
                side_effect=NotFoundError(resource="product", message="Product not found")
            )

            response = await test_client.get(
                f"/api/products/{uuid.uuid4()}", headers={"X-Request-ID": "req-1234"}
            )

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "req-1234"
        assert response.json() == {
            "error": "not_found",
            "message": "Product not found",
            "request_id": "req-1234",
        }

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.list_products = AsyncMock(return_value={
                "products": [], "total": 0, "limit": 20, "offset": 0,
            })

            response = await test_client.get("/api/products")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_admin_create_returns_201(self, test_client):
        admin_view = transform_product(product_row(make_product()), None)
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.create_product = AsyncMock(return_value=admin_view)

            response = await test_client.post(
                "/api/admin/products",
                json={"name": {"en": "Soil Test Kit"}, "isFeatured": "true", "price": "120.50"},
            )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created successfully"
        assert body["product"]["name"] == {"en": "Soil Test Kit", "ar": "مجموعة اختبار التربة"}
        call = mock_service.create_product.call_args.kwargs
        assert call["locale"] is None
        assert call["body"].provided() == {
            "name": {"en": "Soil Test Kit"}, "is_featured": "true", "price": "120.50",
        }

    @pytest.mark.asyncio
    async def test_admin_create_conflict(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.create_product = AsyncMock(
                side_effect=ConflictError(message="A product with this name already exists", slug="soil-test-kit")
            )

            response = await test_client.post("/api/admin/products", json={"name": "Soil Test Kit"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["details"] == {"slug": "soil-test-kit"}

    @pytest.mark.asyncio
    async def test_admin_create_validation_error(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.create_product = AsyncMock(
                side_effect=ValidationError(message="Product name is required", field="name")
            )

            response = await test_client.post("/api/admin/products", json={})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "name"}

    @pytest.mark.asyncio
    async def test_admin_delete(self, test_client):
        with patch("portal.routes.products.product_service") as mock_service:
            mock_service.delete_product = AsyncMock(return_value=None)

            response = await test_client.delete(f"/api/admin/products/{uuid.uuid4()}?lang=ar")

        assert response.status_code == 200
        assert response.json() == {"message": "تم حذف المنتج بنجاح"}


class TestServiceCenterRoutes:

    @pytest.mark.asyncio
    async def test_public_detail_with_preview_flag(self, test_client):
        center = transform_service_center(center_row(make_center(staff=[make_staff()])), "en")
        with patch("portal.routes.service_centers.service_center_service") as mock_service:
            mock_service.get_center_by_slug = AsyncMock(return_value=center)

            response = await test_client.get("/api/service-centers/materials-lab?preview=1")

        assert response.status_code == 200
        body = response.json()["center"]
        assert body["products"][0]["name"] == "Legacy card"
        assert body["services"] == ["XRD", "SEM"]
        assert body["staff"][0]["name"] == "Dr. Sara Ali"
        assert mock_service.get_center_by_slug.call_args.kwargs["preview"] is True

    @pytest.mark.asyncio
    async def test_admin_list_accepts_camel_case_flag(self, test_client):
        with patch("portal.routes.service_centers.service_center_service") as mock_service:
            mock_service.list_centers = AsyncMock(return_value={"centers": [], "total": 0})

            response = await test_client.get("/api/admin/service-centers?includeHidden=yes")

        assert response.status_code == 200
        assert mock_service.list_centers.call_args.kwargs["include_hidden"] is True

    @pytest.mark.asyncio
    async def test_admin_list_hides_unpublished_by_default(self, test_client):
        with patch("portal.routes.service_centers.service_center_service") as mock_service:
            mock_service.list_centers = AsyncMock(return_value={"centers": [], "total": 0})

            await test_client.get("/api/admin/service-centers")

        assert mock_service.list_centers.call_args.kwargs["include_hidden"] is False

    @pytest.mark.asyncio
    async def test_admin_update_not_found(self, test_client):
        with patch("portal.routes.service_centers.service_center_service") as mock_service:
            mock_service.update_center = AsyncMock(
                side_effect=NotFoundError(resource="service center", message="Service center not found")
            )

            response = await test_client.put(
                f"/api/admin/service-centers/{uuid.uuid4()}", json={"isPublished": "false"}
            )

        assert response.status_code == 404
        assert response.json()["message"] == "Service center not found"


class TestCatalogAndStaffRoutes:

    @pytest.mark.asyncio
    async def test_list_services(self, test_client):
        service = transform_service(service_row(make_service()), "en")
        with patch("portal.routes.services.catalog_service") as mock_service:
            mock_service.list_services = AsyncMock(return_value={"services": [service], "total": 1})

            response = await test_client.get("/api/services")

        assert response.status_code == 200
        assert response.json()["services"][0]["center_head"]["expertise"] == ["XRD", "Rietveld"]

    @pytest.mark.asyncio
    async def test_department_staff(self, test_client):
        laboratory = make_laboratory()
        staff_member = {
            **make_staff().to_dict(),
            "name": "Dr. Sara Ali",
            "title": "Professor",
            "is_department_staff": True,
            "laboratories": [{"id": str(laboratory.id), "name": "Polymer Lab", "position": "Head"}],
        }
        with patch("portal.routes.staff.staff_service") as mock_service:
            mock_service.department_staff = AsyncMock(return_value=[staff_member])

            response = await test_client.get(f"/api/departments/{uuid.uuid4()}/staff")

        assert response.status_code == 200
        member = response.json()["staff"][0]
        assert member["is_department_staff"] is True
        assert member["laboratories"][0]["position"] == "Head"

    @pytest.mark.asyncio
    async def test_laboratory_not_found(self, test_client):
        with patch("portal.routes.staff.staff_service") as mock_service:
            mock_service.laboratory_staff = AsyncMock(
                side_effect=NotFoundError(resource="laboratory", message="Laboratory not found")
            )

            response = await test_client.get(f"/api/laboratories/{uuid.uuid4()}/staff")

        assert response.status_code == 404


class TestHealthRoute:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        with patch("portal.routes.health.engine") as mock_engine:
            mock_engine.connect.return_value.__aenter__.return_value = AsyncMock()

            response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_database_returns_503(self, test_client):
        with patch("portal.routes.health.engine") as mock_engine:
            mock_engine.connect = MagicMock(side_effect=OSError("connection refused"))

            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
