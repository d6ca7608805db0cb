"""
Entity Transformer Unit Tests
==============================

What we test:
    ✅ Product JSON columns decode to lists/objects whatever was stored
    ✅ Service center prefers related products over the legacy column
    ✅ Legacy fallback when related products are missing or all broken
    ✅ locale=None keeps localized mappings for admin editors
    ✅ Service equipment and center head decoding
    ✅ Staff required vs optional localized fields
"""

import logging

from factories import make_center, make_equipment, make_product, make_service, make_staff
from portal.services.catalog_service import service_row
from portal.services.product_service import product_row
from portal.services.service_center_service import center_row
from portal.transforms import (
    transform_product,
    transform_service,
    transform_service_center,
    transform_staff_member,
)


class TestTransformProduct:

    def setup_method(self):
        self.row = product_row(make_product())

    def test_json_columns_are_decoded(self):
        product = transform_product(self.row, "en")

        assert product["images"] == ["/img/kit-1.png", "/img/kit-2.png"]
        assert product["tags"] == ["soil", "field"]
        assert product["specifications"] == {"weight": "2kg"}

    def test_missing_and_malformed_lists_become_empty(self):
        product = transform_product(self.row, "en")

        assert product["features"] == []
        assert product["sizes"] == []

    def test_price_is_a_float(self):
        product = transform_product(self.row, "en")

        assert product["price"] == 120.5
        assert isinstance(product["price"], float)
        assert product["original_price"] is None

    def test_localized_fields_follow_locale(self):
        product = transform_product(self.row, "ar")

        assert product["name"] == "مجموعة اختبار التربة"
        assert product["short_description"] == "مجموعة"

    def test_admin_view_keeps_mappings(self):
        product = transform_product(self.row, None)

        assert product["name"] == {"en": "Soil Test Kit", "ar": "مجموعة اختبار التربة"}
        assert product["images"] == ["/img/kit-1.png", "/img/kit-2.png"]

    def test_object_field_that_is_a_list_string(self):
        row = {**self.row, "specifications": '["a", "b"]', "tags": '{"k": 1}'}
        product = transform_product(row, "en")

        assert product["specifications"] == ["a", "b"]
        assert product["tags"] == []

    def test_deeply_nested_column_degrades_to_empty_list(self):
        product = transform_product({**self.row, "tags": "[" * 100000}, "en")

        assert product["tags"] == []
        assert product["images"] == ["/img/kit-1.png", "/img/kit-2.png"]

    def test_missing_name_becomes_empty_string(self):
        product = transform_product({**self.row, "name": None}, "en")
        assert product["name"] == ""

    def test_service_center_summary_is_localized(self):
        center = make_center()
        product = make_product(service_center=center)

        result = transform_product(product_row(product), "ar")

        assert result["service_center"]["name"] == "معمل المواد"
        assert result["service_center"]["location"] == "المبنى ب"
        assert result["service_center"]["slug"] == "materials-lab"


class TestTransformServiceCenter:

    def test_related_products_win_over_legacy_column(self):
        center = make_center(products_list=[make_product(short_description={"en": "Kit"}, description=None)])

        result = transform_service_center(center_row(center), "en")

        assert [p["name"] for p in result["products"]] == ["Soil Test Kit"]
        assert result["products"][0]["description"] == "Kit"

    def test_legacy_products_used_without_related_rows(self):
        result = transform_service_center(center_row(make_center()), "en")

        assert result["products"] == [
            {
                "name": "Legacy card",
                "description": "From the old editor",
                "image": None,
                "specifications": None,
            }
        ]

    def test_broken_related_product_is_skipped_and_others_kept(self, caplog):
        first = make_product(name={"en": "First"}, slug="first")
        second = make_product(name={"en": "Second"}, slug="second")
        row = {
            **center_row(make_center()),
            "products_list": [product_row(first), "not a row", product_row(second)],
        }

        with caplog.at_level(logging.WARNING, logger="portal.transforms.entities"):
            result = transform_service_center(row, "en")

        assert [p["slug"] for p in result["products"]] == ["first", "second"]
        assert "Legacy card" not in [p["name"] for p in result["products"]]
        assert any(
            "Skipping service center product" in r.getMessage() for r in caplog.records
        )

    def test_legacy_fallback_when_every_related_product_fails(self):
        row = {**center_row(make_center()), "products_list": ["not a row"]}

        result = transform_service_center(row, "en")

        assert [p["name"] for p in result["products"]] == ["Legacy card"]

    def test_blobs_and_relations(self):
        staff = make_staff()
        center = make_center(staff=[staff], equipments=[make_equipment()])

        result = transform_service_center(center_row(center), "en")

        assert result["services"] == ["XRD", "SEM"]
        assert result["metrics"] is None
        assert result["equipments"][0]["name"] == "Microscope"
        assert result["equipments"][0]["specifications"] == {"zoom": "100x"}
        assert result["staff"][0]["name"] == "Dr. Sara Ali"
        assert "products_list" not in result

    def test_admin_view_keeps_mappings(self):
        center = make_center(equipments=[make_equipment()])

        result = transform_service_center(center_row(center), None)

        assert result["name"] == {"en": "Materials Lab", "ar": "معمل المواد"}
        assert result["equipments"][0]["name"] == {"en": "Microscope", "ar": "مجهر"}

    def test_equipment_without_name_in_locale_falls_back(self):
        center = make_center(equipments=[make_equipment(name={"ar": "مجهر"})])

        result = transform_service_center(center_row(center), "en")

        assert result["equipments"][0]["name"] == "مجهر"


class TestTransformService:

    def test_features_equipment_and_head(self):
        result = transform_service(service_row(make_service()), "en")

        assert result["title"] == "X-ray diffraction"
        assert result["features"] == ["Phase ID", "Crystallinity"]
        assert result["equipment"][0]["name"] == "Diffractometer"
        assert result["equipment"][0]["specifications"] == {"source": "Cu"}
        assert result["center_head"]["expertise"] == ["XRD", "Rietveld"]

    def test_missing_center_head_is_none(self):
        result = transform_service(service_row(make_service(center_head=None)), "ar")

        assert result["center_head"] is None
        assert result["title"] == "حيود الأشعة السينية"


class TestTransformStaffMember:

    def test_required_fields_never_none(self):
        staff = transform_staff_member({"id": 1, "name": None, "title": None}, "en")

        assert staff["name"] == ""
        assert staff["title"] == ""
        assert staff["bio"] is None

    def test_localized_fields(self):
        staff = transform_staff_member(make_staff().to_dict(), "ar")

        assert staff["name"] == "د. سارة علي"
        # No Arabic title: falls back to the default locale
        assert staff["title"] == "Professor"
