"""
In-memory ORM rows for tests. Nothing here is flushed; relationships are
assigned directly so services and transforms see fully loaded objects.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from portal.models import (
    Department,
    Laboratory,
    LaboratoryStaff,
    Product,
    Service,
    ServiceCenter,
    ServiceCenterEquipment,
    ServiceCenterHead,
    ServiceCenterStaff,
    ServiceEquipment,
    Staff,
)

NOW = datetime(2025, 3, 2, 10, 30, tzinfo=timezone.utc)


def make_product(**overrides) -> Product:
    values = dict(
        id=uuid.uuid4(),
        name={"en": "Soil Test Kit", "ar": "مجموعة اختبار التربة"},
        slug="soil-test-kit",
        description={"en": "Complete kit", "ar": "مجموعة كاملة"},
        short_description={"en": "Kit", "ar": "مجموعة"},
        image="/img/kit.png",
        images='["/img/kit-1.png", "/img/kit-2.png"]',
        price=Decimal("120.50"),
        original_price=None,
        category="kits",
        tags='["soil", "field"]',
        specifications='{"weight": "2kg"}',
        features=None,
        sizes="not json",
        stock_quantity=5,
        sku="KIT-001",
        is_featured=False,
        is_published=True,
        is_available=True,
        order_index=0,
        service_center_id=None,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return Product(**values)


def make_equipment(**overrides) -> ServiceCenterEquipment:
    values = dict(
        id=uuid.uuid4(),
        name={"en": "Microscope", "ar": "مجهر"},
        description=None,
        image=None,
        specifications={"zoom": "100x"},
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return ServiceCenterEquipment(**values)


def make_staff(**overrides) -> Staff:
    values = dict(
        id=uuid.uuid4(),
        name={"en": "Dr. Sara Ali", "ar": "د. سارة علي"},
        title={"en": "Professor"},
        academic_position=None,
        current_admin_position=None,
        bio=None,
        research_interests=None,
        email="sara@example.edu",
        phone=None,
        picture=None,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return Staff(**values)


def make_center(staff=(), **overrides) -> ServiceCenter:
    values = dict(
        id=uuid.uuid4(),
        name={"en": "Materials Lab", "ar": "معمل المواد"},
        slug="materials-lab",
        type="center",
        headline={"en": "Testing you can trust"},
        description=None,
        location={"en": "Building B", "ar": "المبنى ب"},
        lab_methodology=None,
        future_prospective=None,
        image=None,
        banner_image=None,
        contact_phone=None,
        contact_email=None,
        products=[{"name": "Legacy card", "details": "From the old editor"}],
        work_volume=None,
        company_activity=None,
        services='["XRD", "SEM"]',
        metrics=None,
        is_featured=False,
        is_published=True,
        order_index=0,
        created_at=NOW,
        updated_at=NOW,
        equipments=[],
        products_list=[],
    )
    values.update(overrides)
    center = ServiceCenter(**values)
    center.staff_links = [ServiceCenterStaff(id=uuid.uuid4(), staff=member) for member in staff]
    return center


def make_service(**overrides) -> Service:
    values = dict(
        id=uuid.uuid4(),
        title={"en": "X-ray diffraction", "ar": "حيود الأشعة السينية"},
        subtitle=None,
        description={"en": "Phase identification"},
        image=None,
        category="analysis",
        price="On request",
        duration="3 days",
        features='["Phase ID", "Crystallinity"]',
        is_featured=True,
        is_published=True,
        created_at=NOW,
        updated_at=NOW,
        equipment=[
            ServiceEquipment(
                id=uuid.uuid4(),
                name={"en": "Diffractometer"},
                description=None,
                image=None,
                specifications='{"source": "Cu"}',
            )
        ],
        center_head=ServiceCenterHead(
            id=uuid.uuid4(),
            name="Dr. Omar Hassan",
            title="Head of XRD",
            expertise='["XRD", "Rietveld"]',
        ),
    )
    values.update(overrides)
    return Service(**values)


def make_department(**overrides) -> Department:
    values = dict(id=uuid.uuid4(), name={"en": "Chemistry", "ar": "الكيمياء"})
    values.update(overrides)
    return Department(**values)


def make_laboratory(members=(), **overrides) -> Laboratory:
    """Laboratory with `members` given as (staff, position) pairs."""
    values = dict(id=uuid.uuid4(), name={"en": "Polymer Lab", "ar": "معمل البوليمرات"})
    values.update(overrides)
    laboratory = Laboratory(**values)
    laboratory.staff_links = [
        LaboratoryStaff(id=uuid.uuid4(), staff=member, position=position)
        for member, position in members
    ]
    return laboratory
