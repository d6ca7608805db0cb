"""
ORM models. Importing this package registers every table with
`Base.metadata` and lets string relationship targets resolve.
"""

from portal.models.organization import (
    Department,
    DepartmentStaff,
    Laboratory,
    LaboratoryStaff,
    Staff,
)
from portal.models.product import Product
from portal.models.service import Service, ServiceCenterHead, ServiceEquipment
from portal.models.service_center import (
    ServiceCenter,
    ServiceCenterEquipment,
    ServiceCenterStaff,
)

__all__ = [
    "Department",
    "DepartmentStaff",
    "Laboratory",
    "LaboratoryStaff",
    "Product",
    "Service",
    "ServiceCenter",
    "ServiceCenterEquipment",
    "ServiceCenterHead",
    "ServiceCenterStaff",
    "ServiceEquipment",
    "Staff",
]
