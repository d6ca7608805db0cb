"""Staff response models for center pages and department/laboratory listings."""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from portal.schemas.common import LocalizedField


class StaffMemberResponse(BaseModel):
    id: uuid.UUID
    name: LocalizedField
    title: LocalizedField = None
    academic_position: LocalizedField = None
    current_admin_position: LocalizedField = None
    bio: LocalizedField = None
    research_interests: LocalizedField = None
    email: Optional[str] = None
    phone: Optional[str] = None
    picture: Optional[str] = None


class LaboratoryAffiliation(BaseModel):
    id: uuid.UUID
    name: LocalizedField = None
    position: Optional[str] = None


class DepartmentStaffMember(StaffMemberResponse):
    """A department person with every laboratory they work in."""
    is_department_staff: bool = Field(description="Directly attached to the department")
    laboratories: List[LaboratoryAffiliation] = Field(default_factory=list)


class LaboratoryStaffMember(StaffMemberResponse):
    lab_position: Optional[str] = Field(default=None, description="Position within this laboratory")


class DepartmentStaffResponse(BaseModel):
    staff: List[DepartmentStaffMember]


class LaboratoryStaffResponse(BaseModel):
    staff: List[LaboratoryStaffMember]
