from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class StudentStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class CertificateStatus(str, Enum):
    PENDING = "Pending"
    VERIFIED = "Verified"
    REJECTED = "Rejected"


class StaffRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


# Approved and Rejected are terminal; only checked when transition enforcement is on.
STUDENT_TRANSITIONS: dict[StudentStatus, set[StudentStatus]] = {
    StudentStatus.PENDING: {StudentStatus.APPROVED, StudentStatus.REJECTED},
    StudentStatus.APPROVED: set(),
    StudentStatus.REJECTED: set(),
}


def can_transition(current: str, target: str) -> bool:
    if current == target:
        return True
    try:
        allowed = STUDENT_TRANSITIONS[StudentStatus(current)]
    except ValueError:
        # legacy rows with an unknown status may move anywhere
        return True
    return StudentStatus(target) in allowed


class PortalModel(BaseModel):
    """Snake_case in Python, camelCase on the wire and in Mongo."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_default=True,
    )


class StudentCreate(PortalModel):
    full_name: str = Field(min_length=1)
    date_of_birth: date
    address: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    email: EmailStr
    nic: str = Field(min_length=1)
    middle_school_results: str = Field(min_length=1)
    high_school_results: str = Field(min_length=1)
    certifications: Optional[str] = None
    preferred_study_center: str = Field(min_length=1)
    selected_category: str = Field(min_length=1)
    selected_subcategory: Optional[str] = None
    selected_course: str = Field(min_length=1)


class StudentUpdate(PortalModel):
    full_name: Optional[str] = Field(None, min_length=1)
    date_of_birth: Optional[date] = None
    address: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    nic: Optional[str] = Field(None, min_length=1)
    middle_school_results: Optional[str] = Field(None, min_length=1)
    high_school_results: Optional[str] = Field(None, min_length=1)
    certifications: Optional[str] = None
    preferred_study_center: Optional[str] = Field(None, min_length=1)
    selected_category: Optional[str] = Field(None, min_length=1)
    selected_subcategory: Optional[str] = None
    selected_course: Optional[str] = Field(None, min_length=1)
    status: Optional[StudentStatus] = None
    disabled: Optional[bool] = None


class CertificateCreate(PortalModel):
    student_id: str = Field(min_length=1)
    nic: str = Field(min_length=1)
    certificate_type: str = Field(min_length=1)
    issuing_institution: Optional[str] = None
    issue_date: Optional[date] = None
    certificate_id: Optional[str] = None
    comments: Optional[str] = None
    file_name: str = Field(min_length=1)
    file_size: int = Field(ge=0)
    file_type: str = Field(min_length=1)


class Course(PortalModel):
    name: str = Field(min_length=1)
    qualification: str = Field(min_length=1)
    duration: str = Field(min_length=1)


class Subcategory(PortalModel):
    name: str = Field(min_length=1)
    courses: List[Course] = []


class Category(PortalModel):
    name: str = Field(min_length=1)
    courses: List[Course] = []
    subcategories: List[Subcategory] = []


class StaffCreate(PortalModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    role: StaffRole = StaffRole.STAFF


class AuthUser(BaseModel):
    email: str
    name: str
    role: str
