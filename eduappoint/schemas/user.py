from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional

from ..core.security import UserRole


def normalize_email(value):
    """Trim and lowercase an email before it is validated."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase in JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class AvailabilitySlot(CamelModel):
    day: str
    time: str


class TeacherProfileSchema(CamelModel):
    subjects: List[str] = []
    availability: List[AvailabilitySlot] = []
    department: str = ""


class TeacherProfileFields(CamelModel):
    """Partial teacher profile; omitted fields keep their stored value."""
    subjects: Optional[List[str]] = None
    availability: Optional[List[AvailabilitySlot]] = None
    department: Optional[str] = None


class UserSummary(CamelModel):
    id: int
    name: str
    email: str


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole
    teacher_profile: Optional[TeacherProfileSchema] = None
    is_admin_approved: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeacherProfileResponse(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole
    teacher_profile: Optional[TeacherProfileSchema] = None


class TeacherProfileUpdate(TeacherProfileFields):
    name: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v) if v is not None else v


class AdminUserCreate(CamelModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=1)
    role: UserRole
    teacher_profile: Optional[TeacherProfileFields] = None
    is_admin_approved: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v)


class AdminUserUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None
    is_admin_approved: Optional[bool] = None
    teacher_profile: Optional[TeacherProfileFields] = None

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v) if v is not None else v
