from pydantic import EmailStr, Field, field_validator

from ..core.security import UserRole
from .user import CamelModel, UserResponse, normalize_email, require_text


class UserRegister(CamelModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=1)
    role: UserRole

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v)


class UserLogin(CamelModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v):
        return normalize_email(v)


class AuthResponse(UserResponse):
    """User record plus a freshly issued bearer token."""
    token: str
