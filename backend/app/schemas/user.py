"""
User management schemas

Self-service profile changes and administrator account management
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from app.core.status_config import UserRole
from app.schemas.auth import UserRegister, UserResponse, check_birth_date, check_password_strength
from app.schemas.common import PaginationMeta, reject_null


class ProfileUpdate(BaseModel):
    """Partial profile update. Omitted fields are left unchanged."""
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = None
    contact_number: Optional[str] = Field(None, min_length=10, max_length=20)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country_id: Optional[int] = None

    @field_validator('first_name', 'last_name', 'email')
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info)

    @field_validator('date_of_birth')
    @classmethod
    def validate_not_in_future(cls, v: Optional[date]) -> Optional[date]:
        return check_birth_date(v)


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)

    @field_validator('new_password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class AdminUserCreate(UserRegister):
    """Account provisioned by an administrator; may carry any role"""
    role: UserRole = UserRole.REGISTERED_USER
    email_verified: bool = True


class AdminUserUpdate(ProfileUpdate):
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    email_verified: Optional[bool] = None

    @field_validator('role', 'is_active', 'email_verified')
    @classmethod
    def flags_not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info)


class UserListResponse(BaseModel):
    items: List[UserResponse]
    pagination: PaginationMeta
