"""
Pydantic schemas for authentication endpoints

Request and response models for registration, login and the current profile
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.country import CountrySummary


def check_password_strength(v: str) -> str:
    """Require at least one digit, one uppercase and one lowercase letter"""
    if not any(char.isdigit() for char in v):
        raise ValueError('Password must contain at least one number')
    if not any(char.isupper() for char in v):
        raise ValueError('Password must contain at least one uppercase letter')
    if not any(char.islower() for char in v):
        raise ValueError('Password must contain at least one lowercase letter')
    return v


def check_birth_date(v: Optional[date]) -> Optional[date]:
    if v is not None and v > date.today():
        raise ValueError('Date of birth cannot be in the future')
    return v


class UserRegister(BaseModel):
    """Schema for user registration request"""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    date_of_birth: Optional[date] = None
    contact_number: Optional[str] = Field(None, min_length=10, max_length=20)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country_id: Optional[int] = None

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)

    @field_validator('date_of_birth')
    @classmethod
    def validate_not_in_future(cls, v: Optional[date]) -> Optional[date]:
        return check_birth_date(v)


class UserResponse(BaseModel):
    """Schema for user data response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    contact_number: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[CountrySummary] = None
    role: str
    is_active: bool
    email_verified: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    """Schema for token response (login)"""
    access_token: str
    token_type: str = "bearer"
