"""
Country Schemas

Pydantic models for the destination country endpoints
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.core.status_config import Continent, ShippingZone
from app.schemas.common import reject_null


class CountryBase(BaseModel):
    """Fields shared by create and response"""
    name: str = Field(..., min_length=2, max_length=100)
    code: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2 code")
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 currency code")
    multiplier: Decimal = Field(..., ge=0, description="Applied to box base price")
    continent: Continent
    shipping_zone: ShippingZone = ShippingZone.ZONE1

    @field_validator("code", "currency")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v.isalpha():
            raise ValueError("Code must be alphabetic")
        return v


class CountryCreate(CountryBase):
    """Schema for creating a country"""
    is_active: bool = True


class CountryUpdate(BaseModel):
    """Schema for updating a country (all fields optional)"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    code: Optional[str] = Field(None, min_length=2, max_length=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    multiplier: Optional[Decimal] = Field(None, ge=0)
    continent: Optional[Continent] = None
    shipping_zone: Optional[ShippingZone] = None
    is_active: Optional[bool] = None

    @field_validator("code", "currency")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else v

    @field_validator("*")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info)


class CountryResponse(CountryBase):
    """Schema for country response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CountrySummary(BaseModel):
    """Compact country embedded in shipment responses"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    currency: str


class ShippingMultiplierResponse(BaseModel):
    country_name: str
    multiplier: Decimal
    currency: str
