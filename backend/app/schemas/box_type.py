"""
Box Type Schemas

Pydantic models for box type management and cost quotes
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_serializer, field_validator

from app.schemas.common import reject_null
from app.services.shipping_cost import round_money


class BoxTypeBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    length: Decimal = Field(..., gt=0, description="cm")
    width: Decimal = Field(..., gt=0, description="cm")
    height: Decimal = Field(..., gt=0, description="cm")
    weight: Decimal = Field(..., gt=0, description="kg")
    base_price: Decimal = Field(..., gt=0)
    color: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class BoxTypeCreate(BoxTypeBase):
    is_active: bool = True


class BoxTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    length: Optional[Decimal] = Field(None, gt=0)
    width: Optional[Decimal] = Field(None, gt=0)
    height: Optional[Decimal] = Field(None, gt=0)
    weight: Optional[Decimal] = Field(None, gt=0)
    base_price: Optional[Decimal] = Field(None, gt=0)
    color: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

    @field_validator("name", "length", "width", "height", "weight", "base_price", "color", "is_active")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info)


class BoxTypeResponse(BoxTypeBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class BoxTypeSummary(BaseModel):
    """Compact box type embedded in shipment responses"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str
    base_price: Decimal


class CostQuoteRequest(BaseModel):
    box_type_id: int
    country_id: int


class CostQuoteResponse(BaseModel):
    box_type_id: int
    box_name: str
    country_id: int
    country_name: str
    currency: str
    base_price: Decimal
    multiplier: Decimal
    shipping_cost: Decimal

    @field_serializer("shipping_cost")
    def serialize_cost(self, value: Decimal) -> str:
        return str(round_money(value))
