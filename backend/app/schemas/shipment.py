"""
Shipment Schemas

Pydantic models for the shipment endpoints: creation, status updates,
payments and list/detail responses.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer

from app.core.status_config import PaymentMethod, ShipmentPriority, ShipmentStatus
from app.schemas.box_type import BoxTypeSummary
from app.schemas.common import PaginationMeta
from app.schemas.country import CountrySummary
from app.services.shipping_cost import round_money


class ShipmentCreate(BaseModel):
    """Schema for creating a shipment"""
    receiver_first_name: str = Field(..., min_length=2, max_length=50)
    receiver_last_name: str = Field(..., min_length=2, max_length=50)
    receiver_email: EmailStr
    receiver_contact_number: str = Field(..., min_length=10, max_length=20)
    receiver_street: str = Field(..., min_length=5, max_length=255)
    receiver_city: str = Field(..., min_length=2, max_length=100)
    receiver_state: Optional[str] = Field(None, max_length=100)
    receiver_zip_code: str = Field(..., min_length=3, max_length=20)
    receiver_country_id: int

    box_type_id: int
    contents: str = Field(..., min_length=5, max_length=1000)
    weight: Decimal = Field(..., ge=Decimal("0.1"))
    priority: ShipmentPriority = ShipmentPriority.NORMAL
    is_fragile: bool = False

    is_insured: bool = False
    insured_value: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)


class ShipmentStatusUpdate(BaseModel):
    """Schema for requesting a status transition"""
    status: ShipmentStatus
    location: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, max_length=500)


class ShipmentPaymentRequest(BaseModel):
    payment_method: PaymentMethod


class TrackingHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    location: str
    description: Optional[str] = None
    timestamp: datetime


class SenderSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str


class ShipmentSummary(BaseModel):
    """Row in shipment lists"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    tracking_number: str
    sender_id: Optional[int] = None
    receiver_first_name: str
    receiver_last_name: str
    receiver_email: str
    receiver_city: str
    status: str
    priority: str
    is_fragile: bool
    shipping_cost: Decimal
    payment_status: str
    estimated_delivery_date: Optional[datetime] = None
    actual_delivery_date: Optional[datetime] = None
    created_at: datetime

    box_type: Optional[BoxTypeSummary] = None
    receiver_country: Optional[CountrySummary] = None

    @field_serializer("shipping_cost")
    def serialize_cost(self, value: Decimal) -> str:
        return str(round_money(value))


class ShipmentResponse(ShipmentSummary):
    """Full shipment detail including the tracking ledger"""
    receiver_contact_number: str
    receiver_street: str
    receiver_state: Optional[str] = None
    receiver_zip_code: str
    receiver_country_id: int
    box_type_id: int
    weight: Decimal
    contents: str
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    is_insured: bool
    insured_value: Optional[Decimal] = None
    notes: Optional[str] = None
    updated_at: datetime

    sender: Optional[SenderSummary] = None
    tracking_history: List[TrackingHistoryResponse] = []


class CustomerShipmentResponse(ShipmentSummary):
    """Shipment row for the per-customer admin view, with the latest ledger entry"""
    latest_tracking: Optional[TrackingHistoryResponse] = None


class ShipmentListResponse(BaseModel):
    items: List[ShipmentSummary]
    pagination: PaginationMeta


class CustomerShipmentListResponse(BaseModel):
    items: List[CustomerShipmentResponse]
    pagination: PaginationMeta
