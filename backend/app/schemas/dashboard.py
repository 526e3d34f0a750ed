"""
Dashboard Schemas
"""
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from app.schemas.shipment import ShipmentSummary


class UserDashboardResponse(BaseModel):
    total_shipments: int
    status_counts: Dict[str, int]
    total_spent: Decimal
    recent_shipments: List[ShipmentSummary]


class DestinationCount(BaseModel):
    country: str
    shipments: int


class AdminDashboardResponse(BaseModel):
    active_users: int
    total_shipments: int
    active_countries: int
    active_box_types: int
    status_counts: Dict[str, int]
    total_revenue: Decimal
    average_shipping_cost: Decimal
    top_destinations: List[DestinationCount]


class CountryRevenue(BaseModel):
    country_id: int
    country: str
    shipments: int
    total_shipping_cost: Decimal


class DeliveryTimeStats(BaseModel):
    """Days from creation to delivery over COMPLETED shipments"""
    completed_shipments: int
    average_days: Optional[float] = None
    min_days: Optional[float] = None
    max_days: Optional[float] = None


class ShipmentAnalyticsResponse(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    priority_counts: Dict[str, int]
    by_country: List[CountryRevenue]
    delivery_time: DeliveryTimeStats
