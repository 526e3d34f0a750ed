"""
Dashboard API Endpoints
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_admin_user, get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.dashboard import (
    AdminDashboardResponse,
    ShipmentAnalyticsResponse,
    UserDashboardResponse,
)
from app.services import dashboard

router = APIRouter()


@router.get("/user", response_model=UserDashboardResponse)
async def user_dashboard(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Shipment counts, spend and recent shipments for the signed-in user"""
    return dashboard.user_dashboard(db, current_user.id)


@router.get("/admin", response_model=AdminDashboardResponse)
async def admin_dashboard(
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    return dashboard.admin_dashboard(db)


@router.get("/analytics", response_model=ShipmentAnalyticsResponse)
async def shipment_analytics(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db),
):
    """
    Shipment breakdowns for shipments created in [start_date, end_date]

    - counts by priority
    - shipment count and quoted revenue by destination country
    - average, fastest and slowest delivery time in days
    """
    return dashboard.shipment_analytics(db, start_date, end_date)
