"""
Box Types API Endpoints

Box catalogue and the public shipping cost calculator.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_admin_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.box_type import (
    BoxTypeCreate,
    BoxTypeResponse,
    BoxTypeUpdate,
    CostQuoteRequest,
    CostQuoteResponse,
)
from app.schemas.common import MessageResponse
from app.services import reference_data
from app.services.shipping_cost import quote_cost

router = APIRouter()


@router.get("/", response_model=List[BoxTypeResponse])
async def list_box_types(active: bool = False, db: Session = Depends(get_db)):
    """List box types, cheapest first"""
    return reference_data.list_box_types(db, active_only=active)


@router.post("/calculate-cost", response_model=CostQuoteResponse)
async def calculate_cost(data: CostQuoteRequest, db: Session = Depends(get_db)):
    """
    Quote the shipping cost of one box to one country

    Returns 400 INVALID_REFERENCE when either id is unknown or inactive.
    """
    quote = quote_cost(reference_data.SqlReferenceData(db), data.box_type_id, data.country_id)
    return CostQuoteResponse(
        box_type_id=quote.box_type.id,
        box_name=quote.box_type.name,
        country_id=quote.country.id,
        country_name=quote.country.name,
        currency=quote.country.currency,
        base_price=quote.box_type.base_price,
        multiplier=quote.country.multiplier,
        shipping_cost=quote.shipping_cost,
    )


@router.get("/{box_type_id}", response_model=BoxTypeResponse)
async def get_box_type(box_type_id: int, db: Session = Depends(get_db)):
    return reference_data.get_box_type(db, box_type_id)


# ============================================================================
# Admin
# ============================================================================

@router.post("/", response_model=BoxTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_box_type(
    data: BoxTypeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return reference_data.create_box_type(db, data)


@router.put("/{box_type_id}", response_model=BoxTypeResponse)
async def update_box_type(
    box_type_id: int,
    data: BoxTypeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return reference_data.update_box_type(db, box_type_id, data)


@router.patch("/{box_type_id}/toggle-status", response_model=BoxTypeResponse)
async def toggle_box_type_status(
    box_type_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return reference_data.toggle_box_type_active(db, box_type_id)


@router.delete("/{box_type_id}", response_model=MessageResponse)
async def delete_box_type(
    box_type_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    reference_data.delete_box_type(db, box_type_id)
    return {"message": "Box type deleted"}
