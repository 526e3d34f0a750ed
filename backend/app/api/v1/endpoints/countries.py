"""
Countries API Endpoints

Destination countries and their shipping multipliers. Reads are public;
changes require an administrator.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_admin_user
from app.core.status_config import Continent
from app.db.session import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.country import (
    CountryCreate,
    CountryResponse,
    CountryUpdate,
    ShippingMultiplierResponse,
)
from app.services import reference_data

router = APIRouter()


@router.get("/", response_model=List[CountryResponse])
async def list_countries(active: bool = False, db: Session = Depends(get_db)):
    """
    List countries ordered by name

    - **active**: only countries currently accepting shipments
    """
    return reference_data.list_countries(db, active_only=active)


@router.get("/continent/{continent}", response_model=List[CountryResponse])
async def list_countries_by_continent(continent: Continent, db: Session = Depends(get_db)):
    return reference_data.list_countries_by_continent(db, continent.value)


@router.get("/{country_id}", response_model=CountryResponse)
async def get_country(country_id: int, db: Session = Depends(get_db)):
    return reference_data.get_country(db, country_id)


@router.get("/{country_id}/multiplier", response_model=ShippingMultiplierResponse)
async def get_shipping_multiplier(country_id: int, db: Session = Depends(get_db)):
    return reference_data.get_shipping_multiplier(db, country_id)


# ============================================================================
# Admin
# ============================================================================

@router.post("/", response_model=CountryResponse, status_code=status.HTTP_201_CREATED)
async def create_country(
    data: CountryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return reference_data.create_country(db, data)


@router.put("/{country_id}", response_model=CountryResponse)
async def update_country(
    country_id: int,
    data: CountryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return reference_data.update_country(db, country_id, data)


@router.patch("/{country_id}/toggle-status", response_model=CountryResponse)
async def toggle_country_status(
    country_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    return reference_data.toggle_country_active(db, country_id)


@router.delete("/{country_id}", response_model=MessageResponse)
async def delete_country(
    country_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user),
):
    """Delete an unreferenced country (409 if shipments or users still use it)"""
    reference_data.delete_country(db, country_id)
    return {"message": "Country deleted"}
