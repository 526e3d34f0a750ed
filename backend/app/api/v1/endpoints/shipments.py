"""
Shipments API Endpoints

Creation, tracking, status transitions, payment and deletion of shipments.
Every route runs on behalf of the authenticated Actor; the service layer
decides what that actor may see or change.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.deps import PageParams, get_current_actor, get_page_params
from app.core.status_config import ShipmentPriority, ShipmentStatus
from app.db.session import get_db
from app.schemas.common import MessageResponse, PaginationMeta
from app.schemas.shipment import (
    CustomerShipmentListResponse,
    CustomerShipmentResponse,
    ShipmentCreate,
    ShipmentListResponse,
    ShipmentPaymentRequest,
    ShipmentResponse,
    ShipmentStatusUpdate,
    TrackingHistoryResponse,
)
from app.services import shipment_directory
from app.services.shipment_access import Actor
from app.services.shipment_directory import ShipmentFilters
from app.services.shipment_lifecycle import ShipmentLifecycleService

router = APIRouter()


def _page(items, total: int, page: PageParams) -> dict:
    return {
        "items": items,
        "pagination": PaginationMeta.for_page(total, page.page, page.page_size, len(items)),
    }


# ============================================================================
# Listings
# ============================================================================

@router.get("/", response_model=ShipmentListResponse)
async def list_shipments(
    status_filter: Optional[ShipmentStatus] = Query(None, alias="status"),
    priority: Optional[ShipmentPriority] = None,
    search: Optional[str] = None,
    page: PageParams = Depends(get_page_params),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """
    List shipments, newest first

    - **status**: exact status; administrators otherwise see only
      shipments that are not COMPLETED or CANCELLED
    - **priority**: NORMAL, EXPRESS or URGENT
    - **search**: substring of tracking number or receiver email
    """
    filters = ShipmentFilters(
        status=status_filter.value if status_filter else None,
        priority=priority.value if priority else None,
        search=search,
    )
    items, total = shipment_directory.list_shipments(db, actor, filters, page.page, page.page_size)
    return _page(items, total, page)


@router.get("/complete", response_model=ShipmentListResponse)
async def list_completed_shipments(
    page: PageParams = Depends(get_page_params),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    items, total = shipment_directory.list_completed(db, actor, page.page, page.page_size)
    return _page(items, total, page)


@router.get("/cancelled", response_model=ShipmentListResponse)
async def list_cancelled_shipments(
    page: PageParams = Depends(get_page_params),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    items, total = shipment_directory.list_cancelled(db, actor, page.page, page.page_size)
    return _page(items, total, page)


@router.get("/customer/{customer_id}", response_model=CustomerShipmentListResponse)
async def list_customer_shipments(
    customer_id: int,
    page: PageParams = Depends(get_page_params),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """All shipments of one customer with their latest tracking entry (admin)"""
    rows, total = shipment_directory.list_for_customer(db, actor, customer_id, page.page, page.page_size)
    items = []
    for shipment, latest in rows:
        item = CustomerShipmentResponse.model_validate(shipment)
        item.latest_tracking = TrackingHistoryResponse.model_validate(latest) if latest else None
        items.append(item)
    return _page(items, total, page)


@router.get("/track/{tracking_number}", response_model=ShipmentResponse)
async def track_shipment(
    tracking_number: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return shipment_directory.get_by_tracking_number(db, actor, tracking_number)


# ============================================================================
# Single shipment
# ============================================================================

@router.post("/", response_model=ShipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    data: ShipmentCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """
    Create a shipment in CREATED status

    Cost is base price x destination multiplier. Returns 400
    INVALID_REFERENCE for unknown or inactive box types and countries.
    """
    shipment = ShipmentLifecycleService(db).create(actor, data)
    return shipment_directory.get_shipment(db, actor, shipment.id)


@router.get("/{shipment_id}", response_model=ShipmentResponse)
async def get_shipment(
    shipment_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    return shipment_directory.get_shipment(db, actor, shipment_id)


@router.put("/{shipment_id}", response_model=ShipmentResponse)
async def update_shipment_status(
    shipment_id: int,
    data: ShipmentStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """
    Move a shipment to a new status

    Administrators may request any legal transition; senders may only
    cancel their own non-terminal shipments. 400 ILLEGAL_TRANSITION for
    moves the state machine forbids, 409 CONFLICT if another request
    changed the status first.
    """
    ShipmentLifecycleService(db).transition(
        shipment_id,
        actor,
        data.status,
        location=data.location,
        description=data.description,
    )
    return shipment_directory.get_shipment(db, actor, shipment_id)


@router.post("/{shipment_id}/payment", response_model=ShipmentResponse)
async def pay_for_shipment(
    shipment_id: int,
    data: ShipmentPaymentRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    ShipmentLifecycleService(db).record_payment(shipment_id, actor, data.payment_method)
    return shipment_directory.get_shipment(db, actor, shipment_id)


@router.delete("/{shipment_id}", response_model=MessageResponse)
async def delete_shipment(
    shipment_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Delete a shipment and its tracking history (admin)"""
    ShipmentLifecycleService(db).delete(shipment_id, actor)
    return {"message": "Shipment deleted"}
