"""
Shipment Directory

Read-side queries over shipments: filtered, paginated listings and
single-shipment lookups with the ledger attached.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.status_config import ShipmentStatus
from app.exceptions import ForbiddenError, NotFoundError
from app.models.shipment import Shipment, TrackingHistory
from app.services.query_helpers import LIKE_ESCAPE, contains_pattern
from app.services.shipment_access import Actor, ensure_can_read

ACTIVE_EXCLUDED = (ShipmentStatus.CANCELLED.value, ShipmentStatus.COMPLETED.value)


@dataclass
class ShipmentFilters:
    status: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None


def _base_query(db: Session):
    return db.query(Shipment).options(
        joinedload(Shipment.box_type),
        joinedload(Shipment.receiver_country),
    )


def _paginate(query, page: int, page_size: int) -> Tuple[List[Shipment], int]:
    total = query.order_by(None).count()
    items = (
        query.order_by(desc(Shipment.created_at), desc(Shipment.id))
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total


def list_shipments(
    db: Session,
    actor: Actor,
    filters: Optional[ShipmentFilters] = None,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[Shipment], int]:
    """
    Newest-first page of shipments visible to the actor.

    Registered users only ever see their own shipments. Administrators see
    everyone's, and without an explicit status filter the finished
    (COMPLETED / CANCELLED) ones are left out.

    Returns:
        (items on this page, total matching rows)
    """
    if actor.is_anonymous:
        raise ForbiddenError("Sign in to list shipments", action="list", resource="Shipment")

    filters = filters or ShipmentFilters()
    query = _base_query(db)

    if not actor.is_admin:
        query = query.filter(Shipment.sender_id == actor.id)

    if filters.status:
        query = query.filter(Shipment.status == ShipmentStatus(filters.status).value)
    elif actor.is_admin:
        query = query.filter(Shipment.status.notin_(ACTIVE_EXCLUDED))

    if filters.priority:
        query = query.filter(Shipment.priority == filters.priority)

    search = (filters.search or "").strip()
    if search:
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                Shipment.tracking_number.ilike(pattern, escape=LIKE_ESCAPE),
                Shipment.receiver_email.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    return _paginate(query, page, page_size)


def list_completed(db: Session, actor: Actor, page: int = 1, page_size: int = 10):
    return list_shipments(db, actor, ShipmentFilters(status=ShipmentStatus.COMPLETED.value), page, page_size)


def list_cancelled(db: Session, actor: Actor, page: int = 1, page_size: int = 10):
    return list_shipments(db, actor, ShipmentFilters(status=ShipmentStatus.CANCELLED.value), page, page_size)


def _with_detail(db: Session):
    return db.query(Shipment).options(
        joinedload(Shipment.box_type),
        joinedload(Shipment.receiver_country),
        joinedload(Shipment.sender),
        selectinload(Shipment.tracking_history),
    )


def get_shipment(db: Session, actor: Actor, shipment_id: int) -> Shipment:
    shipment = _with_detail(db).filter(Shipment.id == shipment_id).first()
    if not shipment:
        raise NotFoundError("Shipment", shipment_id)
    ensure_can_read(actor, shipment)
    return shipment


def get_by_tracking_number(db: Session, actor: Actor, tracking_number: str) -> Shipment:
    shipment = _with_detail(db).filter(Shipment.tracking_number == tracking_number).first()
    if not shipment:
        raise NotFoundError("Shipment", tracking_number)
    ensure_can_read(actor, shipment)
    return shipment


def latest_tracking_entry(db: Session, shipment_id: int) -> Optional[TrackingHistory]:
    return (
        db.query(TrackingHistory)
        .filter(TrackingHistory.shipment_id == shipment_id)
        .order_by(desc(TrackingHistory.timestamp), desc(TrackingHistory.id))
        .first()
    )


def list_for_customer(
    db: Session,
    actor: Actor,
    customer_id: int,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[Tuple[Shipment, Optional[TrackingHistory]]], int]:
    """
    Every shipment one customer sent, each paired with its latest ledger
    entry. Administrators only.
    """
    if not actor.is_admin:
        raise ForbiddenError("Administrator access required", action="list", resource="Shipment")

    query = _base_query(db).filter(Shipment.sender_id == customer_id)
    shipments, total = _paginate(query, page, page_size)
    return [(s, latest_tracking_entry(db, s.id)) for s in shipments], total
