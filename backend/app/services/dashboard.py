"""
Dashboard statistics for the user and administrator home screens.
"""
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import desc, func
from sqlalchemy.orm import Session, joinedload

from app.core.status_config import PaymentStatus, ShipmentPriority, ShipmentStatus, UserRole
from app.exceptions import ValidationError
from app.models.box_type import BoxType
from app.models.country import Country
from app.models.shipment import Shipment
from app.models.user import User
from app.services.shipping_cost import round_money

RECENT_LIMIT = 5
TOP_DESTINATIONS_LIMIT = 5


def _status_counts(query) -> Dict[str, int]:
    counts = {status.value: 0 for status in ShipmentStatus}
    for status, count in query.group_by(Shipment.status).all():
        counts[status] = count
    return counts


def user_dashboard(db: Session, user_id: int) -> Dict[str, Any]:
    owned = db.query(Shipment).filter(Shipment.sender_id == user_id)

    status_counts = _status_counts(
        db.query(Shipment.status, func.count(Shipment.id)).filter(Shipment.sender_id == user_id)
    )
    total_spent = (
        db.query(func.coalesce(func.sum(Shipment.shipping_cost), 0))
        .filter(
            Shipment.sender_id == user_id,
            Shipment.payment_status == PaymentStatus.PAID.value,
        )
        .scalar()
    )
    recent = (
        owned.options(joinedload(Shipment.box_type), joinedload(Shipment.receiver_country))
        .order_by(desc(Shipment.created_at), desc(Shipment.id))
        .limit(RECENT_LIMIT)
        .all()
    )

    return {
        "total_shipments": owned.count(),
        "status_counts": status_counts,
        "total_spent": round_money(total_spent),
        "recent_shipments": recent,
    }


def admin_dashboard(db: Session) -> Dict[str, Any]:
    paid = db.query(Shipment).filter(Shipment.payment_status == PaymentStatus.PAID.value)
    revenue = paid.with_entities(func.coalesce(func.sum(Shipment.shipping_cost), 0)).scalar()
    paid_count = paid.count()
    average = Decimal(str(revenue)) / paid_count if paid_count else Decimal("0")

    top_destinations = (
        db.query(Country.name, func.count(Shipment.id).label("shipments"))
        .join(Shipment, Shipment.receiver_country_id == Country.id)
        .group_by(Country.id, Country.name)
        .order_by(desc("shipments"), Country.name)
        .limit(TOP_DESTINATIONS_LIMIT)
        .all()
    )

    return {
        "active_users": db.query(User).filter(
            User.is_active.is_(True), User.role == UserRole.REGISTERED_USER.value
        ).count(),
        "total_shipments": db.query(Shipment).count(),
        "active_countries": db.query(Country).filter(Country.is_active.is_(True)).count(),
        "active_box_types": db.query(BoxType).filter(BoxType.is_active.is_(True)).count(),
        "status_counts": _status_counts(db.query(Shipment.status, func.count(Shipment.id))),
        "total_revenue": round_money(revenue),
        "average_shipping_cost": round_money(average),
        "top_destinations": [
            {"country": name, "shipments": count} for name, count in top_destinations
        ],
    }


def shipment_analytics(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Shipment breakdowns over an optional creation-date range.

    Both bounds are inclusive calendar days. Revenue per country sums the
    quoted shipping cost of every shipment in range, paid or not. Delivery
    time covers COMPLETED shipments, measured from creation to delivery.

    Raises:
        ValidationError: start_date is after end_date
    """
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date cannot be after end_date", field="start_date")

    in_range = []
    if start_date:
        in_range.append(Shipment.created_at >= datetime.combine(start_date, time.min))
    if end_date:
        in_range.append(Shipment.created_at < datetime.combine(end_date + timedelta(days=1), time.min))

    priority_counts = {priority.value: 0 for priority in ShipmentPriority}
    for priority, count in (
        db.query(Shipment.priority, func.count(Shipment.id))
        .filter(*in_range)
        .group_by(Shipment.priority)
        .all()
    ):
        priority_counts[priority] = count

    by_country = (
        db.query(
            Country.id,
            Country.name,
            func.count(Shipment.id).label("shipments"),
            func.coalesce(func.sum(Shipment.shipping_cost), 0),
        )
        .join(Shipment, Shipment.receiver_country_id == Country.id)
        .filter(*in_range)
        .group_by(Country.id, Country.name)
        .order_by(desc("shipments"), Country.name)
        .all()
    )

    delivered = (
        db.query(Shipment.created_at, Shipment.actual_delivery_date)
        .filter(
            Shipment.status == ShipmentStatus.COMPLETED.value,
            Shipment.actual_delivery_date.isnot(None),
            *in_range,
        )
        .all()
    )
    durations = [
        (delivered_at - created_at).total_seconds() / 86400 for created_at, delivered_at in delivered
    ]

    return {
        "start_date": start_date,
        "end_date": end_date,
        "priority_counts": priority_counts,
        "by_country": [
            {
                "country_id": country_id,
                "country": name,
                "shipments": count,
                "total_shipping_cost": round_money(total),
            }
            for country_id, name, count, total in by_country
        ],
        "delivery_time": {
            "completed_shipments": len(durations),
            "average_days": round(sum(durations) / len(durations), 2) if durations else None,
            "min_days": round(min(durations), 2) if durations else None,
            "max_days": round(max(durations), 2) if durations else None,
        },
    }
