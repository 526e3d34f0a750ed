"""
Test data factories for BoxShip.

Provides functions to create test entities with sensible defaults.

Usage:
    from tests.factories import create_test_user, create_test_shipment

    def test_something(db_session):
        user = create_test_user(db_session, email="test@example.com")
        shipment = create_test_shipment(db_session, sender=user)
"""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.core.status_config import (
    Continent,
    PaymentStatus,
    ShipmentPriority,
    ShipmentStatus,
    ShippingZone,
    UserRole,
)


# =============================================================================
# SEQUENCE MANAGEMENT
# =============================================================================

_sequences: Dict[str, int] = {}


def reset_sequences():
    """Reset all sequences. Call between tests for predictable values."""
    global _sequences
    _sequences = {}


def _next(name: str) -> int:
    """Get next sequence number for a given entity type."""
    _sequences[name] = _sequences.get(name, 0) + 1
    return _sequences[name]


# =============================================================================
# USER FACTORY
# =============================================================================

def create_test_user(
    db: Session,
    email: Optional[str] = None,
    password: str = "TestPass123!",
    role: str = UserRole.REGISTERED_USER.value,
    **overrides
) -> "User":
    """
    Create or get a test user (get-or-create semantics).

    Args:
        db: Database session
        email: User email (auto-generated if not provided)
        password: Plain text password (will be hashed)
        role: REGISTERED_USER or ADMINISTRATOR
        **overrides: Additional field overrides
    """
    from app.models.user import User

    seq = _next("user")
    target_email = email or f"testuser{seq}@example.com"

    existing = db.query(User).filter_by(email=target_email).first()
    if existing:
        return existing

    user = User(
        email=target_email,
        password_hash=hash_password(password),
        first_name=overrides.pop("first_name", f"Test{seq}"),
        last_name=overrides.pop("last_name", "User"),
        role=role,
        is_active=overrides.pop("is_active", True),
        email_verified=overrides.pop("email_verified", False),
        **overrides
    )
    db.add(user)
    db.flush()
    return user


# =============================================================================
# REFERENCE DATA FACTORIES
# =============================================================================

def create_test_country(
    db: Session,
    name: Optional[str] = None,
    code: Optional[str] = None,
    multiplier="1.0",
    **overrides
) -> "Country":
    """Create a destination country. Codes default to XA, XB, ..."""
    from app.models.country import Country

    seq = _next("country")

    country = Country(
        name=name or f"Testland {seq}",
        code=code or f"X{chr(ord('A') + seq - 1)}",
        currency=overrides.pop("currency", "USD"),
        multiplier=Decimal(str(multiplier)),
        continent=overrides.pop("continent", Continent.EUROPE.value),
        shipping_zone=overrides.pop("shipping_zone", ShippingZone.ZONE1.value),
        is_active=overrides.pop("is_active", True),
        **overrides
    )
    db.add(country)
    db.flush()
    return country


def create_test_box_type(
    db: Session,
    name: Optional[str] = None,
    base_price="10.00",
    **overrides
) -> "BoxType":
    from app.models.box_type import BoxType

    seq = _next("box_type")

    box_type = BoxType(
        name=name or f"Box {seq}",
        length=overrides.pop("length", Decimal("30")),
        width=overrides.pop("width", Decimal("20")),
        height=overrides.pop("height", Decimal("15")),
        weight=overrides.pop("weight", Decimal("1.5")),
        base_price=Decimal(str(base_price)),
        color=overrides.pop("color", "#8B4513"),
        is_active=overrides.pop("is_active", True),
        **overrides
    )
    db.add(box_type)
    db.flush()
    return box_type


# =============================================================================
# SHIPMENT FACTORY
# =============================================================================

def create_test_shipment(
    db: Session,
    sender=None,
    box_type=None,
    country=None,
    status: str = ShipmentStatus.CREATED.value,
    created_at: Optional[datetime] = None,
    **overrides
) -> "Shipment":
    """
    Insert a shipment directly, bypassing the lifecycle service.

    Writes a single ledger entry for the given status so the
    one-entry-per-status-assignment shape holds for seeded rows.
    """
    from app.models.shipment import Shipment, TrackingHistory

    seq = _next("shipment")
    box_type = box_type or create_test_box_type(db)
    country = country or create_test_country(db)
    created_at = created_at or datetime.utcnow()

    shipment = Shipment(
        tracking_number=overrides.pop("tracking_number", f"BOX-{1700000000000 + seq}-TEST{seq:02d}"),
        sender_id=sender.id if sender is not None else None,
        receiver_first_name=overrides.pop("receiver_first_name", "Receiver"),
        receiver_last_name=overrides.pop("receiver_last_name", f"Number{seq}"),
        receiver_email=overrides.pop("receiver_email", f"receiver{seq}@example.com"),
        receiver_contact_number=overrides.pop("receiver_contact_number", "0701234567"),
        receiver_street=overrides.pop("receiver_street", "1 Harbour Street"),
        receiver_city=overrides.pop("receiver_city", "Gothenburg"),
        receiver_zip_code=overrides.pop("receiver_zip_code", "41101"),
        receiver_country_id=country.id,
        box_type_id=box_type.id,
        weight=overrides.pop("weight", Decimal("2.0")),
        contents=overrides.pop("contents", "Books and papers"),
        priority=overrides.pop("priority", ShipmentPriority.NORMAL.value),
        is_fragile=overrides.pop("is_fragile", False),
        shipping_cost=overrides.pop(
            "shipping_cost", Decimal(str(box_type.base_price)) * Decimal(str(country.multiplier))
        ),
        status=status,
        estimated_delivery_date=created_at + timedelta(days=7),
        payment_status=overrides.pop("payment_status", PaymentStatus.PENDING.value),
        is_insured=overrides.pop("is_insured", False),
        created_at=created_at,
        updated_at=created_at,
        **overrides
    )
    shipment.tracking_history.append(
        TrackingHistory(status=status, location="Origin Facility", description="Seeded", timestamp=created_at)
    )
    db.add(shipment)
    db.flush()
    return shipment
