"""Status Configuration and Transition Rules

This module defines valid status values and allowed transitions for
Shipments, plus the other closed value sets shared by models and schemas.
Status transitions are validated to prevent invalid state changes.
"""
from enum import Enum
from typing import Dict, FrozenSet, List

from app.exceptions import IllegalTransitionError


# =============================================================================
# Shipment Status
# =============================================================================

class ShipmentStatus(str, Enum):
    """Valid status values for Shipments"""
    CREATED = "CREATED"
    RECEIVED = "RECEIVED"
    IN_TRANSIT = "IN_TRANSIT"
    COMPLETED = "COMPLETED"  # Delivered to the receiver
    CANCELLED = "CANCELLED"


# Allowed transitions: current_status -> set of allowed next statuses.
# Forward moves may skip stages; nothing moves backwards.
SHIPMENT_TRANSITIONS: Dict[ShipmentStatus, FrozenSet[ShipmentStatus]] = {
    ShipmentStatus.CREATED: frozenset({
        ShipmentStatus.RECEIVED,
        ShipmentStatus.IN_TRANSIT,
        ShipmentStatus.COMPLETED,
        ShipmentStatus.CANCELLED,
    }),
    ShipmentStatus.RECEIVED: frozenset({
        ShipmentStatus.IN_TRANSIT,
        ShipmentStatus.COMPLETED,
        ShipmentStatus.CANCELLED,
    }),
    ShipmentStatus.IN_TRANSIT: frozenset({
        ShipmentStatus.COMPLETED,
        ShipmentStatus.CANCELLED,
    }),
    ShipmentStatus.COMPLETED: frozenset(),  # Terminal
    ShipmentStatus.CANCELLED: frozenset(),  # Terminal
}

TERMINAL_STATUSES: FrozenSet[ShipmentStatus] = frozenset(
    status for status, allowed in SHIPMENT_TRANSITIONS.items() if not allowed
)


def is_terminal_status(status: str) -> bool:
    """True for COMPLETED and CANCELLED"""
    return ShipmentStatus(status) in TERMINAL_STATUSES


def get_allowed_shipment_transitions(current_status: str) -> List[str]:
    """Get sorted list of allowed next statuses for a shipment"""
    allowed = SHIPMENT_TRANSITIONS.get(ShipmentStatus(current_status), frozenset())
    order = list(ShipmentStatus)
    return [s.value for s in sorted(allowed, key=order.index)]


def is_valid_shipment_transition(current_status: str, new_status: str) -> bool:
    """Check if a shipment status transition is valid.

    Re-requesting the current status is not a transition and is rejected.
    """
    current = ShipmentStatus(current_status)
    new = ShipmentStatus(new_status)
    return new in SHIPMENT_TRANSITIONS[current]


def validate_shipment_transition(current: str, new: str) -> None:
    """Validate and raise error if transition is invalid"""
    if not is_valid_shipment_transition(current, new):
        allowed = get_allowed_shipment_transitions(current)
        current_value = ShipmentStatus(current).value
        new_value = ShipmentStatus(new).value
        raise IllegalTransitionError(
            f"Invalid shipment status transition: '{current_value}' -> '{new_value}'. "
            f"Allowed: {allowed if allowed else 'none (terminal state)'}",
            current_state=current_value,
            requested_state=new_value,
            allowed_states=allowed,
        )


# =============================================================================
# Shipment Priority
# =============================================================================

class ShipmentPriority(str, Enum):
    """Handling priority chosen by the sender"""
    NORMAL = "NORMAL"
    EXPRESS = "EXPRESS"
    URGENT = "URGENT"


# =============================================================================
# Payment Status
# =============================================================================

class PaymentStatus(str, Enum):
    """Valid payment status values for Shipments"""
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, Enum):
    CARD = "CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH = "CASH"


# =============================================================================
# User Roles
# =============================================================================

class UserRole(str, Enum):
    REGISTERED_USER = "REGISTERED_USER"
    ADMINISTRATOR = "ADMINISTRATOR"


# =============================================================================
# Reference data value sets
# =============================================================================

class Continent(str, Enum):
    AFRICA = "Africa"
    ANTARCTICA = "Antarctica"
    ASIA = "Asia"
    EUROPE = "Europe"
    NORTH_AMERICA = "North America"
    OCEANIA = "Oceania"
    SOUTH_AMERICA = "South America"


class ShippingZone(str, Enum):
    DOMESTIC = "domestic"
    ZONE1 = "zone1"
    ZONE2 = "zone2"
    ZONE3 = "zone3"
