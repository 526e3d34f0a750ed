"""
Shipment Authorization Gate

Decides who may read, transition and delete a shipment.

Rules:
- Administrators read every shipment and may request any transition the
  state machine allows.
- Registered users read only shipments they sent, and may only cancel
  their own shipments while those are not terminal.
- Anonymous actors have no rights on existing shipments.

Denials raise ForbiddenError, never NotFoundError: the shipment's
existence is not hidden, only access to it.
"""
from dataclasses import dataclass
from typing import Optional

from app.core.status_config import ShipmentStatus, UserRole, is_terminal_status
from app.exceptions import ForbiddenError


@dataclass(frozen=True)
class Actor:
    """The identity a core operation runs on behalf of"""
    id: Optional[int]
    role: Optional[UserRole]

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=user.id, role=UserRole(user.role))

    @classmethod
    def anonymous(cls) -> "Actor":
        return cls(id=None, role=None)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMINISTRATOR

    @property
    def is_registered(self) -> bool:
        return self.role == UserRole.REGISTERED_USER and self.id is not None

    @property
    def is_anonymous(self) -> bool:
        return self.role is None


def _owns(actor: Actor, shipment) -> bool:
    return actor.is_registered and shipment.sender_id is not None and shipment.sender_id == actor.id


def can_read(actor: Actor, shipment) -> bool:
    if actor.is_admin:
        return True
    return _owns(actor, shipment)


def can_transition(actor: Actor, shipment, requested_status: str) -> bool:
    """
    Whether the actor may ask for this status.

    Legality of the move itself is the state machine's concern
    (validate_shipment_transition); this only answers "who".
    """
    if actor.is_admin:
        return True
    if not _owns(actor, shipment):
        return False
    if ShipmentStatus(requested_status) != ShipmentStatus.CANCELLED:
        return False
    return not is_terminal_status(shipment.status)


def can_delete(actor: Actor) -> bool:
    return actor.is_admin


def ensure_can_read(actor: Actor, shipment) -> None:
    if not can_read(actor, shipment):
        raise ForbiddenError(
            "Not authorized to access this shipment",
            action="read",
            resource="Shipment",
        )


def ensure_can_transition(actor: Actor, shipment, requested_status: str) -> None:
    if can_transition(actor, shipment, requested_status):
        return
    if _owns(actor, shipment):
        message = "Users can only cancel their own shipments"
    else:
        message = "Not authorized to update this shipment"
    raise ForbiddenError(message, action=f"transition:{ShipmentStatus(requested_status).value}", resource="Shipment")


def ensure_can_delete(actor: Actor) -> None:
    if not can_delete(actor):
        raise ForbiddenError("Administrator access required", action="delete", resource="Shipment")
