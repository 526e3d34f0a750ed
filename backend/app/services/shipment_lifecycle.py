"""
Shipment Lifecycle Service

Owns the shipment status state machine and the tracking-history ledger.

    CREATED -> RECEIVED -> IN_TRANSIT -> COMPLETED
        \\__________\\____________\\______-> CANCELLED

Every status assignment (creation included) writes exactly one
TrackingHistory row in the same commit as the status change. Transitions
use a conditional UPDATE on the previously read status, so two racing
requests cannot both apply: the loser gets a ConflictError and nothing is
written for it.
"""
import random
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.status_config import (
    PaymentMethod,
    PaymentStatus,
    ShipmentStatus,
    is_terminal_status,
    validate_shipment_transition,
)
from app.exceptions import ConflictError, ForbiddenError, IllegalTransitionError, NotFoundError
from app.logging_config import get_logger
from app.models.shipment import Shipment, TrackingHistory
from app.schemas.shipment import ShipmentCreate
from app.services.reference_data import ReferenceDataProvider, SqlReferenceData
from app.services.shipment_access import (
    Actor,
    ensure_can_delete,
    ensure_can_read,
    ensure_can_transition,
)
from app.services.shipping_cost import quote_cost
from app.services.tracking_numbers import TrackingNumberGenerator, generate_tracking_number

logger = get_logger(__name__)

CREATED_DESCRIPTION = "Shipment created and awaiting confirmation"


def add_business_days(start: datetime, days: int) -> datetime:
    """Move forward `days` weekdays from start, skipping Saturdays and Sundays."""
    current = start
    added = 0
    while added < days:
        current += timedelta(days=1)
        if current.weekday() < 5:
            added += 1
    return current


class ShipmentLifecycleService:
    """
    Creates shipments, moves them through their lifecycle and deletes them.

    Collaborators are injectable so tests can pin randomness and time:
        reference_data: country / box type lookups (defaults to the DB)
        tracking_numbers: zero-arg callable returning a new tracking number
        rng: random.Random used for the delivery estimate
        clock: zero-arg callable returning naive UTC "now"
    """

    def __init__(
        self,
        db: Session,
        reference_data: Optional[ReferenceDataProvider] = None,
        tracking_numbers: Optional[TrackingNumberGenerator] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.reference_data = reference_data or SqlReferenceData(db)
        self.tracking_numbers = tracking_numbers or generate_tracking_number
        self.rng = rng or random.Random()
        self.clock = clock or datetime.utcnow

    # ========================================================================
    # CREATE
    # ========================================================================

    def estimate_delivery(self, start: datetime) -> datetime:
        days = self.rng.randint(
            settings.ESTIMATED_DELIVERY_MIN_DAYS,
            settings.ESTIMATED_DELIVERY_MAX_DAYS,
        )
        return add_business_days(start, days)

    def create(self, actor: Actor, data: ShipmentCreate) -> Shipment:
        """
        Create a shipment owned by the actor.

        Raises:
            ForbiddenError: anonymous actor
            InvalidReferenceError: box type or country missing or inactive
            ConflictError: tracking number collided with an existing shipment
        """
        if actor.is_anonymous:
            raise ForbiddenError("Sign in to create shipments", action="create", resource="Shipment")

        quote = quote_cost(self.reference_data, data.box_type_id, data.receiver_country_id)
        now = self.clock()
        tracking_number = self.tracking_numbers()

        shipment = Shipment(
            tracking_number=tracking_number,
            sender_id=actor.id,
            receiver_first_name=data.receiver_first_name,
            receiver_last_name=data.receiver_last_name,
            receiver_email=data.receiver_email,
            receiver_contact_number=data.receiver_contact_number,
            receiver_street=data.receiver_street,
            receiver_city=data.receiver_city,
            receiver_state=data.receiver_state,
            receiver_zip_code=data.receiver_zip_code,
            receiver_country_id=quote.country.id,
            box_type_id=quote.box_type.id,
            weight=data.weight,
            contents=data.contents,
            priority=data.priority.value,
            is_fragile=data.is_fragile,
            shipping_cost=quote.shipping_cost,
            status=ShipmentStatus.CREATED.value,
            estimated_delivery_date=self.estimate_delivery(now),
            actual_delivery_date=None,
            payment_status=PaymentStatus.PENDING.value,
            is_insured=data.is_insured,
            insured_value=data.insured_value,
            notes=data.notes,
            created_at=now,
            updated_at=now,
        )
        shipment.tracking_history.append(
            TrackingHistory(
                status=ShipmentStatus.CREATED.value,
                location=settings.DEFAULT_ORIGIN_LOCATION,
                description=CREATED_DESCRIPTION,
                timestamp=now,
            )
        )

        self.db.add(shipment)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            collided = self.db.query(Shipment.id).filter(
                Shipment.tracking_number == tracking_number
            ).first()
            if collided:
                logger.warning(f"Tracking number collision on {tracking_number}")
                raise ConflictError(
                    "Tracking number already in use; shipment was not created",
                    details={"tracking_number": tracking_number},
                ) from exc
            raise
        self.db.refresh(shipment)

        logger.info(
            f"Shipment {shipment.tracking_number} created",
            extra={
                "shipment_id": shipment.id,
                "sender_id": actor.id,
                "shipping_cost": str(shipment.shipping_cost),
            },
        )
        return shipment

    # ========================================================================
    # TRANSITIONS
    # ========================================================================

    def _get(self, shipment_id: int) -> Shipment:
        shipment = self.db.get(Shipment, shipment_id)
        if shipment is None:
            raise NotFoundError("Shipment", shipment_id)
        return shipment

    def transition(
        self,
        shipment_id: int,
        actor: Actor,
        new_status: str,
        location: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Shipment:
        """
        Move a shipment to new_status and append one ledger entry.

        Check order: existence, read access, terminal state, the actor's
        right to request this status, then the transition table.

        Raises:
            NotFoundError: no such shipment
            ForbiddenError: actor may not see the shipment or request this status
            IllegalTransitionError: shipment is terminal, or new_status is not
                reachable from the current status (including itself)
            ConflictError: another request changed the status first
        """
        shipment = self._get(shipment_id)
        # Read access before the terminal check: strangers learn nothing about state.
        ensure_can_read(actor, shipment)

        current = ShipmentStatus(shipment.status)
        target = ShipmentStatus(new_status)

        if is_terminal_status(current):
            raise IllegalTransitionError(
                f"Shipment {shipment.tracking_number} is {current.value} and can no longer change",
                current_state=current.value,
                requested_state=target.value,
                allowed_states=[],
            )

        ensure_can_transition(actor, shipment, target)
        validate_shipment_transition(current, target)

        return self.apply_transition(
            shipment_id,
            expected_status=current,
            new_status=target,
            location=location,
            description=description,
        )

    def apply_transition(
        self,
        shipment_id: int,
        expected_status: str,
        new_status: str,
        location: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Shipment:
        """
        Write a pre-validated transition atomically.

        The UPDATE only matches while the row still has expected_status;
        zero matched rows means a concurrent writer won and the whole unit
        is rolled back.
        """
        expected = ShipmentStatus(expected_status)
        target = ShipmentStatus(new_status)
        now = self.clock()

        values = {"status": target.value, "updated_at": now}
        if target == ShipmentStatus.COMPLETED:
            values["actual_delivery_date"] = now

        try:
            result = self.db.execute(
                update(Shipment)
                .where(Shipment.id == shipment_id, Shipment.status == expected.value)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                logger.warning(
                    f"Concurrent update on shipment {shipment_id}: expected {expected.value}",
                    extra={"shipment_id": shipment_id, "requested": target.value},
                )
                raise ConflictError(
                    "Shipment was modified by another request; reload and try again",
                    details={
                        "shipment_id": shipment_id,
                        "expected_status": expected.value,
                        "requested_status": target.value,
                    },
                )

            self.db.add(
                TrackingHistory(
                    shipment_id=shipment_id,
                    status=target.value,
                    location=location or settings.DEFAULT_UPDATE_LOCATION,
                    description=description or f"Status updated to {target.value}",
                    timestamp=now,
                )
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        shipment = self._get(shipment_id)
        self.db.refresh(shipment)
        logger.info(f"Shipment {shipment.tracking_number}: {expected.value} -> {target.value}")
        return shipment

    # ========================================================================
    # DELETE
    # ========================================================================

    def delete(self, shipment_id: int, actor: Actor) -> None:
        """
        Remove a shipment and its ledger in one transaction (administrators only).

        Raises:
            ForbiddenError: actor is not an administrator
            NotFoundError: no such shipment
        """
        ensure_can_delete(actor)
        shipment = self._get(shipment_id)
        tracking_number = shipment.tracking_number

        try:
            self.db.execute(delete(TrackingHistory).where(TrackingHistory.shipment_id == shipment_id))
            self.db.execute(delete(Shipment).where(Shipment.id == shipment_id))
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Shipment {tracking_number} deleted", extra={"deleted_by": actor.id})

    # ========================================================================
    # PAYMENT
    # ========================================================================

    def record_payment(self, shipment_id: int, actor: Actor, method: str) -> Shipment:
        """
        Mark the shipping cost as paid. Payment is not a status transition
        and does not touch the ledger.

        Raises:
            NotFoundError: no such shipment
            ForbiddenError: actor is neither the sender nor an administrator
            IllegalTransitionError: shipment cancelled or already paid
            ConflictError: cancelled or paid concurrently
        """
        shipment = self._get(shipment_id)
        ensure_can_read(actor, shipment)

        if shipment.status == ShipmentStatus.CANCELLED.value:
            raise IllegalTransitionError(
                "Cannot pay for a cancelled shipment",
                current_state=shipment.status,
            )
        if shipment.payment_status == PaymentStatus.PAID.value:
            raise IllegalTransitionError(
                "Shipment is already paid",
                current_state=shipment.payment_status,
                requested_state=PaymentStatus.PAID.value,
            )

        return self.apply_payment(shipment_id, method)

    def apply_payment(self, shipment_id: int, method: str) -> Shipment:
        """
        Write a payment only while the shipment is still unpaid and not
        cancelled; a concurrent cancel or payment makes this a ConflictError.
        """
        now = self.clock()
        try:
            result = self.db.execute(
                update(Shipment)
                .where(
                    Shipment.id == shipment_id,
                    Shipment.status != ShipmentStatus.CANCELLED.value,
                    Shipment.payment_status != PaymentStatus.PAID.value,
                )
                .values(
                    payment_status=PaymentStatus.PAID.value,
                    payment_method=PaymentMethod(method).value,
                    paid_at=now,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                logger.warning(f"Concurrent update blocked payment on shipment {shipment_id}")
                raise ConflictError(
                    "Shipment was cancelled or paid by another request",
                    details={"shipment_id": shipment_id},
                )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        shipment = self._get(shipment_id)
        self.db.refresh(shipment)
        logger.info(
            f"Shipment {shipment.tracking_number} paid",
            extra={"payment_method": shipment.payment_method, "amount": str(shipment.shipping_cost)},
        )
        return shipment
