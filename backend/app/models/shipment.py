"""
Shipment and Tracking History models

A Shipment is a parcel sent by a user to a receiver who has no account;
the receiver's contact block is stored inline. TrackingHistory is the
append-only ledger of status changes for a shipment.
"""
from datetime import datetime

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import relationship

from app.core.status_config import PaymentStatus, ShipmentPriority, ShipmentStatus
from app.db.base import Base


class Shipment(Base):
    """Shipment - a parcel moving through the delivery lifecycle"""
    __tablename__ = "shipments"
    __table_args__ = (
        CheckConstraint("weight > 0", name="ck_shipments_weight_positive"),
        CheckConstraint("shipping_cost >= 0", name="ck_shipments_cost_non_negative"),
    )

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Public identifier, BOX-<suffix>
    tracking_number = Column(String(50), unique=True, nullable=False, index=True)

    # Sender (nullable only for externally created guest shipments)
    sender_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Receiver contact block
    receiver_first_name = Column(String(50), nullable=False)
    receiver_last_name = Column(String(50), nullable=False)
    receiver_email = Column(String(255), nullable=False, index=True)
    receiver_contact_number = Column(String(20), nullable=False)
    receiver_street = Column(String(255), nullable=False)
    receiver_city = Column(String(100), nullable=False)
    receiver_state = Column(String(100), nullable=True)
    receiver_zip_code = Column(String(20), nullable=False)
    receiver_country_id = Column(
        Integer,
        ForeignKey("countries.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    # Parcel
    box_type_id = Column(
        Integer,
        ForeignKey("box_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    weight = Column(Numeric(8, 2), nullable=False)
    contents = Column(Text, nullable=False)
    is_fragile = Column(Boolean, default=False, nullable=False)
    priority = Column(String(10), default=ShipmentPriority.NORMAL.value, nullable=False, index=True)

    # Quoted at creation, never re-priced (full precision, rounded on display)
    shipping_cost = Column(Numeric(12, 4), nullable=False)

    # Lifecycle
    status = Column(String(20), default=ShipmentStatus.CREATED.value, nullable=False, index=True)
    estimated_delivery_date = Column(DateTime, nullable=True)
    actual_delivery_date = Column(DateTime, nullable=True)  # Set only on COMPLETED

    # Payment
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False, index=True)
    payment_method = Column(String(20), nullable=True)
    paid_at = Column(DateTime, nullable=True)

    # Insurance
    is_insured = Column(Boolean, default=False, nullable=False)
    insured_value = Column(Numeric(12, 2), nullable=True)

    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    sender = relationship("User", back_populates="shipments")
    box_type = relationship("BoxType")
    receiver_country = relationship("Country")
    tracking_history = relationship(
        "TrackingHistory",
        back_populates="shipment",
        order_by=lambda: [TrackingHistory.timestamp, TrackingHistory.id],
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Shipment {self.tracking_number} {self.status}>"


class TrackingHistory(Base):
    """Tracking History - one ledger entry per status assignment"""
    __tablename__ = "tracking_history"

    id = Column(Integer, primary_key=True, index=True)

    shipment_id = Column(
        Integer,
        ForeignKey("shipments.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    status = Column(String(20), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    shipment = relationship("Shipment", back_populates="tracking_history")

    def __repr__(self):
        return f"<TrackingHistory {self.status} for shipment {self.shipment_id}>"
