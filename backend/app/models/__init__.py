"""Database models"""
from app.models.country import Country
from app.models.box_type import BoxType
from app.models.user import User
from app.models.shipment import Shipment, TrackingHistory

__all__ = [
    # Reference data
    "Country",
    "BoxType",
    # Identity
    "User",
    # Shipments
    "Shipment",
    "TrackingHistory",
]
