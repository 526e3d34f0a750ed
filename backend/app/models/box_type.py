"""
Box Type model - the parcel sizes/tiers customers can ship
"""
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from app.db.base import Base


class BoxType(Base):
    """Box type with physical dimensions and a base shipping price"""
    __tablename__ = "box_types"
    __table_args__ = (
        CheckConstraint("length > 0", name="ck_box_types_length_positive"),
        CheckConstraint("width > 0", name="ck_box_types_width_positive"),
        CheckConstraint("height > 0", name="ck_box_types_height_positive"),
        CheckConstraint("weight > 0", name="ck_box_types_weight_positive"),
        CheckConstraint("base_price > 0", name="ck_box_types_base_price_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    # Dimensions in cm, weight in kg
    length = Column(Numeric(8, 2), nullable=False)
    width = Column(Numeric(8, 2), nullable=False)
    height = Column(Numeric(8, 2), nullable=False)
    weight = Column(Numeric(8, 2), nullable=False)

    base_price = Column(Numeric(10, 2), nullable=False)
    color = Column(String(50), nullable=False, default="#8B4513")
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=False), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<BoxType {self.name} @ {self.base_price}>"
