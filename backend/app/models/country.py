"""
Country model - destination countries and their price multipliers
"""
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from app.core.status_config import ShippingZone
from app.db.base import Base


class Country(Base):
    """Destination country with the multiplier applied to box base prices"""
    __tablename__ = "countries"
    __table_args__ = (
        CheckConstraint("multiplier >= 0", name="ck_countries_multiplier_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    code = Column(String(2), unique=True, nullable=False, index=True)  # ISO 3166-1 alpha-2
    currency = Column(String(3), nullable=False)  # ISO 4217
    multiplier = Column(Numeric(8, 4), nullable=False, default=1)
    continent = Column(String(20), nullable=False, index=True)
    shipping_zone = Column(String(10), nullable=False, default=ShippingZone.ZONE1.value)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=False), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now(), nullable=False)

    @validates("code", "currency")
    def _uppercase(self, key, value):
        return value.upper() if value else value

    def __repr__(self):
        return f"<Country {self.code} x{self.multiplier}>"
