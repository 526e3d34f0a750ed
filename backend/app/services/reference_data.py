"""
Reference Data Service

Lookups and administrator CRUD for destination countries and box types.

The shipment services depend only on the ReferenceDataProvider protocol
(get_country / get_box_type), so tests can hand them an in-memory fake
instead of a database-backed provider.
"""
from enum import Enum
from typing import List, Optional, Protocol

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, DuplicateError, NotFoundError
from app.logging_config import get_logger
from app.models.box_type import BoxType
from app.models.country import Country
from app.models.shipment import Shipment
from app.models.user import User
from app.schemas.box_type import BoxTypeCreate, BoxTypeUpdate
from app.schemas.country import CountryCreate, CountryUpdate

logger = get_logger(__name__)


class ReferenceDataProvider(Protocol):
    """Read-only lookup of pricing reference data by id"""

    def get_country(self, country_id: int) -> Optional[Country]:
        ...

    def get_box_type(self, box_type_id: int) -> Optional[BoxType]:
        ...


class SqlReferenceData:
    """ReferenceDataProvider backed by the application database"""

    def __init__(self, db: Session):
        self.db = db

    def get_country(self, country_id: int) -> Optional[Country]:
        return self.db.get(Country, country_id)

    def get_box_type(self, box_type_id: int) -> Optional[BoxType]:
        return self.db.get(BoxType, box_type_id)


# ============================================================================
# COUNTRIES
# ============================================================================

def list_countries(db: Session, active_only: bool = False) -> List[Country]:
    query = db.query(Country)
    if active_only:
        query = query.filter(Country.is_active.is_(True))
    return query.order_by(Country.name).all()


def list_countries_by_continent(db: Session, continent: str) -> List[Country]:
    return (
        db.query(Country)
        .filter(Country.continent == continent, Country.is_active.is_(True))
        .order_by(Country.name)
        .all()
    )


def get_country(db: Session, country_id: int) -> Country:
    country = db.get(Country, country_id)
    if not country:
        raise NotFoundError("Country", country_id)
    return country


def get_shipping_multiplier(db: Session, country_id: int) -> dict:
    country = get_country(db, country_id)
    return {
        "country_name": country.name,
        "multiplier": country.multiplier,
        "currency": country.currency,
    }


def _ensure_unique_code(db: Session, code: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Country).filter(Country.code == code.upper())
    if exclude_id is not None:
        query = query.filter(Country.id != exclude_id)
    if query.first():
        raise DuplicateError("Country", field="code", value=code.upper())


def create_country(db: Session, data: CountryCreate) -> Country:
    _ensure_unique_code(db, data.code)

    country = Country(
        name=data.name,
        code=data.code,
        currency=data.currency,
        multiplier=data.multiplier,
        continent=data.continent.value,
        shipping_zone=data.shipping_zone.value,
        is_active=data.is_active,
    )
    db.add(country)
    db.commit()
    db.refresh(country)

    logger.info(f"Country {country.code} created", extra={"country_id": country.id})
    return country


def update_country(db: Session, country_id: int, data: CountryUpdate) -> Country:
    country = get_country(db, country_id)

    changes = data.model_dump(exclude_unset=True)
    if "code" in changes and changes["code"] != country.code:
        _ensure_unique_code(db, changes["code"], exclude_id=country_id)

    for field, value in changes.items():
        if isinstance(value, Enum):
            value = value.value
        setattr(country, field, value)

    db.commit()
    db.refresh(country)

    logger.info(f"Country {country.code} updated", extra={"fields": sorted(changes)})
    return country


def toggle_country_active(db: Session, country_id: int) -> Country:
    country = get_country(db, country_id)
    country.is_active = not country.is_active
    db.commit()
    db.refresh(country)
    logger.info(f"Country {country.code} active={country.is_active}")
    return country


def delete_country(db: Session, country_id: int) -> None:
    """
    Hard-delete a country that nothing references.

    Raises:
        ConflictError: shipments or users still point at the country
    """
    country = get_country(db, country_id)

    shipment_refs = db.query(func.count(Shipment.id)).filter(
        Shipment.receiver_country_id == country_id
    ).scalar()
    user_refs = db.query(func.count(User.id)).filter(User.country_id == country_id).scalar()
    if shipment_refs or user_refs:
        raise ConflictError(
            f"Country {country.code} is still referenced; deactivate it instead",
            details={"shipments": shipment_refs, "users": user_refs},
        )

    code = country.code
    db.delete(country)
    db.commit()
    logger.info(f"Country {code} deleted")


# ============================================================================
# BOX TYPES
# ============================================================================

def list_box_types(db: Session, active_only: bool = False) -> List[BoxType]:
    query = db.query(BoxType)
    if active_only:
        query = query.filter(BoxType.is_active.is_(True))
    return query.order_by(BoxType.base_price, BoxType.id).all()


def get_box_type(db: Session, box_type_id: int) -> BoxType:
    box_type = db.get(BoxType, box_type_id)
    if not box_type:
        raise NotFoundError("BoxType", box_type_id)
    return box_type


def create_box_type(db: Session, data: BoxTypeCreate) -> BoxType:
    box_type = BoxType(**data.model_dump())
    db.add(box_type)
    db.commit()
    db.refresh(box_type)
    logger.info(f"Box type '{box_type.name}' created", extra={"box_type_id": box_type.id})
    return box_type


def update_box_type(db: Session, box_type_id: int, data: BoxTypeUpdate) -> BoxType:
    box_type = get_box_type(db, box_type_id)

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(box_type, field, value)

    db.commit()
    db.refresh(box_type)
    logger.info(f"Box type '{box_type.name}' updated", extra={"fields": sorted(changes)})
    return box_type


def toggle_box_type_active(db: Session, box_type_id: int) -> BoxType:
    box_type = get_box_type(db, box_type_id)
    box_type.is_active = not box_type.is_active
    db.commit()
    db.refresh(box_type)
    logger.info(f"Box type '{box_type.name}' active={box_type.is_active}")
    return box_type


def delete_box_type(db: Session, box_type_id: int) -> None:
    """
    Hard-delete a box type that no shipment references.

    Raises:
        ConflictError: shipments still point at the box type
    """
    box_type = get_box_type(db, box_type_id)

    shipment_refs = db.query(func.count(Shipment.id)).filter(
        Shipment.box_type_id == box_type_id
    ).scalar()
    if shipment_refs:
        raise ConflictError(
            f"Box type '{box_type.name}' is used by {shipment_refs} shipment(s); deactivate it instead",
            details={"shipments": shipment_refs},
        )

    name = box_type.name
    db.delete(box_type)
    db.commit()
    logger.info(f"Box type '{name}' deleted")
