"""
Shipping Cost Calculator

cost = box_type.base_price * country.multiplier

The product is kept at full precision for storage. Rounding to the
currency's two decimal places happens only when a value is presented.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, Any

from app.exceptions import InvalidReferenceError

if TYPE_CHECKING:
    from app.models.box_type import BoxType
    from app.models.country import Country
    from app.services.reference_data import ReferenceDataProvider

CENT = Decimal("0.01")


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() avoids binary float artefacts (2.1 -> 2.100000000000000088...)
    return Decimal(str(value))


def compute_cost(box_type: "BoxType", country: "Country") -> Decimal:
    """Shipping cost for one box of this type to this country, unrounded."""
    return _to_decimal(box_type.base_price) * _to_decimal(country.multiplier)


def round_money(value: Any) -> Decimal:
    """Round half-up to two decimal places for display."""
    return _to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CostQuote:
    box_type: "BoxType"
    country: "Country"
    shipping_cost: Decimal


def resolve_box_type(provider: "ReferenceDataProvider", box_type_id: int) -> "BoxType":
    """Look up an active box type or raise InvalidReferenceError."""
    box_type = provider.get_box_type(box_type_id)
    if box_type is None:
        raise InvalidReferenceError("BoxType", box_type_id)
    if not box_type.is_active:
        raise InvalidReferenceError("BoxType", box_type_id, reason="inactive")
    return box_type


def resolve_country(provider: "ReferenceDataProvider", country_id: int) -> "Country":
    """Look up an active destination country or raise InvalidReferenceError."""
    country = provider.get_country(country_id)
    if country is None:
        raise InvalidReferenceError("Country", country_id)
    if not country.is_active:
        raise InvalidReferenceError("Country", country_id, reason="inactive")
    return country


def quote_cost(provider: "ReferenceDataProvider", box_type_id: int, country_id: int) -> CostQuote:
    """
    Resolve both references and price the shipment.

    Raises:
        InvalidReferenceError: box type or country missing or inactive
    """
    box_type = resolve_box_type(provider, box_type_id)
    country = resolve_country(provider, country_id)
    return CostQuote(
        box_type=box_type,
        country=country,
        shipping_cost=compute_cost(box_type, country),
    )
