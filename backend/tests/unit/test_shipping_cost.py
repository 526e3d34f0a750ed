"""
Unit tests for the shipping cost calculator.

Uses an in-memory reference data provider; no database involved.
"""
from dataclasses import dataclass
from decimal import Decimal

import pytest

from app.exceptions import InvalidReferenceError
from app.services.shipping_cost import compute_cost, quote_cost, round_money


@dataclass
class FakeBox:
    id: int
    base_price: object
    is_active: bool = True
    name: str = "Box"


@dataclass
class FakeCountry:
    id: int
    multiplier: object
    is_active: bool = True
    name: str = "Country"
    currency: str = "USD"


class InMemoryReferenceData:
    def __init__(self, boxes=(), countries=()):
        self.boxes = {b.id: b for b in boxes}
        self.countries = {c.id: c for c in countries}

    def get_box_type(self, box_type_id):
        return self.boxes.get(box_type_id)

    def get_country(self, country_id):
        return self.countries.get(country_id)


class TestComputeCost:

    def test_base_price_times_multiplier(self):
        assert compute_cost(FakeBox(1, Decimal("49")), FakeCountry(1, Decimal("2.0"))) == Decimal("98.0")

    def test_zero_multiplier_is_free(self):
        assert compute_cost(FakeBox(1, Decimal("49")), FakeCountry(1, Decimal("0"))) == 0

    def test_full_precision_kept(self):
        cost = compute_cost(FakeBox(1, Decimal("10.01")), FakeCountry(1, Decimal("1.255")))
        assert cost == Decimal("12.56255")

    def test_float_inputs_do_not_leak_binary_error(self):
        assert compute_cost(FakeBox(1, 10.0), FakeCountry(1, 2.1)) == Decimal("21.00")


class TestRoundMoney:

    @pytest.mark.parametrize("value,expected", [
        (Decimal("12.56255"), Decimal("12.56")),
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("2.675"), Decimal("2.68")),
        ("98", Decimal("98.00")),
    ])
    def test_half_up_to_cents(self, value, expected):
        assert round_money(value) == expected


class TestQuoteCost:

    def setup_method(self):
        self.provider = InMemoryReferenceData(
            boxes=[FakeBox(1, Decimal("49")), FakeBox(2, Decimal("20"), is_active=False)],
            countries=[FakeCountry(10, Decimal("2.0")), FakeCountry(11, Decimal("1.5"), is_active=False)],
        )

    def test_quote_resolves_both_references(self):
        quote = quote_cost(self.provider, 1, 10)
        assert quote.box_type.id == 1
        assert quote.country.id == 10
        assert quote.shipping_cost == Decimal("98.0")

    def test_missing_box_type(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            quote_cost(self.provider, 99, 10)
        assert exc_info.value.details["resource"] == "BoxType"
        assert exc_info.value.details["reason"] == "not found"

    def test_inactive_box_type(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            quote_cost(self.provider, 2, 10)
        assert exc_info.value.details["reason"] == "inactive"

    def test_missing_country(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            quote_cost(self.provider, 1, 99)
        assert exc_info.value.details["resource"] == "Country"

    def test_inactive_country(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            quote_cost(self.provider, 1, 11)
        assert exc_info.value.status_code == 400
        assert exc_info.value.details["reason"] == "inactive"
