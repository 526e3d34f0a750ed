"""
Tests for the countries and boxes endpoints, including the cost calculator.
"""
import pytest

from tests.factories import create_test_box_type, create_test_country, create_test_shipment


def country_payload(**overrides):
    payload = {
        "name": "Norway",
        "code": "no",
        "currency": "nok",
        "multiplier": "1.75",
        "continent": "Europe",
    }
    payload.update(overrides)
    return payload


def box_payload(**overrides):
    payload = {
        "name": "Medium",
        "length": "40",
        "width": "30",
        "height": "20",
        "weight": "2.5",
        "base_price": "79.00",
        "color": "#223344",
    }
    payload.update(overrides)
    return payload


class TestCountries:

    @pytest.mark.api
    def test_admin_creates_country_with_normalized_codes(self, client, admin_headers):
        response = client.post("/api/v1/countries/", json=country_payload(), headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["code"] == "NO"
        assert data["currency"] == "NOK"
        assert data["is_active"] is True

    @pytest.mark.api
    def test_duplicate_code_is_conflict(self, client, admin_headers, country):
        response = client.post("/api/v1/countries/", json=country_payload(code="se"), headers=admin_headers)
        assert response.status_code == 409

    @pytest.mark.api
    def test_negative_multiplier_rejected(self, client, admin_headers):
        response = client.post("/api/v1/countries/", json=country_payload(multiplier="-1"), headers=admin_headers)
        assert response.status_code == 422

    @pytest.mark.api
    def test_customer_cannot_create(self, client, customer_headers):
        response = client.post("/api/v1/countries/", json=country_payload(), headers=customer_headers)
        assert response.status_code == 403

    @pytest.mark.api
    def test_public_list_and_active_filter(self, client, db):
        create_test_country(db, name="Alpha", code="AA")
        create_test_country(db, name="Beta", code="BB", is_active=False)
        db.commit()

        everything = client.get("/api/v1/countries/").json()
        active = client.get("/api/v1/countries/", params={"active": True}).json()

        assert [c["name"] for c in everything] == ["Alpha", "Beta"]
        assert [c["name"] for c in active] == ["Alpha"]

    @pytest.mark.api
    def test_by_continent(self, client, db):
        create_test_country(db, name="Kenya", code="KE", continent="Africa")
        create_test_country(db, name="Spain", code="ES")
        db.commit()

        response = client.get("/api/v1/countries/continent/Africa")
        assert [c["code"] for c in response.json()] == ["KE"]

    @pytest.mark.api
    def test_multiplier_lookup(self, client, country):
        response = client.get(f"/api/v1/countries/{country.id}/multiplier")

        assert response.status_code == 200
        data = response.json()
        assert data["country_name"] == "Sweden"
        assert data["currency"] == "SEK"

    @pytest.mark.api
    def test_toggle_status(self, client, admin_headers, country):
        response = client.patch(f"/api/v1/countries/{country.id}/toggle-status", headers=admin_headers)
        assert response.json()["is_active"] is False

    @pytest.mark.api
    def test_update(self, client, admin_headers, country):
        response = client.put(
            f"/api/v1/countries/{country.id}", json={"multiplier": "3.5"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert float(response.json()["multiplier"]) == 3.5

    @pytest.mark.api
    def test_update_rejects_explicit_null(self, client, db, admin_headers, country):
        response = client.put(
            f"/api/v1/countries/{country.id}", json={"multiplier": None}, headers=admin_headers
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]["errors"][0]["field"] == "multiplier"
        db.refresh(country)
        assert float(country.multiplier) == 2.0

    @pytest.mark.api
    def test_delete_unreferenced(self, client, admin_headers, country):
        response = client.delete(f"/api/v1/countries/{country.id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/api/v1/countries/{country.id}").status_code == 404

    @pytest.mark.api
    def test_delete_referenced_is_conflict(self, client, db, admin_headers, customer_user, box_type, country):
        create_test_shipment(db, sender=customer_user, box_type=box_type, country=country)
        db.commit()

        response = client.delete(f"/api/v1/countries/{country.id}", headers=admin_headers)
        assert response.status_code == 409
        assert client.get(f"/api/v1/countries/{country.id}").status_code == 200


class TestBoxes:

    @pytest.mark.api
    def test_admin_creates_box(self, client, admin_headers):
        response = client.post("/api/v1/boxes/", json=box_payload(), headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["name"] == "Medium"

    @pytest.mark.api
    def test_zero_dimension_rejected(self, client, admin_headers):
        response = client.post("/api/v1/boxes/", json=box_payload(width="0"), headers=admin_headers)
        assert response.status_code == 422

    @pytest.mark.api
    def test_update_rejects_null_price_but_clears_description(self, client, admin_headers, box_type):
        response = client.put(
            f"/api/v1/boxes/{box_type.id}", json={"base_price": None}, headers=admin_headers
        )
        assert response.status_code == 422

        response = client.put(
            f"/api/v1/boxes/{box_type.id}",
            json={"description": None, "name": "Small Plus"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Small Plus"
        assert body["description"] is None
        assert float(body["base_price"]) == 49.0

    @pytest.mark.api
    def test_list_ordered_by_price(self, client, db):
        create_test_box_type(db, name="Large", base_price="120")
        create_test_box_type(db, name="Small", base_price="25")
        db.commit()

        names = [b["name"] for b in client.get("/api/v1/boxes/").json()]
        assert names == ["Small", "Large"]

    @pytest.mark.api
    def test_delete_referenced_is_conflict(self, client, db, admin_headers, customer_user, box_type, country):
        create_test_shipment(db, sender=customer_user, box_type=box_type, country=country)
        db.commit()

        response = client.delete(f"/api/v1/boxes/{box_type.id}", headers=admin_headers)
        assert response.status_code == 409


class TestCalculateCost:

    @pytest.mark.api
    def test_quote(self, client, box_type, country):
        response = client.post(
            "/api/v1/boxes/calculate-cost",
            json={"box_type_id": box_type.id, "country_id": country.id},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["shipping_cost"] == "98.00"
        assert data["currency"] == "SEK"
        assert data["box_name"] == "Small"

    @pytest.mark.api
    def test_rounded_half_up_on_display(self, client, db):
        box = create_test_box_type(db, base_price="10.01")
        country = create_test_country(db, multiplier="1.255")
        db.commit()

        response = client.post(
            "/api/v1/boxes/calculate-cost",
            json={"box_type_id": box.id, "country_id": country.id},
        )
        assert response.json()["shipping_cost"] == "12.56"

    @pytest.mark.api
    def test_inactive_country_is_invalid_reference(self, client, db, box_type):
        closed = create_test_country(db, is_active=False)
        db.commit()

        response = client.post(
            "/api/v1/boxes/calculate-cost",
            json={"box_type_id": box_type.id, "country_id": closed.id},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REFERENCE"
