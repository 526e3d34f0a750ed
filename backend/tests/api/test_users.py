"""
Tests for the administrator users directory and the account endpoints.
"""
import pytest

from app.models.user import User
from tests.factories import create_test_shipment, create_test_user


def new_user_payload(**overrides):
    payload = {
        "email": "ops@example.com",
        "password": "OpsPass123",
        "first_name": "Olga",
        "last_name": "Ops",
        "role": "ADMINISTRATOR",
    }
    payload.update(overrides)
    return payload


class TestUserDirectory:

    @pytest.mark.api
    def test_list_requires_admin(self, client, customer_headers):
        response = client.get("/api/v1/users/", headers=customer_headers)
        assert response.status_code == 403

    @pytest.mark.api
    def test_list_filters_and_paginates(self, client, db, admin_headers, admin_user, customer_user):
        create_test_user(db, email="dormant@example.com", first_name="Dormant", is_active=False)
        db.commit()

        everyone = client.get("/api/v1/users/", headers=admin_headers).json()
        assert everyone["pagination"]["total"] == 3

        admins = client.get("/api/v1/users/?role=ADMINISTRATOR", headers=admin_headers).json()
        assert [u["email"] for u in admins["items"]] == ["admin@example.com"]

        inactive = client.get("/api/v1/users/?is_active=false", headers=admin_headers).json()
        assert [u["email"] for u in inactive["items"]] == ["dormant@example.com"]

        page = client.get("/api/v1/users/?page=2&page_size=2", headers=admin_headers).json()
        assert page["pagination"] == {"total": 3, "offset": 2, "limit": 2, "returned": 1}

    @pytest.mark.api
    def test_search_by_name_or_email(self, client, admin_headers, customer_user, other_customer):
        response = client.get("/api/v1/users/?search=CUSTOMER", headers=admin_headers)
        assert [u["email"] for u in response.json()["items"]] == ["customer@example.com"]

    @pytest.mark.api
    def test_admin_provisions_administrator(self, client, db, admin_headers):
        response = client.post("/api/v1/users/", json=new_user_payload(), headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "ADMINISTRATOR"
        assert body["email_verified"] is True
        assert db.query(User).filter(User.email == "ops@example.com").count() == 1

    @pytest.mark.api
    def test_get_missing_user(self, client, admin_headers):
        response = client.get("/api/v1/users/9999", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    @pytest.mark.api
    def test_update_role_and_flags(self, client, admin_headers, customer_user):
        response = client.put(
            f"/api/v1/users/{customer_user.id}",
            json={"role": "ADMINISTRATOR", "email_verified": True, "city": "Lund"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "ADMINISTRATOR"
        assert body["email_verified"] is True
        assert body["city"] == "Lund"

    @pytest.mark.api
    def test_cannot_demote_self(self, client, admin_headers, admin_user):
        response = client.put(
            f"/api/v1/users/{admin_user.id}", json={"role": "REGISTERED_USER"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "role"

    @pytest.mark.api
    def test_toggle_status_blocks_login(self, client, admin_headers, customer_user):
        response = client.patch(f"/api/v1/users/{customer_user.id}/toggle-status", headers=admin_headers)
        assert response.json()["is_active"] is False

        login = client.post(
            "/api/v1/auth/login",
            data={"username": "customer@example.com", "password": "CustomerPass123!"},
        )
        assert login.status_code == 403

    @pytest.mark.api
    def test_cannot_toggle_self(self, client, admin_headers, admin_user):
        response = client.patch(f"/api/v1/users/{admin_user.id}/toggle-status", headers=admin_headers)
        assert response.status_code == 400

    @pytest.mark.api
    def test_delete_user_without_shipments(self, client, db, admin_headers, other_customer):
        response = client.delete(f"/api/v1/users/{other_customer.id}", headers=admin_headers)

        assert response.status_code == 200
        assert db.query(User).filter(User.email == "other@example.com").count() == 0

    @pytest.mark.api
    def test_delete_user_with_shipments_is_conflict(self, client, db, admin_headers, customer_user):
        create_test_shipment(db, sender=customer_user)
        db.commit()

        response = client.delete(f"/api/v1/users/{customer_user.id}", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["details"]["shipments"] == 1


class TestAccount:

    @pytest.mark.api
    def test_get_own_account(self, client, customer_headers):
        response = client.get("/api/v1/account/", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "customer@example.com"

    @pytest.mark.api
    def test_update_own_account(self, client, customer_headers):
        response = client.put(
            "/api/v1/account/", json={"contact_number": "0709998877"}, headers=customer_headers
        )
        assert response.status_code == 200
        assert response.json()["contact_number"] == "0709998877"

    @pytest.mark.api
    def test_customer_cannot_delete_accounts(self, client, customer_headers, other_customer):
        response = client.delete(f"/api/v1/account/{other_customer.id}", headers=customer_headers)
        assert response.status_code == 403

    @pytest.mark.api
    def test_admin_deletes_account(self, client, admin_headers, other_customer):
        response = client.delete(f"/api/v1/account/{other_customer.id}", headers=admin_headers)
        assert response.status_code == 200

    @pytest.mark.api
    def test_admin_cannot_delete_self(self, client, admin_headers, admin_user):
        response = client.delete(f"/api/v1/account/{admin_user.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
