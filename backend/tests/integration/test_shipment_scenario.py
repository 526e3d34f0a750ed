"""
End-to-end shipment scenario through the HTTP API.

A customer registers, logs in, prices and sends a box; an administrator
moves it to delivery; the customer can no longer cancel it and both
dashboards reflect the result.
"""
import pytest


@pytest.mark.integration
def test_register_ship_deliver(client, admin_headers, box_type, country):
    # Register and log in
    registered = client.post("/api/v1/auth/register", json={
        "email": "sender@example.com",
        "password": "Sender123",
        "first_name": "Sam",
        "last_name": "Sender",
        "country_id": country.id,
    })
    assert registered.status_code == 201

    login = client.post("/api/v1/auth/login", data={"username": "sender@example.com", "password": "Sender123"})
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    # Quote and create
    quote = client.post(
        "/api/v1/boxes/calculate-cost",
        json={"box_type_id": box_type.id, "country_id": country.id},
    ).json()
    assert quote["shipping_cost"] == "98.00"

    created = client.post("/api/v1/shipments/", headers=headers, json={
        "receiver_first_name": "Rita",
        "receiver_last_name": "Receiver",
        "receiver_email": "rita@example.com",
        "receiver_contact_number": "0709876543",
        "receiver_street": "Kungsgatan 12",
        "receiver_city": "Uppsala",
        "receiver_zip_code": "75321",
        "receiver_country_id": country.id,
        "box_type_id": box_type.id,
        "contents": "Handmade ceramics",
        "weight": "3.2",
        "is_fragile": True,
    })
    assert created.status_code == 201
    shipment = created.json()
    assert shipment["shipping_cost"] == quote["shipping_cost"]

    # Admin skips RECEIVED and delivers
    for status in ("IN_TRANSIT", "COMPLETED"):
        response = client.put(f"/api/v1/shipments/{shipment['id']}", json={"status": status}, headers=admin_headers)
        assert response.status_code == 200

    delivered = response.json()
    assert delivered["actual_delivery_date"] is not None
    assert [e["status"] for e in delivered["tracking_history"]] == ["CREATED", "IN_TRANSIT", "COMPLETED"]

    # Too late to cancel
    late_cancel = client.put(f"/api/v1/shipments/{shipment['id']}", json={"status": "CANCELLED"}, headers=headers)
    assert late_cancel.status_code == 400
    detail = client.get(f"/api/v1/shipments/{shipment['id']}", headers=headers).json()
    assert len(detail["tracking_history"]) == 3

    # Pay and check dashboards
    paid = client.post(f"/api/v1/shipments/{shipment['id']}/payment", json={"payment_method": "CARD"}, headers=headers)
    assert paid.status_code == 200

    mine = client.get("/api/v1/dashboard/user", headers=headers).json()
    assert mine["total_shipments"] == 1
    assert mine["status_counts"]["COMPLETED"] == 1
    assert float(mine["total_spent"]) == 98.0

    overview = client.get("/api/v1/dashboard/admin", headers=admin_headers).json()
    assert overview["total_shipments"] == 1
    assert float(overview["total_revenue"]) == 98.0
    assert overview["top_destinations"] == [{"country": "Sweden", "shipments": 1}]

    assert client.get("/api/v1/dashboard/admin", headers=headers).status_code == 403
