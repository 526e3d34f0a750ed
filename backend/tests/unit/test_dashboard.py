"""
Unit tests for dashboard statistics and shipment analytics.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from app.exceptions import ValidationError
from app.services import dashboard

from tests.factories import create_test_country, create_test_shipment

BASE = datetime(2026, 3, 2, 10, 0)


@pytest.fixture
def spread(db, customer_user, box_type, country):
    """Shipments to two countries over three days, two of them delivered"""
    norway = create_test_country(db, name="Norway", code="NO", multiplier="1.5")
    shipments = [
        create_test_shipment(db, sender=customer_user, box_type=box_type, country=country,
                             created_at=BASE, priority="URGENT", status="COMPLETED",
                             actual_delivery_date=BASE + timedelta(days=4)),
        create_test_shipment(db, sender=customer_user, box_type=box_type, country=country,
                             created_at=BASE + timedelta(days=1), status="COMPLETED",
                             actual_delivery_date=BASE + timedelta(days=3)),
        create_test_shipment(db, sender=customer_user, box_type=box_type, country=norway,
                             created_at=BASE + timedelta(days=2), priority="EXPRESS"),
    ]
    db.commit()
    return shipments


class TestShipmentAnalytics:

    def test_whole_history(self, db, spread):
        result = dashboard.shipment_analytics(db)

        assert result["priority_counts"] == {"NORMAL": 1, "EXPRESS": 1, "URGENT": 1}
        assert result["by_country"] == [
            {"country_id": spread[0].receiver_country_id, "country": "Sweden",
             "shipments": 2, "total_shipping_cost": Decimal("196.00")},
            {"country_id": spread[2].receiver_country_id, "country": "Norway",
             "shipments": 1, "total_shipping_cost": Decimal("73.50")},
        ]
        assert result["delivery_time"] == {
            "completed_shipments": 2,
            "average_days": 3.0,
            "min_days": 2.0,
            "max_days": 4.0,
        }

    def test_end_date_is_inclusive(self, db, spread):
        result = dashboard.shipment_analytics(
            db, start_date=date(2026, 3, 3), end_date=date(2026, 3, 3)
        )

        assert result["priority_counts"]["NORMAL"] == 1
        assert sum(result["priority_counts"].values()) == 1
        assert result["delivery_time"]["average_days"] == 2.0

    def test_empty_range(self, db, spread):
        result = dashboard.shipment_analytics(db, start_date=date(2027, 1, 1))

        assert result["by_country"] == []
        assert result["delivery_time"] == {
            "completed_shipments": 0, "average_days": None, "min_days": None, "max_days": None,
        }

    def test_inverted_range_rejected(self, db):
        with pytest.raises(ValidationError):
            dashboard.shipment_analytics(db, start_date=date(2026, 3, 5), end_date=date(2026, 3, 1))


class TestAnalyticsEndpoint:

    @pytest.mark.api
    def test_admin_only(self, client, customer_headers):
        assert client.get("/api/v1/dashboard/analytics", headers=customer_headers).status_code == 403

    @pytest.mark.api
    def test_returns_breakdowns(self, client, admin_headers, spread):
        response = client.get(
            "/api/v1/dashboard/analytics?start_date=2026-03-01&end_date=2026-03-31",
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["start_date"] == "2026-03-01"
        assert body["by_country"][0]["country"] == "Sweden"
        assert body["delivery_time"]["completed_shipments"] == 2

    @pytest.mark.api
    def test_inverted_range_is_400(self, client, admin_headers):
        response = client.get(
            "/api/v1/dashboard/analytics?start_date=2026-03-05&end_date=2026-03-01",
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "start_date"
