from decimal import Decimal

import pytest

from core.models import AuditLog
from deals.models import Deal
from ledger.models import PointsLedgerEntry
from regions.models import PointsConfig

DEALS_URL = "/api/v1/deals/"


@pytest.mark.django_db
class TestDealEndpoints:
    def test_seller_registers_deal(self, seller_client, seller):
        response = seller_client.post(DEALS_URL, {
            "product_name": "Firewall",
            "deal_value": "50000.00",
            "deal_type": "new_customer",
            "close_date": "2026-03-15",
        }, format="json")

        assert response.status_code == 201
        assert response.data["status"] == "pending"
        assert Deal.objects.get().user == seller

    def test_non_positive_value_is_rejected(self, seller_client):
        response = seller_client.post(DEALS_URL, {
            "product_name": "Firewall",
            "deal_value": "0",
            "close_date": "2026-03-15",
        }, format="json")
        assert response.status_code == 400
        assert "deal_value" in response.data

    def test_sellers_only_list_their_deals(self, seller_client, seller, make_seller, make_deal):
        make_deal(seller)
        make_deal(make_seller())
        response = seller_client.get(DEALS_URL)
        assert response.status_code == 200
        assert response.data["count"] == 1

    def test_admin_approves(self, admin_client, seller, nola_points, colombia_config, make_deal):
        deal = make_deal(seller)
        response = admin_client.post(f"{DEALS_URL}{deal.pk}/approve/")

        assert response.status_code == 200
        assert response.data["status"] == "approved"
        assert response.data["points_earned"] == 50
        assert response.data["goals_earned"] == "50.00"

    def test_seller_cannot_approve(self, seller_client, seller, make_deal):
        deal = make_deal(seller)
        response = seller_client.post(f"{DEALS_URL}{deal.pk}/approve/")
        assert response.status_code == 403
        deal.refresh_from_db()
        assert deal.status == Deal.Status.PENDING

    def test_approve_unknown_deal_is_404(self, admin_client):
        assert admin_client.post(f"{DEALS_URL}999999/approve/").status_code == 404
        assert admin_client.post(f"{DEALS_URL}999999/reject/").status_code == 404

    def test_admin_rejects(self, admin_client, seller, make_deal):
        deal = make_deal(seller)
        response = admin_client.post(f"{DEALS_URL}{deal.pk}/reject/")
        assert response.status_code == 200
        assert response.data["status"] == "rejected"

    def test_delete_is_audited(self, admin_client, seller, make_deal, django_capture_on_commit_callbacks):
        deal = make_deal(seller)
        with django_capture_on_commit_callbacks(execute=True):
            response = admin_client.delete(f"{DEALS_URL}{deal.pk}/")
        assert response.status_code == 204
        assert AuditLog.objects.get(action="DEAL_DELETE").before_json["id"] == deal.pk

    def test_recalculate_points(self, admin_client, admin_user, seller, nola_points, make_deal):
        from deals.services import approve_deal

        deal = make_deal(seller)
        approve_deal(deal.pk, admin_user)
        PointsConfig.objects.filter(pk=nola_points.pk).update(new_customer_rate=250)

        response = admin_client.post(f"{DEALS_URL}recalculate-points/")

        assert response.status_code == 200
        assert response.data == {"updated": 1, "errors": []}
        assert PointsLedgerEntry.objects.get(deal=deal).points == 200

    def test_seller_edits_pending_deal(self, seller_client, seller, make_deal):
        deal = make_deal(seller)
        response = seller_client.patch(f"{DEALS_URL}{deal.pk}/", {"deal_value": "1234.50"}, format="json")
        assert response.status_code == 200
        deal.refresh_from_db()
        assert deal.deal_value == Decimal("1234.50")


@pytest.mark.django_db
class TestSellerDashboards:
    def test_points_balance(self, seller_client, admin_user, seller, nola_points, make_deal):
        from deals.services import approve_deal

        approve_deal(make_deal(seller).pk, admin_user)
        response = seller_client.get("/api/v1/points/balance/")
        assert response.data == {"total": 50, "available": 50, "earned": 50}

    def test_goal_progress(self, seller_client, admin_user, seller, nola_points, colombia_config, make_deal):
        from deals.services import approve_deal

        approve_deal(make_deal(seller).pk, admin_user)
        response = seller_client.get("/api/v1/goals/progress/", {"month": 3, "year": 2026})

        assert response.status_code == 200
        assert response.data["goals"] == "50.00"
        assert response.data["target"] == 100
        assert response.data["percent"] == "50.00"
        assert response.data["region_config"] == colombia_config.pk

    def test_goal_progress_rejects_bad_month(self, seller_client):
        response = seller_client.get("/api/v1/goals/progress/", {"month": 13, "year": 2026})
        assert response.status_code == 400

    def test_anonymous_is_rejected(self, api_client):
        assert api_client.get("/api/v1/points/balance/").status_code == 403
