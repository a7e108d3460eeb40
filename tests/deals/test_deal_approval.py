from datetime import date
from decimal import Decimal

import pytest

from core.models import AuditLog
from deals.models import Deal
from deals.services import approve_deal, create_deal, delete_deal, reject_deal, update_deal
from ledger.models import GoalsLedgerEntry, PointsLedgerEntry
from notifications.models import Notification


@pytest.mark.django_db
class TestCreateDeal:
    def test_creates_pending_deal(self, seller):
        deal = create_deal(
            seller,
            product_name="Firewall",
            deal_value="1500.00",
            close_date=date(2026, 3, 1),
            deal_type=Deal.DealType.RENEWAL,
        )
        assert deal.status == Deal.Status.PENDING
        assert deal.points_earned == 0
        assert deal.deal_value == Decimal("1500.00")

    @pytest.mark.parametrize("value", [0, "-5", "abc"])
    def test_rejects_non_positive_values(self, seller, value):
        with pytest.raises(ValueError):
            create_deal(seller, product_name="X", deal_value=value, close_date=date(2026, 3, 1))

    def test_rejects_unknown_deal_type(self, seller):
        with pytest.raises(ValueError):
            create_deal(seller, product_name="X", deal_value=10, close_date=date(2026, 3, 1), deal_type="upsell")


@pytest.mark.django_db
class TestApproveDeal:
    def test_new_customer_scenario(self, admin_user, seller, nola_points, colombia_config, make_deal):
        deal = make_deal(seller, deal_value="50000")

        deal = approve_deal(deal.pk, admin_user)

        assert deal.status == Deal.Status.APPROVED
        assert deal.points_earned == 50
        assert deal.goals_earned == Decimal("50.00")
        assert deal.region_config == colombia_config
        assert deal.approved_by == admin_user
        assert deal.approved_at is not None
        goals_entry = GoalsLedgerEntry.objects.get(deal=deal)
        assert goals_entry.goals == Decimal("50.00")
        assert (goals_entry.month, goals_entry.year) == (3, 2026)
        assert PointsLedgerEntry.objects.get(deal=deal).points == 50

    def test_renewal_scenario(self, admin_user, seller, nola_points, colombia_config, make_deal):
        deal = make_deal(seller, deal_value="160000", deal_type=Deal.DealType.RENEWAL)
        deal = approve_deal(deal.pk, admin_user)
        assert deal.points_earned == 80
        assert deal.goals_earned == Decimal("80.00")

    def test_reapproval_is_idempotent(self, admin_user, seller, nola_points, colombia_config, make_deal):
        deal = make_deal(seller)
        approve_deal(deal.pk, admin_user)
        approve_deal(deal.pk, admin_user)

        assert PointsLedgerEntry.objects.filter(deal=deal).count() == 1
        assert GoalsLedgerEntry.objects.filter(deal=deal).count() == 1

    def test_unresolved_config_still_approves_with_zero_goals(self, admin_user, make_seller, nola_points,
                                                              colombia_config, make_deal):
        user = make_seller(region_subcategory="CENTRO AMERICA")
        deal = approve_deal(make_deal(user).pk, admin_user)

        assert deal.status == Deal.Status.APPROVED
        assert deal.points_earned == 50
        assert deal.goals_earned == Decimal("0.00")
        assert deal.region_config is None
        assert not GoalsLedgerEntry.objects.filter(deal=deal).exists()

    def test_points_fall_back_to_default_rates(self, admin_user, seller, make_deal):
        deal = approve_deal(make_deal(seller, deal_value="5000").pk, admin_user)
        assert deal.points_earned == 5

    def test_unknown_deal_raises(self, admin_user):
        with pytest.raises(Deal.DoesNotExist):
            approve_deal(999999, admin_user)

    def test_notifies_seller_after_commit(self, admin_user, seller, nola_points, make_deal,
                                          django_capture_on_commit_callbacks):
        deal = make_deal(seller)
        with django_capture_on_commit_callbacks(execute=True):
            approve_deal(deal.pk, admin_user)

        notification = Notification.objects.get(user=seller)
        assert notification.kind == Notification.Kind.DEAL_APPROVED
        assert notification.payload["points"] == 50

    def test_notification_failure_does_not_undo_approval(self, admin_user, seller, nola_points, make_deal,
                                                         monkeypatch, django_capture_on_commit_callbacks):
        from notifications import tasks

        def _broken(**kwargs):
            raise RuntimeError("broker down")

        monkeypatch.setattr(tasks.deliver_notification, "delay", _broken)
        deal = make_deal(seller)
        with django_capture_on_commit_callbacks(execute=True):
            approve_deal(deal.pk, admin_user)

        deal.refresh_from_db()
        assert deal.status == Deal.Status.APPROVED
        assert not Notification.objects.exists()


@pytest.mark.django_db
class TestRejectDeal:
    def test_reject_pending_deal(self, seller, make_deal):
        deal = reject_deal(make_deal(seller).pk)
        assert deal.status == Deal.Status.REJECTED
        assert deal.points_earned == 0

    def test_reject_after_approval_retracts(self, admin_user, seller, nola_points, colombia_config, make_deal):
        deal = make_deal(seller)
        approve_deal(deal.pk, admin_user)

        deal = reject_deal(deal.pk)

        assert deal.points_earned == 0
        assert deal.goals_earned == Decimal("0.00")
        assert not PointsLedgerEntry.objects.filter(deal=deal).exists()
        assert not GoalsLedgerEntry.objects.filter(deal=deal).exists()


@pytest.mark.django_db
class TestUpdateAndDeleteDeal:
    def test_pending_deal_value_is_editable(self, seller, make_deal):
        deal = update_deal(make_deal(seller).pk, deal_value="75000", client_info="ACME")
        assert deal.deal_value == Decimal("75000")
        assert deal.client_info == "ACME"

    def test_approved_deal_value_is_locked(self, admin_user, seller, make_deal):
        deal = make_deal(seller)
        approve_deal(deal.pk, admin_user)
        with pytest.raises(ValueError):
            update_deal(deal.pk, deal_value="1")
        assert update_deal(deal.pk, product_name="Renamed").product_name == "Renamed"

    def test_delete_retracts_and_audits(self, admin_user, seller, nola_points, colombia_config, make_deal,
                                        django_capture_on_commit_callbacks):
        deal = make_deal(seller)
        approve_deal(deal.pk, admin_user)
        deal_id = deal.pk

        with django_capture_on_commit_callbacks(execute=True):
            snapshot = delete_deal(deal_id, actor=admin_user, ip="10.0.0.1")

        assert not Deal.objects.filter(pk=deal_id).exists()
        assert not PointsLedgerEntry.objects.filter(deal_id=deal_id).exists()
        log = AuditLog.objects.get(action="DEAL_DELETE")
        assert log.entity_id == str(deal_id)
        assert log.before_json == snapshot
        assert log.before_json["points_earned"] == 50
        assert log.after_json is None
        assert log.ip_address == "10.0.0.1"
