from datetime import date
from decimal import Decimal

import pytest

from ledger.models import GoalsLedgerEntry, PointsLedgerEntry
from ledger.services import (
    record_accrual,
    record_points_debit,
    retract_accrual,
    user_available_points,
    user_earned_points,
    user_goals_for_month,
    user_total_points,
)


@pytest.mark.django_db
class TestRecordAccrual:
    def test_writes_one_entry_per_currency(self, seller, colombia_config, make_deal):
        deal = make_deal(seller)
        points_entry, goals_entry = record_accrual(deal, 50, Decimal("50"), colombia_config)

        assert points_entry.points == 50
        assert goals_entry.goals == Decimal("50.00")
        assert goals_entry.region_config == colombia_config

    def test_goals_are_attributed_to_close_date_month(self, seller, colombia_config, make_deal):
        deal = make_deal(seller, close_date=date(2025, 11, 30))
        _, goals_entry = record_accrual(deal, 50, Decimal("50"), colombia_config)
        assert (goals_entry.month, goals_entry.year) == (11, 2025)

    def test_goals_are_rounded_on_write(self, seller, colombia_config, make_deal):
        deal = make_deal(seller)
        _, goals_entry = record_accrual(deal, 0, Decimal(1000) / Decimal(3), colombia_config)
        assert goals_entry.goals == Decimal("333.33")

    def test_nothing_written_for_zero_or_unresolved(self, seller, make_deal):
        deal = make_deal(seller)
        assert record_accrual(deal, 0, Decimal("12"), None) == (None, None)
        assert not PointsLedgerEntry.objects.exists()
        assert not GoalsLedgerEntry.objects.exists()

    def test_retract_then_record_leaves_single_entries(self, seller, colombia_config, make_deal):
        deal = make_deal(seller)
        record_accrual(deal, 50, Decimal("50"), colombia_config)

        assert retract_accrual(deal.pk) == (1, 1)
        record_accrual(deal, 25, Decimal("25"), colombia_config)

        assert PointsLedgerEntry.objects.filter(deal=deal).count() == 1
        assert GoalsLedgerEntry.objects.filter(deal=deal).count() == 1
        assert user_total_points(seller) == 25

    def test_entries_cannot_be_updated_in_place(self, seller, colombia_config, make_deal):
        deal = make_deal(seller)
        points_entry, _ = record_accrual(deal, 50, Decimal("50"), colombia_config)
        points_entry.points = 10
        with pytest.raises(ValueError):
            points_entry.save()


@pytest.mark.django_db
class TestPointsBalance:
    def test_debit_reduces_available_but_not_earned(self, seller, colombia_config, make_deal):
        record_accrual(make_deal(seller), 50, Decimal("0"), None)

        entry = record_points_debit(seller, 20, "Echange : casque audio")

        assert entry.points == -20
        assert entry.deal is None
        assert user_available_points(seller) == 30
        assert user_earned_points(seller) == 50

    def test_debit_must_be_positive(self, seller):
        with pytest.raises(ValueError):
            record_points_debit(seller, 0, "rien")

    def test_debit_cannot_overdraw(self, seller, make_deal):
        record_accrual(make_deal(seller), 10, Decimal("0"), None)
        with pytest.raises(ValueError, match="insuffisant"):
            record_points_debit(seller, 11, "trop")
        assert user_total_points(seller) == 10

    def test_goals_for_month(self, seller, colombia_config, make_deal):
        record_accrual(make_deal(seller, close_date=date(2026, 3, 1)), 0, Decimal("12.5"), colombia_config)
        record_accrual(make_deal(seller, close_date=date(2026, 3, 31)), 0, Decimal("7.5"), colombia_config)
        record_accrual(make_deal(seller, close_date=date(2026, 4, 1)), 0, Decimal("99"), colombia_config)

        assert str(user_goals_for_month(seller, 3, 2026)) == "20.00"
        assert str(user_goals_for_month(seller, 5, 2026)) == "0.00"

    def test_goals_for_month_keep_two_decimals(self, admin_user, seller, nola_points, colombia_config, make_deal):
        from deals.services import approve_deal

        approve_deal(make_deal(seller, deal_value="50000").pk, admin_user)
        assert str(user_goals_for_month(seller, 3, 2026)) == "50.00"
