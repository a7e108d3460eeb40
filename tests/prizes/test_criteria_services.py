from datetime import date
from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from ledger.models import GoalsLedgerEntry
from prizes.models import GrandPrizeCriteria, GrandPrizeWinner
from prizes.services import (
    activate_criteria,
    award_grand_prize,
    create_criteria,
    get_active_criteria,
    monthly_goal_progress,
    update_criteria,
    validate_weights,
)


@pytest.mark.django_db
class TestSingleActiveCriteria:
    def test_creating_active_criteria_deactivates_previous(self):
        first = create_criteria(name="Copa A", criteria_type="points")
        second = create_criteria(name="Copa B", criteria_type="deals")

        first.refresh_from_db()
        assert not first.is_active
        assert second.is_active
        assert get_active_criteria() == second
        assert GrandPrizeCriteria.objects.filter(is_active=True).count() == 1

    def test_inactive_creation_leaves_active_one(self):
        active = create_criteria(name="Copa A", criteria_type="points")
        create_criteria(name="Brouillon", criteria_type="points", is_active=False)
        assert get_active_criteria() == active

    def test_activate_switches_active_row(self):
        first = create_criteria(name="Copa A", criteria_type="points")
        draft = create_criteria(name="Copa B", criteria_type="points", is_active=False)

        activate_criteria(draft.pk)

        first.refresh_from_db()
        assert not first.is_active
        assert get_active_criteria() == draft

    def test_update_to_active_deactivates_others(self):
        first = create_criteria(name="Copa A", criteria_type="points")
        draft = create_criteria(name="Copa B", criteria_type="points", is_active=False)

        update_criteria(draft.pk, is_active=True, prize_description="Voyage")

        first.refresh_from_db()
        assert not first.is_active
        assert GrandPrizeCriteria.objects.get(is_active=True).prize_description == "Voyage"

    def test_database_rejects_two_active_rows(self):
        GrandPrizeCriteria.objects.create(name="A", is_active=True)
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                GrandPrizeCriteria.objects.create(name="B", is_active=True)

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValueError):
            create_criteria(name="Copa", colour="blue")


class TestWeights:
    def test_combined_weights_must_sum_to_100(self):
        with pytest.raises(ValueError):
            validate_weights("combined", 70, 40)
        validate_weights("combined", 70, 30)
        validate_weights("combined", None, None)

    def test_other_types_ignore_weights(self):
        validate_weights("points", 70, 40)


@pytest.mark.django_db
class TestAwardAndProgress:
    def test_award_freezes_top_positions(self, make_seller):
        from deals.models import Deal

        users = [make_seller() for _ in range(3)]
        for user, points in zip(users, (10, 30, 20)):
            Deal.objects.create(
                user=user, product_name="X", deal_value=Decimal("1"), close_date=date(2026, 3, 1),
                status=Deal.Status.APPROVED, points_earned=points,
            )
        criteria = create_criteria(name="Copa", criteria_type="points", ranking_position=2)

        winners = award_grand_prize(criteria.pk, notes="Remise en mai")

        assert [(winner.user, winner.rank) for winner in winners] == [(users[1], 1), (users[2], 2)]
        award_grand_prize(criteria.pk)
        assert GrandPrizeWinner.objects.filter(criteria=criteria).count() == 2

    def test_monthly_goal_progress(self, seller, colombia_config, make_deal):
        deal = make_deal(seller)
        GoalsLedgerEntry.objects.create(
            user=seller, deal=deal, goals=Decimal("40.00"), month=3, year=2026,
            region_config=colombia_config, description="test",
        )

        progress = monthly_goal_progress(seller, 3, 2026)

        assert progress["goals"] == Decimal("40.00")
        assert progress["target"] == 100
        assert progress["percent"] == Decimal("40.00")
        assert progress["reached"] is False

    def test_progress_without_config(self, make_seller):
        progress = monthly_goal_progress(make_seller(region=""), 3, 2026)
        assert progress["target"] is None
        assert progress["percent"] is None
        assert progress["reached"] is False
