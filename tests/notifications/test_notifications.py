import pytest

from notifications.models import Notification
from notifications.services import mark_all_read, notify, render
from notifications.tasks import deliver_notification


class TestRender:
    def test_known_kind(self):
        level, title, message = render(
            "deal_approved", {"product_name": "Firewall", "points": 50, "goals": "50.00"},
        )
        assert level == "success"
        assert title == "Vente approuvee"
        assert "50 points" in message

    def test_missing_payload_keys_fall_back(self):
        level, title, message = render("deal_rejected", {})
        assert level == "warning"
        assert message == title

    def test_unknown_kind_uses_message(self):
        assert render("custom", {"message": "Bonjour"}) == ("info", "Notification", "Bonjour")


@pytest.mark.django_db
class TestDelivery:
    def test_notify_is_deferred_until_commit(self, seller, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            notify(seller.pk, "deal_rejected", {"product_name": "Firewall"})
            assert not Notification.objects.exists()

        assert len(callbacks) == 1
        callbacks[0]()
        notification = Notification.objects.get(user=seller)
        assert notification.kind == Notification.Kind.DEAL_REJECTED
        assert notification.message == "Votre vente Firewall a ete rejetee."

    def test_unknown_kind_is_stored_as_info(self, seller):
        deliver_notification(user_id=str(seller.pk), kind="custom", payload={"message": "Salut"})
        assert Notification.objects.get(user=seller).kind == Notification.Kind.INFO

    def test_mark_all_read(self, seller):
        for _ in range(2):
            deliver_notification(user_id=str(seller.pk), kind="info", payload={"message": "x"})
        assert mark_all_read(seller) == 2
        assert not Notification.objects.filter(is_read=False).exists()
