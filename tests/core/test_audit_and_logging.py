import json
import logging

import pytest

from core import services
from core.logging import JSONFormatter
from core.models import AuditLog
from core.services import create_audit_log, record_audit_event


class TestJSONFormatter:
    def test_renders_one_json_object_with_extras(self):
        record = logging.makeLogRecord({
            "name": "partnercup",
            "levelname": "INFO",
            "msg": "Deal %s approved",
            "args": (7,),
            "deal_id": 7,
        })
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "Deal 7 approved"
        assert payload["logger"] == "partnercup"
        assert payload["deal_id"] == 7
        assert "timestamp" in payload


@pytest.mark.django_db
class TestAuditLog:
    def test_entries_are_immutable(self, admin_user):
        log = create_audit_log(admin_user, "DEAL_DELETE", "Deal", 1, before={"id": 1})
        assert log.entity_id == "1"
        log.action = "OTHER"
        with pytest.raises(ValueError):
            log.save()

    def test_record_audit_event_runs_on_commit(self, admin_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            record_audit_event(admin_user, "POINTS_CONFIG_UPDATE", "PointsConfig", 3, after={"renewal_rate": 10})
            assert not AuditLog.objects.exists()
        assert AuditLog.objects.get().after_json == {"renewal_rate": 10}

    def test_audit_failure_is_swallowed(self, admin_user, monkeypatch, django_capture_on_commit_callbacks):
        def _fail(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(services, "create_audit_log", _fail)
        with django_capture_on_commit_callbacks(execute=True):
            record_audit_event(admin_user, "DEAL_DELETE", "Deal", 1)
        assert not AuditLog.objects.exists()
