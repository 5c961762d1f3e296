import json
import unittest
from unittest import mock

from django.db.utils import OperationalError

from apps.common import views


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(response.content), {"status": "alive"})

    @mock.patch("apps.common.views._db_check", return_value={"status": "ok", "latency_ms": 1.5})
    def test_ready_health_ok_when_database_answers(self, mock_db_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload["status"], "ok")
        self.assertEqual(payload["checks"]["database"], mock_db_check.return_value)

    @mock.patch("apps.common.views._db_check", return_value={"status": "fail", "error": "db down"})
    def test_ready_health_degraded_when_database_fails(self, mock_db_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload["status"], "degraded")
        self.assertEqual(payload["checks"]["database"]["error"], "db down")

    @mock.patch("apps.common.views.connections")
    def test_db_check_reports_operational_error(self, mock_connections):
        cursor = mock_connections.__getitem__.return_value.cursor.return_value
        cursor.__enter__.return_value.execute.side_effect = OperationalError("refused")
        result = views._db_check()
        self.assertEqual(result, {"status": "fail", "error": "refused"})


class AppLoggerTests(unittest.TestCase):
    def test_bind_merges_context_and_formats_pairs(self):
        from apps.common import get_logger

        log = get_logger("apps.tests").bind(component="users").bind(layer="view")
        self.assertEqual(log.context, {"component": "users", "layer": "view"})
        with self.assertLogs("apps.tests", level="INFO") as captured:
            log.info("Created", user_id=3, name=None)
        self.assertEqual(
            captured.records[0].getMessage(),
            "Created | component=users layer=view user_id=3 name=None",
        )
