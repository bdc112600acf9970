import datetime as dt

import pytest

from cost_notifier import handler
from cost_notifier.config import Settings
from cost_notifier.errors import ConfigError, SendError
from cost_notifier.schemas import NotificationMessage


def test_lambda_handler_reports_today(monkeypatch):
    seen = {}

    def fake_run_report(settings, reporting_date):
        seen["date"] = reporting_date
        return NotificationMessage(header="header", body="body")

    monkeypatch.setattr(handler, "load_settings", lambda: Settings(reporting_timezone="Asia/Tokyo"))
    monkeypatch.setattr(handler, "run_report", fake_run_report)

    assert handler.lambda_handler({}, None) == {"status": "ok", "header": "header"}
    assert isinstance(seen["date"], dt.date)


def test_lambda_handler_propagates_failures(monkeypatch):
    def failing_run(settings, reporting_date):
        raise SendError("Slack notification failed: HTTP 500")

    monkeypatch.setattr(handler, "load_settings", lambda: Settings(reporting_timezone="UTC"))
    monkeypatch.setattr(handler, "run_report", failing_run)
    with pytest.raises(SendError):
        handler.lambda_handler({}, None)


def test_lambda_handler_fails_without_config(monkeypatch):
    def missing():
        raise ConfigError("REPORTING_TIMEZONE not found")

    monkeypatch.setattr(handler, "load_settings", missing)
    with pytest.raises(ConfigError):
        handler.lambda_handler({}, None)
