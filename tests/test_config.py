import pytest

from cost_notifier.config import DEFAULT_SCHEDULE, load_settings
from cost_notifier.errors import ConfigError

BASE_ENV = {
    "REPORTING_TIMEZONE": "Asia/Tokyo",
    "SLACK_WEBHOOK_URL": "https://hooks.slack.com/services/T000/B000/secret",
}


def test_defaults():
    settings = load_settings(BASE_ENV)
    assert settings.reporting_timezone == "Asia/Tokyo"
    assert settings.aws_region == "us-east-1"
    assert settings.http_timeout == 10.0
    assert settings.schedule_cron == DEFAULT_SCHEDULE


def test_overrides():
    env = dict(BASE_ENV, AWS_REGION="ap-northeast-1", HTTP_TIMEOUT_SECONDS="2.5",
               REPORT_SCHEDULE_CRON="30 23 * * *")
    settings = load_settings(env)
    assert settings.aws_region == "ap-northeast-1"
    assert settings.http_timeout == 2.5
    assert settings.schedule_cron == "30 23 * * *"


def test_missing_timezone():
    with pytest.raises(ConfigError, match="REPORTING_TIMEZONE"):
        load_settings({"SLACK_WEBHOOK_URL": "https://example.com"})


def test_invalid_timezone():
    with pytest.raises(ConfigError):
        load_settings(dict(BASE_ENV, REPORTING_TIMEZONE="Invalid/Timezone"))


def test_missing_webhook():
    with pytest.raises(ConfigError, match="SLACK_WEBHOOK_URL"):
        load_settings({"REPORTING_TIMEZONE": "UTC"})


def test_webhook_optional_for_dry_run():
    assert load_settings({"REPORTING_TIMEZONE": "UTC"}, require_webhook=False).slack_webhook_url is None


@pytest.mark.parametrize("value", ["ten", "0", "-1"])
def test_invalid_timeout(value):
    with pytest.raises(ConfigError):
        load_settings(dict(BASE_ENV, HTTP_TIMEOUT_SECONDS=value))


def test_invalid_schedule():
    with pytest.raises(ConfigError):
        load_settings(dict(BASE_ENV, REPORT_SCHEDULE_CRON="every day"))
