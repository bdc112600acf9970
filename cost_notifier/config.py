import os
from typing import Mapping, Optional

from apscheduler.triggers.cron import CronTrigger
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .errors import ConfigError
from .reporting_date import load_timezone

DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_SCHEDULE = "0 0 * * *"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    reporting_timezone: str
    slack_webhook_url: Optional[str] = None
    aws_region: str = DEFAULT_AWS_REGION
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    schedule_cron: str = DEFAULT_SCHEDULE


def load_settings(environ: Optional[Mapping[str, str]] = None, require_webhook: bool = True) -> Settings:
    """Read settings from the environment (and ``.env`` when reading ``os.environ``)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    tz = environ.get("REPORTING_TIMEZONE")
    if not tz:
        raise ConfigError("REPORTING_TIMEZONE not found")
    load_timezone(tz)

    webhook = environ.get("SLACK_WEBHOOK_URL") or None
    if require_webhook and not webhook:
        raise ConfigError("SLACK_WEBHOOK_URL not found")

    raw_timeout = environ.get("HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as e:
        raise ConfigError(f"HTTP_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from e
    if timeout <= 0:
        raise ConfigError(f"HTTP_TIMEOUT_SECONDS must be positive, got {raw_timeout!r}")

    schedule = environ.get("REPORT_SCHEDULE_CRON") or DEFAULT_SCHEDULE
    try:
        CronTrigger.from_crontab(schedule)
    except ValueError as e:
        raise ConfigError(f"REPORT_SCHEDULE_CRON is not a crontab expression: {schedule!r}") from e

    return Settings(
        reporting_timezone=tz,
        slack_webhook_url=webhook,
        aws_region=environ.get("AWS_REGION") or DEFAULT_AWS_REGION,
        http_timeout=timeout,
        schedule_cron=schedule,
    )
