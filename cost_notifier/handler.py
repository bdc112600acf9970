"""AWS Lambda entry point, triggered by a daily EventBridge schedule."""
import logging

from .config import load_settings
from .report import LOG_FORMAT, run_report
from .reporting_date import ReportingClock

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
LOG = logging.getLogger(__name__)
LOG.setLevel(logging.INFO)


def lambda_handler(event, context):
    settings = load_settings()
    reporting_date = ReportingClock(settings.reporting_timezone).today()
    LOG.info(f"Launched lambda handler with reporting date {reporting_date}")
    # errors propagate so Lambda records the invocation as failed
    message = run_report(settings, reporting_date)
    return {"status": "ok", "header": message.header}
