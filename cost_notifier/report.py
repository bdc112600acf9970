"""Run the cost report: query Cost Explorer, build the message, post it to Slack.

The period runs from the first day of the month up to the reporting date. When
the reporting date is the first day of a month, the period starts on the first
day of the previous month instead, so the run on the 1st covers the whole
previous month.
"""
import argparse
import datetime as dt
import logging
import sys
from typing import Optional

from . import metrics
from .config import Settings, load_settings
from .errors import CostNotifierError
from .fetchers.aws_fetcher import CostExplorerService, GetCostAndUsage, cost_explorer_client
from .message_builder import build_message
from .notifiers.slack import SendMessage, SlackNotifier
from .reporting_date import ReportingClock, compute_report_range, parse_reporting_date
from .schemas import NotificationMessage

LOG = logging.getLogger(__name__)
LOG_FORMAT = "[cost-notifier] %(message)s"


def request_cost_and_notify(client: GetCostAndUsage, notifier: Optional[SendMessage],
                            reporting_date: dt.date) -> NotificationMessage:
    """Build the report for ``reporting_date`` and send it unless ``notifier`` is None."""
    date_range = compute_report_range(reporting_date)
    LOG.info(f"Reporting costs for {date_range.start_date}..{date_range.end_date} (reporting date {reporting_date})")
    try:
        explorer = CostExplorerService(client, date_range)
        total_cost = explorer.request_total_cost()
        service_costs = explorer.request_service_costs()
        message = build_message(total_cost, service_costs)
        if notifier is not None:
            notifier.send(message)
            LOG.info("Notification successfully completed")
    except CostNotifierError:
        metrics.record_failure()
        raise
    if notifier is None:
        metrics.record_dry_run()
    else:
        metrics.record_success(total_cost, message)
    return message


def run_report(settings: Settings, reporting_date: Optional[dt.date] = None,
               dry_run: bool = False) -> NotificationMessage:
    if reporting_date is None:
        reporting_date = ReportingClock(settings.reporting_timezone).today()
    client = cost_explorer_client(settings.aws_region, settings.http_timeout)
    notifier = None
    if not dry_run:
        notifier = SlackNotifier(settings.slack_webhook_url, timeout=settings.http_timeout)
    return request_cost_and_notify(client, notifier, reporting_date)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Post the AWS cost report to Slack")
    p.add_argument("--date", help="Reporting date (YYYY-MM-DD); defaults to today in REPORTING_TIMEZONE")
    p.add_argument("--dry-run", action="store_true", help="Print the message instead of sending it")
    p.add_argument("--schedule", action="store_true", help="Keep running on REPORT_SCHEDULE_CRON")
    return p.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    args = parse_args(argv)
    try:
        settings = load_settings(require_webhook=not args.dry_run)
        if args.schedule:
            from .scheduler.cron_job import run_forever

            run_forever(settings)
            return 0
        reporting_date = parse_reporting_date(args.date) if args.date else None
        message = run_report(settings, reporting_date, dry_run=args.dry_run)
    except CostNotifierError as e:
        LOG.error(f"Cost report failed: {e}")
        return 1
    if args.dry_run:
        print(message.header)
        print(message.body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
