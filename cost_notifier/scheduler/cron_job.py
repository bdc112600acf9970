# cost_notifier/scheduler/cron_job.py
import logging

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import Settings
from ..errors import CostNotifierError
from ..report import run_report

LOG = logging.getLogger(__name__)


def report_job(settings: Settings):
    try:
        run_report(settings)
    except CostNotifierError as e:
        # one failed run must not stop the schedule
        LOG.error(f"Scheduled cost report failed: {e}")


def build_scheduler(settings: Settings) -> BlockingScheduler:
    scheduler = BlockingScheduler(timezone="UTC")
    scheduler.add_job(
        report_job,
        CronTrigger.from_crontab(settings.schedule_cron, timezone="UTC"),
        args=[settings],
        id="cost-report",
        max_instances=1,
        coalesce=True,
    )
    return scheduler


def run_forever(settings: Settings):
    LOG.info(f"Scheduler starting with cron '{settings.schedule_cron}' (UTC)")
    build_scheduler(settings).start()
