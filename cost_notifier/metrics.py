import time

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, generate_latest

from .schemas import NotificationMessage, TotalCost

registry = CollectorRegistry()
total_amount_gauge = Gauge("cost_report_total_amount", "Total cost in the last report", ["unit"], registry=registry)
service_count_gauge = Gauge("cost_report_service_count", "Services listed in the last report", registry=registry)
runs_counter = Counter("cost_report_runs", "Report runs by outcome", ["status"], registry=registry)
last_success_gauge = Gauge("cost_report_last_success_timestamp", "Unix time of the last successful report", registry=registry)


def record_success(total: TotalCost, message: NotificationMessage):
    total_amount_gauge.labels(unit=total.cost.unit).set(float(total.cost.amount))
    service_count_gauge.set(len(message.body.splitlines()) if message.body else 0)
    runs_counter.labels(status="success").inc()
    last_success_gauge.set(time.time())


def record_dry_run():
    # previews send nothing, so they never count as a reported run
    runs_counter.labels(status="dry_run").inc()


def record_failure():
    runs_counter.labels(status="error").inc()


def scrape_metrics():
    return generate_latest(registry), CONTENT_TYPE_LATEST
