"""Turn Cost Explorer ``get_cost_and_usage`` responses into cost records.

Only the first ``ResultsByTime`` bucket is read. Required sections that are
missing raise ``MissingField``; nothing is defaulted to zero.
"""
import datetime as dt
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from .errors import InvalidTimestamp, MalformedCost, MissingField
from .schemas import Cost, ReportedDateRange, ServiceCost, TotalCost

LOG = logging.getLogger(__name__)

COST_METRIC = "AmortizedCost"
# amounts must still quantize to cents within the default 28-digit context
MAX_AMOUNT_EXPONENT = 25

_TIMESTAMP = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _require(container: Dict[str, Any], key: str, path: str):
    value = container.get(key) if isinstance(container, dict) else None
    if value is None:
        raise MissingField(f"{path}.{key}" if path else key)
    return value


def parse_timestamp(timestamp: str) -> dt.date:
    if not isinstance(timestamp, str) or not _TIMESTAMP.match(timestamp):
        raise InvalidTimestamp(f"expected YYYY-MM-DD, got {timestamp!r}")
    try:
        return dt.date.fromisoformat(timestamp)
    except ValueError as e:
        raise InvalidTimestamp(f"invalid date {timestamp!r}: {e}") from e


def parse_time_period(time_period: Dict[str, str], path: str = "TimePeriod") -> ReportedDateRange:
    start = parse_timestamp(_require(time_period, "Start", path))
    end = parse_timestamp(_require(time_period, "End", path))
    if start > end:
        raise InvalidTimestamp(f"{path} starts after it ends: {start} > {end}")
    return ReportedDateRange(start_date=start, end_date=end)


def parse_cost(metric_value: Dict[str, str], path: str = COST_METRIC) -> Cost:
    raw_amount = _require(metric_value, "Amount", path)
    unit = _require(metric_value, "Unit", path)
    try:
        amount = Decimal(str(raw_amount))
    except InvalidOperation as e:
        raise MalformedCost(f"{path}.Amount is not a number: {raw_amount!r}") from e
    if not amount.is_finite():
        raise MalformedCost(f"{path}.Amount is not finite: {raw_amount!r}")
    if amount.adjusted() > MAX_AMOUNT_EXPONENT:
        raise MalformedCost(f"{path}.Amount is too large to report: {raw_amount!r}")
    return Cost(amount=amount, unit=unit)


def _first_result(response: Dict[str, Any]) -> Dict[str, Any]:
    results = _require(response, "ResultsByTime", "")
    if not results:
        raise MissingField("ResultsByTime[0]")
    if response.get("NextPageToken"):
        LOG.warning("Cost Explorer returned more than one page; only the first page is reported")
    return results[0]


def parse_total_cost(response: Dict[str, Any]) -> TotalCost:
    result = _first_result(response)
    path = "ResultsByTime[0]"
    date_range = parse_time_period(_require(result, "TimePeriod", path), f"{path}.TimePeriod")
    total = _require(result, "Total", path)
    metric = _require(total, COST_METRIC, f"{path}.Total")
    return TotalCost(date_range=date_range, cost=parse_cost(metric, f"{path}.Total.{COST_METRIC}"))


def parse_service_cost(group: Dict[str, Any], path: str = "Group") -> ServiceCost:
    keys = _require(group, "Keys", path)
    if not keys:
        raise MissingField(f"{path}.Keys[0]")
    metrics = _require(group, "Metrics", path)
    metric = _require(metrics, COST_METRIC, f"{path}.Metrics")
    return ServiceCost(service_name=keys[0], cost=parse_cost(metric, f"{path}.Metrics.{COST_METRIC}"))


def parse_service_costs(response: Dict[str, Any]) -> List[ServiceCost]:
    result = _first_result(response)
    groups = _require(result, "Groups", "ResultsByTime[0]")
    return [
        parse_service_cost(g, f"ResultsByTime[0].Groups[{i}]")
        for i, g in enumerate(groups)
    ]
