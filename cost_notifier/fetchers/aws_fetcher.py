# cost_notifier/fetchers/aws_fetcher.py
import logging
from typing import Any, Dict, List, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..cost_response_parser import COST_METRIC, parse_service_costs, parse_total_cost
from ..errors import TransportError
from ..schemas import ReportedDateRange, ServiceCost, TotalCost

LOG = logging.getLogger(__name__)

SERVICE_GROUP = {"Type": "DIMENSION", "Key": "SERVICE"}


class GetCostAndUsage(Protocol):
    def get_cost_and_usage(self, **kwargs: Any) -> Dict[str, Any]:
        ...


def cost_explorer_client(region: str = "us-east-1", timeout: float = 10.0):
    """boto3 Cost Explorer client with bounded timeouts and no retries."""
    config = Config(
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
    return boto3.client("ce", region_name=region, config=config)


def build_cost_and_usage_request(date_range: ReportedDateRange, group_by_service: bool) -> Dict[str, Any]:
    request: Dict[str, Any] = {
        "TimePeriod": date_range.as_time_period(),
        "Granularity": "MONTHLY",
        "Metrics": [COST_METRIC],
    }
    if group_by_service:
        request["GroupBy"] = [dict(SERVICE_GROUP)]
    return request


class CostExplorerService:
    """Requests total and per-service amortized cost for one date range."""

    def __init__(self, client: GetCostAndUsage, date_range: ReportedDateRange):
        self.client = client
        self.date_range = date_range

    def _get_cost_and_usage(self, group_by_service: bool) -> Dict[str, Any]:
        request = build_cost_and_usage_request(self.date_range, group_by_service)
        try:
            return self.client.get_cost_and_usage(**request)
        except (ClientError, BotoCoreError) as e:
            raise TransportError(f"GetCostAndUsage failed: {e}") from e

    def request_total_cost(self) -> TotalCost:
        return parse_total_cost(self._get_cost_and_usage(group_by_service=False))

    def request_service_costs(self) -> List[ServiceCost]:
        services = parse_service_costs(self._get_cost_and_usage(group_by_service=True))
        LOG.info(f"Retrieved costs for {len(services)} services")
        return services
