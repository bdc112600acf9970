from typing import List, Optional, Tuple

import pytest

from cost_notifier.errors import SendError


def metric(amount: str, unit: str = "USD"):
    return {"AmortizedCost": {"Amount": amount, "Unit": unit}}


def sample_response(time_period: Optional[dict] = None, total_cost: Optional[str] = None,
                    service_costs: Optional[List[Tuple[str, str]]] = None) -> dict:
    """Shape of a boto3 ``get_cost_and_usage`` response with one time bucket."""
    result = {
        "Estimated": False,
        "TimePeriod": time_period or {"Start": "2021-07-01", "End": "2021-07-23"},
        "Total": metric(total_cost) if total_cost is not None else {},
    }
    if service_costs is not None:
        result["Groups"] = [{"Keys": [name], "Metrics": metric(amount)} for name, amount in service_costs]
    return {"GroupDefinitions": [], "ResultsByTime": [result], "DimensionValueAttributes": []}


class FakeCostExplorerClient:
    def __init__(self, total_cost: Optional[str] = None,
                 service_costs: Optional[List[Tuple[str, str]]] = None, error: Exception = None):
        self.total_cost = total_cost
        self.service_costs = service_costs
        self.error = error
        self.requests = []

    def get_cost_and_usage(self, **request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return sample_response(
            time_period=request["TimePeriod"],
            total_cost=self.total_cost,
            service_costs=self.service_costs if "GroupBy" in request else None,
        )


class FakeNotifier:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send(self, message):
        if self.fail:
            raise SendError("Something Wrong!")
        self.sent.append(message)


@pytest.fixture
def two_services():
    return [
        ("Amazon Simple Storage Service", "1234.56"),
        ("Amazon Elastic Compute Cloud", "31415.92"),
    ]
