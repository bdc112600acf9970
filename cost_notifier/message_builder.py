"""Build the Slack notification text from parsed costs.

Service lines are ordered by amount, largest first, and services whose cost
rounds to 0.00 are left out.
"""
from typing import Iterable, List

from .schemas import Cost, NotificationMessage, ServiceCost, TotalCost


def format_cost(cost: Cost) -> str:
    return str(cost)


def format_header(total: TotalCost) -> str:
    return f"{total.date_range}の請求額は、{format_cost(total.cost)}です。"


def format_service_line(service: ServiceCost) -> str:
    return f"・{service.service_name}: {format_cost(service.cost)}"


def _visible(services: Iterable[ServiceCost]) -> List[ServiceCost]:
    ordered = sorted(services, key=lambda s: s.cost.amount, reverse=True)
    return [s for s in ordered if s.cost.rounded() != 0]


def build_message(total: TotalCost, services: Iterable[ServiceCost]) -> NotificationMessage:
    return NotificationMessage(
        header=format_header(total),
        body="\n".join(format_service_line(s) for s in _visible(services)),
    )
