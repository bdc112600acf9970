import datetime as dt
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Dict

from pydantic import BaseModel, ConfigDict, model_validator

CENT = Decimal("0.01")
WIRE_DATE_FORMAT = "%Y-%m-%d"


class Cost(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal
    unit: str

    def rounded(self) -> Decimal:
        # ties go to the even cent: 0.005 -> 0.00, 0.015 -> 0.02
        return self.amount.quantize(CENT, rounding=ROUND_HALF_EVEN)

    def __str__(self) -> str:
        return f"{self.rounded():.2f} {self.unit}"


class ReportedDateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: dt.date
    end_date: dt.date

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError(f"start_date {self.start_date} is after end_date {self.end_date}")
        return self

    def as_time_period(self) -> Dict[str, str]:
        """Cost Explorer ``TimePeriod`` for this range."""
        return {
            "Start": self.start_date.strftime(WIRE_DATE_FORMAT),
            "End": self.end_date.strftime(WIRE_DATE_FORMAT),
        }

    @classmethod
    def from_time_period(cls, time_period: Dict[str, str]) -> "ReportedDateRange":
        from .cost_response_parser import parse_time_period

        return parse_time_period(time_period)

    def __str__(self) -> str:
        return (
            f"{self.start_date.month:02}/{self.start_date.day:02}"
            f"~{self.end_date.month:02}/{self.end_date.day:02}"
        )


class TotalCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_range: ReportedDateRange
    cost: Cost


class ServiceCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_name: str
    cost: Cost


class NotificationMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: str
    body: str
