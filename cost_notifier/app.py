from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel

from .config import Settings, load_settings
from .errors import CostNotifierError, InvalidDate, TransportError
from .fetchers.aws_fetcher import cost_explorer_client
from .metrics import scrape_metrics
from .report import request_cost_and_notify
from .reporting_date import ReportingClock, compute_report_range, parse_reporting_date

app = FastAPI(title="AWS Cost Notifier API", version="1.0.0")


class ReportPreview(BaseModel):
    start_date: str
    end_date: str
    header: str
    body: str


def get_settings() -> Settings:
    try:
        return load_settings(require_webhook=False)
    except CostNotifierError as e:
        raise HTTPException(status_code=500, detail=str(e))


def get_cost_client(settings: Settings = Depends(get_settings)):
    return cost_explorer_client(settings.aws_region, settings.http_timeout)


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.get("/api/report", response_model=ReportPreview)
def preview_report(date: Optional[str] = None, settings: Settings = Depends(get_settings),
                   client=Depends(get_cost_client)):
    try:
        if date:
            reporting_date = parse_reporting_date(date)
        else:
            reporting_date = ReportingClock(settings.reporting_timezone).today()
        message = request_cost_and_notify(client, None, reporting_date)
    except InvalidDate as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except CostNotifierError as e:
        raise HTTPException(status_code=500, detail=str(e))
    date_range = compute_report_range(reporting_date)
    return ReportPreview(
        start_date=date_range.start_date.isoformat(),
        end_date=date_range.end_date.isoformat(),
        header=message.header,
        body=message.body,
    )


@app.get("/metrics")
def metrics():
    output, ctype = scrape_metrics()
    return Response(content=output, media_type=ctype)
