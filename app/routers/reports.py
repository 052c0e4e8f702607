# =========================================================
# REPORTS ROUTER
#
# Revenue dashboard for any date range:
# - Explicit start_date / end_date (YYYY-MM-DD), or a preset
# - Optional service filter ("all" means no filter)
# - Attribution defaults to REVENUE_ATTRIBUTION
# =========================================================

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.aggregation import compute_report, parse_report_date, validate_report_options
from app.core.auth import get_current_user
from app.core.config import settings
from app.core.presets import PRESETS, resolve_preset
from app.schemas.report import DateRangeResponse, ReportResponse
from app.store import RecordStore, get_store

router = APIRouter(prefix="/reports", tags=["Reports"])

logger = logging.getLogger("app.reports")


# =========================================================
# REVENUE REPORT
# =========================================================
@router.get("", response_model=ReportResponse)
def revenue_report(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    preset: Optional[str] = Query(None),
    service_filter: Optional[str] = Query("all"),
    period: str = Query("daily"),
    attribution: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    if preset:
        start, end = resolve_preset(preset, date.today())
    else:
        start = parse_report_date(start_date, "start_date")
        end = parse_report_date(end_date, "end_date")

    attribution = attribution or settings.REVENUE_ATTRIBUTION
    validate_report_options(period, attribution)

    # An inverted range is an empty report, not an error
    records = store.query_records(start, end, service_filter) if start <= end else []

    report = compute_report(
        records,
        start,
        end,
        service_filter=service_filter,
        period=period,
        attribution=attribution,
    )

    logger.info(
        f"Report {start} to {end} "
        f"records: {report.total_count} "
        f"filter: {report.service_filter or 'all'}"
    )

    return report


# =========================================================
# DATE RANGE PRESETS
# =========================================================
@router.get("/presets", response_model=list[DateRangeResponse])
def report_presets(
    current_user=Depends(get_current_user),
):
    today = date.today()

    ranges = []
    for preset in PRESETS:
        start, end = resolve_preset(preset, today)
        ranges.append({"preset": preset, "start_date": start, "end_date": end})

    return ranges
