from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from app.core.aggregation import parse_report_date
from app.core.auth import get_current_user
from app.core.rate_limiter import limiter
from app.core.tabular import build_csv, build_template_csv, build_workbook
from app.store import RecordStore, get_store

router = APIRouter(prefix="/exports", tags=["Exports"])

EXPORT_NAME = "salon-customers"


# =========================================================
# RECORD SELECTION HELPER
# =========================================================
def _export_records(store: RecordStore, start_date: Optional[str], end_date: Optional[str]):
    # No range given: export every customer, newest first
    if not start_date and not end_date:
        return store.list_customers(), EXPORT_NAME

    start = parse_report_date(start_date, "start_date")
    end = parse_report_date(end_date, "end_date")

    if start > end:
        return [], f"{EXPORT_NAME}_{start}_to_{end}"

    return store.query_records(start, end), f"{EXPORT_NAME}_{start}_to_{end}"


# =========================================================
# EXPORT ROUTES
# =========================================================
@router.get("/customers.csv")
@limiter.limit("10/minute")
def export_customers_csv(
    request: Request,
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    customers, filename = _export_records(store, start_date, end_date)

    output = BytesIO(build_csv(customers).encode("utf-8"))

    return StreamingResponse(
        output,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )


@router.get("/customers.xlsx")
@limiter.limit("10/minute")
def export_customers_excel(
    request: Request,
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    customers, filename = _export_records(store, start_date, end_date)

    return StreamingResponse(
        build_workbook(customers),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}.xlsx"'},
    )


@router.get("/template.csv")
def import_template(
    current_user=Depends(get_current_user),
):
    output = BytesIO(build_template_csv().encode("utf-8"))

    return StreamingResponse(
        output,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="sample-customers.csv"'},
    )
