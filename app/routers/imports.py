# =========================================================
# IMPORTS ROUTER
#
# Each accepted row becomes its own create call:
# - rows without a name or contact are skipped before submission
# - a failing row is counted and the next row still runs
# - nothing is rolled back, nothing is retried
# =========================================================

import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from pydantic import ValidationError as PayloadError

from app.core.auth import get_current_user
from app.core.errors import StoreUnavailableError
from app.core.rate_limiter import limiter
from app.core.tabular import is_importable, normalize_row, read_import_file
from app.schemas.customer import CustomerCreate
from app.schemas.transfer import ImportSummary
from app.store import RecordStore, get_store

router = APIRouter(prefix="/imports", tags=["Imports"])

logger = logging.getLogger("app.imports")


def _describe(exc: PayloadError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


# =========================================================
# CORE ROW IMPORTER
# =========================================================
def _import_rows(store: RecordStore, raw_rows: list[dict]) -> dict:
    success = 0
    failed = 0
    skipped = 0
    errors = []

    for row_number, raw in enumerate(raw_rows, start=1):
        row = normalize_row(raw)

        if not is_importable(row):
            skipped += 1
            continue

        try:
            payload = CustomerCreate(**row)
            store.create_customer(payload.model_dump())
            success += 1

        except PayloadError as exc:
            failed += 1
            errors.append({"row": row_number, "detail": _describe(exc)})

        except StoreUnavailableError as exc:
            failed += 1
            errors.append({"row": row_number, "detail": str(exc)})

    for error in errors:
        logger.warning(f"Import row {error['row']} rejected: {error['detail']}")

    return {
        "total": success + failed,
        "success": success,
        "failed": failed,
        "skipped": skipped,
        "errors": errors,
    }


# =========================================================
# IMPORT ROUTE
# =========================================================
@router.post("/customers", response_model=ImportSummary)
@limiter.limit("5/minute")
def import_customers(
    request: Request,
    file: UploadFile = File(...),
    store: RecordStore = Depends(get_store),
    current_user=Depends(get_current_user),
):
    raw_rows = read_import_file(file.filename, file.file.read())

    summary = _import_rows(store, raw_rows)

    logger.info(
        f"Imported {file.filename} "
        f"success: {summary['success']} "
        f"failed: {summary['failed']} "
        f"skipped: {summary['skipped']}"
    )

    return summary
