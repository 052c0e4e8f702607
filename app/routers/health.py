# app/routers/health.py

from fastapi import APIRouter, Depends

from app.store import RecordStore, get_store

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/db")
def database_health(store: RecordStore = Depends(get_store)):
    """Reports whether the record store answers and holds any customers."""
    return {
        "status": "ok",
        "has_data": store.has_data(),
    }
