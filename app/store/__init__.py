from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database import get_db
from app.store.base import RecordStore
from app.store.memory import InMemoryRecordStore
from app.store.sql import SqlRecordStore

_memory_store = None


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    global _memory_store

    if settings.STORE_BACKEND == "memory":
        if _memory_store is None:
            _memory_store = InMemoryRecordStore()
        return _memory_store

    return SqlRecordStore(db)
